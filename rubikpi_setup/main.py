from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence, Tuple

from .intent import Intent, parse_intent
from .lib.privilege import PrivilegeError, ensure_root
from .logging_utils import configure_logging
from .pipeline import PipelineResult, Step, StepContext, run_pipeline
from .settings import Settings, load_settings
from .steps import (
    AddRepositoryStep,
    InstallCameraStep,
    InstallSoftwareStep,
    RebootStep,
    SetHostnameStep,
    UpgradeSystemStep,
)

logger = logging.getLogger(__name__)

BANNER = "RUBIK Pi 3 Initial Setup Script"


def build_steps() -> Tuple[Step, ...]:
    return (
        SetHostnameStep(),
        AddRepositoryStep(),
        InstallCameraStep(),
        InstallSoftwareStep(),
        UpgradeSystemStep(),
        RebootStep(),
    )


def run(
    intent: Intent,
    *,
    settings: Optional[Settings] = None,
    dry_run: bool = False,
) -> PipelineResult:
    """Run every step the intent enables, in the fixed step order."""

    ctx = StepContext(intent=intent, settings=settings or Settings(), dry_run=dry_run)
    logger.info("Intent: %s (dry_run=%s)", intent, dry_run)
    result = run_pipeline(ctx=ctx, steps=build_steps())
    logger.debug("Ran steps: %s; skipped: %s", result.ran_steps, result.skipped_steps)
    return result


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    parsed = parse_intent(args)
    opts = parsed.options

    configure_logging(opts.log_path, verbose=opts.verbose)
    logger.info(BANNER)
    logger.info("=" * len(BANNER))

    try:
        settings = load_settings(opts.config_path) if opts.config_path else Settings()
    except (OSError, ValueError, RuntimeError) as e:
        logger.error("Could not load settings from %s: %s", opts.config_path, e)
        return 1

    if not opts.dry_run:
        try:
            ensure_root(args)
        except PrivilegeError as e:
            logger.error("%s", e)
            return 1

    result = run(parsed.intent, settings=settings, dry_run=opts.dry_run)
    if result.failure is not None:
        logger.error("Setup aborted at step %s", result.failure.step_id)
    return result.exit_code

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from .intent import Intent
from .lib.command import CommandError
from .settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepContext:
    intent: Intent
    settings: Settings
    dry_run: bool = False


class Step(Protocol):
    """A single setup action."""

    step_id: str

    def enabled(self, intent: Intent) -> bool:
        ...

    def run(self, ctx: StepContext) -> None:
        ...


@dataclass(frozen=True)
class StepOutcome:
    step_id: str
    ok: bool
    error: Optional[Exception] = None

    @property
    def exit_code(self) -> int:
        if self.ok:
            return 0
        if isinstance(self.error, CommandError) and self.error.returncode > 0:
            return self.error.returncode
        return 1


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]
    skipped_steps: List[str]
    failure: Optional[StepOutcome] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def exit_code(self) -> int:
        return 0 if self.failure is None else self.failure.exit_code


def run_step(step: Step, ctx: StepContext) -> StepOutcome:
    try:
        step.run(ctx)
    except (CommandError, OSError) as e:
        return StepOutcome(step_id=step.step_id, ok=False, error=e)
    return StepOutcome(step_id=step.step_id, ok=True)


def run_pipeline(*, ctx: StepContext, steps: Sequence[Step]) -> PipelineResult:
    """Run enabled steps in declared order; stop at the first failure."""

    ran: List[str] = []
    skipped: List[str] = []

    for step in steps:
        if not step.enabled(ctx.intent):
            logger.debug("Skipping step %s (not requested)", step.step_id)
            skipped.append(step.step_id)
            continue

        logger.debug("Running step %s", step.step_id)
        outcome = run_step(step, ctx)
        if not outcome.ok:
            logger.error("Step %s failed: %s", step.step_id, outcome.error)
            return PipelineResult(ran_steps=ran, skipped_steps=skipped, failure=outcome)
        ran.append(step.step_id)

    return PipelineResult(ran_steps=ran, skipped_steps=skipped)

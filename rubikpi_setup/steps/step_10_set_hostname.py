from __future__ import annotations

import logging
import re

from ..intent import Intent
from ..lib.command import run_cmd
from ..lib.files import substitute_lines
from ..pipeline import StepContext

logger = logging.getLogger(__name__)

LOOPBACK_ALIAS = re.compile(r"^127\.0\.1\.1\s+.*")


class SetHostnameStep:
    step_id = "10_set_hostname"

    def enabled(self, intent: Intent) -> bool:
        return intent.hostname is not None

    def run(self, ctx: StepContext) -> None:
        name = ctx.intent.hostname or ""
        # An empty --hostname= is accepted and ignored.
        if not name:
            return

        logger.info("Setting hostname to: %s", name)
        run_cmd(["hostnamectl", "set-hostname", name], dry_run=ctx.dry_run)
        substitute_lines(ctx.settings.hosts_file, LOOPBACK_ALIAS, f"127.0.1.1 {name}", dry_run=ctx.dry_run)
        logger.info("Hostname set successfully")

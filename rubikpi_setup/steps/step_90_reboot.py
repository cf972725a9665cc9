from __future__ import annotations

import logging
import time

from ..intent import Intent
from ..lib.command import run_cmd
from ..pipeline import StepContext

logger = logging.getLogger(__name__)


class RebootStep:
    step_id = "90_reboot"

    def enabled(self, intent: Intent) -> bool:
        return True

    def run(self, ctx: StepContext) -> None:
        logger.info("Setup completed successfully!")

        if not ctx.intent.reboot:
            logger.info("Skipping reboot as requested.")
            logger.info("Some configurations may require a reboot to take effect.")
            return

        delay = ctx.settings.reboot_delay_s
        logger.info("System will reboot in %d seconds...", delay)
        if not ctx.dry_run:
            time.sleep(delay)
        run_cmd(["reboot"], dry_run=ctx.dry_run)

from __future__ import annotations

import logging

from ..intent import Intent
from ..lib.pkg import apt_upgrade
from ..pipeline import StepContext

logger = logging.getLogger(__name__)


class UpgradeSystemStep:
    step_id = "50_upgrade_system"

    def enabled(self, intent: Intent) -> bool:
        return intent.run_upgrade

    def run(self, ctx: StepContext) -> None:
        logger.info("Upgrading system packages...")
        apt_upgrade(dry_run=ctx.dry_run)
        logger.info("System upgrade completed successfully")

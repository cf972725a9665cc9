from __future__ import annotations

import logging

from ..intent import Intent
from ..lib.pkg import apt_install
from ..pipeline import StepContext

logger = logging.getLogger(__name__)


class InstallSoftwareStep:
    step_id = "40_install_software"

    def enabled(self, intent: Intent) -> bool:
        return intent.run_software

    def run(self, ctx: StepContext) -> None:
        logger.info("Installing RubikPi software packages...")
        apt_install(ctx.settings.software_packages, dry_run=ctx.dry_run)
        logger.info("RubikPi software packages installed successfully")

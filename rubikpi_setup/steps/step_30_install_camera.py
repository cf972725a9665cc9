from __future__ import annotations

import logging

from ..intent import Intent
from ..lib.files import append_line_unless, ensure_dir, exact_line, write_file
from ..lib.pkg import apt_install
from ..pipeline import StepContext

logger = logging.getLogger(__name__)


class InstallCameraStep:
    step_id = "30_install_camera"

    def enabled(self, intent: Intent) -> bool:
        return intent.run_camera

    def run(self, ctx: StepContext) -> None:
        s = ctx.settings
        dry_run = ctx.dry_run

        logger.info("Installing camera packages...")
        ensure_dir(s.shared_dir, mode=s.shared_dir_mode, dry_run=dry_run)

        # Camera apps need XDG_RUNTIME_DIR in both login shells.
        export = exact_line(s.xdg_export)
        append_line_unless(s.user_bashrc, s.xdg_export, export, owner=s.user_name, dry_run=dry_run)
        append_line_unless(s.root_bashrc, s.xdg_export, export, dry_run=dry_run)

        ensure_dir(s.camera_cache_dir, dry_run=dry_run)
        write_file(s.camera_settings_file, s.camera_settings_line + "\n", dry_run=dry_run)

        # CAM/AI from the QCOM PPA, then camera support from the RUBIK Pi PPA.
        apt_install(s.qcom_camera_packages, dry_run=dry_run)
        apt_install(s.rubikpi_camera_packages, dry_run=dry_run)
        logger.info("Camera packages installed successfully")

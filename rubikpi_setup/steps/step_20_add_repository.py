from __future__ import annotations

import logging

from ..intent import Intent
from ..lib.command import run_cmd
from ..lib.files import append_line_unless, exact_line, uncommented
from ..lib.pkg import apt_update
from ..pipeline import StepContext

logger = logging.getLogger(__name__)


class AddRepositoryStep:
    step_id = "20_add_repository"

    def enabled(self, intent: Intent) -> bool:
        return intent.run_ppa

    def run(self, ctx: StepContext) -> None:
        s = ctx.settings
        dry_run = ctx.dry_run

        logger.info("Adding PPA repositories...")
        append_line_unless(s.sources_list, s.repo_entry, uncommented(s.repo_entry), dry_run=dry_run)
        append_line_unless(s.hosts_file, s.host_entry, exact_line(s.host_entry), dry_run=dry_run)

        # Signing key is refreshed on every run.
        run_cmd(["wget", "-qO", s.key_path, s.key_url], dry_run=dry_run)

        apt_update(dry_run=dry_run)
        logger.info("PPA repositories added successfully")

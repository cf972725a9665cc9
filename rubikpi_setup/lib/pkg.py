from __future__ import annotations

import logging
from typing import Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)

APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


def _apt(args: Sequence[str], *, dry_run: bool = False) -> None:
    # apt-get output goes to the terminal; failures surface as CommandError.
    run_cmd(["apt-get", *args], capture=False, env=APT_ENV, dry_run=dry_run)


def apt_update(*, dry_run: bool = False) -> None:
    _apt(["update", "-y"], dry_run=dry_run)


def apt_install(packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    _apt(["install", "-y", *packages], dry_run=dry_run)


def apt_upgrade(*, dry_run: bool = False) -> None:
    _apt(["upgrade", "-y"], dry_run=dry_run)

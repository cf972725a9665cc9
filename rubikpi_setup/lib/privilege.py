"""Root privilege helpers."""
from __future__ import annotations

import logging
import os
import shutil
import sys
from typing import Sequence

logger = logging.getLogger(__name__)


class PrivilegeError(RuntimeError):
    pass


def is_root() -> bool:
    return os.geteuid() == 0


def relaunch_with_sudo(argv: Sequence[str]) -> None:
    """Replace the current process with `sudo python -m rubikpi_setup <argv>`."""

    sudo = shutil.which("sudo")
    if not sudo:
        raise PrivilegeError("Root privileges are required and sudo is not available")
    cmd = [sudo, sys.executable, "-m", "rubikpi_setup", *argv]
    logger.info("Re-launching under sudo")
    sys.stdout.flush()
    sys.stderr.flush()
    os.execvp(sudo, cmd)


def ensure_root(argv: Sequence[str]) -> None:
    if is_root():
        return
    relaunch_with_sudo(argv)

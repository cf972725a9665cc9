from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Tuple

DEFAULT_LOG_PATH = "/var/log/rubikpi-setup.log"
FALLBACK_LOG_NAME = "rubikpi-setup.log"

FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


class ConsoleFormatter(logging.Formatter):
    """Plain progress lines; warnings and errors keep their level name."""

    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        if record.levelno >= logging.WARNING:
            return f"{record.levelname}: {msg}"
        return msg


def _open_log_file(log_path: str) -> Tuple[logging.FileHandler, str]:
    # /var/log is not writable before the sudo re-launch or in a user dry-run.
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path), log_path
    except OSError:
        fallback = str(Path.cwd() / FALLBACK_LOG_NAME)
        return logging.FileHandler(fallback), fallback


def configure_logging(log_path: str = DEFAULT_LOG_PATH, *, verbose: bool = False) -> None:
    """Send everything to the log file and progress to the console.

    The file always receives DEBUG records, including captured command
    output. The console shows INFO and up, or DEBUG with `verbose`.
    Calling this again is a no-op.
    """

    root = logging.getLogger()
    if getattr(root, "_rubikpi_configured", False):
        return
    root.setLevel(logging.DEBUG)

    file_handler, actual = _open_log_file(log_path)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(file_handler)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.DEBUG if verbose else logging.INFO)
    console.setFormatter(ConsoleFormatter("%(message)s"))
    root.addHandler(console)

    setattr(root, "_rubikpi_configured", True)

    log = logging.getLogger(__name__)
    if actual != log_path:
        log.warning("Cannot write %s; logging to %s", log_path, actual)
    log.debug("Logging initialized (file=%s verbose=%s)", actual, verbose)

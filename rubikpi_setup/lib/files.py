from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path
from re import Pattern
from typing import Optional

logger = logging.getLogger(__name__)

# System files are not guaranteed to be UTF-8; undecodable bytes round-trip unchanged.
_TEXT = {"encoding": "utf-8", "errors": "surrogateescape"}


def read_lines(path: str) -> list[str]:
    p = Path(path)
    if not p.exists():
        return []
    return p.read_text(**_TEXT).splitlines()


def has_matching_line(path: str, pattern: Pattern[str]) -> bool:
    return any(pattern.search(line) for line in read_lines(path))


def append_line(path: str, line: str, *, owner: Optional[str] = None, dry_run: bool = False) -> None:
    """Append one line, creating the file if needed.

    A file created here is chowned to `owner` when one is given.
    """

    p = Path(path)
    if dry_run:
        logger.info("Would append to %s: %s", str(p), line)
        return

    created = not p.exists()
    prefix = ""
    if not created:
        existing = p.read_text(**_TEXT)
        if existing and not existing.endswith("\n"):
            prefix = "\n"
    else:
        p.parent.mkdir(parents=True, exist_ok=True)

    with p.open("a", **_TEXT) as f:
        f.write(prefix + line + "\n")

    if created and owner:
        shutil.chown(str(p), user=owner)
    logger.info("Appended to %s: %s", str(p), line)


def append_line_unless(
    path: str,
    line: str,
    pattern: Pattern[str],
    *,
    owner: Optional[str] = None,
    dry_run: bool = False,
) -> bool:
    """Append `line` unless some existing line matches `pattern`.

    Returns True when the line was (or in dry-run, would be) appended.
    """

    if has_matching_line(path, pattern):
        logger.info("Already present in %s: %s", path, line)
        return False
    append_line(path, line, owner=owner, dry_run=dry_run)
    return True


def exact_line(line: str) -> Pattern[str]:
    """Pattern for a line equal to `line` (grep -xF)."""
    return re.compile(r"^" + re.escape(line) + r"$")


def uncommented(text: str) -> Pattern[str]:
    """Pattern for a line holding `text` with no '#' before it."""
    return re.compile(r"^[^#]*" + re.escape(text))


def write_file(path: str, contents: str, *, dry_run: bool = False) -> None:
    p = Path(path)
    if dry_run:
        logger.info("Would write %s", str(p))
        return
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(contents, **_TEXT)
    logger.info("Wrote %s", str(p))


def ensure_dir(path: str, *, mode: Optional[int] = None, dry_run: bool = False) -> None:
    p = Path(path)
    if dry_run:
        logger.info("Would create %s (mode=%s)", str(p), oct(mode) if mode is not None else "default")
        return
    p.mkdir(parents=True, exist_ok=True)
    if mode is not None:
        p.chmod(mode)


def substitute_lines(path: str, pattern: Pattern[str], replacement: str, *, dry_run: bool = False) -> int:
    """Replace every line matching `pattern` with `replacement` (sed -i).

    Returns the number of lines replaced. A missing file raises FileNotFoundError.
    """

    p = Path(path)
    lines = p.read_text(**_TEXT).splitlines(keepends=True)
    out: list[str] = []
    count = 0
    for line in lines:
        body = line.rstrip("\n")
        if pattern.search(body):
            count += 1
            out.append(replacement + ("\n" if line.endswith("\n") else ""))
        else:
            out.append(line)

    if dry_run:
        logger.info("Would replace %d line(s) in %s with: %s", count, str(p), replacement)
        return count

    if count:
        p.write_text("".join(out), **_TEXT)
    logger.info("Replaced %d line(s) in %s", count, str(p))
    return count

"""Command line → Intent.

The Intent says which setup actions to run. It is built once and
never changed afterwards.
"""
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import NoReturn, Optional, Sequence

from .logging_utils import DEFAULT_LOG_PATH

PROG = "rubikpi-setup"

HELP_TOKENS = ("-h", "--help")

FLAG_TOKENS = (
    *HELP_TOKENS,
    "-p", "--ppa-only",
    "-c", "--camera-only",
    "-s", "--software-only",
    "-u", "--upgrade-only",
    "-a", "--all",
    "--no-reboot",
    "--dry-run",
    "-v", "--verbose",
)

VALUE_OPTIONS = ("--hostname", "--log", "--config")

DESCRIPTION = "Helps you quickly enable RUBIK Pi's peripheral functions (CAM, AI, Audio, etc.)"

EXAMPLES = f"""\
examples:
  {PROG}                              # Run all components (original behavior)
  {PROG} --ppa-only                   # Only add repositories
  {PROG} --camera-only --no-reboot    # Install camera without reboot
  {PROG} --hostname=mypi              # Set hostname and run all
"""


@dataclass(frozen=True)
class Intent:
    run_ppa: bool = False
    run_camera: bool = False
    run_software: bool = False
    run_upgrade: bool = False
    reboot: bool = True
    hostname: Optional[str] = None

    @classmethod
    def run_all(cls, *, reboot: bool = True, hostname: Optional[str] = None) -> "Intent":
        return cls(
            run_ppa=True,
            run_camera=True,
            run_software=True,
            run_upgrade=True,
            reboot=reboot,
            hostname=hostname,
        )


@dataclass(frozen=True)
class RunOptions:
    dry_run: bool = False
    log_path: str = DEFAULT_LOG_PATH
    config_path: Optional[str] = None
    verbose: bool = False


@dataclass(frozen=True)
class ParsedArgs:
    intent: Intent
    options: RunOptions


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        self.exit(1, f"Unknown option: {message}\nUse --help for usage information\n")


def build_parser() -> argparse.ArgumentParser:
    p = _Parser(
        prog=PROG,
        description=DESCRIPTION,
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )
    p.add_argument("-h", "--help", action="store_true", help="display this help message")
    p.add_argument("-p", "--ppa-only", dest="ppa", action="store_true", help="only add PPA repositories")
    p.add_argument("-c", "--camera-only", dest="camera", action="store_true", help="only install camera packages")
    p.add_argument(
        "-s", "--software-only", dest="software", action="store_true", help="only install RubikPi software packages"
    )
    p.add_argument("-u", "--upgrade-only", dest="upgrade", action="store_true", help="only run system upgrade")
    p.add_argument(
        "-a", "--all", dest="all", action="store_true", help="run all components (default behavior)"
    )
    p.add_argument("--no-reboot", dest="reboot", action="store_false", help="skip automatic reboot")
    p.add_argument("--hostname", metavar="<name>", default=None, help="set system hostname (--hostname=<name>)")
    p.add_argument("--dry-run", action="store_true", help="log commands and file edits without running them")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, metavar="<path>", help="path to the setup log (--log=<path>)")
    p.add_argument(
        "--config", default=None, metavar="<path>", help="YAML file overriding built-in settings (--config=<path>)"
    )
    p.add_argument("-v", "--verbose", action="store_true", help="show captured command output on the console")
    return p


def _recognized(token: str) -> bool:
    if token in FLAG_TOKENS:
        return True
    return any(token.startswith(opt + "=") for opt in VALUE_OPTIONS)


def parse_intent(argv: Optional[Sequence[str]] = None) -> ParsedArgs:
    """Parse argv into an Intent plus run options.

    Tokens are checked left to right before argparse sees them: only
    whole flags and `--opt=value` forms are accepted, so combined short
    flags (`-pc`) and `--hostname <name>` are unknown options. The first
    help token exits 0; the first unknown token exits 1.
    """

    args = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()

    for token in args:
        if token in HELP_TOKENS:
            parser.print_help(sys.stdout)
            parser.exit(0)
        if not _recognized(token):
            parser.exit(1, f"Unknown option: {token}\nUse --help for usage information\n")

    ns = parser.parse_args(args)

    explicit = ns.ppa or ns.camera or ns.software or ns.upgrade
    if ns.all or not explicit:
        intent = Intent.run_all(reboot=ns.reboot, hostname=ns.hostname)
    else:
        intent = Intent(
            run_ppa=ns.ppa,
            run_camera=ns.camera,
            run_software=ns.software,
            run_upgrade=ns.upgrade,
            reboot=ns.reboot,
            hostname=ns.hostname,
        )

    options = RunOptions(
        dry_run=ns.dry_run,
        log_path=ns.log,
        config_path=ns.config,
        verbose=ns.verbose,
    )
    return ParsedArgs(intent=intent, options=options)

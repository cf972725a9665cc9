from __future__ import annotations

import os
import pwd
import subprocess
from pathlib import Path
from typing import Sequence

import pytest

from rubikpi_setup.lib import command
from rubikpi_setup.settings import Settings


class FakeRun:
    """Stands in for subprocess.run and records every argv."""

    def __init__(self) -> None:
        self.commands: list[list[str]] = []
        self.envs: list[dict[str, str]] = []
        self.failures: dict[str, int] = {}

    def fail(self, program: str, returncode: int = 100, *, subcommand: str | None = None) -> None:
        key = program if subcommand is None else f"{program} {subcommand}"
        self.failures[key] = returncode

    def _returncode(self, argv: Sequence[str]) -> int:
        if len(argv) > 1 and f"{argv[0]} {argv[1]}" in self.failures:
            return self.failures[f"{argv[0]} {argv[1]}"]
        return self.failures.get(argv[0], 0)

    def __call__(self, argv, **kwargs) -> subprocess.CompletedProcess:
        argv = list(argv)
        self.commands.append(argv)
        self.envs.append(dict(kwargs.get("env") or {}))
        rc = self._returncode(argv)
        captured = kwargs.get("stdout") is subprocess.PIPE
        stderr = "boom" if rc and captured else ("" if captured else None)
        return subprocess.CompletedProcess(argv, rc, "" if captured else None, stderr)

    def programs(self) -> list[str]:
        return [c[0] for c in self.commands]


@pytest.fixture()
def fake_run(monkeypatch: pytest.MonkeyPatch) -> FakeRun:
    fake = FakeRun()
    monkeypatch.setattr(command.subprocess, "run", fake)
    return fake


@pytest.fixture()
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    slept: list[float] = []
    monkeypatch.setattr("rubikpi_setup.steps.step_90_reboot.time.sleep", slept.append)
    return slept


@pytest.fixture()
def sandbox(tmp_path: Path) -> Settings:
    """Settings whose file targets all live under tmp_path."""

    etc = tmp_path / "etc"
    (etc / "apt").mkdir(parents=True)
    (etc / "apt" / "sources.list").write_text("deb http://ports.ubuntu.com/ubuntu-ports jammy main\n")
    (etc / "hosts").write_text("127.0.0.1 localhost\n127.0.1.1 ubuntu\n")
    home = tmp_path / "home" / "ubuntu"
    home.mkdir(parents=True)
    root = tmp_path / "root"
    root.mkdir()

    return Settings(
        key_path=str(etc / "apt" / "trusted.gpg.d" / "rubikpi3.asc"),
        sources_list=str(etc / "apt" / "sources.list"),
        hosts_file=str(etc / "hosts"),
        user_name=pwd.getpwuid(os.getuid()).pw_name,
        user_home=str(home),
        root_bashrc=str(root / ".bashrc"),
        shared_dir=str(tmp_path / "opt"),
        camera_cache_dir=str(tmp_path / "var" / "cache" / "camera"),
        camera_settings_file=str(tmp_path / "var" / "cache" / "camera" / "camxoverridesettings.txt"),
        reboot_delay_s=10,
    )

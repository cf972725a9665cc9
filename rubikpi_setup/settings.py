from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Tuple

QCOM_CAMERA_PACKAGES = (
    "gstreamer1.0-qcom-sample-apps",
    "qcom-sensors-test-apps",
    "gstreamer1.0-tools",
    "qcom-fastcv-binaries-dev",
    "qcom-video-firmware",
    "weston-autostart",
    "libgbm-msm1",
    "qcom-adreno1",
    "qcom-ib2c",
    "qcom-camera-server",
    "qcom-camx",
)


@dataclass(frozen=True)
class Settings:
    """Fixed targets of the setup actions.

    Defaults describe a stock RUBIK Pi 3 Ubuntu image.
    """

    repo_entry: str = "deb http://apt.rubikpi.ai ppa main"
    host_entry: str = "151.106.120.85 apt.rubikpi.ai"
    key_url: str = (
        "https://thundercomm.s3.dualstack.ap-northeast-1.amazonaws.com"
        "/uploads/web/rubik-pi-3/tools/key.asc"
    )
    key_path: str = "/etc/apt/trusted.gpg.d/rubikpi3.asc"
    sources_list: str = "/etc/apt/sources.list"
    hosts_file: str = "/etc/hosts"

    user_name: str = "ubuntu"
    user_home: str = "/home/ubuntu"
    root_bashrc: str = "/root/.bashrc"
    xdg_export: str = "export XDG_RUNTIME_DIR=/run/user/$(id -u)"

    shared_dir: str = "/opt"
    shared_dir_mode: int = 0o755
    camera_cache_dir: str = "/var/cache/camera"
    camera_settings_file: str = "/var/cache/camera/camxoverridesettings.txt"
    camera_settings_line: str = "enableNCSService=FALSE"

    qcom_camera_packages: Tuple[str, ...] = QCOM_CAMERA_PACKAGES
    rubikpi_camera_packages: Tuple[str, ...] = ("rubikpi3-cameras",)
    software_packages: Tuple[str, ...] = ("wiringrp", "wiringrp-python")

    reboot_delay_s: int = 10

    @property
    def user_bashrc(self) -> str:
        return str(Path(self.user_home) / ".bashrc")


def _coerce(name: str, default: Any, value: Any) -> Any:
    if isinstance(default, tuple):
        if not isinstance(value, list):
            raise ValueError(f"settings.{name} must be a list")
        return tuple(str(v).strip() for v in value if str(v).strip())
    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"settings.{name} must be an integer")
        return value
    if not isinstance(value, str):
        raise ValueError(f"settings.{name} must be a string")
    return value


def settings_from_mapping(raw: Dict[str, Any], base: Settings | None = None) -> Settings:
    base = base or Settings()
    known = {f.name: getattr(base, f.name) for f in fields(Settings)}
    unknown = sorted(set(raw) - set(known))
    if unknown:
        raise ValueError(f"Unknown settings key(s): {', '.join(unknown)}")
    overrides = {k: _coerce(k, known[k], v) for k, v in raw.items()}
    return replace(base, **overrides)


def load_settings(path: str) -> Settings:
    """Load a YAML override file on top of the default Settings."""

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("settings file must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read a settings file") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"settings file is not valid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError("settings file must contain a mapping/object")

    return settings_from_mapping(raw)

"""Where backlightd keeps its files.

Resolved on every call so tests (and `BACKLIGHTD_CONFIG_*` overrides) can
redirect them through the environment before a Config is built.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

APP_DIR_NAME = "backlightd"


def _env_path(name: str) -> Optional[Path]:
    value = os.environ.get(name, "").strip()
    return Path(value).expanduser() if value else None


def config_dir() -> Path:
    """BACKLIGHTD_CONFIG_DIR, else $XDG_CONFIG_HOME/backlightd, else ~/.config/backlightd."""

    explicit = _env_path("BACKLIGHTD_CONFIG_DIR")
    if explicit is not None:
        return explicit

    base = _env_path("XDG_CONFIG_HOME") or Path.home() / ".config"
    return base / APP_DIR_NAME


def config_file_path() -> Path:
    """BACKLIGHTD_CONFIG_PATH if set, else config.json in config_dir()."""

    return _env_path("BACKLIGHTD_CONFIG_PATH") or config_dir() / "config.json"


def lock_file_path() -> Path:
    return config_dir() / f"{APP_DIR_NAME}.lock"

from __future__ import annotations

import builtins
import os
import tempfile
import traceback
from pathlib import Path

import pytest


def _hardware_opted_in() -> bool:
    return os.environ.get("BACKLIGHTD_ALLOW_HARDWARE") == "1"


# Safety default: during pytest, avoid touching the user's real config and
# instance lock. This also keeps a running backlightd from seeing test writes.
if not _hardware_opted_in():
    os.environ.setdefault(
        "BACKLIGHTD_CONFIG_DIR",
        tempfile.mkdtemp(prefix="backlightd-test-config-"),
    )


def _install_tripwire() -> None:
    """Hard-fail on writes to the real /sys tree during pytest.

    Only enabled when BACKLIGHTD_TEST_HARDWARE_TRIPWIRE=1 and hardware is
    NOT opted in. Raises with a traceback of the first attempted write.
    """

    if os.environ.get("BACKLIGHTD_TEST_HARDWARE_TRIPWIRE") != "1":
        return
    if _hardware_opted_in():
        return

    _orig_open = builtins.open

    def _is_write_mode(mode: str) -> bool:
        return any(ch in mode for ch in ("w", "a", "+"))

    def _tripwire_open(file, mode="r", *args, **kwargs):  # type: ignore[override]
        try:
            p = os.fspath(file)
        except TypeError:
            p = str(file)
        if isinstance(p, str) and p.startswith("/sys/") and _is_write_mode(str(mode)):
            raise RuntimeError(
                f"Tripwire: attempted write to real /sys path during pytest: {p}\n\n"
                + "".join(traceback.format_stack(limit=50))
            )
        return _orig_open(file, mode, *args, **kwargs)

    builtins.open = _tripwire_open  # type: ignore[assignment]


_install_tripwire()


@pytest.fixture(autouse=True)
def _reset_log_throttle():
    from backlightd.core.logging_utils import reset_throttle

    reset_throttle()
    yield
    reset_throttle()


def write_text(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def fake_sysfs(tmp_path: Path, monkeypatch) -> Path:
    """A small /sys lookalike with one backlight, one keyboard LED and a sensor."""

    root = tmp_path / "sys"
    write_text(root / "class" / "backlight" / "intel_backlight" / "brightness", "500\n")
    write_text(root / "class" / "backlight" / "intel_backlight" / "max_brightness", "1000\n")
    write_text(root / "class" / "backlight" / "intel_backlight" / "type", "raw\n")

    write_text(root / "class" / "leds" / "smc::kbd_backlight" / "brightness", "100\n")
    write_text(root / "class" / "leds" / "smc::kbd_backlight" / "max_brightness", "255\n")
    write_text(root / "class" / "leds" / "input3::capslock" / "brightness", "0\n")

    write_text(root / "devices" / "platform" / "applesmc.768" / "light", "(5,0)\n")

    write_text(root / "class" / "power_supply" / "ADP1" / "type", "Mains\n")
    write_text(root / "class" / "power_supply" / "ADP1" / "online", "1\n")

    monkeypatch.setenv("BACKLIGHTD_SYSFS_ROOT", str(root))
    return root


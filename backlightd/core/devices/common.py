from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def _hardware_allowed() -> bool:
    return os.environ.get("BACKLIGHTD_ALLOW_HARDWARE") == "1"


def sysfs_root() -> Path:
    """Root under which /sys-style device trees are discovered."""

    # Test hook: allow overriding the sysfs root.
    root = os.environ.get("BACKLIGHTD_SYSFS_ROOT")

    # Safety: under pytest, never probe the real sysfs tree unless explicitly allowed.
    if root is None and os.environ.get("PYTEST_CURRENT_TEST") and not _hardware_allowed():
        return Path("/nonexistent-backlightd-test-sysfs")

    return Path(root or "/sys")


def is_real_sysfs_path(path: Path) -> bool:
    try:
        real = os.path.realpath(str(path))
        return real.startswith("/sys/")
    except Exception:
        return False


def writes_blocked(path: Path) -> bool:
    """Return True when writing *path* must be skipped (pytest on real sysfs)."""

    if os.environ.get("PYTEST_CURRENT_TEST") and not _hardware_allowed() and is_real_sysfs_path(path):
        if os.environ.get("BACKLIGHTD_TEST_HARDWARE_TRIPWIRE") == "1":
            raise RuntimeError(f"Refusing to write real sysfs path under pytest: {path}")
        return True
    return False


def read_text(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8", errors="ignore")
    except OSError:
        return None


def read_int(path: Path) -> Optional[int]:
    raw = read_text(path)
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def _is_candidate_kbd_led(name: str) -> bool:
    n = name.lower()
    return (
        "kbd_backlight" in n
        or "keyboard" in n
        or "smc::kbd" in n  # Apple SMC
        or "tpacpi::kbd" in n  # ThinkPad
        or "asus::kbd" in n  # ASUS WMI
        or "dell::kbd" in n  # Dell
        or "system76::kbd" in n  # System76
    )


def score_kbd_led_dir(led_dir: Path) -> int:
    """Score a sysfs LED directory for likelihood of being a keyboard backlight."""

    name = led_dir.name.lower()
    score = 0

    if "kbd_backlight" in name:
        score += 40
    if name.endswith("kbd_backlight"):
        score += 10
    if "keyboard" in name:
        score += 5

    # De-prioritize "noise" LEDs that frequently contain kbd substrings.
    for noisy in ("capslock", "numlock", "scrolllock", "micmute", "mute"):
        if noisy in name:
            score -= 60

    b = led_dir / "brightness"
    if b.exists():
        if os.access(b, os.R_OK):
            score += 3
        if os.access(b, os.W_OK):
            score += 7

    return score


def score_backlight_dir(bl_dir: Path) -> int:
    """Score a /sys/class/backlight entry; firmware/platform beat raw."""

    score = 0
    kind = (read_text(bl_dir / "type") or "").strip().lower()
    if kind == "firmware":
        score += 30
    elif kind == "platform":
        score += 20
    elif kind == "raw":
        score += 10

    b = bl_dir / "brightness"
    if b.exists() and os.access(b, os.W_OK):
        score += 7
    return score


def find_screen_brightness() -> Optional[Path]:
    base = sysfs_root() / "class" / "backlight"
    try:
        dirs = [p for p in sorted(base.iterdir()) if (p / "brightness").exists()]
    except OSError:
        return None
    if not dirs:
        return None
    best = max(dirs, key=score_backlight_dir)
    return best / "brightness"


def find_keyboard_brightness() -> Optional[Path]:
    base = sysfs_root() / "class" / "leds"
    try:
        dirs = [
            p
            for p in sorted(base.iterdir())
            if _is_candidate_kbd_led(p.name) and (p / "brightness").exists()
        ]
    except OSError:
        return None
    if not dirs:
        return None
    best = max(dirs, key=score_kbd_led_dir)
    if score_kbd_led_dir(best) <= 0:
        return None
    return best / "brightness"


def find_light_sensor() -> Optional[Path]:
    """Apple SMC exposes the ambient light sensor as a "(left,right)" pair."""

    base = sysfs_root() / "devices" / "platform"
    try:
        for candidate in sorted(base.glob("applesmc*/light")):
            return candidate
    except OSError:
        return None
    return None

"""Device files: brightness attributes and sysfs discovery."""

from __future__ import annotations

from .brightness_file import BrightnessFile
from .common import find_keyboard_brightness, find_light_sensor, find_screen_brightness, sysfs_root

__all__ = [
    "BrightnessFile",
    "find_keyboard_brightness",
    "find_light_sensor",
    "find_screen_brightness",
    "sysfs_root",
]

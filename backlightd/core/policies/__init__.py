"""IO-free policies: brightness math, light tables, power multipliers."""

from __future__ import annotations

from .brightness_policy import clamp_proportion, compute_offset_delta, compute_target_brightness
from .light_tables import (
    DEFAULT_KEYBOARD_MULTIPLIER,
    DEFAULT_SCREEN_MULTIPLIER,
    KEYBOARD_TABLE,
    SCREEN_TABLE,
    lookup_multipliers,
)
from .power_multiplier import AC_MULTIPLIER, BATTERY_MULTIPLIER, classify_adapter_state, compute_power_multiplier

__all__ = [
    "AC_MULTIPLIER",
    "BATTERY_MULTIPLIER",
    "DEFAULT_KEYBOARD_MULTIPLIER",
    "DEFAULT_SCREEN_MULTIPLIER",
    "KEYBOARD_TABLE",
    "SCREEN_TABLE",
    "clamp_proportion",
    "classify_adapter_state",
    "compute_offset_delta",
    "compute_power_multiplier",
    "compute_target_brightness",
    "lookup_multipliers",
]

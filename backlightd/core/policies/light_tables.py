"""Ambient light response curves.

Both tables are indexed directly by the raw sensor sample. The screen gets
brighter as the room gets brighter; the keyboard does the opposite, since a
lit keyboard only helps in the dark.
"""

from __future__ import annotations

from typing import Optional

SCREEN_TABLE: tuple[float, ...] = (
    0.50, 0.52, 0.55, 0.57, 0.60, 0.62, 0.65, 0.68, 0.70, 0.73,
    0.75, 0.78, 0.80, 0.83, 0.86, 0.88, 0.91, 0.93, 0.96, 0.99,
)

KEYBOARD_TABLE: tuple[float, ...] = (
    1.00, 0.97, 0.95, 0.92, 0.90, 0.87, 0.84, 0.82, 0.79, 0.76,
    0.74, 0.71, 0.68, 0.66, 0.63, 0.61, 0.58, 0.55, 0.53, 0.50,
)

# Used when the sample is missing or falls outside the tables (saturated
# or unreadable sensor): assume a bright environment.
DEFAULT_SCREEN_MULTIPLIER = 1.0
DEFAULT_KEYBOARD_MULTIPLIER = 0.5


def _lookup(table: tuple[float, ...], sample: Optional[int], default: float) -> float:
    if sample is None or sample < 0 or sample >= len(table):
        return default
    return table[sample]


def lookup_multipliers(sample: Optional[int]) -> tuple[float, float]:
    """Return (screen_multiplier, keyboard_multiplier) for a raw sample."""

    return (
        _lookup(SCREEN_TABLE, sample, DEFAULT_SCREEN_MULTIPLIER),
        _lookup(KEYBOARD_TABLE, sample, DEFAULT_KEYBOARD_MULTIPLIER),
    )

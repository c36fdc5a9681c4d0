from __future__ import annotations

from typing import Optional


def clamp_proportion(proportion: float) -> float:
    return max(0.0, min(1.0, float(proportion)))


def compute_offset_delta(
    *,
    observed: Optional[int],
    last_written: Optional[int],
    min_brightness: int,
    max_brightness: int,
) -> float:
    """Drift (in proportion units) between what was written and what is there now.

    Returns 0.0 when either value is unknown or they agree.
    """

    if observed is None or last_written is None or observed == last_written:
        return 0.0
    return (int(observed) - int(last_written)) / float(max_brightness - min_brightness)


def compute_target_brightness(
    *,
    proportion: float,
    offset: float,
    min_brightness: int,
    max_brightness: int,
    power_multiplier: float,
    sensor_multiplier: float,
    dimmed: bool,
) -> int:
    """Device value for a proportion.

    While dimmed the result is the hard floor `min * power_multiplier`, which
    ignores the proportion and the sensor. Otherwise the scaled value is
    clamped into [min, max].
    """

    if dimmed:
        return int(min_brightness * power_multiplier)

    span = max_brightness - min_brightness
    raw = (float(proportion) + float(offset)) * span + min_brightness
    scaled = raw * float(power_multiplier) * float(sensor_multiplier)
    return int(max(float(min_brightness), min(float(max_brightness), scaled)))

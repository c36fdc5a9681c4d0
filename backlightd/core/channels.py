from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .devices import BrightnessFile
from .policies.light_tables import DEFAULT_KEYBOARD_MULTIPLIER, DEFAULT_SCREEN_MULTIPLIER

SCREEN = "screen"
KEYBOARD = "keyboard"


@dataclass
class ChannelState:
    """Per-output brightness bookkeeping.

    `offset` is in proportion units and accumulates every brightness change
    the engine observed but did not make itself. It is never decayed.
    """

    name: str
    device: BrightnessFile
    min_brightness: int
    max_brightness: int
    last_written: Optional[int] = None
    offset: float = 0.0
    sensor_multiplier: Optional[float] = None

    def __post_init__(self) -> None:
        self.min_brightness = int(self.min_brightness)
        self.max_brightness = int(self.max_brightness)
        if self.min_brightness >= self.max_brightness:
            raise ValueError(
                f"{self.name}: min brightness {self.min_brightness} must be below max {self.max_brightness}"
            )
        if self.sensor_multiplier is None:
            self.sensor_multiplier = default_sensor_multiplier(self.name)

    def seed_from_device(self) -> None:
        """Adopt the device's current value as the last written one, if readable."""

        self.last_written = self.device.read()


def default_sensor_multiplier(name: str) -> float:
    return DEFAULT_KEYBOARD_MULTIPLIER if name == KEYBOARD else DEFAULT_SCREEN_MULTIPLIER

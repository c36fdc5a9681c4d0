from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from ..channels import KEYBOARD, SCREEN
from ..devices import common
from ..engine import BrightnessEngine
from ..policies.light_tables import lookup_multipliers

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"-?\d+")


def parse_light_sample(text: Optional[str]) -> Optional[int]:
    """First integer of a "(left,right)" style reading, or None."""

    if not text:
        return None
    m = _INT_RE.search(text)
    if m is None:
        return None
    return int(m.group(0))


def read_light_sample(path: Optional[Path]) -> Optional[int]:
    if path is None:
        return None
    return parse_light_sample(common.read_text(path))


class LightSensorAdapter:
    """Keeps each channel's sensor multiplier in step with the ambient light."""

    def __init__(self, engine: BrightnessEngine, sensor_path: Optional[Path] = None):
        self.engine = engine
        self.sensor_path = sensor_path
        self.last_sample: Optional[int] = None

    def poll_sensor(self) -> bool:
        """Read one sample; re-apply brightness when a multiplier moved.

        Returns True when the engine was re-triggered.
        """

        sample = read_light_sample(self.sensor_path)
        self.last_sample = sample
        screen_mult, kbd_mult = lookup_multipliers(sample)

        changed = False
        for name, mult in ((SCREEN, screen_mult), (KEYBOARD, kbd_mult)):
            ch = self.engine.channel(name)
            if ch is None or ch.sensor_multiplier == mult:
                continue
            logger.debug("%s sensor multiplier %.2f -> %.2f (sample=%s)", name, ch.sensor_multiplier, mult, sample)
            ch.sensor_multiplier = mult
            changed = True

        if changed:
            self.engine.reapply()
        return changed

from __future__ import annotations

from .light_sensor import LightSensorAdapter, parse_light_sample, read_light_sample

__all__ = ["LightSensorAdapter", "parse_light_sample", "read_light_sample"]

"""Brightness control core: engine, channel state, sensor and power adapters."""

from __future__ import annotations

from .channels import KEYBOARD, SCREEN, ChannelState
from .engine import BrightnessEngine
from .lock_trigger import LockTrigger
from .monitoring import PowerStateMonitor
from .sensors import LightSensorAdapter

__all__ = [
    "KEYBOARD",
    "SCREEN",
    "BrightnessEngine",
    "ChannelState",
    "LightSensorAdapter",
    "LockTrigger",
    "PowerStateMonitor",
]

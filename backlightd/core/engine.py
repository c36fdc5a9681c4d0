"""Brightness control engine.

Owns all channel and global brightness state. The light sensor adapter, the
power state monitor and the dimming state machine all receive the engine
explicitly and mutate state only through it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional

from .channels import ChannelState
from .logging_utils import log_throttled
from .policies.brightness_policy import clamp_proportion, compute_offset_delta, compute_target_brightness
from .policies.power_multiplier import AC_MULTIPLIER
from .utils.exceptions import describe_device_error

logger = logging.getLogger(__name__)

_DEVICE_ERROR_LOG_INTERVAL_S = 30.0


class BrightnessEngine:
    def __init__(self, channels: Iterable[ChannelState]):
        self.channels: list[ChannelState] = list(channels)
        self.power_multiplier: float = AC_MULTIPLIER
        self.last_proportion: float = 1.0
        self.is_dimmed: bool = False

    def channel(self, name: str) -> Optional[ChannelState]:
        for ch in self.channels:
            if ch.name == name:
                return ch
        return None

    def set_proportion(self, proportion: float) -> None:
        """Apply *proportion* to every channel."""

        proportion = clamp_proportion(proportion)
        for ch in self.channels:
            self._write_channel(ch, proportion)
        self.last_proportion = proportion

    def reapply(self) -> None:
        """Recompute output after a multiplier change, keeping the logical target."""

        self.set_proportion(self.last_proportion)

    def _write_channel(self, ch: ChannelState, proportion: float) -> None:
        # Computed inside the read-modify-write so drift is only committed
        # once the device accepted the new value.
        pending: dict[str, float] = {}

        def _compute(observed: Optional[int]) -> int:
            delta = compute_offset_delta(
                observed=observed,
                last_written=ch.last_written,
                min_brightness=ch.min_brightness,
                max_brightness=ch.max_brightness,
            )
            offset = ch.offset + delta
            pending["offset"] = offset
            if delta:
                logger.info(
                    "%s brightness changed outside the daemon (%s -> %s); offset now %.3f",
                    ch.name,
                    ch.last_written,
                    observed,
                    offset,
                )
            return compute_target_brightness(
                proportion=proportion,
                offset=offset,
                min_brightness=ch.min_brightness,
                max_brightness=ch.max_brightness,
                power_multiplier=self.power_multiplier,
                sensor_multiplier=float(ch.sensor_multiplier),
                dimmed=self.is_dimmed,
            )

        try:
            target = ch.device.read_modify_write(_compute)
        except OSError as exc:
            log_throttled(
                logger,
                f"engine.write.{ch.name}",
                "Could not update %s brightness at %s: %s",
                ch.name,
                ch.device.path,
                describe_device_error(exc),
                interval_s=_DEVICE_ERROR_LOG_INTERVAL_S,
                level=logging.WARNING,
            )
            return

        ch.offset = pending.get("offset", ch.offset)
        ch.last_written = target
        logger.debug("Adjusting %s brightness to %d", ch.name, target)

"""Wires configuration, devices and the dimming state machine together."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from backlightd.core.channels import KEYBOARD, SCREEN, ChannelState
from backlightd.core.config import Config
from backlightd.core.devices import BrightnessFile, find_keyboard_brightness, find_light_sensor, find_screen_brightness
from backlightd.core.engine import BrightnessEngine
from backlightd.core.idle import IdleSource, create_idle_source
from backlightd.core.lock_trigger import LockTrigger
from backlightd.core.monitoring import PowerStateMonitor
from backlightd.core.sensors import LightSensorAdapter

from .dimming import DimmingStateMachine, DimState
from .notifications import PowerNotifications, resolve_signal

logger = logging.getLogger(__name__)


def build_channel(
    name: str,
    device_path: Optional[Path],
    *,
    min_brightness: int,
    max_brightness: Optional[int],
) -> Optional[ChannelState]:
    """Channel for *device_path*, or None when there is no usable device."""

    if device_path is None:
        logger.warning("No %s backlight device found; %s channel disabled", name, name)
        return None

    device = BrightnessFile(Path(device_path))
    if max_brightness is None:
        max_brightness = device.read_max()
    if max_brightness is None:
        logger.warning("Cannot determine max brightness of %s (%s); channel disabled", name, device.path)
        return None

    channel = ChannelState(
        name=name,
        device=device,
        min_brightness=min_brightness,
        max_brightness=max_brightness,
    )
    channel.seed_from_device()
    logger.info(
        "%s: %s range=[%d, %d] current=%s",
        name,
        device.path,
        channel.min_brightness,
        channel.max_brightness,
        channel.last_written,
    )
    return channel


class BacklightDaemon:
    def __init__(self, config: Config, *, idle_source: Optional[IdleSource] = None):
        self.config = config

        channels = [
            build_channel(
                SCREEN,
                config.screen_device or find_screen_brightness(),
                min_brightness=config.screen_min_brightness,
                max_brightness=config.screen_max_brightness,
            ),
            build_channel(
                KEYBOARD,
                config.keyboard_device or find_keyboard_brightness(),
                min_brightness=config.keyboard_min_brightness,
                max_brightness=config.keyboard_max_brightness,
            ),
        ]
        self.engine = BrightnessEngine(ch for ch in channels if ch is not None)

        sensor_path = config.light_sensor or find_light_sensor()
        if sensor_path is None:
            logger.info("No ambient light sensor; using bright-environment defaults")
        self.sensor = LightSensorAdapter(self.engine, sensor_path)
        self.power = PowerStateMonitor(self.engine, config.adapter_state)
        self.notifications = PowerNotifications()
        self.lock = LockTrigger(config.lock_command)

        self.idle_source = idle_source
        self.machine: Optional[DimmingStateMachine] = None

    def start(self) -> DimmingStateMachine:
        """Connect the idle source and build the state machine.

        Raises IdleSourceUnavailable when the idle source cannot be reached.
        """

        if self.idle_source is None:
            self.idle_source = create_idle_source(self.config.idle_source)

        self.notifications.install(resolve_signal(self.config.power_signal))
        # Apply the power state found at start-up on the first safe point.
        self.notifications.request()

        self.machine = DimmingStateMachine(
            self.engine,
            self.idle_source,
            sensor=self.sensor,
            power=self.power,
            notifications=self.notifications,
            lock=self.lock,
            idle_threshold_s=self.config.idle_threshold_s,
            lock_delay_s=self.config.lock_delay_s,
            ramp_step_delay_s=self.config.ramp_step_delay_ms / 1000.0,
            dimmed_poll_interval_s=self.config.dimmed_poll_interval_ms / 1000.0,
            active_poll_interval_s=self.config.active_poll_interval_s,
        )
        return self.machine

    def restore(self) -> None:
        """Leave the backlight at full brightness (used on shutdown)."""

        if self.machine is not None and self.machine.state is not DimState.ACTIVE:
            self.engine.is_dimmed = False
            self.engine.set_proportion(1.0)

    def run(self) -> None:
        machine = self.start()
        try:
            machine.run()
        finally:
            self.notifications.uninstall()
            self.restore()

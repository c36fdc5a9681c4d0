"""Idle dimming state machine.

ACTIVE waits for the idle threshold, DIMMING ramps the brightness down and
DIMMED waits for the user to come back. Everything runs on the caller's
thread with blocking sleeps between polls.
"""

from __future__ import annotations

import logging
import time
from enum import Enum

from backlightd.core.engine import BrightnessEngine
from backlightd.core.idle import IdleSource
from backlightd.core.lock_trigger import LockTrigger
from backlightd.core.monitoring import PowerStateMonitor
from backlightd.core.sensors import LightSensorAdapter

from .notifications import PowerNotifications

logger = logging.getLogger(__name__)

RAMP_STEPS = 1000


class DimState(Enum):
    ACTIVE = "active"
    DIMMING = "dimming"
    DIMMED = "dimmed"


def ramp_proportions(steps: int = RAMP_STEPS) -> list[float]:
    """1.0 down to 0.0 in `steps` equal decrements (steps + 1 values)."""

    return [(steps - i) / steps for i in range(steps + 1)]


class DimmingStateMachine:
    def __init__(
        self,
        engine: BrightnessEngine,
        idle_source: IdleSource,
        *,
        sensor: LightSensorAdapter,
        power: PowerStateMonitor,
        notifications: PowerNotifications,
        lock: LockTrigger,
        idle_threshold_s: float,
        lock_delay_s: float,
        ramp_step_delay_s: float = 0.01,
        dimmed_poll_interval_s: float = 0.5,
        active_poll_interval_s: float = 2.0,
    ):
        self.engine = engine
        self.idle_source = idle_source
        self.sensor = sensor
        self.power = power
        self.notifications = notifications
        self.lock = lock

        self.idle_threshold_ms = int(float(idle_threshold_s) * 1000)
        self.lock_delay_ms = int(float(lock_delay_s) * 1000)
        self.ramp_step_delay_s = float(ramp_step_delay_s)
        self.dimmed_poll_interval_s = float(dimmed_poll_interval_s)
        self.active_poll_interval_s = float(active_poll_interval_s)

        self.state = DimState.ACTIVE

    def _idle_ms(self) -> int:
        return int(self.idle_source.idle_ms())

    def _service_notifications(self) -> None:
        self.notifications.drain(self.power.refresh_power_state)

    def _set_state(self, state: DimState) -> None:
        if state is not self.state:
            logger.info("State %s -> %s", self.state.value, state.value)
        self.state = state

    # ---- ACTIVE

    def wait_for_idle(self) -> int:
        """Block until idle time reaches the threshold; returns that idle value.

        Sleeps in bounded chunks so the sensor stays current and power
        notifications are handled while waiting.
        """

        self._set_state(DimState.ACTIVE)
        while True:
            self._service_notifications()
            idle = self._idle_ms()
            if idle >= self.idle_threshold_ms:
                return idle

            remaining_s = (self.idle_threshold_ms - idle) / 1000.0
            time.sleep(min(remaining_s, self.active_poll_interval_s))
            self.sensor.poll_sensor()

    # ---- DIMMING

    def dim(self, entry_idle: int) -> bool:
        """Run the ramp. Returns True when it completed and the machine is dimmed."""

        self._set_state(DimState.DIMMING)
        proportions = ramp_proportions()
        for step, proportion in enumerate(proportions):
            if self._idle_ms() < entry_idle:
                logger.info("Woken during dimming ramp at step %d/%d", step, len(proportions) - 1)
                self.engine.set_proportion(1.0)
                self._set_state(DimState.ACTIVE)
                return False

            self.engine.set_proportion(proportion)
            time.sleep(self.ramp_step_delay_s)
            self._service_notifications()

        # The dimmed floor applies to this closing write.
        self.engine.is_dimmed = True
        self.engine.set_proportion(0.0)
        self._set_state(DimState.DIMMED)
        return True

    # ---- DIMMED

    def wait_for_wake(self) -> None:
        """Poll until idle time drops, firing the lock once past the lock delay."""

        self._set_state(DimState.DIMMED)
        lock_armed = True
        last_idle = self._idle_ms()

        while True:
            time.sleep(self.dimmed_poll_interval_s)
            idle = self._idle_ms()
            if idle < last_idle:
                break
            last_idle = idle

            if lock_armed and idle >= self.lock_delay_ms:
                lock_armed = False
                logger.info("Idle for %.0f s; locking screen", idle / 1000.0)
                self.lock.trigger_lock()

            self.sensor.poll_sensor()
            self._service_notifications()

        logger.info("Woken after %.0f s idle", last_idle / 1000.0)
        self.engine.is_dimmed = False
        self.engine.set_proportion(1.0)
        self._set_state(DimState.ACTIVE)

    # ---- loop

    def run_once(self) -> bool:
        """One ACTIVE -> ... -> ACTIVE cycle. Returns True if it reached DIMMED."""

        entry_idle = self.wait_for_idle()
        if not self.dim(entry_idle):
            return False
        self.wait_for_wake()
        return True

    def run(self) -> None:
        while True:
            self.run_once()

"""backlightd Config implementation."""

from __future__ import annotations

import logging
from typing import Any

from ._props import (
    bool_prop,
    enum_prop,
    float_prop,
    int_prop,
    optional_int_prop,
    optional_path_prop,
    optional_str_prop,
)
from .defaults import DEFAULTS as _DEFAULTS
from .file_storage import load_config_settings, save_config_settings_atomic
from .paths import config_dir, config_file_path

logger = logging.getLogger(__name__)


class Config:
    """Configuration for backlightd.

    Values come from the JSON config file merged over DEFAULTS. Command line
    options are applied with `apply_overrides` and only persist if `save`
    is called.
    """

    DEFAULTS = _DEFAULTS

    def __init__(self):
        # Recompute at runtime so test harnesses can set env vars in conftest.
        self.CONFIG_DIR = config_dir()
        self.CONFIG_FILE = config_file_path()
        loaded = self._load()
        self._settings: dict[str, Any] = loaded if loaded is not None else dict(self.DEFAULTS)

    def _load(self, *, retries: int = 3, retry_delay: float = 0.02):
        return load_config_settings(
            config_file=self.CONFIG_FILE,
            defaults=self.DEFAULTS,
            retries=retries,
            retry_delay=retry_delay,
            logger=logger,
        )

    def reload(self) -> None:
        loaded = self._load()
        # If the file was transiently unreadable, keep the previous in-memory settings.
        if loaded is not None:
            self._settings = loaded

    def save(self) -> bool:
        return save_config_settings_atomic(
            config_dir=self.CONFIG_FILE.parent,
            config_file=self.CONFIG_FILE,
            settings={k: self._settings.get(k) for k in self.DEFAULTS},
            logger=logger,
        )

    def apply_overrides(self, **values: Any) -> None:
        """Set known keys in memory; None means "not given" and is skipped."""

        for key, value in values.items():
            if value is None:
                continue
            if key not in self.DEFAULTS:
                raise KeyError(f"Unknown config key: {key}")
            setattr(self, key, value)

    # ---- devices

    screen_device = optional_path_prop("screen_device")
    keyboard_device = optional_path_prop("keyboard_device")
    light_sensor = optional_path_prop("light_sensor")
    adapter_state = optional_path_prop("adapter_state")

    screen_min_brightness = int_prop("screen_min_brightness", default=0, min_v=0)
    screen_max_brightness = optional_int_prop("screen_max_brightness", min_v=1)
    keyboard_min_brightness = int_prop("keyboard_min_brightness", default=0, min_v=0)
    keyboard_max_brightness = optional_int_prop("keyboard_max_brightness", min_v=1)

    # ---- idle / dimming

    idle_source = enum_prop("idle_source", default="x11", allowed=("x11", "logind"))
    idle_threshold_s = float_prop("idle_threshold_s", default=30.0, min_v=1.0)
    lock_delay_s = float_prop("lock_delay_s", default=300.0, min_v=0.0)
    lock_command = optional_str_prop("lock_command")

    ramp_step_delay_ms = int_prop("ramp_step_delay_ms", default=10, min_v=0, max_v=1000)
    dimmed_poll_interval_ms = int_prop("dimmed_poll_interval_ms", default=500, min_v=10, max_v=999)
    active_poll_interval_s = float_prop("active_poll_interval_s", default=2.0, min_v=0.1)

    # ---- process

    power_signal = enum_prop("power_signal", default="SIGUSR1", allowed=("SIGUSR1", "SIGUSR2", "SIGHUP"))
    daemonize = bool_prop("daemonize", default=False)

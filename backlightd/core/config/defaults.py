"""Default configuration values.

Split out from `backlightd.core.config` to keep that module small and focused.
"""

from __future__ import annotations

DEFAULTS: dict = {
    # Brightness attribute files. None = auto-detect under /sys.
    "screen_device": None,
    "keyboard_device": None,
    # Device units. A max of None is read from the sibling max_brightness file.
    "screen_min_brightness": 0,
    "screen_max_brightness": None,
    "keyboard_min_brightness": 0,
    "keyboard_max_brightness": None,
    # Ambient light sensor ("(left,right)" pair). None = auto-detect applesmc.
    "light_sensor": None,
    # Free-text AC adapter state, e.g. /proc/acpi/ac_adapter/ADP1/state.
    # None = use /sys/class/power_supply.
    "adapter_state": None,
    # 'x11' | 'logind'
    "idle_source": "x11",
    "idle_threshold_s": 30,
    "lock_delay_s": 300,
    # Executable started (no arguments) once idle passes lock_delay_s while dimmed.
    "lock_command": None,
    # 1000 ramp steps; 10 ms each gives a 10 s fade.
    "ramp_step_delay_ms": 10,
    "dimmed_poll_interval_ms": 500,
    # Longest single sleep while waiting for the idle threshold.
    "active_poll_interval_s": 2.0,
    # Signal sent by the ACPI/udev helper on AC plug/unplug.
    "power_signal": "SIGUSR1",
    "daemonize": False,
}

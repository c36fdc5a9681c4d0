from __future__ import annotations

from .power_state import PowerStateMonitor
from .power_supply import iter_ac_online_files, read_adapter_state, read_on_ac_power

__all__ = ["PowerStateMonitor", "iter_ac_online_files", "read_adapter_state", "read_on_ac_power"]

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..engine import BrightnessEngine
from ..policies.power_multiplier import compute_power_multiplier
from .power_supply import read_adapter_state

logger = logging.getLogger(__name__)


class PowerStateMonitor:
    """Maps AC adapter connectivity to the engine's power multiplier.

    Only called when a power notification was received; never polled.
    """

    def __init__(
        self,
        engine: BrightnessEngine,
        adapter_state_path: Optional[Path] = None,
        *,
        power_supply_root: Optional[Path] = None,
    ):
        self.engine = engine
        self.adapter_state_path = adapter_state_path
        self.power_supply_root = power_supply_root

    def refresh_power_state(self) -> bool:
        """Re-read the adapter state; re-apply brightness if the multiplier moved."""

        on_ac = read_adapter_state(self.adapter_state_path, power_supply_root=self.power_supply_root)
        multiplier = compute_power_multiplier(on_ac)
        if multiplier == self.engine.power_multiplier:
            return False

        logger.info(
            "Power source changed (%s): multiplier %.2f -> %.2f",
            "unknown" if on_ac is None else ("AC" if on_ac else "battery"),
            self.engine.power_multiplier,
            multiplier,
        )
        self.engine.power_multiplier = multiplier
        self.engine.reapply()
        return True

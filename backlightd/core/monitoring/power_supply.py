from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from ..devices import common
from ..policies.power_multiplier import classify_adapter_state


def iter_ac_online_files(power_supply_root: Path) -> list[Path]:
    files: list[Path] = []
    try:
        for child in sorted(power_supply_root.iterdir()):
            if not child.is_dir():
                continue
            online = child / "online"
            if not online.exists():
                continue
            # Prefer devices that identify as Mains.
            typ = (common.read_text(child / "type") or "").strip().lower()
            if typ == "mains":
                files.append(online)

        if files:
            return files
    except OSError:
        pass

    # Fallback: common names like AC/ACAD/ADP1
    for pattern in ("AC*/online", "ADP*/online"):
        try:
            files.extend(sorted(power_supply_root.glob(pattern)))
        except OSError:
            continue

    return files


def _power_supply_root() -> Path:
    override = os.environ.get("BACKLIGHTD_SYSFS_POWER_SUPPLY_ROOT")
    if override:
        return Path(override)
    return common.sysfs_root() / "class" / "power_supply"


def read_on_ac_power(*, power_supply_root: Optional[Path] = None) -> Optional[bool]:
    if power_supply_root is None:
        power_supply_root = _power_supply_root()

    for online_path in iter_ac_online_files(power_supply_root):
        raw = (common.read_text(online_path) or "").strip()
        if raw in ("1", "0"):
            return raw == "1"

    return None


def read_adapter_state(
    adapter_state_path: Optional[Path] = None,
    *,
    power_supply_root: Optional[Path] = None,
) -> Optional[bool]:
    """AC connectivity from the adapter state file, else the power_supply class."""

    if adapter_state_path is not None:
        on_ac = classify_adapter_state(common.read_text(adapter_state_path))
        if on_ac is not None:
            return on_ac

    return read_on_ac_power(power_supply_root=power_supply_root)

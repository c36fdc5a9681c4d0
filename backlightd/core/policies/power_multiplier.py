from __future__ import annotations

from typing import Optional

AC_MULTIPLIER = 1.0
BATTERY_MULTIPLIER = 0.5

_ONLINE_KEYWORDS = ("on-line", "online")


def classify_adapter_state(text: Optional[str]) -> Optional[bool]:
    """Classify free-text adapter state ("state:      on-line").

    Returns True on AC, False on battery, None when there is nothing to read.
    """

    if text is None:
        return None
    s = str(text).strip().lower()
    if not s:
        return None
    return any(keyword in s for keyword in _ONLINE_KEYWORDS)


def compute_power_multiplier(on_ac: Optional[bool]) -> float:
    """Unknown power state counts as AC so brightness is never cut by mistake."""

    if on_ac is None or bool(on_ac):
        return AC_MULTIPLIER
    return BATTERY_MULTIPLIER

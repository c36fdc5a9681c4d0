"""backlightd daemon package."""

from __future__ import annotations

from .application import BacklightDaemon
from .dimming import DimmingStateMachine, DimState

__all__ = ["BacklightDaemon", "DimState", "DimmingStateMachine"]

"""Power-change notifications delivered by signal.

The signal handler only sets a flag. The control loop drains it at points
where no brightness update is in flight and does the device I/O there.
"""

from __future__ import annotations

import logging
import signal
from collections.abc import Callable
from typing import Optional

logger = logging.getLogger(__name__)


def resolve_signal(name: str) -> signal.Signals:
    try:
        return signal.Signals[str(name).strip().upper()]
    except KeyError as exc:
        raise ValueError(f"Unknown signal name: {name!r}") from exc


class PowerNotifications:
    def __init__(self) -> None:
        # Written from the signal handler, which may interrupt drain() anywhere;
        # no lock may guard it.
        self._pending = False
        self._signum: Optional[int] = None
        self._previous_handler = None

    def request(self) -> None:
        """Mark a power-state refresh as pending. Safe from a signal handler."""

        self._pending = True

    @property
    def pending(self) -> bool:
        return self._pending

    def _on_signal(self, signum, frame) -> None:
        self._pending = True

    def install(self, signum: int) -> None:
        self._previous_handler = signal.signal(signum, self._on_signal)
        self._signum = signum
        logger.info("Listening for power notifications on %s", signal.Signals(signum).name)

    def uninstall(self) -> None:
        if self._signum is None:
            return
        signal.signal(self._signum, self._previous_handler or signal.SIG_DFL)
        self._signum = None

    def drain(self, refresh: Callable[[], object]) -> bool:
        """Run *refresh* once if a notification is pending. Returns True if it ran."""

        if not self._pending:
            return False
        # Reset before refreshing so a signal during refresh() is kept.
        self._pending = False
        refresh()
        return True

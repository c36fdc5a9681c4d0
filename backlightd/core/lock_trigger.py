from __future__ import annotations

import logging
import subprocess
from typing import Optional

logger = logging.getLogger(__name__)


class LockTrigger:
    """Fire-and-forget launcher for the screen locker."""

    def __init__(self, command: Optional[str] = None):
        self.command = command
        self._process: Optional[subprocess.Popen] = None

    def trigger_lock(self) -> bool:
        """Spawn the lock command with no arguments; never waits for it.

        Returns False when no command is configured or spawning failed.
        """

        if not self.command:
            logger.debug("Lock delay reached but no lock command is configured")
            return False

        # Reap a locker left over from an earlier episode.
        if self._process is not None and self._process.poll() is not None:
            self._process = None

        try:
            self._process = subprocess.Popen(
                [self.command],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            logger.warning("Failed to start lock command %s: %s", self.command, exc)
            return False

        logger.info("Started lock command %s (pid %s)", self.command, self._process.pid)
        return True

from __future__ import annotations

import logging
import os
import sys

from . import runtime

logger = logging.getLogger(__name__)


def configure_logging(*, daemonize: bool = False, debug: bool = False) -> None:
    """Configure root logging for the daemon.

    If callers already configured logging handlers, we don't override them.
    Daemonized runs only report warnings; BACKLIGHTD_DEBUG or --debug wins.
    """

    if logging.getLogger().handlers:
        return

    if debug or os.environ.get("BACKLIGHTD_DEBUG"):
        level = logging.DEBUG
    elif daemonize:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def acquire_single_instance_or_exit() -> None:
    """Acquire the single-instance lock or exit with code 0."""

    if runtime.acquire_single_instance_lock():
        return

    logger.error("backlightd is already running (lock held). Not starting a second instance.")
    sys.exit(0)

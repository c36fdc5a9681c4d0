"""Daemon startup entrypoint.

This module owns the startup sequence (arguments, logging, single-instance)
and then launches the `BacklightDaemon`.
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys
from typing import Optional, Sequence

from backlightd.core.config import Config
from backlightd.core.idle import IDLE_SOURCES
from backlightd.core.utils.exceptions import IdleSourceUnavailable

from .application import BacklightDaemon
from .startup import acquire_single_instance_or_exit, configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="backlightd",
        description="Dim screen and keyboard backlights when idle, following ambient light and power source.",
    )
    parser.add_argument("--screen-max", dest="screen_max_brightness", type=int, help="Screen max brightness")
    parser.add_argument("--keyboard-max", dest="keyboard_max_brightness", type=int, help="Keyboard max brightness")
    parser.add_argument(
        "--idle-threshold", dest="idle_threshold_s", type=float, help="Idle seconds before dimming"
    )
    parser.add_argument("--lock-delay", dest="lock_delay_s", type=float, help="Idle seconds before locking")
    parser.add_argument("--lock-command", dest="lock_command", help="Screen locker executable")
    parser.add_argument("--idle-source", dest="idle_source", choices=IDLE_SOURCES, help="Where idle time comes from")
    parser.add_argument(
        "--daemonize",
        dest="daemonize",
        action="store_true",
        default=None,
        help="Unattended mode: only log warnings (detaching is left to the service manager)",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument(
        "--write-config",
        action="store_true",
        help="Save the effective settings to the config file and exit",
    )
    return parser


_OVERRIDE_KEYS = (
    "screen_max_brightness",
    "keyboard_max_brightness",
    "idle_threshold_s",
    "lock_delay_s",
    "lock_command",
    "idle_source",
    "daemonize",
)


def _raise_keyboard_interrupt(signum, frame) -> None:
    raise KeyboardInterrupt()


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        config = Config()
        config.apply_overrides(**{k: getattr(args, k) for k in _OVERRIDE_KEYS})
        configure_logging(daemonize=config.daemonize, debug=args.debug)

        if args.write_config:
            if not config.save():
                sys.exit(1)
            logger.info("Wrote %s", config.CONFIG_FILE)
            return

        acquire_single_instance_or_exit()
        signal.signal(signal.SIGTERM, _raise_keyboard_interrupt)

        daemon = BacklightDaemon(config)
        daemon.run()

    except IdleSourceUnavailable as exc:
        logger.error("Cannot read idle time: %s", exc)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        sys.exit(0)
    except Exception as exc:
        logger.exception("Unhandled error: %s", exc)
        sys.exit(1)

from __future__ import annotations

import logging
import os
from contextlib import suppress
from pathlib import Path
from typing import Optional

from backlightd.core.config import lock_file_path

logger = logging.getLogger(__name__)

_instance_lock_fh = None


def acquire_single_instance_lock(lock_dir: Optional[Path] = None) -> bool:
    """Ensure only one backlightd instance drives the backlight."""

    global _instance_lock_fh

    try:
        import fcntl  # Linux/Unix
    except ImportError:
        return True

    lock_path = lock_dir / "backlightd.lock" if lock_dir is not None else lock_file_path()
    with suppress(OSError):
        lock_path.parent.mkdir(parents=True, exist_ok=True)

    fh = None
    try:
        fh = open(lock_path, "a+")
        fcntl.flock(fh.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        fh.seek(0)
        fh.truncate()
        fh.write(f"pid={os.getpid()}\n")
        fh.flush()
    except OSError as exc:
        logger.debug("Could not take instance lock %s: %s", lock_path, exc)
        if fh is not None:
            fh.close()
        return False

    _instance_lock_fh = fh
    return True

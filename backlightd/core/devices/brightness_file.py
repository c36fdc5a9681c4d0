from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import common

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BrightnessFile:
    """A brightness attribute file (backlight class or LED class).

    Every operation opens and closes the file; no handle outlives a call.
    """

    path: Path

    @property
    def max_brightness_path(self) -> Path:
        return self.path.parent / "max_brightness"

    def read(self) -> Optional[int]:
        return common.read_int(self.path)

    def read_max(self) -> Optional[int]:
        m = common.read_int(self.max_brightness_path)
        if m is None or m <= 0:
            return None
        return m

    def read_modify_write(self, compute: Callable[[Optional[int]], int]) -> int:
        """Read the current value, pass it to *compute*, write the result back.

        The read and the write share one handle. *compute* receives None when
        the current content is not an integer. Raises OSError when the file
        cannot be opened or written; nothing is written in that case.
        """

        if common.writes_blocked(self.path):
            with open(self.path, "r", encoding="utf-8") as fh:
                value = compute(_parse(fh.read()))
            logger.debug("sysfs write to %s skipped under pytest", self.path)
            return value

        with open(self.path, "r+", encoding="utf-8") as fh:
            observed = _parse(fh.read())
            value = int(compute(observed))
            fh.seek(0)
            fh.write(f"{value}\n")
            # sysfs attributes take the whole write; plain files keep stale tail bytes.
            if not common.is_real_sysfs_path(self.path):
                fh.truncate()
            fh.flush()

        if os.environ.get("BACKLIGHTD_DEBUG_BRIGHTNESS") == "1":
            logger.info("sysfs.write %s <- %s (was %s)", self.path, value, observed)
        return value


def _parse(raw: str) -> Optional[int]:
    try:
        return int(raw.strip())
    except ValueError:
        return None

"""JSON persistence for the backlightd config file."""

from __future__ import annotations

import json
import os
import tempfile
import time
from contextlib import suppress
from pathlib import Path
from typing import Any

# Written by hand as often as by --write-config, so accept any case.
_LOWERCASE_KEYS = ("idle_source",)
_UPPERCASE_KEYS = ("power_signal",)


def _normalize_loaded(loaded: Any, defaults: dict[str, Any], logger) -> dict[str, Any]:
    if not isinstance(loaded, dict):
        logger.warning("Config file does not hold a JSON object; using defaults")
        return {}

    unknown = sorted(k for k in loaded if k not in defaults)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))

    out = {k: v for k, v in loaded.items() if k in defaults}
    for key in _LOWERCASE_KEYS:
        if isinstance(out.get(key), str):
            out[key] = out[key].strip().lower()
    for key in _UPPERCASE_KEYS:
        if isinstance(out.get(key), str):
            out[key] = out[key].strip().upper()
    return out


def load_config_settings(
    *,
    config_file: Path,
    defaults: dict[str, Any],
    retries: int = 3,
    retry_delay: float = 0.02,
    logger,
) -> dict[str, Any] | None:
    """Load config JSON merged over *defaults*.

    A missing file yields a copy of *defaults*. A file that does not parse is
    retried (an editor or `--write-config` may be mid-write); None is
    returned if it still fails, or on any OS error.
    """

    if not config_file.exists():
        return dict(defaults)

    attempts = max(1, retries)
    for attempt in range(1, attempts + 1):
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except json.JSONDecodeError as e:
            if attempt == attempts:
                logger.warning("Failed to parse config %s: %s", config_file, e)
                return None
            time.sleep(retry_delay)
            continue
        except OSError as e:
            logger.warning("Failed to read config %s: %s", config_file, e)
            return None

        return {**defaults, **_normalize_loaded(loaded, defaults, logger)}

    return None


def save_config_settings_atomic(*, config_dir: Path, config_file: Path, settings: dict[str, Any], logger) -> bool:
    """Write *settings* to a temp file in *config_dir*, then rename it over *config_file*.

    Returns False (and logs) on failure; the previous file is left untouched.
    """

    tmp_path: str | None = None
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix="config.", suffix=".tmp", dir=str(config_dir))
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(settings, f, indent=2, sort_keys=True)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, config_file)
        tmp_path = None
    except (OSError, TypeError, ValueError) as e:
        logger.warning("Failed to save config %s: %s", config_file, e)
        return False
    finally:
        if tmp_path is not None:
            with suppress(OSError):
                os.unlink(tmp_path)

    logger.debug("Saved config to %s", config_file)
    return True

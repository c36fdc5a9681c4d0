from __future__ import annotations

import threading
import time


_last_log_times: dict[str, float] = {}
_lock = threading.Lock()


def log_throttled(
    logger,
    key: str,
    msg: str,
    *args,
    interval_s: float,
    level: int,
    exc: BaseException | None = None,
) -> bool:
    """Log at most once per *interval_s* for a given *key*.

    *msg* and *args* are passed to the logger unformatted.

    Returns True if the message was logged.
    """

    now = time.monotonic()
    with _lock:
        last = _last_log_times.get(key)
        if last is not None and (now - last) < interval_s:
            return False
        _last_log_times[key] = now

    if exc is not None:
        logger.log(level, msg, *args, exc_info=exc)
        return True

    logger.log(level, msg, *args)
    return True


def reset_throttle(key: str | None = None) -> None:
    """Forget throttle history (all keys, or one key)."""

    with _lock:
        if key is None:
            _last_log_times.clear()
        else:
            _last_log_times.pop(key, None)

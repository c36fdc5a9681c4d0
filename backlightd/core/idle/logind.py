"""Idle time from systemd-logind's session IdleHint."""

from __future__ import annotations

import logging
import os
import subprocess
import time
from typing import Optional

from ..utils.exceptions import IdleSourceUnavailable

logger = logging.getLogger(__name__)


def _run(argv: list[str], *, timeout_s: float = 1.0) -> Optional[str]:
    try:
        cp = subprocess.run(argv, capture_output=True, text=True, timeout=timeout_s, check=False)
    except (OSError, subprocess.SubprocessError):
        return None
    if cp.returncode != 0:
        return None
    out = (cp.stdout or "").strip()
    return out or None


def get_session_id() -> Optional[str]:
    sid = os.environ.get("XDG_SESSION_ID")
    if sid:
        return str(sid).strip() or None

    out = _run(["loginctl", "show-user", str(os.getuid()), "-p", "Display", "--value"])
    if out:
        return out

    out = _run(["loginctl", "list-sessions", "--no-legend", "--no-pager"])
    if not out:
        return None

    for line in out.splitlines():
        parts = line.strip().split()
        if parts:
            return parts[0]

    return None


def read_logind_idle_seconds(*, session_id: str) -> Optional[float]:
    """Read idle time via logind IdleHint.

    Note: logind IdleHint timing is DE-controlled.
    """

    out = _run(
        [
            "loginctl",
            "show-session",
            session_id,
            "-p",
            "IdleHint",
            "-p",
            "IdleSinceHintMonotonic",
        ],
    )
    if out is None:
        return None

    idle_hint_s: Optional[str] = None
    idle_since_us_s: Optional[str] = None
    for raw_line in out.splitlines():
        line = raw_line.strip()
        if not line or "=" not in line:
            continue
        k, v = line.split("=", 1)
        k = k.strip()
        v = v.strip()
        if k == "IdleHint":
            idle_hint_s = v
        elif k == "IdleSinceHintMonotonic":
            idle_since_us_s = v

    if idle_hint_s is None:
        return None

    s = idle_hint_s.strip().lower()
    if s in {"yes", "true", "1"}:
        is_idle = True
    elif s in {"no", "false", "0"}:
        is_idle = False
    else:
        return None

    if not is_idle:
        return 0.0

    try:
        idle_since_us = int((idle_since_us_s or "").strip())
    except ValueError:
        return None
    # logind returns microseconds from the monotonic clock.
    now_us = int(time.monotonic() * 1_000_000)
    return max(0, now_us - idle_since_us) / 1_000_000.0


class LogindIdleSource:
    name = "logind"

    def __init__(self, session_id: Optional[str] = None):
        self.session_id = session_id or get_session_id()
        if not self.session_id:
            raise IdleSourceUnavailable("No logind session found for this user")
        if read_logind_idle_seconds(session_id=self.session_id) is None:
            raise IdleSourceUnavailable(f"logind session {self.session_id} does not report IdleHint")
        logger.debug("Using logind session %s for idle time", self.session_id)

    def idle_ms(self) -> int:
        idle_s = read_logind_idle_seconds(session_id=self.session_id)
        if idle_s is None:
            return 0
        return int(idle_s * 1000)

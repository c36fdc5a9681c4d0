"""Idle-time sources.

An idle source is any object with an ``idle_ms() -> int`` method returning
milliseconds since the last user input.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..utils.exceptions import IdleSourceUnavailable


@runtime_checkable
class IdleSource(Protocol):
    def idle_ms(self) -> int: ...


IDLE_SOURCES = ("x11", "logind")


def create_idle_source(name: str) -> IdleSource:
    """Connect to the named idle source; raises IdleSourceUnavailable."""

    name = str(name or "").strip().lower()
    if name == "x11":
        from .x11 import X11IdleSource

        return X11IdleSource()
    if name == "logind":
        from .logind import LogindIdleSource

        return LogindIdleSource()
    raise IdleSourceUnavailable(f"Unknown idle source: {name!r}")


__all__ = ["IDLE_SOURCES", "IdleSource", "create_idle_source"]

"""Idle time from the X11 MIT-SCREEN-SAVER extension."""

from __future__ import annotations

import ctypes
import ctypes.util
import logging
import os
from typing import Optional

from ..utils.exceptions import IdleSourceUnavailable

logger = logging.getLogger(__name__)


class XScreenSaverInfo(ctypes.Structure):
    """typedef struct { ... } XScreenSaverInfo;"""

    _fields_ = [
        ("window", ctypes.c_ulong),  # screen saver window
        ("state", ctypes.c_int),  # off, on, disabled
        ("kind", ctypes.c_int),  # blanked, internal, external
        ("til_or_since", ctypes.c_ulong),  # milliseconds
        ("idle", ctypes.c_ulong),  # milliseconds
        ("event_mask", ctypes.c_ulong),  # events
    ]


def _load(soname: str, short: str) -> ctypes.CDLL:
    try:
        return ctypes.cdll.LoadLibrary(soname)
    except OSError:
        found = ctypes.util.find_library(short)
        if not found:
            raise
        return ctypes.cdll.LoadLibrary(found)


class X11IdleSource:
    name = "x11"

    def __init__(self, display: Optional[str] = None):
        display = display if display is not None else os.environ.get("DISPLAY")
        try:
            self._xlib = _load("libX11.so.6", "X11")
            self._xss = _load("libXss.so.1", "Xss")
        except OSError as exc:
            raise IdleSourceUnavailable(f"X11 screensaver libraries not available: {exc}") from exc

        self._xlib.XOpenDisplay.argtypes = [ctypes.c_char_p]
        self._xlib.XOpenDisplay.restype = ctypes.c_void_p
        self._xlib.XDefaultRootWindow.argtypes = [ctypes.c_void_p]
        self._xlib.XDefaultRootWindow.restype = ctypes.c_ulong
        self._xss.XScreenSaverAllocInfo.restype = ctypes.POINTER(XScreenSaverInfo)
        self._xss.XScreenSaverQueryInfo.argtypes = [
            ctypes.c_void_p,
            ctypes.c_ulong,
            ctypes.POINTER(XScreenSaverInfo),
        ]
        self._xss.XScreenSaverQueryInfo.restype = ctypes.c_int

        self._dpy = self._xlib.XOpenDisplay(display.encode() if display else None)
        if not self._dpy:
            raise IdleSourceUnavailable(f"Couldn't connect to X display {display!r}")

        self._root = self._xlib.XDefaultRootWindow(self._dpy)
        self._info = self._xss.XScreenSaverAllocInfo()
        if not self._info:
            raise IdleSourceUnavailable("XScreenSaverAllocInfo failed")
        logger.debug("Connected to X display %s for idle time", display)

    def idle_ms(self) -> int:
        if not self._xss.XScreenSaverQueryInfo(self._dpy, self._root, self._info):
            logger.debug("XScreenSaverQueryInfo failed; reporting idle=0")
            return 0
        return int(self._info.contents.idle)

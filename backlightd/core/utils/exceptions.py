from __future__ import annotations


class BacklightdError(Exception):
    """Base class for errors raised by backlightd."""


class IdleSourceUnavailable(BacklightdError):
    """The idle-time source could not be connected at start-up."""


def is_device_disconnected(exc: Exception) -> bool:
    """Best-effort check for a disappeared device.

    Backlight drivers can be unbound at runtime (hybrid graphics, module
    reloads); sysfs then answers with ENODEV or ENOENT.
    """

    errno = getattr(exc, "errno", None)
    if errno in (2, 19):
        # ENOENT=2, ENODEV=19
        return True

    try:
        msg = str(exc)
    except Exception:
        return False

    return "No such device" in msg or "No such file" in msg


def is_permission_denied(exc: Exception) -> bool:
    """Best-effort check for permission/authorization failures.

    Used to tell the user that udev rules are missing rather than the device.
    """

    if isinstance(exc, PermissionError):
        return True

    errno = getattr(exc, "errno", None)
    if errno in (1, 13):
        # EPERM=1, EACCES=13
        return True

    try:
        msg = str(exc).lower()
    except Exception:
        return False

    return "permission denied" in msg or "not permitted" in msg


def describe_device_error(exc: Exception) -> str:
    """Short human hint for a failed device read/write."""

    if is_permission_denied(exc):
        return "permission denied (is a udev rule granting write access installed?)"
    if is_device_disconnected(exc):
        return "device not present"
    return str(exc) or exc.__class__.__name__

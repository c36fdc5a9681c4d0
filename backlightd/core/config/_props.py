from __future__ import annotations

from pathlib import Path
from typing import Iterable


def bool_prop(key: str, *, default: bool) -> property:
    def _get(self) -> bool:
        v = self._settings.get(key, default)
        if isinstance(v, str):
            return v.strip().lower() in {"1", "true", "yes", "on"}
        return bool(v)

    def _set(self, value: bool) -> None:
        self._settings[key] = bool(value)

    return property(_get, _set)


def _coerce_number(raw, default, cast, min_v, max_v):
    try:
        v = cast(raw)
    except (TypeError, ValueError):
        v = cast(default)
    if min_v is not None:
        v = max(cast(min_v), v)
    if max_v is not None:
        v = min(cast(max_v), v)
    return v


def int_prop(key: str, *, default: int, min_v: int | None = None, max_v: int | None = None) -> property:
    def _get(self) -> int:
        return _coerce_number(self._settings.get(key, default), default, int, min_v, max_v)

    def _set(self, value: int) -> None:
        self._settings[key] = _coerce_number(value, default, int, min_v, max_v)

    return property(_get, _set)


def float_prop(
    key: str, *, default: float, min_v: float | None = None, max_v: float | None = None
) -> property:
    def _get(self) -> float:
        return _coerce_number(self._settings.get(key, default), default, float, min_v, max_v)

    def _set(self, value: float) -> None:
        self._settings[key] = _coerce_number(value, default, float, min_v, max_v)

    return property(_get, _set)


def optional_int_prop(key: str, *, min_v: int | None = None) -> property:
    def _get(self) -> int | None:
        v = self._settings.get(key, None)
        if v is None:
            return None
        try:
            v = int(v)
        except (TypeError, ValueError):
            return None
        if min_v is not None and v < min_v:
            return None
        return v

    def _set(self, value: int | None) -> None:
        self._settings[key] = None if value is None else int(value)

    return property(_get, _set)


def enum_prop(key: str, *, default: str, allowed: Iterable[str]) -> property:
    allowed_set = {str(x).strip().lower() for x in allowed}
    default_norm = str(default or "").strip().lower()
    if default_norm not in allowed_set:
        default_norm = next(iter(allowed_set)) if allowed_set else ""

    def _get(self) -> str:
        v = str(self._settings.get(key, default_norm) or default_norm).strip().lower()
        return v if v in allowed_set else default_norm

    def _set(self, value: str) -> None:
        v = str(value or default_norm).strip().lower()
        self._settings[key] = v if v in allowed_set else default_norm

    return property(_get, _set)


def optional_path_prop(key: str) -> property:
    def _get(self) -> Path | None:
        v = self._settings.get(key, None)
        if not v:
            return None
        return Path(str(v)).expanduser()

    def _set(self, value) -> None:
        self._settings[key] = str(value) if value else None

    return property(_get, _set)


def optional_str_prop(key: str) -> property:
    def _get(self) -> str | None:
        v = self._settings.get(key, None)
        if v is None:
            return None
        s = str(v).strip()
        return s or None

    def _set(self, value: str | None) -> None:
        self._settings[key] = str(value).strip() if value else None

    return property(_get, _set)

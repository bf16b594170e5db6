"""Defensive environment parsing helpers shared by the config modules."""

from __future__ import annotations

import os

_DISABLED_VALUES = {"0", "none", "null", "disabled", "disable", "off", "false", "no"}
_ENABLED_VALUES = {"1", "true", "yes", "y", "on"}


def get_str(name: str, default: str) -> str:
    return (os.getenv(name) or "").strip() or default


def get_float(name: str, default: float, *, minimum: float | None = None) -> float:
    raw = (os.getenv(name) or "").strip()
    try:
        value = float(raw) if raw else float(default)
    except Exception:
        value = float(default)
    if minimum is not None and value < minimum:
        value = float(default)
    return value


def get_int(name: str, default: int, *, minimum: int | None = None) -> int:
    raw = (os.getenv(name) or "").strip()
    try:
        value = int(raw) if raw else int(default)
    except Exception:
        value = int(default)
    if minimum is not None and value < minimum:
        value = int(default)
    return value


def get_bool(name: str, default: bool) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return bool(default)
    if raw in _DISABLED_VALUES:
        return False
    return raw in _ENABLED_VALUES


__all__ = ["get_bool", "get_float", "get_int", "get_str"]

"""Admission control configuration (env-resolved constants only)."""

from __future__ import annotations

from .env import get_int

MAX_CONCURRENT_CONNECTIONS: int = max(1, get_int("MAX_CONCURRENT_CONNECTIONS", 100))

__all__ = ["MAX_CONCURRENT_CONNECTIONS"]

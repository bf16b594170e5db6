"""Logging configuration (env-resolved constants only)."""

from __future__ import annotations

from .env import get_str, get_bool

LOG_LEVEL: str = get_str("LOG_LEVEL", "INFO").upper()
LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# httpx and faster-whisper log every request/segment at INFO.
SHOW_THIRD_PARTY_LOGS: bool = get_bool("SHOW_THIRD_PARTY_LOGS", False)
THIRD_PARTY_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "faster_whisper", "websockets")

__all__ = ["LOG_FORMAT", "LOG_LEVEL", "SHOW_THIRD_PARTY_LOGS", "THIRD_PARTY_LOGGERS"]

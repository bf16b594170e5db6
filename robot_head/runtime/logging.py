"""Logging initialization."""

from __future__ import annotations

import logging

from robot_head.config.logging import LOG_LEVEL, LOG_FORMAT, THIRD_PARTY_LOGGERS, SHOW_THIRD_PARTY_LOGS


def configure_logging() -> None:
    # httpx and faster-whisper are chatty at INFO. Keep them tame unless explicitly enabled.
    if not SHOW_THIRD_PARTY_LOGS:
        for name in THIRD_PARTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


__all__ = ["configure_logging"]

"""Client connection and capture configuration (env-resolved constants only)."""

from __future__ import annotations

from .env import get_int, get_str, get_float

ROBOT_HEAD_SERVER: str = get_str("ROBOT_HEAD_SERVER", "localhost:9001")

CONNECT_MAX_ATTEMPTS: int = get_int("CONNECT_MAX_ATTEMPTS", 5, minimum=1)
CONNECT_BASE_DELAY_S: float = get_float("CONNECT_BASE_DELAY_S", 1.0, minimum=0.0)

# Length of each microphone recording sent as one audio envelope.
RECORD_SECONDS: float = get_float("RECORD_SECONDS", 3.0, minimum=0.1)
CAPTURE_RETRY_DELAY_S: float = 1.0

# Disable protocol-level ping/pong; replies can take a while to synthesize.
WS_PING_INTERVAL_S: float | None = None
WS_PING_TIMEOUT_S: float | None = None
WS_MAX_MESSAGE_BYTES: int = 32 * 1024 * 1024

CONNECTED_STATUS_MESSAGE: str = "Robot head client connected"

__all__ = [
    "CAPTURE_RETRY_DELAY_S",
    "CONNECTED_STATUS_MESSAGE",
    "CONNECT_BASE_DELAY_S",
    "CONNECT_MAX_ATTEMPTS",
    "RECORD_SECONDS",
    "ROBOT_HEAD_SERVER",
    "WS_MAX_MESSAGE_BYTES",
    "WS_PING_INTERVAL_S",
    "WS_PING_TIMEOUT_S",
]

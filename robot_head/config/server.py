"""HTTP server binding configuration (env-resolved constants only)."""

from __future__ import annotations

from .env import get_int, get_str, get_float

HOST: str = get_str("HOST", "0.0.0.0")
PORT: int = get_int("PORT", 9001, minimum=1)

# Seconds an in-flight turn may keep running after a termination signal.
SHUTDOWN_GRACE_S: float = get_float("SHUTDOWN_GRACE_S", 30.0, minimum=0.0)

ROOT_BANNER: str = "Hello from Robot Head Server!"
HEALTH_MESSAGE: str = "Server is healthy!"

__all__ = ["HEALTH_MESSAGE", "HOST", "PORT", "ROOT_BANNER", "SHUTDOWN_GRACE_S"]

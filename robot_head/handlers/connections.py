"""WebSocket admission control, connection registry and graceful shutdown."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import AsyncIterator

from robot_head.config.websocket import WS_CLOSE_GOING_AWAY_CODE, WS_CLOSE_SHUTDOWN_REASON

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks live sockets and in-flight turns across all connections.

    Connections never see each other through this object; it only counts them
    so the server can refuse new sessions at capacity and drain on shutdown.
    """

    def __init__(self, *, max_connections: int) -> None:
        self._max = max(1, int(max_connections))
        self._lock = asyncio.Lock()
        self._active: dict[int, Any] = {}
        self._accepting = True
        self._inflight = 0
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def accepting(self) -> bool:
        return self._accepting

    @property
    def inflight_turns(self) -> int:
        return self._inflight

    async def connect(self, ws: Any) -> bool:
        """Attempt to admit a websocket connection (without accepting it)."""
        key = id(ws)
        async with self._lock:
            if not self._accepting or len(self._active) >= self._max:
                return False
            self._active[key] = ws
            return True

    async def disconnect(self, ws: Any) -> None:
        key = id(ws)
        async with self._lock:
            self._active.pop(key, None)

    def get_connection_count(self) -> int:
        return len(self._active)

    @contextlib.asynccontextmanager
    async def turn(self) -> AsyncIterator[None]:
        self._inflight += 1
        self._idle.clear()
        try:
            yield
        finally:
            self._inflight -= 1
            if self._inflight == 0:
                self._idle.set()

    async def shutdown(self, grace_s: float) -> None:
        """Stop admitting, let in-flight turns finish, then close what is left."""
        self._accepting = False
        if self._inflight:
            logger.info("Waiting up to %.1fs for %d in-flight turn(s)", grace_s, self._inflight)
            try:
                await asyncio.wait_for(self._idle.wait(), timeout=max(0.0, grace_s))
            except TimeoutError:
                logger.warning("Grace period elapsed with %d turn(s) still running", self._inflight)

        async with self._lock:
            remaining = list(self._active.values())
        for ws in remaining:
            with contextlib.suppress(Exception):
                await ws.close(code=WS_CLOSE_GOING_AWAY_CODE, reason=WS_CLOSE_SHUTDOWN_REASON)
        if remaining:
            logger.info("Closed %d remaining connection(s)", len(remaining))


__all__ = ["ConnectionManager"]

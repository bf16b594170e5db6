"""Client side of the envelope connection: dialing, retry and framed I/O."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable, Awaitable

import websockets
from websockets.exceptions import ConnectionClosed

from robot_head.protocol import Envelope, decode, encode_text
from robot_head.errors import ConnectError, SessionTerminated
from robot_head.config.client import WS_PING_TIMEOUT_S, WS_PING_INTERVAL_S, WS_MAX_MESSAGE_BYTES

logger = logging.getLogger(__name__)

Dialer = Callable[[], Awaitable["ClientConnection"]]
SleepFn = Callable[[float], Awaitable[Any]]


class ClientConnection:
    """Envelope I/O over one ``websockets`` client connection.

    The send loop and the receive loop share this object. Writes are
    serialized by a lock; reads come only from the receive loop.
    """

    def __init__(self, ws: Any) -> None:
        self._ws = ws
        self._write_lock = asyncio.Lock()

    async def send_envelope(self, envelope: Envelope) -> bool:
        if envelope.is_empty:
            return False
        frame = encode_text(envelope)
        async with self._write_lock:
            try:
                await self._ws.send(frame)
            except ConnectionClosed as exc:
                raise SessionTerminated(f"connection closed: {exc}") from exc
            except Exception as exc:
                raise SessionTerminated(f"write failed: {exc}") from exc
        return True

    async def receive_envelope(self) -> Envelope:
        try:
            raw = await self._ws.recv()
        except ConnectionClosed as exc:
            raise SessionTerminated(f"connection closed: {exc}") from exc
        except Exception as exc:
            raise SessionTerminated(f"read failed: {exc}") from exc
        return decode(raw)

    async def close(self) -> None:
        with contextlib.suppress(Exception):
            await self._ws.close()


def get_ws_options() -> dict[str, Any]:
    return {
        "ping_interval": WS_PING_INTERVAL_S,
        "ping_timeout": WS_PING_TIMEOUT_S,
        "max_size": WS_MAX_MESSAGE_BYTES,
    }


def websocket_dialer(url: str, **options: Any) -> Dialer:
    ws_options = {**get_ws_options(), **options}

    async def dial() -> ClientConnection:
        logger.info("Connecting to %s", url.split("?", 1)[0])
        ws = await websockets.connect(url, **ws_options)
        logger.info("Connected to server!")
        return ClientConnection(ws)

    return dial


async def connect_with_retry(
    dial: Dialer,
    *,
    max_attempts: int,
    base_delay_s: float,
    sleep: SleepFn = asyncio.sleep,
) -> ClientConnection:
    """Dial up to ``max_attempts`` times with deterministic exponential backoff.

    Waits ``base_delay_s * 2**attempt`` after each failed attempt except the
    last (attempt is zero-indexed), so 5 attempts at 1s sleep 1, 2, 4 and 8s.
    """
    attempts = max(1, int(max_attempts))
    last_error: BaseException | None = None
    for attempt in range(attempts):
        try:
            return await dial()
        except Exception as exc:
            last_error = exc
        if attempt < attempts - 1:
            delay = base_delay_s * (2**attempt)
            logger.warning(
                "Connection failed, retrying in %.1fs... (attempt %d/%d): %s",
                delay,
                attempt + 1,
                attempts,
                last_error,
            )
            await sleep(delay)
    raise ConnectError(attempts, last_error)


__all__ = ["ClientConnection", "Dialer", "connect_with_retry", "get_ws_options", "websocket_dialer"]

"""Server side of one envelope connection over a FastAPI WebSocket."""

from __future__ import annotations

import asyncio
import logging
import contextlib

from fastapi import WebSocket, WebSocketDisconnect

from robot_head.errors import SessionTerminated
from robot_head.protocol import Envelope, decode, encode_text
from robot_head.config.websocket import WS_CLOSE_NORMAL_CODE

logger = logging.getLogger(__name__)


class ServerConnection:
    """Reads and writes envelopes on one accepted socket.

    Reads happen only from the session's read loop. Writes may come from any
    task and are serialized so two envelopes never interleave on the wire.
    """

    def __init__(self, ws: WebSocket) -> None:
        self._ws = ws
        self._write_lock = asyncio.Lock()

    @property
    def websocket(self) -> WebSocket:
        return self._ws

    async def receive_envelope(self) -> Envelope:
        try:
            message = await self._ws.receive()
        except WebSocketDisconnect as exc:
            raise SessionTerminated(f"client disconnected (code {exc.code})") from exc
        except RuntimeError as exc:
            raise SessionTerminated(f"socket is no longer readable: {exc}") from exc

        if message.get("type") == "websocket.disconnect":
            raise SessionTerminated(f"client disconnected (code {message.get('code')})")

        text = message.get("text")
        if text is not None:
            return decode(text)
        return decode(message.get("bytes") or b"")

    async def send_envelope(self, envelope: Envelope) -> bool:
        """Write one envelope. The no-response sentinel is skipped (returns False)."""
        if envelope.is_empty:
            return False
        frame = encode_text(envelope)
        async with self._write_lock:
            try:
                await self._ws.send_text(frame)
            except Exception as exc:
                raise SessionTerminated(f"write failed: {exc}") from exc
        return True

    async def close(self, *, code: int = WS_CLOSE_NORMAL_CODE, reason: str = "") -> None:
        with contextlib.suppress(Exception):
            await self._ws.close(code=code, reason=reason)


__all__ = ["ServerConnection"]

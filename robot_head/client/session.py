"""One client session: announce, then run send and receive loops together."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from dataclasses import dataclass
from collections.abc import AsyncIterable

from robot_head.errors import SessionTerminated
from robot_head.protocol import envelope as envelopes
from robot_head.config.client import CONNECTED_STATUS_MESSAGE

from .loops import ClientInput, send_loop, receive_loop
from .contracts import TextSink
from .playback import PlaybackWorker
from .connection import ClientConnection

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SessionSummary:
    sent: int = 0
    received: int = 0


class ClientSession:
    """Runs the send and receive loops concurrently over one connection.

    The loops are independent: the receive loop ending does not stop the send
    loop, which runs until its source is exhausted or a write fails. When the
    send side finishes, the connection is closed and both loops plus the
    playback worker are joined.
    """

    def __init__(
        self,
        conn: ClientConnection,
        *,
        source: AsyncIterable[ClientInput],
        text_sink: TextSink,
        playback: PlaybackWorker,
    ) -> None:
        self._conn = conn
        self._source = source
        self._text_sink = text_sink
        self._playback = playback

    async def run(self) -> SessionSummary:
        summary = SessionSummary()
        receiver: asyncio.Task | None = None
        sender: asyncio.Task | None = None
        cancelled = False
        try:
            await self._conn.send_envelope(envelopes.status(CONNECTED_STATUS_MESSAGE))
            logger.info("Client connected and ready to send/receive messages.")

            receiver = asyncio.create_task(
                receive_loop(self._conn, self._text_sink, self._playback), name="receive-loop"
            )
            sender = asyncio.create_task(send_loop(self._conn, self._source), name="send-loop")
            summary.sent = await sender
        except SessionTerminated as exc:
            logger.warning("Failed to send message: %s", exc)
        except asyncio.CancelledError:
            cancelled = True
            raise
        finally:
            if sender is not None:
                sender.cancel()
                with contextlib.suppress(asyncio.CancelledError, Exception):
                    await sender
            await self._conn.close()
            if receiver is not None:
                with contextlib.suppress(asyncio.CancelledError, Exception):
                    summary.received = await receiver
            await self._playback.stop(drain=not cancelled)
        return summary


__all__ = ["ClientSession", "SessionSummary"]

"""Per-connection read loop for the envelope protocol (/ws)."""

from __future__ import annotations

import logging

from robot_head.pipeline import ResponsePipeline
from robot_head.protocol import MessageKind, AudioPayload
from robot_head.handlers.connections import ConnectionManager
from robot_head.errors import SessionTerminated, MalformedEnvelope
from robot_head.config.websocket import WS_CLOSE_INVALID_PAYLOAD_CODE, WS_CLOSE_INVALID_PAYLOAD_REASON

from .channel import ServerConnection

logger = logging.getLogger(__name__)


async def serve(
    conn: ServerConnection,
    pipeline: ResponsePipeline,
    connections: ConnectionManager,
) -> int:
    """Run turns until the session ends; returns the number of replies written.

    A frame that does not decode ends the whole session. Replies go out in the
    order inbound envelopes were read, at most one per inbound envelope.
    """
    replies = 0
    while True:
        try:
            inbound = await conn.receive_envelope()
        except SessionTerminated as exc:
            logger.info("WebSocket read ended: %s", exc)
            return replies
        except MalformedEnvelope as exc:
            logger.warning("Malformed envelope, closing session: %s", exc)
            await conn.close(code=WS_CLOSE_INVALID_PAYLOAD_CODE, reason=WS_CLOSE_INVALID_PAYLOAD_REASON)
            return replies

        if inbound.kind is MessageKind.AUDIO and isinstance(inbound.payload, AudioPayload):
            logger.info("Received audio message (%d bytes)", len(inbound.payload.audio))
        else:
            logger.info("Received %s", inbound.describe())

        async with connections.turn():
            reply = await pipeline.respond(inbound)
            if reply.is_empty:
                continue
            try:
                await conn.send_envelope(reply)
            except SessionTerminated as exc:
                logger.warning("Failed to send response: %s", exc)
                return replies
        replies += 1


__all__ = ["serve"]

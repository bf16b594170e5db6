"""Concurrent send and receive loops for one client session."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable

from robot_head.protocol import Envelope, MessageKind, AudioPayload
from robot_head.protocol import envelope as envelopes
from robot_head.config.pipeline import PCM_MIME_TYPE
from robot_head.errors import MalformedEnvelope, SessionTerminated

from .contracts import TextSink
from .connection import ClientConnection
from .playback import PlaybackWorker

logger = logging.getLogger(__name__)

ClientInput = str | bytes | Envelope


def to_envelope(item: ClientInput, *, audio_mime_type: str = PCM_MIME_TYPE) -> Envelope | None:
    """Wrap one produced input; blank text and empty recordings yield None."""
    if isinstance(item, Envelope):
        return None if item.is_empty else item
    if isinstance(item, str):
        return envelopes.user_input(item) if item.strip() else None
    if isinstance(item, (bytes, bytearray)):
        return envelopes.audio(bytes(item), audio_mime_type) if item else None
    raise TypeError(f"unsupported client input: {type(item).__name__}")


async def send_loop(
    conn: ClientConnection,
    source: AsyncIterable[ClientInput],
    *,
    audio_mime_type: str = PCM_MIME_TYPE,
) -> int:
    """Send every produced input until the source is exhausted.

    A write failure raises :class:`SessionTerminated`; it is not retried.
    Returns the number of envelopes sent.
    """
    sent = 0
    async for item in source:
        envelope = to_envelope(item, audio_mime_type=audio_mime_type)
        if envelope is None:
            continue
        await conn.send_envelope(envelope)
        sent += 1
    return sent


async def receive_loop(conn: ClientConnection, text_sink: TextSink, playback: PlaybackWorker) -> int:
    """Dispatch inbound envelopes until the connection closes or a read fails.

    Audio is queued on the playback worker and never awaited here.
    Returns the number of envelopes received.
    """
    received = 0
    while True:
        try:
            envelope = await conn.receive_envelope()
        except SessionTerminated as exc:
            logger.info("Connection closed: %s", exc)
            return received
        except MalformedEnvelope as exc:
            logger.warning("Skipping malformed envelope from server: %s", exc)
            continue

        received += 1
        if envelope.kind is MessageKind.AUDIO and isinstance(envelope.payload, AudioPayload):
            playback.submit(envelope.payload)
        else:
            text_sink(envelope.kind, envelope.text)


__all__ = ["ClientInput", "receive_loop", "send_loop", "to_envelope"]

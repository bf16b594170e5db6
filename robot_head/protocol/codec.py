"""JSON wire codec for envelopes.

Wire form (one WebSocket frame per envelope)::

    {"type": "user_input", "timestamp": 1700000000, "data": "hello"}
    {"type": "audio", "timestamp": 1700000000,
     "data": {"text": "hi", "audio_data": "<base64>", "mime_type": "audio/mpeg"}}

Audio bytes travel base64 encoded so arbitrary binary content survives the
JSON text frame unchanged.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any

import orjson

from robot_head.errors import MalformedEnvelope
from robot_head.config.websocket import (
    WS_KEY_DATA,
    WS_KEY_TYPE,
    WS_KEY_MIME_TYPE,
    WS_KEY_TIMESTAMP,
    WS_KEY_AUDIO_DATA,
    WS_KEY_AUDIO_TEXT,
    WS_KEY_AUDIO_DATA_ALIAS,
)

from .envelope import AudioPayload, Envelope, MessageKind

_KINDS_BY_TAG: dict[str, MessageKind] = {kind.value: kind for kind in MessageKind}


def _encode_data(envelope: Envelope) -> Any:
    payload = envelope.payload
    if isinstance(payload, AudioPayload):
        return {
            WS_KEY_AUDIO_TEXT: payload.text,
            WS_KEY_AUDIO_DATA: base64.b64encode(payload.audio).decode("ascii"),
            WS_KEY_MIME_TYPE: payload.mime_type,
        }
    return payload


def to_wire(envelope: Envelope) -> dict[str, Any]:
    if envelope.is_empty:
        raise ValueError("the no-response sentinel is never transmitted")
    return {
        WS_KEY_TYPE: envelope.kind.value,
        WS_KEY_TIMESTAMP: int(envelope.timestamp),
        WS_KEY_DATA: _encode_data(envelope),
    }


def encode(envelope: Envelope) -> bytes:
    return orjson.dumps(to_wire(envelope))


def encode_text(envelope: Envelope) -> str:
    return encode(envelope).decode("utf-8")


def _parse_kind(msg: dict[str, Any]) -> MessageKind:
    tag = msg.get(WS_KEY_TYPE)
    if not isinstance(tag, str) or not tag.strip():
        raise MalformedEnvelope("message missing non-empty 'type'")
    kind = _KINDS_BY_TAG.get(tag.strip())
    if kind is None:
        raise MalformedEnvelope(f"message type '{tag}' is not recognized")
    return kind


def _parse_timestamp(msg: dict[str, Any]) -> int:
    raw = msg.get(WS_KEY_TIMESTAMP, 0)
    if raw is None:
        return 0
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise MalformedEnvelope("message 'timestamp' must be a number")
    return int(raw)


def _parse_text(kind: MessageKind, data: Any) -> str:
    if data is None:
        return ""
    if not isinstance(data, str):
        raise MalformedEnvelope(f"'{kind.value}' message 'data' must be a string")
    return data


def _parse_audio(data: Any) -> AudioPayload:
    if not isinstance(data, dict):
        raise MalformedEnvelope("'audio' message 'data' must be an object")

    encoded = data.get(WS_KEY_AUDIO_DATA)
    if encoded is None:
        encoded = data.get(WS_KEY_AUDIO_DATA_ALIAS)
    if encoded is None:
        encoded = ""
    if not isinstance(encoded, str):
        raise MalformedEnvelope("'audio' message 'data.audio_data' must be a base64 string")
    try:
        raw_audio = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedEnvelope(f"invalid base64 audio: {exc}") from exc

    mime_type = data.get(WS_KEY_MIME_TYPE)
    if not isinstance(mime_type, str) or not mime_type.strip():
        raise MalformedEnvelope("'audio' message missing non-empty 'data.mime_type'")

    text = data.get(WS_KEY_AUDIO_TEXT)
    if text is None:
        text = ""
    if not isinstance(text, str):
        raise MalformedEnvelope("'audio' message 'data.text' must be a string")

    return AudioPayload(audio=raw_audio, mime_type=mime_type.strip(), text=text)


def from_wire(msg: Any) -> Envelope:
    if not isinstance(msg, dict):
        raise MalformedEnvelope("message must be a JSON object")

    kind = _parse_kind(msg)
    timestamp = _parse_timestamp(msg)
    data = msg.get(WS_KEY_DATA)
    if kind is MessageKind.AUDIO:
        payload: str | AudioPayload = _parse_audio(data)
    else:
        payload = _parse_text(kind, data)
    return Envelope(kind=kind, payload=payload, timestamp=timestamp)


def decode(raw: bytes | str) -> Envelope:
    try:
        msg = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise MalformedEnvelope(f"invalid JSON: {exc}") from exc
    except TypeError as exc:
        raise MalformedEnvelope(f"unsupported frame type: {type(raw).__name__}") from exc
    return from_wire(msg)


__all__ = ["decode", "encode", "encode_text", "from_wire", "to_wire"]

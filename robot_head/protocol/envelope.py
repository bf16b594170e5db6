"""Envelope types exchanged over the robot head WebSocket.

An envelope is a tagged union: ``kind`` selects the payload shape.

* ``user_input``, ``ai_response``, ``status`` and ``error`` carry a ``str``.
* ``audio`` carries an :class:`AudioPayload`.

``NO_RESPONSE`` (``kind is None``) is the sentinel the server pipeline returns
when nothing should be sent back, e.g. for silence. It is never put on the wire.
"""

from __future__ import annotations

import time
from enum import Enum
from dataclasses import dataclass


class MessageKind(str, Enum):
    USER_INPUT = "user_input"
    AI_RESPONSE = "ai_response"
    AUDIO = "audio"
    STATUS = "status"
    ERROR = "error"


TEXT_KINDS: frozenset[MessageKind] = frozenset(
    {MessageKind.USER_INPUT, MessageKind.AI_RESPONSE, MessageKind.STATUS, MessageKind.ERROR}
)


@dataclass(frozen=True, slots=True)
class AudioPayload:
    audio: bytes
    mime_type: str
    text: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.audio, (bytes, bytearray)):
            raise TypeError("audio payload bytes must be bytes")
        if not isinstance(self.mime_type, str) or not self.mime_type.strip():
            raise ValueError("audio payload requires a non-empty mime_type")
        if not isinstance(self.text, str):
            raise TypeError("audio payload text must be a string")
        if isinstance(self.audio, bytearray):
            object.__setattr__(self, "audio", bytes(self.audio))
        # Stored stripped, the same form the codec decodes.
        object.__setattr__(self, "mime_type", self.mime_type.strip())

    def __repr__(self) -> str:
        # Never dump raw audio into logs or assertion output.
        return f"AudioPayload(text={self.text!r}, mime_type={self.mime_type!r}, audio=<{len(self.audio)} bytes>)"


Payload = str | AudioPayload


@dataclass(frozen=True, slots=True)
class Envelope:
    kind: MessageKind | None
    payload: Payload = ""
    timestamp: int = 0

    def __post_init__(self) -> None:
        if self.kind is None:
            return
        if not isinstance(self.kind, MessageKind):
            raise TypeError(f"unsupported envelope kind: {self.kind!r}")
        if self.kind is MessageKind.AUDIO:
            if not isinstance(self.payload, AudioPayload):
                raise TypeError("audio envelopes carry an AudioPayload")
        elif not isinstance(self.payload, str):
            raise TypeError(f"{self.kind.value} envelopes carry a string payload")

    @property
    def is_empty(self) -> bool:
        return self.kind is None

    @property
    def text(self) -> str:
        """Human-readable text of the payload (the caption for audio)."""
        if isinstance(self.payload, AudioPayload):
            return self.payload.text
        return self.payload

    def describe(self) -> str:
        """Log-safe one-line summary; audio bytes are reduced to a size marker."""
        if self.kind is None:
            return "<no response>"
        if isinstance(self.payload, AudioPayload):
            return f"audio message ({len(self.payload.audio)} bytes, {self.payload.mime_type})"
        return f"{self.kind.value}: {self.payload}"


NO_RESPONSE = Envelope(kind=None)


def _now() -> int:
    return int(time.time())


def user_input(text: str) -> Envelope:
    return Envelope(kind=MessageKind.USER_INPUT, payload=text, timestamp=_now())


def ai_response(text: str) -> Envelope:
    return Envelope(kind=MessageKind.AI_RESPONSE, payload=text, timestamp=_now())


def status(text: str) -> Envelope:
    return Envelope(kind=MessageKind.STATUS, payload=text, timestamp=_now())


def error(text: str) -> Envelope:
    return Envelope(kind=MessageKind.ERROR, payload=text, timestamp=_now())


def audio(data: bytes, mime_type: str, text: str = "") -> Envelope:
    return Envelope(
        kind=MessageKind.AUDIO,
        payload=AudioPayload(audio=data, mime_type=mime_type, text=text),
        timestamp=_now(),
    )


__all__ = [
    "AudioPayload",
    "Envelope",
    "MessageKind",
    "NO_RESPONSE",
    "Payload",
    "TEXT_KINDS",
    "ai_response",
    "audio",
    "error",
    "status",
    "user_input",
]

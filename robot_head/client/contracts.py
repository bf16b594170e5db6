"""Device-level collaborators used by the client."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from robot_head.protocol import MessageKind


@runtime_checkable
class AudioCapture(Protocol):
    """Blocking: records ``seconds`` of raw PCM16 from the microphone."""

    def __call__(self, seconds: float) -> bytes: ...


@runtime_checkable
class AudioPlayback(Protocol):
    """Blocking: renders one clip and returns when playback completes."""

    def __call__(self, audio: bytes, mime_type: str) -> None: ...


class TextSink(Protocol):
    def __call__(self, kind: MessageKind, text: str) -> None: ...


__all__ = ["AudioCapture", "AudioPlayback", "TextSink"]

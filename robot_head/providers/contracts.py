"""Contracts for the external capabilities the response pipeline chains.

Implementations raise the matching :mod:`robot_head.errors` type on failure.
The pipeline also converts timeouts and any other exception an adapter lets
escape, so a misbehaving provider can never take down a connection.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable
from dataclasses import dataclass

from robot_head.state.settings import SampleFormat


@dataclass(frozen=True, slots=True)
class SynthesizedAudio:
    audio: bytes
    mime_type: str


@runtime_checkable
class SpeechToText(Protocol):
    """Transcribes raw PCM audio.

    Must return an empty string (or a silence marker) for silence rather than
    raising. One instance is shared by every connection, so concurrent calls
    must be safe.
    """

    async def transcribe(self, pcm: bytes, sample_format: SampleFormat) -> str: ...


@runtime_checkable
class LanguageModel(Protocol):
    """Single-turn completion; no conversation memory is kept by the server."""

    async def complete(self, system_prompt: str, user_text: str) -> str: ...


@runtime_checkable
class TextToSpeech(Protocol):
    async def synthesize(self, text: str) -> SynthesizedAudio: ...


__all__ = ["LanguageModel", "SpeechToText", "SynthesizedAudio", "TextToSpeech"]

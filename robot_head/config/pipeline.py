"""Response pipeline configuration (env-resolved constants only)."""

from __future__ import annotations

from .env import get_float

# Client microphones record PCM16 mono at 16kHz; Whisper expects the same.
PCM_SAMPLE_RATE_HZ: int = 16000
PCM_CHANNELS: int = 1
PCM_SAMPLE_WIDTH_BYTES: int = 2
PCM_MIME_TYPE: str = "audio/pcm"

# Each external call is bounded so one slow provider cannot hang a turn.
STT_TIMEOUT_S: float = get_float("STT_TIMEOUT_S", 30.0, minimum=0.1)
LLM_TIMEOUT_S: float = get_float("LLM_TIMEOUT_S", 30.0, minimum=0.1)
TTS_TIMEOUT_S: float = get_float("TTS_TIMEOUT_S", 30.0, minimum=0.1)

# Whisper emits these markers instead of an empty transcript for silence.
SILENCE_MARKERS: frozenset[str] = frozenset({"[BLANK_AUDIO]", "[SILENCE]", "(silence)"})

SYSTEM_PROMPT: str = (
    "You are a helpful, voice-based assistant. "
    "Speak naturally, like you are talking to a friend. "
    "Keep your answers short and to the point. "
    "Use conversational language, contractions, and "
    "occasionally check in like 'Want to hear more?'"
)

STT_FAILURE_MESSAGE: str = "Sorry, I couldn't understand what you said."
LLM_FAILURE_MESSAGE: str = "Sorry, I'm having trouble thinking right now."
STATUS_ECHO_PREFIX: str = "Received: "

__all__ = [
    "LLM_FAILURE_MESSAGE",
    "LLM_TIMEOUT_S",
    "PCM_CHANNELS",
    "PCM_MIME_TYPE",
    "PCM_SAMPLE_RATE_HZ",
    "PCM_SAMPLE_WIDTH_BYTES",
    "SILENCE_MARKERS",
    "STATUS_ECHO_PREFIX",
    "STT_FAILURE_MESSAGE",
    "STT_TIMEOUT_S",
    "SYSTEM_PROMPT",
    "TTS_TIMEOUT_S",
]

"""External provider configuration (env-resolved constants only)."""

from __future__ import annotations

from .env import get_str, get_float

# Local Whisper model (faster-whisper), loaded once at startup.
WHISPER_MODEL: str = get_str("WHISPER_MODEL", "base.en")
WHISPER_DEVICE: str = get_str("WHISPER_DEVICE", "cpu")
WHISPER_COMPUTE_TYPE: str = get_str("WHISPER_COMPUTE_TYPE", "int8")
WHISPER_LANGUAGE: str = get_str("WHISPER_LANGUAGE", "en")

OPENAI_BASE_URL: str = get_str("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/")
OPENAI_MODEL: str = get_str("OPENAI_MODEL", "gpt-4o")

ELEVENLABS_BASE_URL: str = get_str("ELEVENLABS_BASE_URL", "https://api.elevenlabs.io/v1").rstrip("/")
ELEVENLABS_MODEL_ID: str = get_str("ELEVENLABS_MODEL_ID", "eleven_turbo_v2")
ELEVENLABS_VOICE_ID: str = get_str("ELEVENLABS_VOICE_ID", "Oe8Lhg3t63j9BsrTQBjx")
ELEVENLABS_STABILITY: float = get_float("ELEVENLABS_STABILITY", 0.5, minimum=0.0)
ELEVENLABS_SIMILARITY_BOOST: float = get_float("ELEVENLABS_SIMILARITY_BOOST", 0.5, minimum=0.0)
ELEVENLABS_MIME_TYPE: str = "audio/mpeg"

__all__ = [
    "ELEVENLABS_BASE_URL",
    "ELEVENLABS_MIME_TYPE",
    "ELEVENLABS_MODEL_ID",
    "ELEVENLABS_SIMILARITY_BOOST",
    "ELEVENLABS_STABILITY",
    "ELEVENLABS_VOICE_ID",
    "OPENAI_BASE_URL",
    "OPENAI_MODEL",
    "WHISPER_COMPUTE_TYPE",
    "WHISPER_DEVICE",
    "WHISPER_LANGUAGE",
    "WHISPER_MODEL",
]

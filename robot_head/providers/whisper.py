"""Local speech-to-text backed by a faster-whisper model."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any

import numpy as np
from faster_whisper import WhisperModel

from robot_head.errors import SttError
from robot_head.state.settings import SampleFormat, WhisperSettings

logger = logging.getLogger(__name__)

WHISPER_SAMPLE_RATE_HZ = 16000


def pcm16_to_float32(pcm: bytes, sample_format: SampleFormat) -> np.ndarray:
    """Convert little-endian PCM16 to mono float32 in [-1, 1) at 16kHz."""
    if sample_format.sample_width != 2:
        raise SttError(f"unsupported sample width: {sample_format.sample_width} bytes")

    usable = len(pcm) - (len(pcm) % 2)
    samples = np.frombuffer(pcm[:usable], dtype="<i2").astype(np.float32) / 32768.0

    channels = max(1, int(sample_format.channels))
    if channels > 1:
        frames = len(samples) // channels
        samples = samples[: frames * channels].reshape(frames, channels).mean(axis=1)

    rate = int(sample_format.sample_rate_hz)
    if rate != WHISPER_SAMPLE_RATE_HZ and len(samples) > 1:
        new_length = int(len(samples) * WHISPER_SAMPLE_RATE_HZ / rate)
        indices = np.linspace(0, len(samples) - 1, new_length)
        samples = np.interp(indices, np.arange(len(samples)), samples).astype(np.float32)
    return samples


class WhisperSpeechToText:
    """Speech-to-text over one shared Whisper model.

    The model is loaded once at startup and shared by every connection. The
    underlying decoder is not re-entrant, so calls are serialized by a lock and
    run in a worker thread to keep the event loop free.
    """

    def __init__(self, model: Any, *, language: str | None = "en") -> None:
        self._model = model
        self._language = language or None
        self._lock = threading.Lock()

    @classmethod
    def load(cls, settings: WhisperSettings) -> WhisperSpeechToText:
        logger.info("Loading Whisper model %s (%s, %s)", settings.model, settings.device, settings.compute_type)
        model = WhisperModel(settings.model, device=settings.device, compute_type=settings.compute_type)
        logger.info("Whisper model loaded")
        return cls(model, language=settings.language)

    def _transcribe_sync(self, samples: np.ndarray) -> str:
        with self._lock:
            segments, _info = self._model.transcribe(samples, language=self._language, word_timestamps=False)
            parts = [seg.text.strip() for seg in segments]
        return " ".join(p for p in parts if p).strip()

    async def transcribe(self, pcm: bytes, sample_format: SampleFormat) -> str:
        if not pcm:
            return ""
        samples = pcm16_to_float32(pcm, sample_format)
        if samples.size == 0:
            return ""
        try:
            return await asyncio.to_thread(self._transcribe_sync, samples)
        except SttError:
            raise
        except Exception as exc:
            raise SttError(f"whisper transcription failed: {exc}") from exc


__all__ = ["WHISPER_SAMPLE_RATE_HZ", "WhisperSpeechToText", "pcm16_to_float32"]

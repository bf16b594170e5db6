"""Decode reply audio into int16 sample arrays for the speaker."""

from __future__ import annotations

import io
import wave
import logging

import numpy as np
from pydub import AudioSegment

from robot_head.state.settings import SampleFormat

logger = logging.getLogger(__name__)

_PCM_MIME_TYPES = {"audio/pcm", "audio/l16", "audio/x-pcm"}
_WAV_MIME_TYPES = {"audio/wav", "audio/x-wav", "audio/wave", "audio/vnd.wave"}
_PYDUB_FORMATS = {
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
    "audio/ogg": "ogg",
    "audio/aac": "aac",
    "audio/flac": "flac",
    "audio/webm": "webm",
}


def parse_mime_type(mime_type: str) -> tuple[str, dict[str, str]]:
    """Split ``audio/pcm;rate=16000`` into the base type and its parameters."""
    parts = [p.strip() for p in (mime_type or "").split(";")]
    params: dict[str, str] = {}
    for part in parts[1:]:
        key, sep, value = part.partition("=")
        if sep:
            params[key.strip().lower()] = value.strip()
    return parts[0].lower(), params


def _frames(samples: np.ndarray, channels: int) -> np.ndarray:
    channels = max(1, int(channels))
    if channels == 1:
        return samples
    frames = len(samples) // channels
    return samples[: frames * channels].reshape(frames, channels)


def decode_pcm(audio: bytes, fmt: SampleFormat) -> tuple[np.ndarray, int]:
    usable = len(audio) - (len(audio) % 2)
    samples = np.frombuffer(audio[:usable], dtype="<i2")
    return _frames(samples, fmt.channels), int(fmt.sample_rate_hz)


def decode_wav(audio: bytes) -> tuple[np.ndarray, int]:
    with wave.open(io.BytesIO(audio), "rb") as wf:
        if wf.getsampwidth() != 2:
            raise ValueError(f"unsupported WAV sample width: {wf.getsampwidth()}")
        pcm = wf.readframes(wf.getnframes())
        samples = np.frombuffer(pcm, dtype="<i2")
        return _frames(samples, wf.getnchannels()), wf.getframerate()


def decode_compressed(audio: bytes, container: str | None) -> tuple[np.ndarray, int]:
    # pydub shells out to ffmpeg for MP3/OGG/AAC.
    segment = AudioSegment.from_file(io.BytesIO(audio), format=container).set_sample_width(2)
    samples = np.array(segment.get_array_of_samples(), dtype=np.int16)
    return _frames(samples, segment.channels), segment.frame_rate


def decode_audio(audio: bytes, mime_type: str, *, pcm_format: SampleFormat | None = None) -> tuple[np.ndarray, int]:
    """Return ``(samples, sample_rate)`` for any reply the server can send."""
    base, params = parse_mime_type(mime_type)
    if base in _PCM_MIME_TYPES:
        fmt = pcm_format or SampleFormat()
        rate = params.get("rate")
        channels = params.get("channels")
        if rate or channels:
            fmt = SampleFormat(
                sample_rate_hz=int(rate) if rate else fmt.sample_rate_hz,
                channels=int(channels) if channels else fmt.channels,
                sample_width=fmt.sample_width,
            )
        return decode_pcm(audio, fmt)
    if base in _WAV_MIME_TYPES or audio[:4] == b"RIFF":
        return decode_wav(audio)
    logger.debug("Decoding %s via pydub", base)
    return decode_compressed(audio, _PYDUB_FORMATS.get(base))


__all__ = ["decode_audio", "decode_compressed", "decode_pcm", "decode_wav", "parse_mime_type"]

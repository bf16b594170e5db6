"""Microphone capture and speaker playback through sounddevice."""

from __future__ import annotations

import logging

import sounddevice as sd

from robot_head.state.settings import SampleFormat

from .audio_decode import decode_audio

logger = logging.getLogger(__name__)


class SoundDeviceCapture:
    """Records fixed-length PCM16 clips from the default input device."""

    def __init__(self, sample_format: SampleFormat) -> None:
        if sample_format.sample_width != 2:
            raise ValueError("microphone capture only supports 16-bit PCM")
        self._format = sample_format

    def __call__(self, seconds: float) -> bytes:
        frames = int(self._format.sample_rate_hz * seconds)
        recording = sd.rec(
            frames,
            samplerate=self._format.sample_rate_hz,
            channels=self._format.channels,
            dtype="int16",
        )
        sd.wait()
        return recording.tobytes()


class SoundDevicePlayback:
    """Plays one clip on the default output device and blocks until it ends."""

    def __init__(self, *, pcm_format: SampleFormat | None = None) -> None:
        self._pcm_format = pcm_format

    def __call__(self, audio: bytes, mime_type: str) -> None:
        samples, sample_rate = decode_audio(audio, mime_type, pcm_format=self._pcm_format)
        if samples.size == 0:
            logger.debug("Nothing to play for %s", mime_type)
            return
        sd.play(samples, samplerate=sample_rate)
        sd.wait()


__all__ = ["SoundDeviceCapture", "SoundDevicePlayback"]

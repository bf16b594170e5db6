from __future__ import annotations

import time
import threading
from types import SimpleNamespace

import httpx
import numpy as np
import pytest

from robot_head.errors import LlmError, SttError, TtsError
from robot_head.state.settings import SampleFormat, OpenAISettings, ElevenLabsSettings
from robot_head.providers.whisper import WhisperSpeechToText, pcm16_to_float32
from robot_head.providers.elevenlabs import ElevenLabsSpeech
from robot_head.providers.openai_chat import OpenAIChatModel

_OPENAI = OpenAISettings(api_key="sk-test", base_url="https://api.openai.test/v1", model="gpt-4o")
_ELEVEN = ElevenLabsSettings(
    api_key="xi-test",
    base_url="https://api.elevenlabs.test/v1",
    model_id="eleven_turbo_v2",
    voice_id="voice123",
    stability=0.5,
    similarity_boost=0.5,
)


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# --- whisper ---


class _FakeWhisperModel:
    def __init__(self, text: str = " hello ", delay_s: float = 0.0) -> None:
        self.text = text
        self.delay_s = delay_s
        self.active = 0
        self.max_active = 0
        self.calls = 0
        self._guard = threading.Lock()

    def transcribe(self, samples, language=None, word_timestamps=False):
        with self._guard:
            self.active += 1
            self.calls += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self.delay_s:
                time.sleep(self.delay_s)
            return iter([SimpleNamespace(text=self.text), SimpleNamespace(text=" world")]), None
        finally:
            with self._guard:
                self.active -= 1


def test_pcm16_to_float32_scales_and_downmixes() -> None:
    pcm = np.array([16384, -16384, 32767, 32767], dtype="<i2").tobytes() + b"\x01"
    samples = pcm16_to_float32(pcm, SampleFormat(sample_rate_hz=16000, channels=2, sample_width=2))
    assert samples.dtype == np.float32
    assert samples.shape == (2,)
    assert samples[0] == pytest.approx(0.0)
    assert samples[1] == pytest.approx(32767 / 32768)


def test_pcm16_to_float32_resamples_to_16k() -> None:
    pcm = np.zeros(8000, dtype="<i2").tobytes()
    samples = pcm16_to_float32(pcm, SampleFormat(sample_rate_hz=8000, channels=1, sample_width=2))
    assert len(samples) == 16000


def test_pcm16_to_float32_rejects_other_widths() -> None:
    with pytest.raises(SttError):
        pcm16_to_float32(b"\x00" * 12, SampleFormat(sample_width=3))


@pytest.mark.asyncio
async def test_whisper_joins_segments() -> None:
    stt = WhisperSpeechToText(_FakeWhisperModel())
    assert await stt.transcribe(b"\x00\x10" * 320, SampleFormat()) == "hello world"


@pytest.mark.asyncio
async def test_whisper_empty_audio_skips_model() -> None:
    model = _FakeWhisperModel()
    stt = WhisperSpeechToText(model)
    assert await stt.transcribe(b"", SampleFormat()) == ""
    assert model.calls == 0


@pytest.mark.asyncio
async def test_whisper_calls_are_serialized() -> None:
    import asyncio

    model = _FakeWhisperModel(delay_s=0.05)
    stt = WhisperSpeechToText(model)
    await asyncio.gather(*(stt.transcribe(b"\x00\x10" * 320, SampleFormat()) for _ in range(4)))
    assert model.calls == 4
    assert model.max_active == 1


@pytest.mark.asyncio
async def test_whisper_failure_becomes_stt_error() -> None:
    class _Broken:
        def transcribe(self, *args, **kwargs):
            raise RuntimeError("CUDA out of memory")

    with pytest.raises(SttError, match="CUDA out of memory"):
        await WhisperSpeechToText(_Broken()).transcribe(b"\x00\x10" * 32, SampleFormat())


# --- OpenAI ---


@pytest.mark.asyncio
async def test_openai_complete_posts_chat_request() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = request.read()
        return httpx.Response(200, json={"choices": [{"message": {"content": "  Hey there!  "}}]})

    model = OpenAIChatModel(_OPENAI, client=_client(handler))
    try:
        assert await model.complete("be brief", "hello") == "Hey there!"
    finally:
        await model.aclose()

    assert seen["url"] == "https://api.openai.test/v1/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    assert b'"gpt-4o"' in seen["body"]
    assert b'"be brief"' in seen["body"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="upstream exploded"),
        httpx.Response(200, json={"choices": []}),
        httpx.Response(200, json={"choices": [{"message": {"content": "   "}}]}),
        httpx.Response(200, text="not json"),
    ],
)
async def test_openai_bad_responses_raise_llm_error(response: httpx.Response) -> None:
    model = OpenAIChatModel(_OPENAI, client=_client(lambda _request: response))
    with pytest.raises(LlmError):
        await model.complete("p", "hello")


@pytest.mark.asyncio
async def test_openai_transport_error_raises_llm_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(LlmError):
        await OpenAIChatModel(_OPENAI, client=_client(handler)).complete("p", "hello")


@pytest.mark.asyncio
async def test_openai_missing_key_raises_llm_error() -> None:
    settings = OpenAISettings(api_key="", base_url=_OPENAI.base_url, model=_OPENAI.model)
    with pytest.raises(LlmError, match="not configured"):
        await OpenAIChatModel(settings, client=_client(lambda _r: httpx.Response(200))).complete("p", "x")


# --- ElevenLabs ---


@pytest.mark.asyncio
async def test_elevenlabs_synthesize_returns_audio() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("xi-api-key")
        seen["accept"] = request.headers.get("accept")
        return httpx.Response(200, content=b"ID3mp3", headers={"content-type": "audio/mpeg"})

    tts = ElevenLabsSpeech(_ELEVEN, client=_client(handler))
    speech = await tts.synthesize("hi there")

    assert speech.audio == b"ID3mp3"
    assert speech.mime_type == "audio/mpeg"
    assert seen["url"] == "https://api.elevenlabs.test/v1/text-to-speech/voice123"
    assert seen["key"] == "xi-test"
    assert seen["accept"] == "audio/mpeg"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [httpx.Response(401, text="invalid api key"), httpx.Response(200, content=b"")],
)
async def test_elevenlabs_failures_raise_tts_error(response: httpx.Response) -> None:
    tts = ElevenLabsSpeech(_ELEVEN, client=_client(lambda _request: response))
    with pytest.raises(TtsError):
        await tts.synthesize("hi there")

from __future__ import annotations

import sys
import asyncio
from pathlib import Path

import pytest


# Keep `import robot_head...` working when running `pytest` from the repo root.
_REPO_ROOT = str(Path(__file__).resolve().parents[1])
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)


from robot_head.pipeline import ResponsePipeline  # noqa: E402
from robot_head.providers import SynthesizedAudio  # noqa: E402
from robot_head.runtime.settings import load_pipeline_settings  # noqa: E402
from robot_head.state.settings import SampleFormat, PipelineSettings  # noqa: E402


class StubSpeechToText:
    def __init__(self, transcript: str = "hello robot") -> None:
        self.transcript = transcript
        self.error: Exception | None = None
        self.delay_s = 0.0
        self.calls: list[tuple[bytes, SampleFormat]] = []

    async def transcribe(self, pcm: bytes, sample_format: SampleFormat) -> str:
        self.calls.append((pcm, sample_format))
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        if self.error is not None:
            raise self.error
        return self.transcript


class StubLanguageModel:
    def __init__(self, reply: str = "hi there") -> None:
        self.reply = reply
        self.error: Exception | None = None
        self.delay_s = 0.0
        self.calls: list[tuple[str, str]] = []

    async def complete(self, system_prompt: str, user_text: str) -> str:
        self.calls.append((system_prompt, user_text))
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        if self.error is not None:
            raise self.error
        return self.reply


class StubTextToSpeech:
    def __init__(self, audio: bytes = b"\xff\xfb\x90\x00ID3", mime_type: str = "audio/mpeg") -> None:
        self.audio = audio
        self.mime_type = mime_type
        self.error: Exception | None = None
        self.delay_s = 0.0
        self.calls: list[str] = []

    async def synthesize(self, text: str) -> SynthesizedAudio:
        self.calls.append(text)
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        if self.error is not None:
            raise self.error
        return SynthesizedAudio(audio=self.audio, mime_type=self.mime_type)


@pytest.fixture
def stt() -> StubSpeechToText:
    return StubSpeechToText()


@pytest.fixture
def llm() -> StubLanguageModel:
    return StubLanguageModel()


@pytest.fixture
def tts() -> StubTextToSpeech:
    return StubTextToSpeech()


@pytest.fixture
def pipeline_settings() -> PipelineSettings:
    base = load_pipeline_settings()
    return PipelineSettings(
        system_prompt=base.system_prompt,
        sample_format=base.sample_format,
        stt_timeout_s=0.5,
        llm_timeout_s=0.5,
        tts_timeout_s=0.5,
        silence_markers=base.silence_markers,
        stt_failure_message=base.stt_failure_message,
        llm_failure_message=base.llm_failure_message,
    )


@pytest.fixture
def pipeline(stt, llm, tts, pipeline_settings) -> ResponsePipeline:
    return ResponsePipeline(stt=stt, llm=llm, tts=tts, settings=pipeline_settings)

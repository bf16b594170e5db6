"""Runtime dependency construction (STT engine, providers, admission control)."""

from __future__ import annotations

import asyncio
import logging
from contextlib import AsyncExitStack

from robot_head.state import RuntimeDeps
from robot_head.pipeline import ResponsePipeline
from robot_head.state.settings import AppSettings
from robot_head.providers.whisper import WhisperSpeechToText
from robot_head.handlers.connections import ConnectionManager
from robot_head.providers.elevenlabs import ElevenLabsSpeech
from robot_head.providers.openai_chat import OpenAIChatModel

from .settings import load_settings

logger = logging.getLogger(__name__)


async def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()
    providers = settings.providers

    # Loaded once and shared read-only by every turn on every connection.
    stt = await asyncio.to_thread(WhisperSpeechToText.load, providers.whisper)

    stack = AsyncExitStack()
    llm = OpenAIChatModel(providers.openai, timeout_s=settings.pipeline.llm_timeout_s)
    stack.push_async_callback(llm.aclose)
    tts = ElevenLabsSpeech(providers.elevenlabs, timeout_s=settings.pipeline.tts_timeout_s)
    stack.push_async_callback(tts.aclose)

    if not providers.openai.api_key:
        logger.warning("OPENAI_API_KEY is not set; replies will fail until it is configured")
    if not providers.elevenlabs.api_key:
        logger.warning("ELEVENLABS_API_KEY is not set; replies will fall back to text")
    if not settings.auth.api_key:
        logger.warning("ROBOT_HEAD_API_KEY is not set; /ws accepts any client")

    pipeline = ResponsePipeline(stt=stt, llm=llm, tts=tts, settings=settings.pipeline)
    connections = ConnectionManager(max_connections=settings.limits.max_concurrent_connections)

    return RuntimeDeps(
        connections=connections,
        pipeline=pipeline,
        settings=settings,
        _resource_stack=stack,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]

"""Load runtime settings.

Configuration values are resolved from the environment in `robot_head/config/*`
and exposed here as structured dataclasses for the rest of the package.
"""

from __future__ import annotations

from robot_head.config.limits import MAX_CONCURRENT_CONNECTIONS
from robot_head.config.server import HOST, PORT, SHUTDOWN_GRACE_S
from robot_head.config.secrets import (
    get_openai_api_key,
    get_robot_head_api_key,
    get_elevenlabs_api_key,
)
from robot_head.state.settings import (
    AppSettings,
    AuthSettings,
    SampleFormat,
    LimitsSettings,
    OpenAISettings,
    ServerSettings,
    ClientSettings,
    WhisperSettings,
    PipelineSettings,
    ProviderSettings,
    ElevenLabsSettings,
)
from robot_head.config.client import (
    RECORD_SECONDS,
    ROBOT_HEAD_SERVER,
    CONNECT_BASE_DELAY_S,
    CONNECT_MAX_ATTEMPTS,
)
from robot_head.config.pipeline import (
    LLM_TIMEOUT_S,
    PCM_CHANNELS,
    STT_TIMEOUT_S,
    SYSTEM_PROMPT,
    TTS_TIMEOUT_S,
    SILENCE_MARKERS,
    PCM_SAMPLE_RATE_HZ,
    LLM_FAILURE_MESSAGE,
    STT_FAILURE_MESSAGE,
    PCM_SAMPLE_WIDTH_BYTES,
)
from robot_head.config.providers import (
    OPENAI_MODEL,
    WHISPER_MODEL,
    WHISPER_DEVICE,
    OPENAI_BASE_URL,
    WHISPER_LANGUAGE,
    ELEVENLABS_BASE_URL,
    ELEVENLABS_MODEL_ID,
    ELEVENLABS_VOICE_ID,
    ELEVENLABS_STABILITY,
    WHISPER_COMPUTE_TYPE,
    ELEVENLABS_SIMILARITY_BOOST,
)


def default_sample_format() -> SampleFormat:
    return SampleFormat(
        sample_rate_hz=PCM_SAMPLE_RATE_HZ,
        channels=PCM_CHANNELS,
        sample_width=PCM_SAMPLE_WIDTH_BYTES,
    )


def load_pipeline_settings() -> PipelineSettings:
    return PipelineSettings(
        system_prompt=SYSTEM_PROMPT,
        sample_format=default_sample_format(),
        stt_timeout_s=STT_TIMEOUT_S,
        llm_timeout_s=LLM_TIMEOUT_S,
        tts_timeout_s=TTS_TIMEOUT_S,
        silence_markers=SILENCE_MARKERS,
        stt_failure_message=STT_FAILURE_MESSAGE,
        llm_failure_message=LLM_FAILURE_MESSAGE,
    )


def load_settings() -> AppSettings:
    return AppSettings(
        auth=AuthSettings(api_key=get_robot_head_api_key()),
        server=ServerSettings(host=HOST, port=PORT, shutdown_grace_s=SHUTDOWN_GRACE_S),
        limits=LimitsSettings(max_concurrent_connections=MAX_CONCURRENT_CONNECTIONS),
        pipeline=load_pipeline_settings(),
        providers=ProviderSettings(
            whisper=WhisperSettings(
                model=WHISPER_MODEL,
                device=WHISPER_DEVICE,
                compute_type=WHISPER_COMPUTE_TYPE,
                language=WHISPER_LANGUAGE,
            ),
            openai=OpenAISettings(
                api_key=get_openai_api_key(),
                base_url=OPENAI_BASE_URL,
                model=OPENAI_MODEL,
            ),
            elevenlabs=ElevenLabsSettings(
                api_key=get_elevenlabs_api_key(),
                base_url=ELEVENLABS_BASE_URL,
                model_id=ELEVENLABS_MODEL_ID,
                voice_id=ELEVENLABS_VOICE_ID,
                stability=ELEVENLABS_STABILITY,
                similarity_boost=ELEVENLABS_SIMILARITY_BOOST,
            ),
        ),
    )


def load_client_settings(
    *,
    server: str | None = None,
    secure: bool = False,
    api_key: str | None = None,
) -> ClientSettings:
    return ClientSettings(
        server=(server or ROBOT_HEAD_SERVER).strip(),
        secure=secure,
        api_key=(api_key if api_key is not None else get_robot_head_api_key()).strip(),
        connect_max_attempts=CONNECT_MAX_ATTEMPTS,
        connect_base_delay_s=CONNECT_BASE_DELAY_S,
        record_seconds=RECORD_SECONDS,
        sample_format=default_sample_format(),
    )


__all__ = ["default_sample_format", "load_client_settings", "load_pipeline_settings", "load_settings"]

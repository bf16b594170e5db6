"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AuthSettings:
    # Empty means no access control on /ws.
    api_key: str


@dataclass(frozen=True, slots=True)
class ServerSettings:
    host: str
    port: int
    shutdown_grace_s: float


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_connections: int


@dataclass(frozen=True, slots=True)
class SampleFormat:
    sample_rate_hz: int = 16000
    channels: int = 1
    sample_width: int = 2


@dataclass(frozen=True, slots=True)
class PipelineSettings:
    system_prompt: str
    sample_format: SampleFormat
    stt_timeout_s: float
    llm_timeout_s: float
    tts_timeout_s: float
    silence_markers: frozenset[str]
    stt_failure_message: str
    llm_failure_message: str


@dataclass(frozen=True, slots=True)
class WhisperSettings:
    model: str
    device: str
    compute_type: str
    language: str


@dataclass(frozen=True, slots=True)
class OpenAISettings:
    api_key: str
    base_url: str
    model: str


@dataclass(frozen=True, slots=True)
class ElevenLabsSettings:
    api_key: str
    base_url: str
    model_id: str
    voice_id: str
    stability: float
    similarity_boost: float


@dataclass(frozen=True, slots=True)
class ProviderSettings:
    whisper: WhisperSettings
    openai: OpenAISettings
    elevenlabs: ElevenLabsSettings


@dataclass(frozen=True, slots=True)
class AppSettings:
    auth: AuthSettings
    server: ServerSettings
    limits: LimitsSettings
    pipeline: PipelineSettings
    providers: ProviderSettings


@dataclass(frozen=True, slots=True)
class ClientSettings:
    server: str
    secure: bool
    api_key: str
    connect_max_attempts: int
    connect_base_delay_s: float
    record_seconds: float
    sample_format: SampleFormat


__all__ = [
    "AppSettings",
    "AuthSettings",
    "ClientSettings",
    "ElevenLabsSettings",
    "LimitsSettings",
    "OpenAISettings",
    "PipelineSettings",
    "ProviderSettings",
    "SampleFormat",
    "ServerSettings",
    "WhisperSettings",
]

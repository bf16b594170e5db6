"""Server-side response pipeline: one inbound envelope in, at most one out.

Each turn runs strictly in order and keeps no state between turns::

    audio ──► STT ──┐
                    ├──► LLM ──► TTS ──► audio envelope
    user_input ─────┘                └─► ai_response envelope (TTS fallback)

Collaborator failures never escape a turn. STT and LLM failures become an
``error`` envelope with a fixed apology; a TTS failure falls back to the plain
completion text. Silence produces ``NO_RESPONSE`` so nothing is sent back.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TypeVar
from collections.abc import Callable, Awaitable

from robot_head.protocol import envelope as envelopes
from robot_head.protocol import NO_RESPONSE, Envelope, MessageKind, AudioPayload
from robot_head.state.settings import PipelineSettings
from robot_head.config.pipeline import STATUS_ECHO_PREFIX
from robot_head.errors import LlmError, SttError, TtsError, CollaboratorError
from robot_head.providers.contracts import TextToSpeech, SpeechToText, LanguageModel, SynthesizedAudio

logger = logging.getLogger(__name__)

T = TypeVar("T")

TurnHandler = Callable[[Envelope], Awaitable[Envelope]]


async def call_collaborator(
    call: Callable[[], Awaitable[T]],
    *,
    timeout_s: float,
    error_cls: type[CollaboratorError],
    label: str,
) -> T:
    """Await one collaborator call under its own timeout.

    Whatever goes wrong comes back as ``error_cls`` so callers only handle
    the typed error.
    """
    try:
        return await asyncio.wait_for(call(), timeout=timeout_s)
    except error_cls:
        raise
    except TimeoutError as exc:
        raise error_cls(f"{label} timed out after {timeout_s:.1f}s") from exc
    except Exception as exc:
        raise error_cls(f"{label} failed: {exc}") from exc


class ResponsePipeline:
    def __init__(
        self,
        *,
        stt: SpeechToText,
        llm: LanguageModel,
        tts: TextToSpeech,
        settings: PipelineSettings,
    ) -> None:
        self._stt = stt
        self._llm = llm
        self._tts = tts
        self._settings = settings
        self._handlers: dict[MessageKind, TurnHandler] = {
            MessageKind.AUDIO: self._handle_audio,
            MessageKind.USER_INPUT: self._handle_user_input,
        }

    async def respond(self, envelope: Envelope) -> Envelope:
        if envelope.is_empty:
            return NO_RESPONSE
        handler = self._handlers.get(envelope.kind)
        if handler is None:
            return self._echo_status(envelope)
        return await handler(envelope)

    def is_silence(self, transcript: str) -> bool:
        text = transcript.strip()
        return not text or text in self._settings.silence_markers

    @staticmethod
    def _echo_status(envelope: Envelope) -> Envelope:
        return envelopes.status(f"{STATUS_ECHO_PREFIX}{envelope.text}")

    async def _handle_audio(self, envelope: Envelope) -> Envelope:
        payload = envelope.payload
        if not isinstance(payload, AudioPayload):
            raise TypeError("audio envelope without an AudioPayload")

        try:
            transcript = await call_collaborator(
                lambda: self._stt.transcribe(payload.audio, self._settings.sample_format),
                timeout_s=self._settings.stt_timeout_s,
                error_cls=SttError,
                label="speech-to-text",
            )
            if transcript is None:
                transcript = ""
            if not isinstance(transcript, str):
                raise SttError(f"speech-to-text returned {type(transcript).__name__}, not text")
        except SttError as exc:
            logger.warning("Speech-to-text error: %s", exc)
            return envelopes.error(self._settings.stt_failure_message)

        if self.is_silence(transcript):
            logger.debug("no speech detected; not replying")
            return NO_RESPONSE

        logger.info("User: %s", transcript.strip())
        return await self._reply(transcript.strip())

    async def _handle_user_input(self, envelope: Envelope) -> Envelope:
        return await self._reply(envelope.text)

    async def _reply(self, transcript: str) -> Envelope:
        try:
            completion = await call_collaborator(
                lambda: self._llm.complete(self._settings.system_prompt, transcript),
                timeout_s=self._settings.llm_timeout_s,
                error_cls=LlmError,
                label="language model",
            )
            if not isinstance(completion, str) or not completion.strip():
                raise LlmError(f"language model returned no text: {completion!r}")
        except LlmError as exc:
            logger.warning("Language model error: %s", exc)
            return envelopes.error(self._settings.llm_failure_message)

        logger.info("Robot: %s", completion)

        try:
            speech = await call_collaborator(
                lambda: self._tts.synthesize(completion),
                timeout_s=self._settings.tts_timeout_s,
                error_cls=TtsError,
                label="text-to-speech",
            )
            if not isinstance(speech, SynthesizedAudio) or not isinstance(speech.audio, (bytes, bytearray)):
                raise TtsError(f"text-to-speech returned {type(speech).__name__}, not audio")
            if not speech.audio:
                raise TtsError("text-to-speech returned no audio")
            if not isinstance(speech.mime_type, str) or not speech.mime_type.strip():
                raise TtsError("text-to-speech returned audio without a mime type")
        except TtsError as exc:
            logger.warning("TTS error, falling back to text: %s", exc)
            return envelopes.ai_response(completion)

        return envelopes.audio(speech.audio, speech.mime_type, text=completion)


__all__ = ["ResponsePipeline", "call_collaborator"]

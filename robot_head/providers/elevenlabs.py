"""Text-to-speech over the ElevenLabs HTTP API."""

from __future__ import annotations

import logging

import httpx

from robot_head.errors import TtsError
from robot_head.state.settings import ElevenLabsSettings
from robot_head.config.providers import ELEVENLABS_MIME_TYPE

from .contracts import SynthesizedAudio

logger = logging.getLogger(__name__)


class ElevenLabsSpeech:
    def __init__(
        self,
        settings: ElevenLabsSettings,
        *,
        timeout_s: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._client = client or httpx.AsyncClient(timeout=timeout_s)

    async def synthesize(self, text: str) -> SynthesizedAudio:
        if not self._settings.api_key:
            raise TtsError("ElevenLabs API key is not configured")

        request = {
            "text": text,
            "model_id": self._settings.model_id,
            "voice_settings": {
                "stability": self._settings.stability,
                "similarity_boost": self._settings.similarity_boost,
            },
        }
        try:
            resp = await self._client.post(
                f"{self._settings.base_url}/text-to-speech/{self._settings.voice_id}",
                json=request,
                headers={"Accept": ELEVENLABS_MIME_TYPE, "xi-api-key": self._settings.api_key},
            )
        except httpx.HTTPError as exc:
            raise TtsError(f"TTS request failed: {exc}") from exc

        if resp.status_code != httpx.codes.OK:
            raise TtsError(f"TTS API error {resp.status_code}: {resp.text[:500]}")
        if not resp.content:
            raise TtsError("TTS API returned no audio")

        mime_type = (resp.headers.get("content-type") or "").split(";")[0].strip() or ELEVENLABS_MIME_TYPE
        logger.debug("synthesized %d bytes of %s", len(resp.content), mime_type)
        return SynthesizedAudio(audio=resp.content, mime_type=mime_type)

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = ["ElevenLabsSpeech"]

"""Language completion over the OpenAI chat completions HTTP API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from robot_head.errors import LlmError
from robot_head.state.settings import OpenAISettings

logger = logging.getLogger(__name__)


class OpenAIChatModel:
    def __init__(
        self,
        settings: OpenAISettings,
        *,
        timeout_s: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._client = client or httpx.AsyncClient(timeout=timeout_s)

    def _build_request(self, system_prompt: str, user_text: str) -> dict[str, Any]:
        return {
            "model": self._settings.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_text},
            ],
        }

    async def complete(self, system_prompt: str, user_text: str) -> str:
        if not self._settings.api_key:
            raise LlmError("OpenAI API key is not configured")

        try:
            resp = await self._client.post(
                f"{self._settings.base_url}/chat/completions",
                json=self._build_request(system_prompt, user_text),
                headers={"Authorization": f"Bearer {self._settings.api_key}"},
            )
        except httpx.HTTPError as exc:
            raise LlmError(f"API request failed: {exc}") from exc

        if resp.status_code != httpx.codes.OK:
            raise LlmError(f"API error {resp.status_code}: {resp.text[:500]}")

        try:
            body = resp.json()
            content = body["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise LlmError(f"failed to parse response: {exc}") from exc

        if not isinstance(content, str) or not content.strip():
            raise LlmError("no response choices returned")
        logger.debug("completion returned %d chars", len(content))
        return content.strip()

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = ["OpenAIChatModel"]

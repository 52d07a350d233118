"""Client for a local Ollama server."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import aiohttp

from packages.unified_llm.errors import ApiError


class OllamaClient:
    """Talks to the Ollama HTTP API (``/api/generate``, ``/api/chat``, ...)."""

    provider = "ollama"

    def __init__(self, url: str = "http://localhost:11434", timeout: float = 300.0):
        self.url = url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def _raise_for_status(self, response: aiohttp.ClientResponse) -> None:
        if response.status != 200:
            error_text = await response.text()
            raise ApiError(
                f"Ollama error {response.status}: {error_text}",
                provider=self.provider,
                status_code=response.status,
            )

    async def post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST ``payload`` and return the single JSON response body."""
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.post(f"{self.url}/{path}", json=payload) as response:
                    await self._raise_for_status(response)
                    try:
                        return await response.json(content_type=None)
                    except ValueError as e:
                        raise ApiError(
                            "Ollama error: response is not valid JSON",
                            provider=self.provider,
                            status_code=response.status,
                        ) from e
        except aiohttp.ClientError as e:
            raise ApiError(f"Ollama error: {e}", provider=self.provider) from e

    async def stream(self, path: str, payload: dict[str, Any]) -> AsyncIterator[str]:
        """POST ``payload`` and yield the non-empty NDJSON lines of the response."""
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.post(f"{self.url}/{path}", json=payload) as response:
                    await self._raise_for_status(response)
                    async for line in response.content:
                        text = line.decode("utf-8").strip()
                        if text:
                            yield text
        except aiohttp.ClientError as e:
            raise ApiError(f"Ollama error: {e}", provider=self.provider) from e

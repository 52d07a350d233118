"""Cohere v1 REST client."""

from __future__ import annotations

from typing import Any

from packages.unified_llm.clients.base import JSONHTTPClient


class CohereClient(JSONHTTPClient):
    provider = "cohere"
    base_url = "https://api.cohere.ai/v1"

    async def generate(self, parameters: dict[str, Any]) -> dict[str, Any]:
        return await self.post("/generate", parameters)

    async def chat(self, parameters: dict[str, Any]) -> dict[str, Any]:
        return await self.post("/chat", parameters)

    async def embed(self, texts: list[str], model: str) -> dict[str, Any]:
        return await self.post("/embed", {"texts": texts, "model": model})

    async def tokenize(self, text: str, model: str | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"text": text}
        if model:
            payload["model"] = model
        return await self.post("/tokenize", payload)

    async def summarize(self, text: str, **parameters: Any) -> dict[str, Any]:
        return await self.post("/summarize", {"text": text, **parameters})

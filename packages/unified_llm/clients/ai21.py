"""AI21 Studio REST client."""

from __future__ import annotations

from typing import Any

from packages.unified_llm.clients.base import JSONHTTPClient


class AI21Client(JSONHTTPClient):
    provider = "ai21"
    base_url = "https://api.ai21.com/studio/v1"

    async def complete(self, prompt: str, parameters: dict[str, Any]) -> dict[str, Any]:
        """Run a completion; the model is part of the URL, not the body."""
        body = dict(parameters)
        model = body.pop("model")
        return await self.post(f"/{model}/complete", {"prompt": prompt, **body})

    async def tokenize(self, text: str) -> dict[str, Any]:
        return await self.post("/tokenize", {"text": text})

    async def summarize(
        self,
        text: str,
        source_type: str = "TEXT",
        parameters: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        return await self.post(
            "/summarize",
            {"source": text, "sourceType": source_type, **(parameters or {})},
        )

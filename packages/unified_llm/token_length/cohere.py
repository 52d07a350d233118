"""Cohere token counting through the tokenize endpoint."""

from __future__ import annotations

from typing import Any

from packages.unified_llm.errors import ConfigurationError
from packages.unified_llm.token_length.base import BaseTokenLengthValidator


class CohereTokenLengthValidator(BaseTokenLengthValidator):
    TOKEN_LIMITS = {
        "command": 4096,
        "command-light": 4096,
        "command-r": 128000,
        "command-r-plus": 128000,
        "base": 2048,
        "base-light": 2048,
        "embed-english-v2.0": 512,
        "embed-english-light-v2.0": 512,
        "embed-multilingual-v2.0": 256,
        "summarize-medium": 2048,
        "summarize-xlarge": 2048,
    }

    async def token_length(self, text: str, model_name: str, client: Any = None) -> int:
        if client is None:
            raise ConfigurationError("Cohere client is required to count tokens")
        response = await client.tokenize(text=text, model=model_name)
        return len(response.get("tokens", []))

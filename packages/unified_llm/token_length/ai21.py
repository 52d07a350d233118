"""AI21 token counting through the tokenize endpoint."""

from __future__ import annotations

from typing import Any

from packages.unified_llm.errors import ConfigurationError
from packages.unified_llm.token_length.base import BaseTokenLengthValidator


class AI21TokenLengthValidator(BaseTokenLengthValidator):
    TOKEN_LIMITS = {
        "j2-ultra": 8192,
        "j2-mid": 8192,
        "j2-light": 8192,
    }

    async def token_length(self, text: str, model_name: str, client: Any = None) -> int:
        if client is None:
            raise ConfigurationError("AI21 client is required to count tokens")
        response = await client.tokenize(text)
        return len(response.get("tokens", []))

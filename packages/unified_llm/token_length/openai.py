"""OpenAI token counting with tiktoken."""

from __future__ import annotations

from typing import Any

import tiktoken

from packages.unified_llm.token_length.base import BaseTokenLengthValidator


class OpenAITokenLengthValidator(BaseTokenLengthValidator):
    TOKEN_LIMITS = {
        "gpt-3.5-turbo": 16385,
        "gpt-3.5-turbo-0125": 16385,
        "gpt-3.5-turbo-16k": 16385,
        "gpt-4": 8192,
        "gpt-4-32k": 32768,
        "gpt-4-turbo": 128000,
        "gpt-4-turbo-preview": 128000,
        "gpt-4o": 128000,
        "gpt-4o-mini": 128000,
        "text-embedding-ada-002": 8191,
        "text-embedding-3-small": 8191,
        "text-embedding-3-large": 8191,
    }

    async def token_length(self, text: str, model_name: str, client: Any = None) -> int:
        try:
            encoding = tiktoken.encoding_for_model(model_name)
        except KeyError:
            encoding = tiktoken.get_encoding("cl100k_base")
        return len(encoding.encode(text))

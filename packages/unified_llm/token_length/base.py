"""Token budget calculation shared by the provider validators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from packages.unified_llm.errors import ConfigurationError, TokenLimitExceeded


class BaseTokenLengthValidator(ABC):
    """Computes how many tokens a model may still generate for a prompt.

    Subclasses provide the model token limits and a tokenizer.
    """

    TOKEN_LIMITS: Mapping[str, int] = {}

    def token_limit(self, model_name: str) -> int:
        try:
            return self.TOKEN_LIMITS[model_name]
        except KeyError:
            raise ConfigurationError(f"Unknown token limit for model: {model_name}") from None

    @abstractmethod
    async def token_length(self, text: str, model_name: str, client: Any = None) -> int:
        """Count the tokens of ``text`` for ``model_name``."""

    async def token_length_from_messages(
        self,
        messages: Sequence[Mapping[str, Any]],
        model_name: str,
        client: Any = None,
    ) -> int:
        total = 0
        for message in messages:
            content = message.get("content")
            if isinstance(content, str):
                total += await self.token_length(content, model_name, client)
        return total

    async def compute_max_tokens(
        self,
        content: str | Sequence[Mapping[str, Any]],
        model_name: str,
        *,
        max_tokens: int | None = None,
        client: Any = None,
    ) -> int:
        """Return the output token budget left after ``content``.

        Raises:
            TokenLimitExceeded: If ``content`` alone exceeds the model limit.
        """
        if isinstance(content, str):
            text_token_length = await self.token_length(content, model_name, client)
        else:
            text_token_length = await self.token_length_from_messages(content, model_name, client)

        limit = self.token_limit(model_name)
        leftover_tokens = limit - text_token_length
        if leftover_tokens < 0:
            raise TokenLimitExceeded(
                f"This model's maximum context length is {limit} tokens, "
                f"but the given text is {text_token_length} tokens long.",
                token_overflow=-leftover_tokens,
            )

        if max_tokens is not None:
            leftover_tokens = min(max_tokens, leftover_tokens)
        return leftover_tokens

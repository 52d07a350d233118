"""Token-length validator tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from packages.unified_llm.errors import ConfigurationError, TokenLimitExceeded
from packages.unified_llm.token_length import (
    AI21TokenLengthValidator,
    BaseTokenLengthValidator,
    CohereTokenLengthValidator,
)


class WordCountValidator(BaseTokenLengthValidator):
    """Counts whitespace-separated words as tokens."""

    TOKEN_LIMITS = {"tiny": 10}

    async def token_length(self, text, model_name, client=None):
        return len(text.split())


class TestComputeMaxTokens:
    """Tests for the shared budget calculation."""

    @pytest.mark.asyncio
    async def test_leftover_tokens(self) -> None:
        assert await WordCountValidator().compute_max_tokens("one two three", "tiny") == 7

    @pytest.mark.asyncio
    async def test_caller_cap(self) -> None:
        validator = WordCountValidator()
        assert await validator.compute_max_tokens("one two", "tiny", max_tokens=3) == 3
        assert await validator.compute_max_tokens("one two", "tiny", max_tokens=100) == 8

    @pytest.mark.asyncio
    async def test_exact_fit(self) -> None:
        assert await WordCountValidator().compute_max_tokens(" ".join(["w"] * 10), "tiny") == 0

    @pytest.mark.asyncio
    async def test_over_limit(self) -> None:
        with pytest.raises(TokenLimitExceeded) as exc_info:
            await WordCountValidator().compute_max_tokens(" ".join(["w"] * 13), "tiny")
        assert exc_info.value.token_overflow == 3
        assert "maximum context length is 10 tokens" in str(exc_info.value)
        assert "13 tokens long" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_messages_are_summed(self) -> None:
        messages = [
            {"role": "system", "content": "be brief"},
            {"role": "user", "content": "hello there friend"},
            {"role": "assistant", "content": None},
        ]
        assert await WordCountValidator().compute_max_tokens(messages, "tiny") == 5

    @pytest.mark.asyncio
    async def test_unknown_model(self) -> None:
        with pytest.raises(ConfigurationError, match="nope"):
            await WordCountValidator().compute_max_tokens("hi", "nope")


class TestEndpointValidators:
    """Tests for validators that count through a provider client."""

    @pytest.mark.asyncio
    async def test_cohere_uses_tokenize(self) -> None:
        client = MagicMock()
        client.tokenize = AsyncMock(return_value={"tokens": [1, 2, 3]})

        remaining = await CohereTokenLengthValidator().compute_max_tokens("hi", "command", client=client)

        assert remaining == 4093
        client.tokenize.assert_awaited_once_with(text="hi", model="command")

    @pytest.mark.asyncio
    async def test_ai21_uses_tokenize(self) -> None:
        client = MagicMock()
        client.tokenize = AsyncMock(return_value={"tokens": [{}, {}]})

        remaining = await AI21TokenLengthValidator().compute_max_tokens("hi", "j2-mid", client=client)

        assert remaining == 8190
        client.tokenize.assert_awaited_once_with("hi")

    @pytest.mark.asyncio
    async def test_client_required(self) -> None:
        with pytest.raises(ConfigurationError):
            await CohereTokenLengthValidator().token_length("hi", "command")

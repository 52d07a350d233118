"""OpenAI adapter tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from packages.unified_llm.adapters import OpenAIAdapter
from packages.unified_llm.errors import (
    ApiError,
    ConfigurationError,
    TokenLimitExceeded,
    UnsupportedParameterCombinationError,
)
from packages.unified_llm.responses import OpenAIResponse

CHAT_RESPONSE = {
    "id": "chatcmpl-1",
    "object": "chat.completion",
    "model": "gpt-3.5-turbo",
    "choices": [
        {
            "index": 0,
            "message": {"role": "assistant", "content": "Hello there"},
            "finish_reason": "stop",
        }
    ],
    "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
}


@pytest.fixture
def client() -> MagicMock:
    """Fake AsyncOpenAI client."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=CHAT_RESPONSE)
    client.embeddings.create = AsyncMock(
        return_value={"model": "text-embedding-3-small", "data": [{"embedding": [0.1, 0.2]}]}
    )
    return client


@pytest.fixture
def length_validator() -> MagicMock:
    validator = MagicMock()
    validator.compute_max_tokens = AsyncMock(return_value=8000)
    return validator


@pytest.fixture
def adapter(client: MagicMock, length_validator: MagicMock) -> OpenAIAdapter:
    return OpenAIAdapter(client=client, length_validator=length_validator)


MESSAGES = [{"role": "user", "content": "Hi"}]


class TestOpenAIConstruction:
    """Tests for adapter construction."""

    def test_missing_api_key_raises(self, monkeypatch) -> None:
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        monkeypatch.chdir("/")
        with pytest.raises(ConfigurationError, match="OpenAI API key required"):
            OpenAIAdapter()

    def test_default_overrides(self, client: MagicMock) -> None:
        adapter = OpenAIAdapter(client=client, default_options={"chat_completion_model_name": "gpt-4o"})
        assert adapter.defaults.chat_completion_model_name == "gpt-4o"
        assert adapter.defaults.temperature == 0.0

    def test_unknown_default_override_rejected(self, client: MagicMock) -> None:
        with pytest.raises(ValueError):
            OpenAIAdapter(client=client, default_options={"unknown": 1})


class TestOpenAIChat:
    """Tests for chat requests."""

    @pytest.mark.asyncio
    async def test_empty_model_and_messages_rejected(self, adapter: OpenAIAdapter, client: MagicMock) -> None:
        """Empty messages are reported before any transport call."""
        with pytest.raises(ConfigurationError, match="messages argument is required"):
            await adapter.chat({"model": "", "messages": []})
        client.chat.completions.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_model_rejected(self, adapter: OpenAIAdapter, client: MagicMock) -> None:
        with pytest.raises(ConfigurationError, match="model argument is required"):
            await adapter.chat(model="", messages=MESSAGES)
        client.chat.completions.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_tool_choice_requires_tools(self, adapter: OpenAIAdapter) -> None:
        with pytest.raises(UnsupportedParameterCombinationError):
            await adapter.chat(messages=MESSAGES, tool_choice="auto")

    @pytest.mark.asyncio
    async def test_chat_sends_defaults(self, adapter: OpenAIAdapter, client: MagicMock) -> None:
        response = await adapter.chat(messages=MESSAGES, top_k=5, system="ignored", stop=["\n"])

        client.chat.completions.create.assert_awaited_once_with(
            messages=MESSAGES,
            model="gpt-3.5-turbo",
            n=1,
            temperature=0.0,
            stop=["\n"],
        )
        assert isinstance(response, OpenAIResponse)
        assert response.chat_completion == "Hello there"
        assert response.total_tokens == 7

    @pytest.mark.asyncio
    async def test_error_payload_raises(self, adapter: OpenAIAdapter, client: MagicMock) -> None:
        client.chat.completions.create.return_value = {"error": {"message": "Invalid API key"}}
        with pytest.raises(ApiError, match="OpenAI API error: Invalid API key"):
            await adapter.chat(messages=MESSAGES)

    @pytest.mark.asyncio
    async def test_sdk_error_wrapped(self, adapter: OpenAIAdapter, client: MagicMock) -> None:
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        client.chat.completions.create.side_effect = openai.APIConnectionError(request=request)
        with pytest.raises(ApiError) as exc_info:
            await adapter.chat(messages=MESSAGES)
        assert exc_info.value.provider == "openai"

    @pytest.mark.asyncio
    async def test_pydantic_response_is_dumped(self, adapter: OpenAIAdapter, client: MagicMock) -> None:
        sdk_response = MagicMock()
        sdk_response.model_dump.return_value = CHAT_RESPONSE
        client.chat.completions.create.return_value = sdk_response

        response = await adapter.chat(messages=MESSAGES)
        assert response.raw_response == CHAT_RESPONSE


class TestOpenAIStreaming:
    """Tests for streamed chat completions."""

    @staticmethod
    def _stream(*chunks):
        async def generator():
            for chunk in chunks:
                yield chunk

        return generator()

    @pytest.mark.asyncio
    async def test_stream_is_folded(self, adapter: OpenAIAdapter, client: MagicMock) -> None:
        client.chat.completions.create.return_value = self._stream(
            {"id": "c1", "model": "gpt-3.5-turbo", "choices": [{"index": 0, "delta": {"role": "assistant"}}]},
            {"id": "c1", "choices": [{"index": 0, "delta": {"content": "Hel"}}]},
            {"id": "c1", "choices": [{"index": 0, "delta": {"content": "lo"}, "finish_reason": "stop"}]},
        )
        received = []

        response = await adapter.chat(messages=MESSAGES, on_chunk=received.append)

        assert response.chat_completion == "Hello"
        assert response.finish_reason == "stop"
        assert response.model == "gpt-3.5-turbo"
        assert len(received) == 3
        assert client.chat.completions.create.call_args.kwargs["stream"] is True

    @pytest.mark.asyncio
    async def test_malformed_chunk_skipped(self, adapter: OpenAIAdapter, client: MagicMock) -> None:
        client.chat.completions.create.return_value = self._stream(
            {"choices": [{"index": 0, "delta": {"content": "A"}}]},
            {"unexpected": True},
            {"choices": [{"index": 0, "delta": {"content": "B"}}]},
        )

        response = await adapter.chat(messages=MESSAGES, stream=True)
        assert response.chat_completion == "AB"

    @pytest.mark.asyncio
    async def test_empty_stream_raises(self, adapter: OpenAIAdapter, client: MagicMock) -> None:
        client.chat.completions.create.return_value = self._stream()
        with pytest.raises(ApiError, match="stream ended"):
            await adapter.chat(messages=MESSAGES, stream=True)


class TestOpenAIComplete:
    """Tests for the deprecated completion path."""

    @pytest.mark.asyncio
    async def test_complete_warns_and_builds_messages(self, adapter: OpenAIAdapter, client: MagicMock) -> None:
        with pytest.warns(DeprecationWarning):
            response = await adapter.complete(prompt="Say hi", system="Be brief", stop_sequences=["."])

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["messages"] == [
            {"role": "system", "content": "Be brief"},
            {"role": "user", "content": "Say hi"},
        ]
        assert kwargs["stop"] == ["."]
        assert "prompt" not in kwargs
        assert response.completion == "Hello there"

    @pytest.mark.asyncio
    async def test_complete_requires_prompt(self, adapter: OpenAIAdapter) -> None:
        with pytest.warns(DeprecationWarning), pytest.raises(ConfigurationError, match="prompt"):
            await adapter.complete({})

    @pytest.mark.asyncio
    async def test_summarize_uses_prompt_template(self, adapter: OpenAIAdapter, client: MagicMock) -> None:
        summary = await adapter.summarize("A long text")

        assert summary == "Hello there"
        content = client.chat.completions.create.call_args.kwargs["messages"][-1]["content"]
        assert "A long text" in content
        assert "CONCISE SUMMARY" in content


class TestOpenAIEmbed:
    """Tests for embeddings."""

    @pytest.mark.asyncio
    async def test_embed_defaults(
        self, adapter: OpenAIAdapter, client: MagicMock, length_validator: MagicMock
    ) -> None:
        response = await adapter.embed("hello")

        client.embeddings.create.assert_awaited_once_with(
            input="hello", model="text-embedding-3-small", dimensions=1536
        )
        length_validator.compute_max_tokens.assert_awaited_once_with("hello", "text-embedding-3-small")
        assert response.embedding == [0.1, 0.2]

    @pytest.mark.asyncio
    async def test_embed_options(self, adapter: OpenAIAdapter, client: MagicMock) -> None:
        await adapter.embed("hello", model="custom", encoding_format="base64", user="u1", dimensions=256)
        client.embeddings.create.assert_awaited_once_with(
            input="hello", model="custom", encoding_format="base64", user="u1", dimensions=256
        )

    @pytest.mark.asyncio
    async def test_embed_requires_text(self, adapter: OpenAIAdapter) -> None:
        with pytest.raises(ConfigurationError, match="text argument is required"):
            await adapter.embed("")

    @pytest.mark.asyncio
    async def test_embed_rejects_unknown_encoding(self, adapter: OpenAIAdapter) -> None:
        with pytest.raises(ConfigurationError, match="encoding_format"):
            await adapter.embed("hello", encoding_format="int8")

    @pytest.mark.asyncio
    async def test_embed_token_limit(
        self, adapter: OpenAIAdapter, client: MagicMock, length_validator: MagicMock
    ) -> None:
        length_validator.compute_max_tokens.side_effect = TokenLimitExceeded("too long", token_overflow=10)
        with pytest.raises(TokenLimitExceeded):
            await adapter.embed("hello")
        client.embeddings.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_default_dimensions(self, client: MagicMock) -> None:
        assert await OpenAIAdapter(client=client).default_dimensions() == 1536
        configured = OpenAIAdapter(client=client, default_options={"dimensions": 512})
        assert await configured.default_dimensions() == 512

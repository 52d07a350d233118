"""Response wrapper tests."""

from __future__ import annotations

import pytest

from packages.unified_llm.responses import (
    AnthropicResponse,
    CohereResponse,
    LLMResponse,
    OllamaResponse,
    OpenAIResponse,
)


class TestLLMResponse:
    """Tests for the base wrapper."""

    def test_unsupported_accessors_raise(self) -> None:
        response = LLMResponse({"model": "m"})
        for name in ("completion", "chat_completion", "embedding", "embeddings", "prompt_tokens"):
            with pytest.raises(NotImplementedError):
                getattr(response, name)

    def test_model_override(self) -> None:
        assert LLMResponse({"model": "raw"}).model == "raw"
        assert LLMResponse({"model": "raw"}, model="explicit").model == "explicit"


class TestProviderResponses:
    """Tests for provider-specific accessors."""

    def test_openai_tool_calls(self) -> None:
        call = {"id": "call_1", "type": "function", "function": {"name": "f", "arguments": "{}"}}
        response = OpenAIResponse(
            {"choices": [{"message": {"role": "assistant", "content": None, "tool_calls": [call]}}]}
        )
        assert response.chat_completion == ""
        assert response.tool_calls == [call]

    def test_openai_total_tokens_falls_back_to_sum(self) -> None:
        response = OpenAIResponse({"usage": {"prompt_tokens": 3, "completion_tokens": 4}})
        assert response.total_tokens == 7

    def test_anthropic_tool_use_blocks(self) -> None:
        response = AnthropicResponse(
            {
                "content": [
                    {"type": "text", "text": "Let me check."},
                    {"type": "tool_use", "id": "t1", "name": "get_weather", "input": {"city": "Oslo"}},
                ],
                "stop_reason": "tool_use",
            }
        )
        assert response.chat_completion == "Let me check."
        assert response.tool_calls[0]["name"] == "get_weather"
        assert response.stop_reason == "tool_use"

    def test_cohere_chat_role(self) -> None:
        response = CohereResponse(
            {"text": "Hi", "chat_history": [{"role": "USER", "message": "Hey"}, {"role": "CHATBOT", "message": "Hi"}]}
        )
        assert response.chat_completion == "Hi"
        assert response.role == "CHATBOT"

    def test_ollama_embeddings(self) -> None:
        response = OllamaResponse({"embedding": [1.0, 2.0]}, model="llama3")
        assert response.embeddings == [[1.0, 2.0]]
        assert response.model == "llama3"

"""Uniform accessors over each backend's raw response payload."""

from __future__ import annotations

from typing import Any


class LLMResponse:
    """Wraps a raw backend payload.

    Subclasses implement the accessors their backend supports; the rest
    raise ``NotImplementedError``.
    """

    provider: str = "base"

    def __init__(self, raw_response: Any, model: str | None = None):
        self.raw_response = raw_response
        self._model = model

    @property
    def model(self) -> str | None:
        if self._model:
            return self._model
        if isinstance(self.raw_response, dict):
            return self.raw_response.get("model")
        return None

    @property
    def completion(self) -> str:
        raise NotImplementedError

    @property
    def completions(self) -> list[Any]:
        raise NotImplementedError

    @property
    def chat_completion(self) -> str:
        raise NotImplementedError

    @property
    def chat_completions(self) -> list[Any]:
        raise NotImplementedError

    @property
    def embedding(self) -> list[float]:
        raise NotImplementedError

    @property
    def embeddings(self) -> list[list[float]]:
        raise NotImplementedError

    @property
    def prompt_tokens(self) -> int:
        raise NotImplementedError

    @property
    def completion_tokens(self) -> int:
        raise NotImplementedError

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self.model!r})"


class AI21Response(LLMResponse):
    provider = "ai21"

    @property
    def completions(self) -> list[Any]:
        return self.raw_response.get("completions", [])

    @property
    def completion(self) -> str:
        return self.completions[0]["data"]["text"]

    @property
    def finish_reason(self) -> str | None:
        reason = self.completions[0].get("finishReason") or {}
        return reason.get("reason")

    @property
    def prompt_tokens(self) -> int:
        return len(self.raw_response.get("prompt", {}).get("tokens", []))

    @property
    def completion_tokens(self) -> int:
        return sum(
            len(item.get("data", {}).get("tokens", [])) for item in self.completions
        )


class AnthropicResponse(LLMResponse):
    provider = "anthropic"

    @property
    def completion(self) -> str:
        return self.raw_response.get("completion", "")

    @property
    def completions(self) -> list[Any]:
        return [self.completion]

    @property
    def chat_completion(self) -> str:
        blocks = self.raw_response.get("content") or []
        return "".join(block.get("text", "") for block in blocks if block.get("type") == "text")

    @property
    def chat_completions(self) -> list[Any]:
        return self.raw_response.get("content") or []

    @property
    def tool_calls(self) -> list[dict[str, Any]]:
        blocks = self.raw_response.get("content") or []
        return [block for block in blocks if block.get("type") == "tool_use"]

    @property
    def stop_reason(self) -> str | None:
        return self.raw_response.get("stop_reason")

    @property
    def prompt_tokens(self) -> int:
        return (self.raw_response.get("usage") or {}).get("input_tokens", 0)

    @property
    def completion_tokens(self) -> int:
        return (self.raw_response.get("usage") or {}).get("output_tokens", 0)


class CohereResponse(LLMResponse):
    provider = "cohere"

    @property
    def embeddings(self) -> list[list[float]]:
        return self.raw_response.get("embeddings", [])

    @property
    def embedding(self) -> list[float]:
        return self.embeddings[0]

    @property
    def completions(self) -> list[Any]:
        return self.raw_response.get("generations", [])

    @property
    def completion(self) -> str:
        return self.completions[0]["text"]

    @property
    def chat_completion(self) -> str:
        return self.raw_response.get("text", "")

    @property
    def role(self) -> str:
        history = self.raw_response.get("chat_history") or []
        return history[-1].get("role", "CHATBOT") if history else "CHATBOT"

    @property
    def prompt_tokens(self) -> int:
        billed = (self.raw_response.get("meta") or {}).get("billed_units") or {}
        return billed.get("input_tokens", 0)

    @property
    def completion_tokens(self) -> int:
        billed = (self.raw_response.get("meta") or {}).get("billed_units") or {}
        return billed.get("output_tokens", 0)


class OllamaResponse(LLMResponse):
    provider = "ollama"

    @property
    def completion(self) -> str:
        return self.raw_response.get("response", "")

    @property
    def completions(self) -> list[Any]:
        return [self.completion]

    @property
    def chat_completion(self) -> str:
        return (self.raw_response.get("message") or {}).get("content", "")

    @property
    def role(self) -> str:
        return (self.raw_response.get("message") or {}).get("role", "assistant")

    @property
    def embedding(self) -> list[float]:
        return self.raw_response.get("embedding", [])

    @property
    def embeddings(self) -> list[list[float]]:
        return [self.embedding]

    @property
    def done(self) -> bool:
        return bool(self.raw_response.get("done"))

    @property
    def prompt_tokens(self) -> int:
        return self.raw_response.get("prompt_eval_count", 0)

    @property
    def completion_tokens(self) -> int:
        return self.raw_response.get("eval_count", 0)


class OpenAIResponse(LLMResponse):
    provider = "openai"

    @property
    def chat_completions(self) -> list[Any]:
        return self.raw_response.get("choices", [])

    @property
    def chat_completion(self) -> str:
        return self.chat_completions[0]["message"].get("content") or ""

    @property
    def completions(self) -> list[Any]:
        return self.chat_completions

    @property
    def completion(self) -> str:
        return self.chat_completion

    @property
    def tool_calls(self) -> list[dict[str, Any]]:
        if not self.chat_completions:
            return []
        return self.chat_completions[0]["message"].get("tool_calls") or []

    @property
    def finish_reason(self) -> str | None:
        if not self.chat_completions:
            return None
        return self.chat_completions[0].get("finish_reason")

    @property
    def embeddings(self) -> list[list[float]]:
        return [item["embedding"] for item in self.raw_response.get("data", [])]

    @property
    def embedding(self) -> list[float]:
        return self.embeddings[0]

    @property
    def prompt_tokens(self) -> int:
        return (self.raw_response.get("usage") or {}).get("prompt_tokens", 0)

    @property
    def completion_tokens(self) -> int:
        return (self.raw_response.get("usage") or {}).get("completion_tokens", 0)

    @property
    def total_tokens(self) -> int:
        usage = self.raw_response.get("usage") or {}
        return usage.get("total_tokens", self.prompt_tokens + self.completion_tokens)

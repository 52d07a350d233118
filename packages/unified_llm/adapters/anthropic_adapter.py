"""Anthropic Claude adapter."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import anthropic
from anthropic import AsyncAnthropic

from packages.unified_llm.adapters.base import LLMAdapter
from packages.unified_llm.config import AnthropicDefaults, build_defaults, get_settings
from packages.unified_llm.errors import ConfigurationError
from packages.unified_llm.parameters import value_present
from packages.unified_llm.responses import AnthropicResponse

logger = logging.getLogger(__name__)

TOOLS_BETA_HEADERS = {"anthropic-beta": "tools-2024-05-16"}

# Unified fields the Messages and Text Completions APIs have no use for
_UNSUPPORTED_FIELDS = (
    "seed",
    "logit_bias",
    "frequency_penalty",
    "presence_penalty",
    "repetition_penalty",
)


class AnthropicAdapter(LLMAdapter):
    """Adapter for Anthropic's Messages (chat) and Text Completions APIs."""

    provider = "anthropic"
    display_name = "Anthropic"
    TRANSPORT_ERRORS = (anthropic.AnthropicError,)

    def __init__(
        self,
        api_key: str | None = None,
        *,
        client: Any | None = None,
        default_options: AnthropicDefaults | Mapping[str, Any] | None = None,
        **client_options: Any,
    ):
        """Initialize Anthropic adapter.

        Args:
            api_key: Anthropic API key (defaults to ANTHROPIC_API_KEY env var)
            client: Pre-built ``AsyncAnthropic``-compatible client
            default_options: Request defaults, or overrides for them
            **client_options: Passed to ``AsyncAnthropic``
        """
        super().__init__()
        self.defaults = build_defaults(AnthropicDefaults, default_options)
        if client is None:
            client = AsyncAnthropic(
                api_key=self._resolve_api_key(api_key, get_settings().anthropic_api_key),
                **client_options,
            )
        self.client = client

        self.chat_parameters.update(
            model={"default": self.defaults.chat_completion_model_name},
            temperature={"default": self.defaults.temperature},
            max_tokens={"default": self.defaults.max_tokens_to_sample},
            metadata={},
            system={},
        )
        self.chat_parameters.ignore("n", "user", "response_format", "stream", *_UNSUPPORTED_FIELDS)
        self.chat_parameters.remap(stop="stop_sequences")

        self.complete_parameters.update(
            model={"default": self.defaults.completion_model_name},
            temperature={"default": self.defaults.temperature},
            max_tokens={"default": self.defaults.max_tokens_to_sample},
            metadata={},
        )
        self.complete_parameters.ignore(
            "response_format",
            "seed",
            "system",
            "tool_choice",
            "tools",
            "n",
            "user",
            "stream",
            *_UNSUPPORTED_FIELDS,
        )
        self.complete_parameters.remap(max_tokens="max_tokens_to_sample", stop="stop_sequences")

        logger.info("Initialized Anthropic adapter (model=%s)", self.defaults.chat_completion_model_name)

    async def complete(self, params: Mapping[str, Any] | None = None, /, **options: Any) -> AnthropicResponse:
        """Generate a completion with the legacy Text Completions API.

        The prompt must already follow the ``Human:``/``Assistant:`` format.
        """
        parameters = self.complete_parameters.resolve(self._options(params, options))

        self._require(parameters, "model")
        if parameters.get("max_tokens_to_sample") is None:
            raise ConfigurationError("max_tokens argument is required")

        response = await self._call(self.client.completions.create, **parameters)
        return AnthropicResponse(response)

    async def chat(self, params: Mapping[str, Any] | None = None, /, **options: Any) -> AnthropicResponse:
        """Generate a chat completion with the Messages API."""
        parameters = self.chat_parameters.resolve(self._options(params, options))

        self._require(parameters, "messages")
        self._require(parameters, "model")
        if parameters.get("max_tokens") is None:
            raise ConfigurationError("max_tokens argument is required")
        self._require_tools_for_tool_choice(parameters)

        extra: dict[str, Any] = {}
        if value_present(parameters.get("tools")):
            extra["extra_headers"] = TOOLS_BETA_HEADERS

        response = await self._call(self.client.messages.create, **parameters, **extra)
        return AnthropicResponse(response)

"""Cohere adapter."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from packages.unified_llm.adapters.base import LLMAdapter
from packages.unified_llm.clients import CohereClient
from packages.unified_llm.config import CohereDefaults, build_defaults, get_settings
from packages.unified_llm.errors import ConfigurationError
from packages.unified_llm.responses import CohereResponse
from packages.unified_llm.token_length import BaseTokenLengthValidator, CohereTokenLengthValidator

logger = logging.getLogger(__name__)


class CohereAdapter(LLMAdapter):
    """Adapter for Cohere generate, chat, embed and summarize endpoints."""

    provider = "cohere"
    display_name = "Cohere"

    def __init__(
        self,
        api_key: str | None = None,
        *,
        client: Any | None = None,
        default_options: CohereDefaults | Mapping[str, Any] | None = None,
        length_validator: BaseTokenLengthValidator | None = None,
    ):
        super().__init__()
        self.defaults = build_defaults(CohereDefaults, default_options)
        if client is None:
            settings = get_settings()
            client = CohereClient(
                self._resolve_api_key(api_key, settings.cohere_api_key),
                timeout=settings.request_timeout,
            )
        self.client = client
        self.length_validator = length_validator or CohereTokenLengthValidator()

        self.chat_parameters.update(
            model={"default": self.defaults.chat_completion_model_name},
            temperature={"default": self.defaults.temperature},
        )
        self.chat_parameters.remap(
            system="preamble",
            messages="chat_history",
            stop="stop_sequences",
            top_k="k",
            top_p="p",
        )
        # CohereClient reads single JSON bodies only.
        self.chat_parameters.ignore("stream")

        self.complete_parameters.update(
            model={"default": self.defaults.completion_model_name},
            n={},
            truncate={"default": self.defaults.truncate},
            temperature={"default": self.defaults.temperature},
            preset={},
            end_sequences={},
            return_likelihoods={},
            raw_prompting={},
        )
        self.complete_parameters.remap(
            n="num_generations",
            stop="stop_sequences",
            top_k="k",
            top_p="p",
        )
        self.complete_parameters.ignore(
            "system",
            "response_format",
            "tools",
            "tool_choice",
            "logit_bias",
            "repetition_penalty",
            "stream",
        )

        logger.info("Initialized Cohere adapter (model=%s)", self.defaults.chat_completion_model_name)

    async def embed(self, text: str, **options: Any) -> CohereResponse:
        model = self.defaults.embeddings_model_name
        response = await self._call(self.client.embed, texts=[text], model=model)
        return CohereResponse(response, model=model)

    async def complete(self, params: Mapping[str, Any] | None = None, /, **options: Any) -> CohereResponse:
        """Generate a completion with the generate endpoint.

        ``max_tokens`` is sized to what is left of the model context after the
        prompt, capped by a caller-supplied ``max_tokens``.
        """
        parameters = self.complete_parameters.resolve(self._options(params, options))
        self._require(parameters, "prompt")
        self._require(parameters, "model")

        parameters["max_tokens"] = await self.length_validator.compute_max_tokens(
            parameters["prompt"],
            parameters["model"],
            max_tokens=parameters.get("max_tokens"),
            client=self.client,
        )

        response = await self._call(self.client.generate, parameters=parameters)
        return CohereResponse(response, model=parameters["model"])

    async def chat(self, params: Mapping[str, Any] | None = None, /, **options: Any) -> CohereResponse:
        parameters = self.chat_parameters.resolve(self._options(params, options))
        if "chat_history" not in parameters or not parameters["chat_history"]:
            raise ConfigurationError("messages argument is required")

        response = await self._call(self.client.chat, parameters=parameters)
        return CohereResponse(response)

    async def summarize(self, text: str) -> str:
        response = await self._call(self.client.summarize, text=text)
        return response.get("summary")

    async def default_dimensions(self) -> int:
        return self.defaults.dimensions

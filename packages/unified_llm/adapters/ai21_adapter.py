"""AI21 Studio adapter."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from packages.unified_llm.adapters.base import LLMAdapter
from packages.unified_llm.clients import AI21Client
from packages.unified_llm.config import AI21Defaults, build_defaults, get_settings
from packages.unified_llm.responses import AI21Response
from packages.unified_llm.token_length import AI21TokenLengthValidator, BaseTokenLengthValidator

logger = logging.getLogger(__name__)


class AI21Adapter(LLMAdapter):
    """Adapter for AI21 Jurassic-2 completions and summaries.

    AI21 has no chat endpoint; only ``complete`` and ``summarize`` are
    supported.
    """

    provider = "ai21"
    display_name = "AI21"

    def __init__(
        self,
        api_key: str | None = None,
        *,
        client: Any | None = None,
        default_options: AI21Defaults | Mapping[str, Any] | None = None,
        length_validator: BaseTokenLengthValidator | None = None,
    ):
        super().__init__()
        self.defaults = build_defaults(AI21Defaults, default_options)
        if client is None:
            settings = get_settings()
            client = AI21Client(
                self._resolve_api_key(api_key, settings.ai21_api_key),
                timeout=settings.request_timeout,
            )
        self.client = client
        self.length_validator = length_validator or AI21TokenLengthValidator()

        self.complete_parameters.update(
            model={"default": self.defaults.model},
            n={},
            min_tokens={},
            min_p={},
            temperature={"default": self.defaults.temperature},
            epoch={},
        )
        self.complete_parameters.ignore(
            "response_format",
            "seed",
            "system",
            "tool_choice",
            "tools",
            "stream",
            "user",
            "metadata",
        )
        self.complete_parameters.remap(
            n="numResults",
            max_tokens="maxTokens",
            min_tokens="minTokens",
            top_p="topP",
            min_p="minP",
            stop="stopSequences",
            top_k="topKReturn",
            logit_bias="logitBias",
            frequency_penalty="frequencyPenalty",
            presence_penalty="presencePenalty",
            repetition_penalty="countPenalty",
        )

        logger.info("Initialized AI21 adapter (model=%s)", self.defaults.model)

    async def complete(self, params: Mapping[str, Any] | None = None, /, **options: Any) -> AI21Response:
        """Generate a completion for a prompt.

        ``maxTokens`` is set to what is left of the model context after the
        prompt, capped by a caller-supplied ``max_tokens``.
        """
        parameters = self.complete_parameters.resolve(self._options(params, options))
        self._require(parameters, "prompt")
        self._require(parameters, "model")
        prompt = parameters.pop("prompt")

        parameters["maxTokens"] = await self.length_validator.compute_max_tokens(
            prompt,
            parameters["model"],
            max_tokens=parameters.get("maxTokens"),
            client=self.client,
        )

        response = await self._call(self.client.complete, prompt=prompt, parameters=parameters)
        return AI21Response(response, model=parameters["model"])

    async def summarize(self, text: str, **params: Any) -> str:
        response = await self._call(
            self.client.summarize, text=text, source_type="TEXT", parameters=params
        )
        return response.get("summary")

"""OpenAI adapter."""

from __future__ import annotations

import logging
import warnings
from collections.abc import Callable, Mapping
from typing import Any

import openai
from openai import AsyncOpenAI

from packages.unified_llm.adapters.base import LLMAdapter, as_payload
from packages.unified_llm.config import OpenAIDefaults, build_defaults, get_settings
from packages.unified_llm.errors import ApiError, ConfigurationError
from packages.unified_llm.responses import OpenAIResponse
from packages.unified_llm.streaming import ChunkAccumulator
from packages.unified_llm.token_length import BaseTokenLengthValidator, OpenAITokenLengthValidator

logger = logging.getLogger(__name__)

ChunkCallback = Callable[[dict[str, Any]], Any]


class OpenAIAdapter(LLMAdapter):
    """Adapter for the OpenAI chat completions and embeddings APIs."""

    provider = "openai"
    display_name = "OpenAI"
    TRANSPORT_ERRORS = (openai.OpenAIError,)

    EMBEDDING_SIZES = {
        "text-embedding-ada-002": 1536,
        "text-embedding-3-large": 3072,
        "text-embedding-3-small": 1536,
    }

    def __init__(
        self,
        api_key: str | None = None,
        *,
        client: Any | None = None,
        default_options: OpenAIDefaults | Mapping[str, Any] | None = None,
        length_validator: BaseTokenLengthValidator | None = None,
        **client_options: Any,
    ):
        """Initialize OpenAI adapter.

        Args:
            api_key: OpenAI API key (defaults to OPENAI_API_KEY env var)
            client: Pre-built ``AsyncOpenAI``-compatible client
            default_options: Request defaults, or overrides for them
            length_validator: Token counter used to check embedding inputs
            **client_options: Passed to ``AsyncOpenAI``
        """
        super().__init__()
        self.defaults = build_defaults(OpenAIDefaults, default_options)
        if client is None:
            client = AsyncOpenAI(
                api_key=self._resolve_api_key(api_key, get_settings().openai_api_key),
                **client_options,
            )
        self.client = client
        self.length_validator = length_validator or OpenAITokenLengthValidator()

        request_fields = {
            "model": {"default": self.defaults.chat_completion_model_name},
            "logprobs": {},
            "top_logprobs": {},
            "n": {"default": self.defaults.n},
            "stream_options": {},
            "temperature": {"default": self.defaults.temperature},
            "user": {},
        }
        self.chat_parameters.update(request_fields)
        # The SDK rejects keyword arguments it does not know.
        self.chat_parameters.ignore("top_k", "system", "repetition_penalty")

        self.complete_parameters.update(request_fields)
        self.complete_parameters.alias_field("stop", as_="stop_sequences")
        self.complete_parameters.ignore("top_k")

        logger.info("Initialized OpenAI adapter (model=%s)", self.defaults.chat_completion_model_name)

    async def chat(
        self,
        params: Mapping[str, Any] | None = None,
        /,
        on_chunk: ChunkCallback | None = None,
        **options: Any,
    ) -> OpenAIResponse:
        """Generate a chat completion.

        With ``on_chunk`` (or ``stream=True``) the response is streamed;
        ``on_chunk`` receives the first choice of every chunk and the result
        is built once the stream has ended.
        """
        parameters = self.chat_parameters.resolve(self._options(params, options))

        self._require(parameters, "messages")
        self._require(parameters, "model")
        self._require_tools_for_tool_choice(parameters)

        if on_chunk is not None or parameters.get("stream"):
            return await self._stream_chat(parameters, on_chunk)

        response = await self._call(self.client.chat.completions.create, **parameters)
        return OpenAIResponse(response)

    async def _stream_chat(
        self,
        parameters: dict[str, Any],
        on_chunk: ChunkCallback | None,
    ) -> OpenAIResponse:
        parameters["stream"] = True
        accumulator = ChunkAccumulator()
        try:
            stream = await self.client.chat.completions.create(**parameters)
            async for chunk in stream:
                payload = as_payload(chunk)
                accumulator.add(payload)
                choices = payload.get("choices") if isinstance(payload, dict) else None
                if on_chunk is not None and choices:
                    on_chunk(choices[0])
        except self.TRANSPORT_ERRORS as e:
            raise ApiError(
                f"OpenAI API error: {e}",
                provider=self.provider,
                status_code=getattr(e, "status_code", None),
            ) from e

        if accumulator.skipped:
            logger.debug("Skipped %d malformed stream chunks", accumulator.skipped)

        response = accumulator.to_response()
        if response is None:
            raise ApiError("OpenAI API error: stream ended without any chunks", provider=self.provider)
        return OpenAIResponse(response)

    async def complete(self, params: Mapping[str, Any] | None = None, /, **options: Any) -> OpenAIResponse:
        """Generate a completion for a prompt.

        Deprecated: prompts are sent as a chat conversation; use ``chat``.
        """
        warnings.warn(
            "OpenAIAdapter.complete is deprecated and will be removed, use chat instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        return await self._complete(self._options(params, options))

    async def _complete(self, options: dict[str, Any]) -> OpenAIResponse:
        parameters = self.complete_parameters.resolve(options)
        self._require(parameters, "prompt")

        messages = []
        system = parameters.pop("system", None)
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": parameters.pop("prompt")})
        parameters["messages"] = messages

        return await self.chat(parameters)

    async def embed(
        self,
        text: str,
        model: str | None = None,
        encoding_format: str | None = None,
        user: str | None = None,
        dimensions: int | None = None,
    ) -> OpenAIResponse:
        """Generate an embedding for ``text``.

        Raises:
            ConfigurationError: On missing text/model or a bad encoding format.
            TokenLimitExceeded: If ``text`` exceeds the model's context.
        """
        model = model or self.defaults.embeddings_model_name
        if not text:
            raise ConfigurationError("text argument is required")
        if not model:
            raise ConfigurationError("model argument is required")
        if encoding_format and encoding_format not in ("float", "base64"):
            raise ConfigurationError("encoding_format must be either float or base64")

        parameters: dict[str, Any] = {"input": text, "model": model}
        if encoding_format:
            parameters["encoding_format"] = encoding_format
        if user:
            parameters["user"] = user

        dimensions = dimensions or self.defaults.dimensions
        if dimensions:
            parameters["dimensions"] = dimensions
        elif model in self.EMBEDDING_SIZES:
            parameters["dimensions"] = self.EMBEDDING_SIZES[model]

        await self.length_validator.compute_max_tokens(text, model)

        response = await self._call(self.client.embeddings.create, **parameters)
        return OpenAIResponse(response)

    async def summarize(self, text: str) -> str:
        response = await self._complete({"prompt": self._summarize_prompt(text)})
        return response.chat_completion

    async def default_dimensions(self) -> int:
        return self.defaults.dimensions or self.EMBEDDING_SIZES[self.defaults.embeddings_model_name]

"""Base provider adapter interface."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from packages.unified_llm.config import ProviderDefaults
from packages.unified_llm.errors import (
    ApiError,
    ConfigurationError,
    UnsupportedParameterCombinationError,
)
from packages.unified_llm.parameters import ChatParameters, CompleteParameters, value_present
from packages.unified_llm.prompts import SUMMARIZE, get_prompt_engine
from packages.unified_llm.responses import LLMResponse

logger = logging.getLogger(__name__)


def as_payload(response: Any) -> Any:
    """Convert an SDK response object into plain dicts and lists.

    Mappings are copied; objects exposing ``model_dump`` (pydantic models
    returned by the OpenAI and Anthropic SDKs) are dumped. Anything else is
    returned unchanged.
    """
    if isinstance(response, Mapping):
        return dict(response)
    model_dump = getattr(response, "model_dump", None)
    if callable(model_dump):
        return model_dump()
    return response


class LLMAdapter:
    """Base class for provider adapters.

    Each adapter owns one ``ChatParameters`` and one ``CompleteParameters``
    engine, configured in its constructor with the provider's accepted
    fields, defaults, aliases, renames and ignored fields. Request methods
    resolve the caller's options, check the provider's hard requirements and
    only then call the transport client.
    """

    provider: str = "base"
    display_name: str = "Base"

    # Exceptions raised by the transport that surface as ApiError
    TRANSPORT_ERRORS: tuple[type[BaseException], ...] = ()

    defaults: ProviderDefaults | None = None

    def __init__(self) -> None:
        self.chat_parameters = ChatParameters()
        self.complete_parameters = CompleteParameters()

    async def chat(self, params: Mapping[str, Any] | None = None, /, **options: Any) -> LLMResponse:
        """Generate a chat completion for a list of messages."""
        raise NotImplementedError(f"{type(self).__name__} does not support chat")

    async def complete(self, params: Mapping[str, Any] | None = None, /, **options: Any) -> LLMResponse:
        """Generate a completion for a prompt."""
        raise NotImplementedError(f"{type(self).__name__} does not support complete")

    async def embed(self, text: str, **options: Any) -> LLMResponse:
        """Generate an embedding for a text."""
        raise NotImplementedError(f"{type(self).__name__} does not support embed")

    async def summarize(self, text: str) -> str:
        """Summarize a text."""
        raise NotImplementedError(f"{type(self).__name__} does not support summarize")

    async def default_dimensions(self) -> int:
        """Number of dimensions of the default embedding model."""
        raise NotImplementedError(f"{type(self).__name__} does not support embeddings")

    # ------------------------------------------------------------------
    # Helpers for subclasses
    # ------------------------------------------------------------------

    @staticmethod
    def _options(params: Mapping[str, Any] | None, options: Mapping[str, Any]) -> dict[str, Any]:
        return {**(params or {}), **options}

    @staticmethod
    def _require(parameters: Mapping[str, Any], field_name: str, label: str | None = None) -> None:
        """Raise ConfigurationError unless ``field_name`` holds a non-empty value."""
        value = parameters.get(field_name)
        if not value_present(value) or value == "":
            raise ConfigurationError(f"{label or field_name} argument is required")

    @staticmethod
    def _require_tools_for_tool_choice(parameters: Mapping[str, Any]) -> None:
        if value_present(parameters.get("tool_choice")) and not value_present(parameters.get("tools")):
            raise UnsupportedParameterCombinationError(
                "'tool_choice' is only allowed when 'tools' are specified."
            )

    def _resolve_api_key(self, api_key: str | None, configured: str) -> str:
        key = api_key or configured
        if not key:
            raise ConfigurationError(f"{self.display_name} API key required")
        return key

    async def _call(self, method: Callable[..., Awaitable[Any]], /, **kwargs: Any) -> dict[str, Any]:
        """Invoke a transport method and normalize its result and failures."""
        try:
            response = await method(**kwargs)
        except self.TRANSPORT_ERRORS as e:
            raise ApiError(
                f"{self.display_name} API error: {e}",
                provider=self.provider,
                status_code=getattr(e, "status_code", None),
            ) from e

        payload = as_payload(response)
        if not isinstance(payload, dict):
            raise ApiError(
                f"{self.display_name} API error: unexpected response {type(payload).__name__}",
                provider=self.provider,
            )

        error = payload.get("error")
        if error:
            message = error.get("message") if isinstance(error, Mapping) else error
            raise ApiError(f"{self.display_name} API error: {message}", provider=self.provider)
        return payload

    def _summarize_prompt(self, text: str) -> str:
        return get_prompt_engine().render(SUMMARIZE, {"text": text})

    def __repr__(self) -> str:
        return f"{type(self).__name__}(provider={self.provider!r})"

"""Error taxonomy for the unified LLM layer."""

from __future__ import annotations


class LLMError(Exception):
    """Base class for all unified LLM errors."""


class ConfigurationError(LLMError, ValueError):
    """A provider hard requirement is missing after parameter resolution.

    Raised before any network call, e.g. an empty model name or message list.
    """


class UnsupportedParameterCombinationError(LLMError, ValueError):
    """A parameter was supplied that only makes sense together with another one."""


class ApiError(LLMError):
    """The backend call failed or returned an explicit error payload."""

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class TokenLimitExceeded(LLMError):
    """The prompt does not fit into the model's context window."""

    def __init__(self, message: str, token_overflow: int = 0) -> None:
        super().__init__(message)
        self.token_overflow = token_overflow

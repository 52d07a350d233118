"""Provider configuration.

Credentials and endpoints come from the environment (or a ``.env`` file).
Per-provider request defaults are immutable models handed to each adapter
at construction time.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProviderSettings(BaseSettings):
    """Provider credentials loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    openai_api_key: str = ""
    anthropic_api_key: str = ""
    cohere_api_key: str = ""
    ai21_api_key: str = ""

    # Local Ollama server
    ollama_url: str = "http://localhost:11434"

    # Seconds, applied to the HTTP transports
    request_timeout: float = 120.0


def get_settings() -> ProviderSettings:
    """Load provider settings from the current environment."""
    return ProviderSettings()


class ProviderDefaults(BaseModel):
    """Base class for immutable per-provider defaults."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class AI21Defaults(ProviderDefaults):
    temperature: float = 0.0
    model: str = "j2-ultra"


class AnthropicDefaults(ProviderDefaults):
    temperature: float = 0.0
    completion_model_name: str = "claude-2.1"
    chat_completion_model_name: str = "claude-3-sonnet-20240229"
    max_tokens_to_sample: int = 256


class CohereDefaults(ProviderDefaults):
    temperature: float = 0.0
    completion_model_name: str = "command"
    chat_completion_model_name: str = "command-r-plus"
    embeddings_model_name: str = "small"
    dimensions: int = 1024
    truncate: str = "START"


class OllamaDefaults(ProviderDefaults):
    temperature: float = 0.8
    completion_model_name: str = "llama3"
    embeddings_model_name: str = "llama3"
    chat_completion_model_name: str = "llama3"


class OpenAIDefaults(ProviderDefaults):
    n: int = 1
    temperature: float = 0.0
    chat_completion_model_name: str = "gpt-3.5-turbo"
    embeddings_model_name: str = "text-embedding-3-small"
    dimensions: int | None = None


DefaultsT = TypeVar("DefaultsT", bound=ProviderDefaults)


def build_defaults(
    defaults_cls: type[DefaultsT],
    default_options: DefaultsT | Mapping[str, Any] | None,
) -> DefaultsT:
    """Build a defaults model from an instance or a mapping of overrides.

    Unknown override keys raise a pydantic ``ValidationError``.
    """
    if isinstance(default_options, defaults_cls):
        return default_options
    return defaults_cls(**dict(default_options or {}))

"""Unified LLM layer.

One provider-agnostic vocabulary of request options, translated per
backend (AI21, Anthropic, Cohere, Ollama, OpenAI) by a declarative
parameter unification engine.
"""

from packages.unified_llm.adapters import (
    AI21Adapter,
    AdapterRegistry,
    AnthropicAdapter,
    CohereAdapter,
    LLMAdapter,
    OllamaAdapter,
    OpenAIAdapter,
    get_adapter,
    get_adapter_registry,
    register_adapter,
)
from packages.unified_llm.config import ProviderSettings, get_settings
from packages.unified_llm.errors import (
    ApiError,
    ConfigurationError,
    LLMError,
    TokenLimitExceeded,
    UnsupportedParameterCombinationError,
)
from packages.unified_llm.parameters import (
    ChatParameters,
    CompleteParameters,
    FieldSpec,
    UnifiedParameters,
)
from packages.unified_llm.responses import LLMResponse
from packages.unified_llm.streaming import ChunkAccumulator

__all__ = [
    # Adapters
    "AI21Adapter",
    "AdapterRegistry",
    "AnthropicAdapter",
    "CohereAdapter",
    "LLMAdapter",
    "OllamaAdapter",
    "OpenAIAdapter",
    "get_adapter",
    "get_adapter_registry",
    "register_adapter",
    # Parameters
    "ChatParameters",
    "CompleteParameters",
    "FieldSpec",
    "UnifiedParameters",
    # Config
    "ProviderSettings",
    "get_settings",
    # Errors
    "ApiError",
    "ConfigurationError",
    "LLMError",
    "TokenLimitExceeded",
    "UnsupportedParameterCombinationError",
    # Responses
    "ChunkAccumulator",
    "LLMResponse",
]

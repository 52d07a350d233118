"""Provider adapters."""

from packages.unified_llm.adapters.ai21_adapter import AI21Adapter
from packages.unified_llm.adapters.anthropic_adapter import AnthropicAdapter
from packages.unified_llm.adapters.base import LLMAdapter
from packages.unified_llm.adapters.cohere_adapter import CohereAdapter
from packages.unified_llm.adapters.ollama_adapter import OllamaAdapter
from packages.unified_llm.adapters.openai_adapter import OpenAIAdapter
from packages.unified_llm.adapters.registry import (
    AdapterRegistry,
    get_adapter,
    get_adapter_registry,
    register_adapter,
)

__all__ = [
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
]

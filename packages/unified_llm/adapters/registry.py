"""Adapter registry for looking up provider adapters by name."""

from __future__ import annotations

import logging
from typing import Any

from packages.unified_llm.adapters.ai21_adapter import AI21Adapter
from packages.unified_llm.adapters.anthropic_adapter import AnthropicAdapter
from packages.unified_llm.adapters.base import LLMAdapter
from packages.unified_llm.adapters.cohere_adapter import CohereAdapter
from packages.unified_llm.adapters.ollama_adapter import OllamaAdapter
from packages.unified_llm.adapters.openai_adapter import OpenAIAdapter

logger = logging.getLogger(__name__)


DEFAULT_ADAPTERS: dict[str, type[LLMAdapter]] = {
    "ai21": AI21Adapter,
    "anthropic": AnthropicAdapter,
    "cohere": CohereAdapter,
    "ollama": OllamaAdapter,
    "openai": OpenAIAdapter,
}


class AdapterRegistry:
    """Registry of provider adapter classes.

    Maps provider names to adapter classes and caches adapters built with
    default settings.
    """

    _instance: AdapterRegistry | None = None

    def __init__(self):
        self._adapter_classes: dict[str, type[LLMAdapter]] = dict(DEFAULT_ADAPTERS)
        self._adapters: dict[str, LLMAdapter] = {}

    @classmethod
    def get_instance(cls) -> AdapterRegistry:
        """Get singleton registry instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton (for testing)."""
        cls._instance = None

    def _adapter_class(self, provider: str) -> type[LLMAdapter]:
        try:
            return self._adapter_classes[provider]
        except KeyError:
            raise ValueError(f"Unknown LLM provider: {provider}") from None

    def create_adapter(self, provider: str, **kwargs: Any) -> LLMAdapter:
        """Build a new adapter for ``provider``.

        Args:
            provider: Provider name (e.g., "openai")
            **kwargs: Passed to the adapter constructor

        Raises:
            ValueError: If the provider is unknown
        """
        adapter_cls = self._adapter_class(provider)
        logger.debug("Creating %s adapter", provider)
        return adapter_cls(**kwargs)

    def get_adapter(self, provider: str, **kwargs: Any) -> LLMAdapter:
        """Get an adapter for ``provider``.

        Without constructor arguments the adapter is cached and shared;
        with arguments a new adapter is always built.
        """
        if kwargs:
            return self.create_adapter(provider, **kwargs)
        if provider not in self._adapters:
            self._adapters[provider] = self.create_adapter(provider)
        return self._adapters[provider]

    def register_adapter(self, provider: str, adapter_cls: type[LLMAdapter]) -> None:
        """Register a custom adapter class, replacing any existing one."""
        if not (isinstance(adapter_cls, type) and issubclass(adapter_cls, LLMAdapter)):
            raise TypeError(f"{adapter_cls!r} is not an LLMAdapter subclass")
        self._adapter_classes[provider] = adapter_cls
        self._adapters.pop(provider, None)

    def available_providers(self) -> list[str]:
        return sorted(self._adapter_classes)


def get_adapter_registry() -> AdapterRegistry:
    """Get the singleton adapter registry."""
    return AdapterRegistry.get_instance()


def get_adapter(provider: str, **kwargs: Any) -> LLMAdapter:
    """Get an adapter for the specified provider.

    Convenience function that uses the singleton registry.
    """
    return get_adapter_registry().get_adapter(provider, **kwargs)


def register_adapter(provider: str, adapter_cls: type[LLMAdapter]) -> None:
    """Register a custom adapter class.

    Convenience function that uses the singleton registry.
    """
    get_adapter_registry().register_adapter(provider, adapter_cls)

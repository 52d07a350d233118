"""Unified request vocabulary shared by every provider adapter."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from packages.unified_llm.parameters.unified import FieldSpec, UnifiedParameters

# Fields every backend may receive; adapters add, rename or ignore from here.
_COMMON_FIELDS: tuple[str, ...] = (
    "model",
    # Sampling
    "temperature",
    "max_tokens",
    "top_p",
    "top_k",
    "n",
    "stop",
    "seed",
    "frequency_penalty",
    "presence_penalty",
    "repetition_penalty",
    "logit_bias",
    # System instructions (Anthropic, Cohere)
    "system",
    # Forces a specific output format, e.g. {"type": "json_object"}
    "response_format",
    "stream",
    # Function calling
    "tools",
    "tool_choice",
    "user",
    "metadata",
)


class ChatParameters(UnifiedParameters):
    """Unified parameters for message-based chat requests."""

    SCHEMA: Mapping[str, FieldSpec] = {
        "messages": FieldSpec(),
        **{name: FieldSpec() for name in _COMMON_FIELDS},
    }

    def __init__(self, parameters: Mapping[str, Any] | None = None) -> None:
        super().__init__(schema=self.SCHEMA, parameters=parameters)


class CompleteParameters(UnifiedParameters):
    """Unified parameters for prompt-based completion requests."""

    SCHEMA: Mapping[str, FieldSpec] = {
        "prompt": FieldSpec(),
        **{name: FieldSpec() for name in _COMMON_FIELDS},
    }

    def __init__(self, parameters: Mapping[str, Any] | None = None) -> None:
        super().__init__(schema=self.SCHEMA, parameters=parameters)

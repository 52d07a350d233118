"""Base prompt template classes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class PromptTemplate:
    """A provider-agnostic prompt with named placeholders.

    Subclasses define a TEMPLATE class variable using ``str.format``
    placeholders and list the placeholders in ``required_context``.
    """

    template_id: str
    purpose: str
    required_context: list[str] = field(default_factory=list)

    # Subclasses should override this
    TEMPLATE: str = ""

    def render(self, context: dict[str, Any]) -> str:
        """Render the prompt with context values.

        Raises:
            ValueError: If a required context key is missing.
        """
        missing = [k for k in self.required_context if k not in context]
        if missing:
            raise ValueError(f"Missing required context keys: {missing}")
        return self.TEMPLATE.format(**context)


class PromptEngine:
    """Registry of prompt templates by ID."""

    _instance: PromptEngine | None = None

    def __init__(self):
        self._templates: dict[str, PromptTemplate] = {}
        self._register_defaults()

    @classmethod
    def get_instance(cls) -> PromptEngine:
        """Get singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton (for testing)."""
        cls._instance = None

    def _register_defaults(self) -> None:
        # Import here to avoid circular imports
        from packages.unified_llm.prompts.summarize import SummarizePrompt

        self.register(SummarizePrompt())

    def register(self, template: PromptTemplate) -> None:
        self._templates[template.template_id] = template

    def get(self, template_id: str) -> PromptTemplate:
        if template_id not in self._templates:
            raise KeyError(f"Template not found: {template_id}")
        return self._templates[template_id]

    def render(self, template_id: str, context: dict[str, Any]) -> str:
        return self.get(template_id).render(context)

    def list_templates(self) -> list[str]:
        return list(self._templates.keys())


def get_prompt_engine() -> PromptEngine:
    """Get the singleton prompt engine."""
    return PromptEngine.get_instance()

"""Summarization prompt used by providers without a summarize endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field

from packages.unified_llm.prompts.base import PromptTemplate

SUMMARIZE = "summarize"


@dataclass
class SummarizePrompt(PromptTemplate):
    template_id: str = SUMMARIZE
    purpose: str = "Summarize arbitrary text concisely"
    required_context: list[str] = field(default_factory=lambda: ["text"])

    TEMPLATE: str = """Write a concise summary of the following:

{text}

CONCISE SUMMARY:"""

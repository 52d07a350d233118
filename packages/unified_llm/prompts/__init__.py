"""Prompt templates."""

from packages.unified_llm.prompts.base import PromptEngine, PromptTemplate, get_prompt_engine
from packages.unified_llm.prompts.summarize import SUMMARIZE, SummarizePrompt

__all__ = [
    "PromptEngine",
    "PromptTemplate",
    "SUMMARIZE",
    "SummarizePrompt",
    "get_prompt_engine",
]

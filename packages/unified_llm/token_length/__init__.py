"""Token-length validators used to size output token budgets."""

from packages.unified_llm.token_length.ai21 import AI21TokenLengthValidator
from packages.unified_llm.token_length.base import BaseTokenLengthValidator
from packages.unified_llm.token_length.cohere import CohereTokenLengthValidator
from packages.unified_llm.token_length.openai import OpenAITokenLengthValidator

__all__ = [
    "AI21TokenLengthValidator",
    "BaseTokenLengthValidator",
    "CohereTokenLengthValidator",
    "OpenAITokenLengthValidator",
]

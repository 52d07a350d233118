"""Transport clients for providers reached over plain HTTP."""

from packages.unified_llm.clients.ai21 import AI21Client
from packages.unified_llm.clients.cohere import CohereClient
from packages.unified_llm.clients.base import JSONHTTPClient
from packages.unified_llm.clients.ollama import OllamaClient

__all__ = [
    "AI21Client",
    "CohereClient",
    "JSONHTTPClient",
    "OllamaClient",
]

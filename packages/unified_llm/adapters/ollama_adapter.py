"""Ollama adapter for locally served models."""

from __future__ import annotations

import json
import logging
from contextlib import aclosing
from collections.abc import Callable, Mapping
from typing import Any

from packages.unified_llm.adapters.base import LLMAdapter
from packages.unified_llm.clients import OllamaClient
from packages.unified_llm.config import OllamaDefaults, build_defaults, get_settings
from packages.unified_llm.errors import ApiError
from packages.unified_llm.responses import OllamaResponse

logger = logging.getLogger(__name__)

ChunkCallback = Callable[[dict[str, Any]], Any]

# Keys sent at the top level of the request body; everything else resolved
# goes into the "options" object.
GENERATE_REQUEST_KEYS = frozenset(
    {"model", "prompt", "images", "format", "system", "template", "context", "stream", "raw", "keep_alive"}
)
CHAT_REQUEST_KEYS = frozenset(
    {"model", "messages", "format", "template", "stream", "keep_alive", "tools"}
)

RUNTIME_OPTIONS = (
    "mirostat",
    "mirostat_eta",
    "mirostat_tau",
    "num_ctx",
    "num_gqa",
    "num_gpu",
    "num_thread",
    "repeat_last_n",
    "repeat_penalty",
    "tfs_z",
    "num_predict",
)


def split_options(parameters: Mapping[str, Any], request_keys: frozenset[str]) -> dict[str, Any]:
    """Build an Ollama request body, nesting model options under ``options``."""
    body = {key: value for key, value in parameters.items() if key in request_keys}
    options = {key: value for key, value in parameters.items() if key not in request_keys}
    if options:
        body["options"] = options
    return body


class OllamaAdapter(LLMAdapter):
    """Adapter for an Ollama server (generate, chat and embeddings APIs)."""

    provider = "ollama"
    display_name = "Ollama"

    EMBEDDING_SIZES = {
        "codellama": 4096,
        "dolphin-mixtral": 4096,
        "llama2": 4096,
        "llama3": 4096,
        "llava": 4096,
        "mistral": 4096,
        "mistral-openorca": 4096,
        "mixtral": 4096,
    }

    def __init__(
        self,
        url: str | None = None,
        *,
        client: Any | None = None,
        default_options: OllamaDefaults | Mapping[str, Any] | None = None,
    ):
        """Initialize Ollama adapter.

        Args:
            url: Ollama server URL (defaults to OLLAMA_URL env var)
            client: Pre-built ``OllamaClient``-compatible client
            default_options: Request defaults, or overrides for them
        """
        super().__init__()
        self.defaults = build_defaults(OllamaDefaults, default_options)
        if client is None:
            settings = get_settings()
            client = OllamaClient(url or settings.ollama_url, timeout=settings.request_timeout)
        self.client = client
        self._default_dimensions: int | None = None

        self.chat_parameters.update(
            model={"default": self.defaults.chat_completion_model_name},
            temperature={"default": self.defaults.temperature},
            template={},
            stream={"default": False},
            keep_alive={},
        )
        self.chat_parameters.remap(
            response_format="format",
            max_tokens="num_predict",
            repetition_penalty="repeat_penalty",
        )
        self.chat_parameters.ignore("n", "tool_choice", "logit_bias", "user", "metadata", "system")

        self.complete_parameters.update(
            model={"default": self.defaults.completion_model_name},
            temperature={"default": self.defaults.temperature},
            stream={"default": False},
            images={},
            template={},
            context={},
            raw={},
            keep_alive={},
            **{name: {} for name in RUNTIME_OPTIONS},
        )
        self.complete_parameters.alias_field("stop", as_="stop_sequences")
        self.complete_parameters.remap(
            response_format="format",
            max_tokens="num_predict",
            repetition_penalty="repeat_penalty",
        )
        self.complete_parameters.ignore("n", "tools", "tool_choice", "logit_bias", "user", "metadata")

        logger.info("Initialized Ollama adapter (url=%s)", getattr(client, "url", None))

    async def complete(
        self,
        params: Mapping[str, Any] | None = None,
        /,
        on_chunk: ChunkCallback | None = None,
        **options: Any,
    ) -> OllamaResponse:
        """Generate a completion for a prompt.

        With ``on_chunk`` (or ``stream=True``) the response is streamed;
        ``on_chunk`` receives every decoded chunk.
        """
        parameters = self.complete_parameters.resolve(self._options(params, options))
        self._require(parameters, "prompt")
        self._require(parameters, "model")

        body = split_options(parameters, GENERATE_REQUEST_KEYS)
        if on_chunk is not None or body.get("stream"):
            response = await self._stream("api/generate", body, on_chunk, _generate_fragment)
        else:
            response = await self._call(self.client.post, path="api/generate", payload=body)
        return OllamaResponse(response, model=body["model"])

    async def chat(
        self,
        params: Mapping[str, Any] | None = None,
        /,
        on_chunk: ChunkCallback | None = None,
        **options: Any,
    ) -> OllamaResponse:
        parameters = self.chat_parameters.resolve(self._options(params, options))
        self._require(parameters, "messages")
        self._require(parameters, "model")

        body = split_options(parameters, CHAT_REQUEST_KEYS)
        if on_chunk is not None or body.get("stream"):
            response = await self._stream("api/chat", body, on_chunk, _chat_fragment)
        else:
            response = await self._call(self.client.post, path="api/chat", payload=body)
        return OllamaResponse(response, model=body["model"])

    async def _stream(
        self,
        path: str,
        body: dict[str, Any],
        on_chunk: ChunkCallback | None,
        fragment: Callable[[dict[str, Any]], str],
    ) -> dict[str, Any]:
        """Read an NDJSON stream and fold it into one response payload."""
        body["stream"] = True
        fragments: list[str] = []
        last: dict[str, Any] | None = None

        async with aclosing(self.client.stream(path, body)) as lines:
            async for line in lines:
                try:
                    chunk = json.loads(line)
                except json.JSONDecodeError:
                    logger.debug("Skipping malformed Ollama chunk: %r", line)
                    continue
                if not isinstance(chunk, dict):
                    logger.debug("Skipping malformed Ollama chunk: %r", line)
                    continue
                if chunk.get("error"):
                    raise ApiError(f"Ollama API error: {chunk['error']}", provider=self.provider)

                text = fragment(chunk)
                if text:
                    fragments.append(text)
                last = chunk
                if on_chunk is not None:
                    on_chunk(chunk)

        if last is None:
            raise ApiError("Ollama API error: stream ended without any chunks", provider=self.provider)

        content = "".join(fragments)
        if path == "api/chat":
            return {**last, "message": {**(last.get("message") or {"role": "assistant"}), "content": content}}
        return {**last, "response": content}

    async def embed(self, text: str, model: str | None = None, **options: Any) -> OllamaResponse:
        """Generate an embedding for ``text``.

        Extra keyword arguments are passed as Ollama model options.
        """
        self._require({"text": text}, "text")
        model = model or self.defaults.embeddings_model_name
        runtime = {"temperature": self.defaults.temperature, **options}
        body = {
            "prompt": text,
            "model": model,
            "options": {key: value for key, value in runtime.items() if value is not None},
        }
        response = await self._call(self.client.post, path="api/embeddings", payload=body)
        return OllamaResponse(response, model=model)

    async def summarize(self, text: str) -> str:
        response = await self.complete(prompt=self._summarize_prompt(text))
        return response.completion

    async def default_dimensions(self) -> int:
        # Ollama serves arbitrary models; probe with an embedding when unknown.
        if self._default_dimensions is None:
            size = self.EMBEDDING_SIZES.get(self.defaults.embeddings_model_name)
            if size is None:
                size = len((await self.embed("test")).embedding)
            self._default_dimensions = size
        return self._default_dimensions


def _generate_fragment(chunk: dict[str, Any]) -> str:
    return chunk.get("response") or ""


def _chat_fragment(chunk: dict[str, Any]) -> str:
    return (chunk.get("message") or {}).get("content") or ""

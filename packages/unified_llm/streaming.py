"""Reassembly of streamed chat-completion chunks."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

_HEADER_FIELDS = ("id", "object", "created", "model")


@dataclass
class ChunkAccumulator:
    """Folds the chunks of one streamed response, keyed by choice index.

    Single consumer only: chunks must be added in arrival order by the task
    that reads the stream.
    """

    header: dict[str, Any] = field(default_factory=dict)
    fragments: dict[int, list[str]] = field(default_factory=dict)
    finish_reasons: dict[int, str | None] = field(default_factory=dict)
    chunk_count: int = 0
    skipped: int = 0

    def add(self, chunk: Any) -> ChunkAccumulator:
        """Fold one chunk in. Chunks without usable choices are skipped."""
        choices = chunk.get("choices") if isinstance(chunk, Mapping) else None
        if not isinstance(choices, list):
            self.skipped += 1
            logger.debug("Skipping malformed stream chunk: %r", chunk)
            return self

        if not self.header:
            self.header = {name: chunk[name] for name in _HEADER_FIELDS if name in chunk}

        for choice in choices:
            index = choice.get("index") if isinstance(choice, Mapping) else None
            if not isinstance(index, int):
                self.skipped += 1
                logger.debug("Skipping stream choice without index: %r", choice)
                continue
            delta = choice.get("delta") or {}
            content = delta.get("content")
            parts = self.fragments.setdefault(index, [])
            if content:
                parts.append(content)
            self.finish_reasons[index] = choice.get("finish_reason")

        self.chunk_count += 1
        return self

    def text(self, index: int = 0) -> str:
        return "".join(self.fragments.get(index, []))

    def to_response(self) -> dict[str, Any] | None:
        """Build a regular chat-completion payload from the folded chunks."""
        if not self.chunk_count:
            return None
        choices = [
            {
                "index": index,
                "message": {"role": "assistant", "content": self.text(index)},
                "finish_reason": self.finish_reasons.get(index),
            }
            for index in sorted(self.fragments)
        ]
        return {**self.header, "choices": choices}


def fold_chunks(chunks: Iterable[Any]) -> ChunkAccumulator:
    """Fold a finished chunk sequence into a fresh accumulator."""
    accumulator = ChunkAccumulator()
    for chunk in chunks:
        accumulator.add(chunk)
    return accumulator

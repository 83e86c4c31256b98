"""Embedding port interface.

An embedding provider is an opaque function from text to a fixed-length
vector. It is injected into the similarity store at construction time so
stores and test doubles never share a process-wide model instance.
"""

from __future__ import annotations

from typing import Protocol


class EmbeddingPort(Protocol):
    """Port interface for text embedding providers.

    Implementations must return vectors of exactly ``dimensions`` components
    for every text they accept, and raise
    :class:`vecdb.errors.EmbeddingFailedError` for texts they cannot embed.

    Side effects: may run model inference (potentially slow).
    """

    @property
    def dimensions(self) -> int:
        """Fixed dimensionality ``D`` of every produced vector."""
        ...

    def embed(self, text: str) -> list[float]:
        """Return the embedding of ``text``."""
        ...

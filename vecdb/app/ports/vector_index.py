"""Vector index port interface for ANN search."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol


class VectorIndexPort(Protocol):
    """Port interface for an in-memory approximate nearest neighbour index.

    Implementations should provide:
    - Idempotent point insertion keyed by record id
    - Cosine-distance k-NN search
    - Whole-index snapshot persistence

    Not safe for concurrent reads and writes; callers serialize access.
    """

    @property
    def dimensions(self) -> int:
        ...

    def __len__(self) -> int:
        ...

    def add(self, key: int, vector: Sequence[float]) -> None:
        """Insert a point, growing capacity first when full. No-op if present."""
        ...

    def contains(self, key: int) -> bool:
        ...

    def search(self, vector: Sequence[float], count: int) -> tuple[list[int], list[float]]:
        """Return parallel ``(keys, distances)`` ordered by increasing distance."""
        ...

    def save(self, path: Path) -> None:
        """Write a snapshot of the whole index to ``path``."""
        ...

    def load(self, path: Path) -> None:
        """Replace the in-memory index with the snapshot at ``path``."""
        ...

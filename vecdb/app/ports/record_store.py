"""Record store port interface."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class Record:
    """A stored text with its identity and embedding."""

    id: int
    text: str
    vector: tuple[float, ...]


class RecordStorePort(Protocol):
    """Port interface for the durable text → vector table.

    The store assigns ids (monotonic, never reused) and enforces text
    uniqueness independently of any caller-side checks.

    Side effects: Writes to the records artifact on disk.
    """

    def ensure_schema(self) -> None:
        """Create the records table if it does not exist yet."""
        ...

    def find_by_text(self, text: str) -> Record | None:
        """Return the record whose text matches exactly, if any."""
        ...

    def find_by_id(self, record_id: int) -> Record | None:
        """Return the record with primary key ``record_id``, if any."""
        ...

    def insert_new(self, text: str, vector: Sequence[float]) -> int:
        """Insert a new row and return its id.

        Raises:
            DuplicateKeyError: If ``text`` is already stored.
        """
        ...

    def iter_ids(self) -> Iterator[int]:
        """Yield every stored id in ascending order."""
        ...

    def count(self) -> int:
        ...

    def close(self) -> None:
        ...

"""Similarity store orchestrating the record store and the ANN index.

Write order for a new text is: durable record first, index point second,
index snapshot third. A crash between the first and the last step leaves the
record store ahead of the index; :meth:`SimilarityStore.reconcile` re-adds the
missing points but is never run implicitly.

A store location must be used by a single process at a time. Concurrent
writers from several processes can diverge the two artifacts or corrupt the
snapshot.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from vecdb.app.adapters.hnsw import HNSWAdapter
from vecdb.app.adapters.sqlite_records import SQLiteRecordStore
from vecdb.app.ports import EmbeddingPort, Record, RecordStorePort, VectorIndexPort
from vecdb.errors import (
    DimensionMismatchError,
    NotFoundError,
    SearchError,
    StoreClosedError,
)
from vecdb.utils.paths import StoreLayout

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SearchHit:
    """Single search result: a record id and its cosine distance to the query."""

    id: int
    distance: float


class SimilarityStore:
    """Embedding-backed text store with approximate nearest neighbour search.

    The embedding provider, record store and index are injected; use
    :meth:`open` to build the default SQLite + hnswlib wiring for a path.

    ``insert`` holds an exclusive lock for its whole sequence. ``lookup`` and
    ``search`` take the same lock so they never observe a half-applied index
    mutation.
    """

    def __init__(
        self,
        layout: StoreLayout,
        *,
        embedder: EmbeddingPort,
        records: RecordStorePort,
        index: VectorIndexPort,
    ) -> None:
        if index.dimensions != embedder.dimensions:
            raise DimensionMismatchError(
                f"Index dimension {index.dimensions} does not match embedder "
                f"dimension {embedder.dimensions}"
            )
        self._layout = layout
        self._embedder = embedder
        self._records = records
        self._index = index
        self._lock = threading.RLock()
        self._closed = False

        self._records.ensure_schema()
        if self._layout.index_path.exists():
            self._index.load(self._layout.index_path)
        logger.debug(
            "Opened store",
            extra={
                "context": {
                    "path": str(self._layout.base_path),
                    "records": self._records.count(),
                    "indexed": len(self._index),
                }
            },
        )

    @classmethod
    def open(
        cls,
        path: str | Path,
        embedder: EmbeddingPort,
        *,
        m: int = 8,
        ef_construction: int = 200,
        ef_search: int = 64,
    ) -> SimilarityStore:
        """Open (or create) the store whose artifacts derive from ``path``."""
        layout = StoreLayout(Path(path))
        layout.ensure_parent()
        records = SQLiteRecordStore(layout.records_path, dimensions=embedder.dimensions)
        index = HNSWAdapter(
            dimensions=embedder.dimensions,
            m=m,
            ef_construction=ef_construction,
            ef_search=ef_search,
        )
        try:
            return cls(layout, embedder=embedder, records=records, index=index)
        except Exception:
            records.close()
            raise

    @property
    def layout(self) -> StoreLayout:
        return self._layout

    @property
    def dimensions(self) -> int:
        return self._embedder.dimensions

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> SimilarityStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Release the record store connection. Safe to call twice."""
        with self._lock:
            if self._closed:
                return
            self._records.close()
            self._closed = True

    def _require_open(self) -> None:
        if self._closed:
            raise StoreClosedError(f"Store at {self._layout.base_path} is closed")

    def insert(self, text: str) -> int:
        """Store ``text`` and return its id.

        Idempotent by text: an already-stored text returns its existing id
        without calling the embedder.

        Raises:
            EmbeddingFailedError: The embedder rejected ``text``; nothing was
                written.
            DimensionMismatchError: The embedder returned a vector of the wrong
                length; nothing was written.
            DuplicateKeyError: The record store saw the text appear concurrently.
        """
        with self._lock:
            self._require_open()
            existing = self._records.find_by_text(text)
            if existing is not None:
                return existing.id

            vector = self._embedder.embed(text)
            if len(vector) != self.dimensions:
                raise DimensionMismatchError(
                    f"Embedder returned {len(vector)} components; expected {self.dimensions}"
                )

            key = self._records.insert_new(text, vector)

            # Fresh ids can only already be indexed if the snapshot was tampered with.
            if self._index.contains(key):
                logger.warning(
                    "Fresh record id already present in index; skipping add",
                    extra={"context": {"id": key}},
                )
                return key

            self._index.add(key, vector)
            self._index.save(self._layout.index_path)
            logger.info("Stored text", extra={"context": {"id": key, "indexed": len(self._index)}})
            return key

    def lookup(self, query: str | int) -> Record:
        """Return the record for a text or an id.

        Raises:
            NotFoundError: No record matches.
        """
        if isinstance(query, str):
            return self.lookup_text(query)
        if isinstance(query, bool) or not isinstance(query, int):
            raise TypeError(f"lookup expects str or int; got {type(query).__name__}")
        return self.lookup_id(query)

    def lookup_text(self, text: str) -> Record:
        with self._lock:
            self._require_open()
            record = self._records.find_by_text(text)
        if record is None:
            raise NotFoundError(f"No record for text {text!r}")
        return record

    def lookup_id(self, record_id: int) -> Record:
        with self._lock:
            self._require_open()
            record = self._records.find_by_id(record_id)
        if record is None:
            raise NotFoundError(f"No record with id {record_id}")
        return record

    def search(self, query: str | Sequence[float], count: int = 10) -> list[SearchHit]:
        """Return up to ``count`` hits ordered by increasing distance.

        A text query is resolved to its stored embedding; the embedder is never
        called for it, so a text that was not inserted raises ``NotFoundError``.

        Raises:
            NotFoundError: ``query`` is a text with no stored record.
            SearchError: The index returned mismatched key/distance sequences.
        """
        if isinstance(query, str):
            embedding: Sequence[float] = self.lookup_text(query).vector
        else:
            embedding = query
        if count < 0:
            raise ValueError("count must be non-negative")

        with self._lock:
            self._require_open()
            keys, distances = self._index.search(embedding, count)

        if len(keys) != len(distances):
            raise SearchError(
                f"Index returned {len(keys)} keys but {len(distances)} distances"
            )
        return [SearchHit(id=int(key), distance=float(dist)) for key, dist in zip(keys, distances)]

    def reconcile(self) -> list[int]:
        """Re-add record ids missing from the index and save the snapshot.

        Returns:
            Ids that were added back, in ascending order.
        """
        with self._lock:
            self._require_open()
            missing = [key for key in self._records.iter_ids() if not self._index.contains(key)]
            for key in missing:
                record = self._records.find_by_id(key)
                if record is None:  # pragma: no cover - ids come from the same table
                    continue
                self._index.add(key, record.vector)
            if missing:
                self._index.save(self._layout.index_path)
                logger.info("Reconciled index", extra={"context": {"added": len(missing)}})
            return missing

    def stats(self) -> dict[str, Any]:
        with self._lock:
            self._require_open()
            return {
                "records": self._records.count(),
                "indexed": len(self._index),
                "dimensions": self.dimensions,
                "records_path": str(self._layout.records_path),
                "index_path": str(self._layout.index_path),
            }

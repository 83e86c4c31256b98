"""hnswlib-based vector index adapter implementing VectorIndexPort."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import numpy as np

from vecdb.app.ports.vector_index import VectorIndexPort
from vecdb.errors import DimensionMismatchError

logger = logging.getLogger(__name__)


class HNSWAdapter(VectorIndexPort):
    """In-memory HNSW index for cosine distance with snapshot persistence."""

    def __init__(
        self,
        *,
        dimensions: int,
        space: str = "cosine",
        m: int = 8,
        ef_construction: int = 200,
        ef_search: int = 64,
        initial_capacity: int = 16,
    ) -> None:
        self._dim = int(dimensions)
        self._space = space
        self._m = m
        self._ef_construction = ef_construction
        self._ef_search = ef_search
        self._initial_capacity = max(1, int(initial_capacity))
        self._index: Any | None = None
        # key -> insertion sequence, used to break distance ties
        self._order: dict[int, int] = {}

    @property
    def dimensions(self) -> int:
        return self._dim

    @property
    def capacity(self) -> int:
        return int(self._ensure_index().get_max_elements())

    def __len__(self) -> int:
        return len(self._order)

    def _new_index(self) -> Any:
        try:
            import hnswlib
        except Exception as exc:  # pragma: no cover - dependency missing runtime path
            raise RuntimeError(
                "hnswlib is required for the vector index. Install it with 'pip install hnswlib'."
            ) from exc

        return hnswlib.Index(space=self._space, dim=self._dim)

    def _ensure_index(self) -> Any:
        if self._index is None:
            index = self._new_index()
            index.init_index(
                max_elements=self._initial_capacity,
                ef_construction=self._ef_construction,
                M=self._m,
            )
            index.set_ef(self._ef_search)
            self._index = index
        return self._index

    def _as_query(self, vector: Sequence[float]) -> np.ndarray:
        array = np.asarray(vector, dtype=np.float32)
        if array.ndim == 1:
            array = array.reshape(1, -1)
        if array.shape != (1, self._dim):
            raise DimensionMismatchError(
                f"Vector must have dimension {self._dim}; got {array.shape[-1]}"
            )
        return array

    def add(self, key: int, vector: Sequence[float]) -> None:
        key = int(key)
        if key in self._order:
            return

        data = self._as_query(vector)
        index = self._ensure_index()
        count = index.get_current_count()
        capacity = index.get_max_elements()
        if count + 1 > capacity:
            new_capacity = max(count + 1, capacity * 2)
            logger.debug("Growing index capacity %d -> %d", capacity, new_capacity)
            index.resize_index(new_capacity)

        index.add_items(data, np.asarray([key], dtype=np.uint64))
        self._order[key] = len(self._order)

    def contains(self, key: int) -> bool:
        return int(key) in self._order

    def search(self, vector: Sequence[float], count: int) -> tuple[list[int], list[float]]:
        query = self._as_query(vector)
        size = len(self._order)
        k = min(int(count), size)
        if k <= 0:
            return [], []

        index = self._ensure_index()
        fetch = k
        while True:
            index.set_ef(max(self._ef_search, fetch))
            labels, distances = index.knn_query(query, k=fetch)
            pairs = [
                (int(label), float(distance)) for label, distance in zip(labels[0], distances[0])
            ]
            pairs.sort(key=lambda pair: (pair[1], self._order.get(pair[0], size)))
            # hnswlib picks arbitrarily among points tied at the cut-off, so widen
            # the fetch until a strictly farther point closes the tie group.
            if fetch >= size or pairs[-1][1] > pairs[k - 1][1]:
                break
            fetch = min(size, fetch * 2)

        pairs = pairs[:k]
        return [key for key, _ in pairs], [distance for _, distance in pairs]

    def save(self, path: Path) -> None:
        """Write the snapshot to a sibling temp file, then swap it into place."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = target.with_name(target.name + ".tmp")
        self._ensure_index().save_index(str(tmp_path))
        os.replace(tmp_path, target)

    def load(self, path: Path) -> None:
        source = Path(path)
        if not source.exists():
            raise FileNotFoundError(f"Index snapshot not found: {source}")

        index = self._new_index()
        index.load_index(str(source))
        index.set_ef(self._ef_search)
        self._index = index
        # The snapshot does not keep insertion order; record ids are monotonic,
        # so ascending key order stands in for it.
        labels = sorted(int(label) for label in index.get_ids_list())
        self._order = {label: seq for seq, label in enumerate(labels)}
        logger.debug("Loaded %d points from %s", len(self._order), source)

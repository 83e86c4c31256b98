"""Deterministic feature-hashing embedder implementing EmbeddingPort.

Runs fully offline with no model weights. Each lowercase word token is hashed
into one of ``dimensions`` buckets with a hash-derived sign; the summed vector
is L2-normalized. Texts sharing tokens land close under cosine distance.
"""

from __future__ import annotations

import hashlib
import re

import numpy as np

from vecdb.app.ports.embedding import EmbeddingPort
from vecdb.errors import EmbeddingFailedError

_TOKEN_RE = re.compile(r"\w+", re.UNICODE)


class HashingEmbedder(EmbeddingPort):
    """Feature-hashing text embedder."""

    def __init__(self, *, dimensions: int = 64) -> None:
        if dimensions < 1:
            raise ValueError("dimensions must be positive")
        self._dim = int(dimensions)

    @property
    def dimensions(self) -> int:
        return self._dim

    def embed(self, text: str) -> list[float]:
        tokens = _TOKEN_RE.findall(text.lower())
        if not tokens:
            raise EmbeddingFailedError(f"No embeddable tokens in {text!r}")

        vector = np.zeros(self._dim, dtype=np.float64)
        for token in tokens:
            digest = hashlib.blake2b(token.encode("utf-8"), digest_size=8).digest()
            value = int.from_bytes(digest, "little")
            bucket = value % self._dim
            sign = 1.0 if (value >> 63) & 1 == 0 else -1.0
            vector[bucket] += sign

        norm = float(np.linalg.norm(vector))
        if norm == 0.0:
            # Opposite-signed collisions cancelled out completely.
            raise EmbeddingFailedError(f"Embedding of {text!r} collapsed to zero")
        return (vector / norm).tolist()

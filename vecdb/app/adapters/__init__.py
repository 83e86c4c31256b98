"""Concrete adapters wiring application ports to built-in implementations."""

from __future__ import annotations

from .hashing_embedder import HashingEmbedder
from .hnsw import HNSWAdapter
from .sbert import SentenceTransformersEmbedder
from .sqlite_records import SQLiteRecordStore

__all__ = [
    "HashingEmbedder",
    "HNSWAdapter",
    "SentenceTransformersEmbedder",
    "SQLiteRecordStore",
]

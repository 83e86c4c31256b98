"""Application layer for vecdb.

The similarity store orchestrates the record store and ANN index through
port interfaces; concrete storage and model code lives in adapters.
"""

__all__ = [
    "SearchHit",
    "SimilarityStore",
]

from vecdb.app.similarity_store import SearchHit, SimilarityStore

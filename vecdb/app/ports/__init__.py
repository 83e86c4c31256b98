"""Port interfaces for the vecdb application layer.

The similarity store depends on these protocols, never on concrete adapters.
"""

__all__ = [
    "EmbeddingPort",
    "Record",
    "RecordStorePort",
    "VectorIndexPort",
]

from vecdb.app.ports.embedding import EmbeddingPort
from vecdb.app.ports.record_store import Record, RecordStorePort
from vecdb.app.ports.vector_index import VectorIndexPort

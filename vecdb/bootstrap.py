"""Application bootstrap wiring settings, adapters and the similarity store."""

from __future__ import annotations

import logging
from pathlib import Path

from vecdb.app import SimilarityStore
from vecdb.app.adapters import HashingEmbedder, SentenceTransformersEmbedder
from vecdb.app.ports import EmbeddingPort
from vecdb.config import Settings, get_settings
from vecdb.utils.paths import resolve_db_path

logger = logging.getLogger(__name__)


def build_embedder(settings: Settings) -> EmbeddingPort:
    """Instantiate the embedding backend selected in ``settings``."""
    if settings.embedder == "sbert":
        return SentenceTransformersEmbedder(settings.sbert_model)
    if settings.embedder == "hashing":
        return HashingEmbedder(dimensions=settings.embedding_dimensions)
    raise ValueError(f"Unknown embedder: {settings.embedder}")


def resolve_store_path(path: str | Path | None, settings: Settings | None = None) -> Path:
    """Resolve a user-supplied store location against the configured data dir."""
    active = settings or get_settings()
    return resolve_db_path(
        path,
        cwd=active.get_data_dir(),
        default_name=active.database_name,
    )


def open_store(
    path: str | Path | None = None,
    *,
    settings: Settings | None = None,
    embedder: EmbeddingPort | None = None,
) -> SimilarityStore:
    """Open the store at ``path`` wired according to ``settings``."""
    active = settings or get_settings()
    base_path = resolve_store_path(path, active)
    provider = embedder or build_embedder(active)
    logger.debug("Opening store at %s with %s embedder", base_path, type(provider).__name__)
    return SimilarityStore.open(
        base_path,
        provider,
        m=active.hnsw_m,
        ef_construction=active.hnsw_ef_construction,
        ef_search=active.hnsw_ef_search,
    )

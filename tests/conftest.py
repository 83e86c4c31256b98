"""Pytest configuration and fixtures."""

from collections.abc import Generator, Sequence
from pathlib import Path

import pytest

from vecdb.app import SimilarityStore
from vecdb.app.adapters import HashingEmbedder
from vecdb.config import Settings
from vecdb.errors import EmbeddingFailedError

# Hand-picked 4-d vectors so that king - man + woman lands nearest to queen.
WORD_VECTORS: dict[str, list[float]] = {
    "king": [0.9, 0.8, 0.1, 0.0],
    "man": [0.1, 0.9, 0.0, 0.1],
    "woman": [0.1, 0.1, 0.9, 0.1],
    "queen": [0.9, 0.1, 0.8, 0.0],
    "duck": [0.0, 0.0, 0.1, 0.9],
}


class StubEmbedder:
    """Deterministic embedder recording every text it is asked to embed."""

    def __init__(
        self,
        *,
        dimensions: int = 4,
        table: dict[str, Sequence[float]] | None = None,
        fail_on: Sequence[str] = (),
    ) -> None:
        self._dim = dimensions
        self._table = dict(WORD_VECTORS if table is None else table)
        self._fail_on = set(fail_on)
        self._fallback = HashingEmbedder(dimensions=dimensions)
        self.calls: list[str] = []

    @property
    def dimensions(self) -> int:
        return self._dim

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if text in self._fail_on:
            raise EmbeddingFailedError(f"stub refuses {text!r}")
        if text in self._table:
            return list(self._table[text])
        return self._fallback.embed(text)


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Alias for pytest's per-test temporary directory."""
    return tmp_path


@pytest.fixture
def embedder() -> StubEmbedder:
    return StubEmbedder()


@pytest.fixture
def store_path(temp_dir: Path) -> Path:
    return temp_dir / "store" / "vectors.db"


@pytest.fixture
def store(store_path: Path, embedder: StubEmbedder) -> Generator[SimilarityStore, None, None]:
    """Open a fresh similarity store backed by the stub embedder."""
    opened = SimilarityStore.open(store_path, embedder)
    try:
        yield opened
    finally:
        opened.close()


@pytest.fixture
def override_settings(temp_dir: Path) -> Generator[Settings, None, None]:
    """Provide isolated vecdb settings scoped to tests."""

    import vecdb.config as config_module

    original_settings = getattr(config_module, "_settings", None)

    data_dir = temp_dir / "appdata"
    data_dir.mkdir(parents=True, exist_ok=True)

    settings = config_module.Settings(
        data_dir=data_dir,
        embedder="hashing",
        embedding_dimensions=16,
    )

    config_module._settings = settings

    try:
        yield settings
    finally:
        config_module._settings = original_settings

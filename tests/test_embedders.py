from __future__ import annotations

import math

import numpy as np
import pytest

from vecdb.app.adapters import HashingEmbedder
from vecdb.errors import EmbeddingFailedError


def test_hashing_embedder_is_deterministic() -> None:
    first = HashingEmbedder(dimensions=32).embed("The quick brown fox")
    second = HashingEmbedder(dimensions=32).embed("The quick brown fox")

    assert first == second
    assert len(first) == 32
    assert math.isclose(float(np.linalg.norm(first)), 1.0, rel_tol=1e-9)


def test_hashing_embedder_is_case_insensitive_per_token() -> None:
    embedder = HashingEmbedder(dimensions=32)

    assert embedder.embed("Duck") == embedder.embed("duck")


def test_shared_tokens_are_closer_than_disjoint_ones() -> None:
    embedder = HashingEmbedder(dimensions=256)
    base = np.asarray(embedder.embed("red apple pie"))
    near = np.asarray(embedder.embed("red apple tart"))
    far = np.asarray(embedder.embed("quantum chromodynamics lecture"))

    assert float(base @ near) > float(base @ far)


def test_text_without_tokens_fails() -> None:
    with pytest.raises(EmbeddingFailedError):
        HashingEmbedder().embed("   ...  ")


def test_dimensions_must_be_positive() -> None:
    with pytest.raises(ValueError):
        HashingEmbedder(dimensions=0)

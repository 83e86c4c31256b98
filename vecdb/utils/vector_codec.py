"""Binary encoding for embedding vectors.

Vectors are stored as a flat sequence of little-endian IEEE-754 float64
values, 8 bytes per component, so a vector of dimension ``D`` occupies
exactly ``8 * D`` bytes. Decoding restores the original bit patterns
(signed zeros, infinities and NaN payloads included), not merely values
that compare close.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from vecdb.errors import VectorCodecError

_DTYPE = np.dtype("<f8")
ITEM_SIZE = _DTYPE.itemsize


def encode_vector(vector: Sequence[float] | np.ndarray) -> bytes:
    """Serialize ``vector`` to ``8 * len(vector)`` little-endian bytes."""
    array = np.asarray(vector, dtype=np.float64)
    if array.ndim != 1:
        raise VectorCodecError(f"Expected a 1-D vector; got shape {array.shape}")
    return array.astype(_DTYPE, copy=False).tobytes()


def decode_vector(blob: bytes | bytearray | memoryview) -> tuple[float, ...]:
    """Deserialize bytes produced by :func:`encode_vector`."""
    raw = bytes(blob)
    if len(raw) % ITEM_SIZE:
        raise VectorCodecError(
            f"Vector blob length {len(raw)} is not a multiple of {ITEM_SIZE}"
        )
    return tuple(np.frombuffer(raw, dtype=_DTYPE).tolist())


def dimensions_of(blob: bytes | bytearray | memoryview) -> int:
    """Return the number of float64 components held by ``blob``."""
    return len(blob) // ITEM_SIZE

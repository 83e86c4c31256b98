from __future__ import annotations

import math
import struct

import pytest

from vecdb.errors import VectorCodecError
from vecdb.utils.vector_codec import decode_vector, dimensions_of, encode_vector


def _bits(values) -> list[bytes]:
    return [struct.pack("<d", value) for value in values]


def test_encoding_is_little_endian_float64() -> None:
    blob = encode_vector([1.0, -2.5])

    assert len(blob) == 16
    assert blob == struct.pack("<d", 1.0) + struct.pack("<d", -2.5)


def test_round_trip_preserves_bit_patterns() -> None:
    vector = [0.0, -0.0, -1.25, math.pi, math.e, 1e-308, 5e-324, -1.7976931348623157e308]

    decoded = decode_vector(encode_vector(vector))

    assert _bits(decoded) == _bits(vector)
    # Signed zero survives, which == alone would not prove.
    assert math.copysign(1.0, decoded[1]) == -1.0


def test_round_trip_preserves_non_finite_values() -> None:
    nan_with_payload = struct.unpack("<d", struct.pack("<Q", 0x7FF8_0000_0000_BEEF))[0]
    vector = [math.inf, -math.inf, nan_with_payload]

    decoded = decode_vector(encode_vector(vector))

    assert _bits(decoded) == _bits(vector)


def test_empty_vector_round_trips() -> None:
    assert encode_vector([]) == b""
    assert decode_vector(b"") == ()


def test_decode_rejects_truncated_blob() -> None:
    blob = encode_vector([1.0, 2.0])[:-3]

    with pytest.raises(VectorCodecError):
        decode_vector(blob)


def test_encode_rejects_matrices() -> None:
    with pytest.raises(VectorCodecError):
        encode_vector([[1.0, 2.0], [3.0, 4.0]])


def test_dimensions_of_counts_components() -> None:
    assert dimensions_of(encode_vector([0.5] * 7)) == 7

"""Exceptions raised by the similarity store and its adapters."""

from __future__ import annotations


class VecDBError(Exception):
    """Base class for all vecdb errors."""


class NotFoundError(VecDBError, LookupError):
    """Raised when a lookup by text or id matches no record."""


class EmbeddingFailedError(VecDBError):
    """Raised when the embedding provider cannot produce a vector for a text."""


class SearchError(VecDBError):
    """Raised when the ANN index returns inconsistent result sequences.

    This signals a broken internal invariant, not a missing record.
    """


class DuplicateKeyError(VecDBError):
    """Raised when the record store rejects a second row for the same text."""


class DimensionMismatchError(VecDBError, ValueError):
    """Raised when a vector length differs from the store's dimensionality."""


class VectorCodecError(VecDBError, ValueError):
    """Raised when a vector blob cannot be decoded."""


class StoreClosedError(VecDBError):
    """Raised when an operation is attempted on a closed store handle."""

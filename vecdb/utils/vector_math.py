"""Element-wise vector arithmetic used for analogy queries."""

from __future__ import annotations

from collections.abc import Sequence


def add(lhs: Sequence[float], rhs: Sequence[float]) -> list[float]:
    """Return ``lhs + rhs``, truncated to the shorter operand."""
    return [a + b for a, b in zip(lhs, rhs)]


def subtract(lhs: Sequence[float], rhs: Sequence[float]) -> list[float]:
    """Return ``lhs - rhs``, truncated to the shorter operand."""
    return [a - b for a, b in zip(lhs, rhs)]

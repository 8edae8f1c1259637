"""
Vector primitives used by semantic scoring.

All functions are pure and accept any sequence of floats; vectors are never
mutated. Sums go through ``math.fsum`` so long embeddings do not accumulate
rounding error.
"""

from __future__ import annotations

import math
from typing import Sequence

from .errors import (
    DegenerateVectorError,
    DimensionMismatchError,
    NonFiniteVectorError,
)


def _check_dimensions(a: Sequence[float], b: Sequence[float]) -> None:
    if len(a) != len(b):
        raise DimensionMismatchError(expected=len(a), actual=len(b))
    if len(a) == 0:
        raise DimensionMismatchError(expected=1, actual=0)


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    """Return the dot product of two equal-length vectors."""
    _check_dimensions(a, b)
    return math.fsum(x * y for x, y in zip(a, b))


def magnitude(a: Sequence[float]) -> float:
    """Return the Euclidean norm of *a*."""
    if len(a) == 0:
        raise DimensionMismatchError(expected=1, actual=0)
    return math.sqrt(math.fsum(x * x for x in a))


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Return the cosine similarity of *a* and *b* in [-1, 1].

    A zero vector has similarity 0.0 to everything. Vectors carrying NaN or
    infinite components raise ``NonFiniteVectorError`` instead of yielding a
    score, so no NaN ever leaves this function.
    """
    _check_dimensions(a, b)
    if not all(math.isfinite(x) for x in (*a, *b)):
        raise NonFiniteVectorError("Cannot compare vectors with non-finite components.")
    norm_a = magnitude(a)
    norm_b = magnitude(b)
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    similarity = dot(a, b) / (norm_a * norm_b)
    if not math.isfinite(similarity):
        raise NonFiniteVectorError("Vector magnitudes overflow a float.")
    return max(-1.0, min(1.0, similarity))


def normalize_unit(a: Sequence[float]) -> tuple[float, ...]:
    """Scale *a* to unit length."""
    norm = magnitude(a)
    if norm == 0.0:
        raise DegenerateVectorError("Cannot normalize a zero-magnitude vector.")
    return tuple(x / norm for x in a)

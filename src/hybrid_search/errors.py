"""
Exception hierarchy for the hybrid search pipeline.
"""

from __future__ import annotations


class HybridSearchError(Exception):
    """Base class for all hybrid search failures."""


class DimensionMismatchError(HybridSearchError, ValueError):
    """Raised when two vectors do not share the same dimensionality."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Vector dimension mismatch: expected {expected}, got {actual}."
        )
        self.expected = expected
        self.actual = actual


class DegenerateVectorError(HybridSearchError, ValueError):
    """Raised when a zero-magnitude vector is asked to be unit-normalized."""


class NonFiniteVectorError(HybridSearchError, ValueError):
    """Raised when a vector holds NaN or infinite components."""


class InvalidPaginationError(HybridSearchError, ValueError):
    """Raised when page or per_page is not a positive integer."""


class InvalidWeightError(HybridSearchError, ValueError):
    """Raised when a fusion weight falls outside [0, 1]."""


class InvalidScopeError(HybridSearchError, ValueError):
    """Raised when a query scope cannot be expressed as a store filter."""


class ScoringError(HybridSearchError):
    """Raised when a scorer produces a value the fusion stage cannot use."""


class EmptyCorpusError(HybridSearchError, LookupError):
    """Raised when a search requires candidates and the store yields none."""


class EmbeddingProviderError(HybridSearchError, RuntimeError):
    """Raised when the query embedding cannot be produced."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Embedding provider failed: {reason}")
        self.reason = reason

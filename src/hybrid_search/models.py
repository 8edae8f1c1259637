"""
Data model shared by the scoring, fusion and ranking stages.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping

from .errors import InvalidPaginationError, InvalidWeightError


@dataclass(frozen=True)
class Document:
    """An indexed document with its text and precomputed embedding."""

    id: str
    text: str
    embedding: tuple[float, ...]
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "embedding", tuple(self.embedding))


@dataclass(frozen=True)
class QueryScope:
    """Restricts which documents a store returns as candidates."""

    corpus_id: str | None = None
    document_ids: frozenset[str] | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def matches(self, document: Document) -> bool:
        if self.document_ids is not None and document.id not in self.document_ids:
            return False
        if self.corpus_id is not None:
            if document.metadata.get("corpus_id") != self.corpus_id:
                return False
        for key, value in self.metadata.items():
            if document.metadata.get(key) != value:
                return False
        return True


def validate_weight(weight: float) -> float:
    """Return *weight* as a float, rejecting values outside [0, 1]."""
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        raise InvalidWeightError(f"Weight must be a number, got {weight!r}.")
    value = float(weight)
    if not math.isfinite(value) or value < 0.0 or value > 1.0:
        raise InvalidWeightError(f"Weight must be within [0, 1], got {weight!r}.")
    return value


def validate_pagination(page: int, per_page: int) -> None:
    """Reject page numbers and page sizes that are not positive integers."""
    for name, value in (("page", page), ("per_page", per_page)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidPaginationError(f"{name} must be an integer, got {value!r}.")
        if value <= 0:
            raise InvalidPaginationError(f"{name} must be >= 1, got {value}.")


@dataclass(frozen=True)
class SearchOptions:
    """
    Per-call search parameters.

    ``weight`` is the share of the hybrid score attributed to semantic
    similarity; lexical relevance receives ``1 - weight``. ``None`` defers
    to the engine's configured default.
    """

    weight: float | None = None
    page: int = 1
    per_page: int = 10

    def __post_init__(self) -> None:
        if self.weight is not None:
            object.__setattr__(self, "weight", validate_weight(self.weight))
        validate_pagination(self.page, self.per_page)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


@dataclass(frozen=True)
class ScoredCandidate:
    """A document paired with its raw, normalized and fused scores."""

    document: Document
    lexical_score: float
    semantic_score: float
    hybrid_score: float = 0.0
    lexical_normalized: float = 0.0
    semantic_normalized: float = 0.0

    @property
    def document_id(self) -> str:
        return self.document.id

    def to_dict(self) -> dict[str, Any]:
        return {
            "document_id": self.document.id,
            "lexical_score": self.lexical_score,
            "semantic_score": self.semantic_score,
            "hybrid_score": self.hybrid_score,
            "metadata": dict(self.document.metadata),
        }


@dataclass(frozen=True)
class ExcludedDocument:
    """A candidate dropped during scoring, with the reason it was dropped."""

    document_id: str
    reason: str

    def to_dict(self) -> dict[str, str]:
        return {"document_id": self.document_id, "reason": self.reason}


@dataclass(frozen=True)
class ResultPage:
    """One page of ranked candidates."""

    items: tuple[ScoredCandidate, ...]
    total: int
    page: int
    per_page: int
    excluded: tuple[ExcludedDocument, ...] = ()

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def page_count(self) -> int:
        return math.ceil(self.total / self.per_page)

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count

    @property
    def excluded_count(self) -> int:
        return len(self.excluded)

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "total": self.total,
            "page": self.page,
            "per_page": self.per_page,
            "offset": self.offset,
            "excluded": [entry.to_dict() for entry in self.excluded],
        }

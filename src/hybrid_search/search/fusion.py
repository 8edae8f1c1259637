"""
Score fusion for hybrid search.

Lexical scores have no natural bound, so they are min-max scaled against the
batch they were produced in. Cosine similarities are mapped from [-1, 1]
onto [0, 1]. The two are then blended linearly under a single weight.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

import structlog

from ..models import ScoredCandidate, validate_weight

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ScoreRange:
    """Observed minimum and maximum of a batch of scores."""

    minimum: float
    maximum: float

    @classmethod
    def from_scores(cls, scores: Sequence[float]) -> ScoreRange:
        if not scores:
            raise ValueError("Cannot compute a score range for an empty batch.")
        return cls(minimum=min(scores), maximum=max(scores))

    @property
    def is_flat(self) -> bool:
        return self.maximum == self.minimum

    def normalize(self, score: float) -> float:
        # A flat batch carries no discriminative signal; every member is
        # treated as fully satisfying.
        if self.is_flat:
            return 1.0
        return (score - self.minimum) / (self.maximum - self.minimum)


def min_max_normalize(scores: Sequence[float]) -> list[float]:
    """Rescale *scores* onto [0, 1] relative to the batch's own range."""
    if not scores:
        return []
    score_range = ScoreRange.from_scores(scores)
    return [score_range.normalize(score) for score in scores]


def normalize_cosine(similarity: float) -> float:
    """Map a cosine similarity from [-1, 1] onto [0, 1]."""
    clamped = max(-1.0, min(1.0, similarity))
    return (clamped + 1.0) / 2.0


def blend(semantic_normalized: float, lexical_normalized: float, weight: float) -> float:
    """Weighted sum of normalized scores; *weight* goes to the semantic side."""
    return weight * semantic_normalized + (1.0 - weight) * lexical_normalized


class ScoreFusion:
    """Turns a batch of raw (lexical, semantic) scores into hybrid scores."""

    def fuse(
        self, candidates: Sequence[ScoredCandidate], weight: float
    ) -> list[ScoredCandidate]:
        weight = validate_weight(weight)
        if not candidates:
            return []

        lexical_range = ScoreRange.from_scores([c.lexical_score for c in candidates])
        fused: list[ScoredCandidate] = []
        for candidate in candidates:
            lexical_norm = lexical_range.normalize(candidate.lexical_score)
            semantic_norm = normalize_cosine(candidate.semantic_score)
            fused.append(
                replace(
                    candidate,
                    lexical_normalized=lexical_norm,
                    semantic_normalized=semantic_norm,
                    hybrid_score=blend(semantic_norm, lexical_norm, weight),
                )
            )

        logger.debug(
            "Score fusion completed",
            candidates=len(fused),
            weight=weight,
            lexical_min=lexical_range.minimum,
            lexical_max=lexical_range.maximum,
            lexical_flat=lexical_range.is_flat,
        )
        return fused

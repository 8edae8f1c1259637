"""
Ranking and pagination of fused candidates.
"""

from __future__ import annotations

from typing import Sequence

from ..models import ResultPage, ScoredCandidate, validate_pagination


def sort_candidates(candidates: Sequence[ScoredCandidate]) -> list[ScoredCandidate]:
    """Order candidates by hybrid score with a total, deterministic tie-break."""
    return sorted(
        candidates,
        key=lambda candidate: (
            -candidate.hybrid_score,
            -candidate.semantic_score,
            candidate.document.id,
        ),
    )


class RankingEngine:
    """Sorts a fused batch and cuts out the requested page."""

    def rank(
        self,
        candidates: Sequence[ScoredCandidate],
        *,
        page: int,
        per_page: int,
    ) -> ResultPage:
        validate_pagination(page, per_page)
        ordered = sort_candidates(candidates)
        offset = (page - 1) * per_page
        return ResultPage(
            items=tuple(ordered[offset : offset + per_page]),
            total=len(ordered),
            page=page,
            per_page=per_page,
        )

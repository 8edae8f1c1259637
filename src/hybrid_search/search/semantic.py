"""
Embedding similarity scorers.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from ..vector_math import cosine_similarity


class SemanticScorer(Protocol):
    """Scores directional closeness between two embeddings."""

    def score(
        self, query_embedding: Sequence[float], document_embedding: Sequence[float]
    ) -> float:
        """Return a similarity in [-1, 1]; raise ``DimensionMismatchError`` on bad input."""


class CosineSemanticScorer:
    """Cosine similarity between the query and document embeddings."""

    def score(
        self, query_embedding: Sequence[float], document_embedding: Sequence[float]
    ) -> float:
        return cosine_similarity(query_embedding, document_embedding)

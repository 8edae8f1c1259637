"""
Storage interface for candidate retrieval.
"""

from __future__ import annotations

from typing import Iterable, Protocol

from ..models import Document, QueryScope


class DocumentStore(Protocol):
    """Read path over an already-indexed corpus."""

    def fetch_candidates(self, scope: QueryScope | None = None) -> Iterable[Document]:
        """Return the documents eligible for a query within *scope*."""

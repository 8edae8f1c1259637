"""
In-memory document store.
"""

from __future__ import annotations

from typing import Iterable

from ..models import Document, QueryScope


class InMemoryDocumentStore:
    """Holds a fixed list of documents and filters them by scope."""

    def __init__(self, documents: Iterable[Document]) -> None:
        self._documents: list[Document] = []
        seen: set[str] = set()
        for document in documents:
            if document.id in seen:
                raise ValueError(f"Duplicate document id: {document.id!r}")
            seen.add(document.id)
            self._documents.append(document)

    def __len__(self) -> int:
        return len(self._documents)

    def fetch_candidates(self, scope: QueryScope | None = None) -> list[Document]:
        if scope is None:
            return list(self._documents)
        return [doc for doc in self._documents if scope.matches(doc)]

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Sequence

import duckdb
import pytest

from hybrid_search.models import Document
from hybrid_search.storage import DuckDBDocumentStore


class FakeEmbeddingProvider:
    """Returns a fixed query vector and records every call."""

    def __init__(self, vector: Sequence[float]) -> None:
        self.vector = list(vector)
        self.calls: list[str] = []

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        return list(self.vector)


class FailingEmbeddingProvider:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    def embed(self, text: str) -> list[float]:  # noqa: ARG002
        raise self.exc


class BlockingEmbeddingProvider:
    """Blocks until released, to exercise embedding timeouts."""

    def __init__(self) -> None:
        self.release = threading.Event()

    def embed(self, text: str) -> list[float]:  # noqa: ARG002
        self.release.wait(timeout=5)
        return [1.0, 0.0]


def sample_documents() -> list[Document]:
    return [
        Document(
            id="doc-a",
            text="Purchase price agreement",
            embedding=(1.0, 0.0),
            metadata={"corpus_id": "deals", "document_type": "agreement"},
        ),
        Document(
            id="doc-b",
            text="Risk register summary",
            embedding=(0.0, 1.0),
            metadata={"corpus_id": "deals", "document_type": "report"},
        ),
        Document(
            id="doc-c",
            text="Price list: price per unit",
            embedding=(0.7, 0.7),
            metadata={"corpus_id": "catalog", "document_type": "list"},
        ),
    ]


@pytest.fixture()
def documents() -> list[Document]:
    return sample_documents()


@pytest.fixture()
def duckdb_index(tmp_path: Path) -> str:
    """Create a DuckDB index holding the sample documents and return its path."""
    db_path = str(tmp_path / "index.duckdb")
    DuckDBDocumentStore(db_path, read_only=False, initialize=True).close()

    conn = duckdb.connect(db_path)
    for doc in sample_documents():
        metadata = {k: v for k, v in doc.metadata.items() if k != "corpus_id"}
        metadata["year"] = 2024 if doc.id != "doc-b" else 2023
        metadata["confidential"] = doc.id == "doc-a"
        conn.execute(
            """
            INSERT INTO documents (id, corpus_id, text, embedding, metadata_json)
            VALUES (?, ?, ?, ?, ?)
            """,
            [
                doc.id,
                doc.metadata["corpus_id"],
                doc.text,
                list(doc.embedding),
                json.dumps(metadata),
            ],
        )
    conn.close()
    return db_path

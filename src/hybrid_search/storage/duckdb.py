"""
DuckDB-backed read path over an indexed corpus.

Documents live in a single ``documents`` table holding the searchable text,
the embedding as a ``DOUBLE[]`` and metadata serialized as JSON.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import duckdb

from ..errors import InvalidScopeError
from ..models import Document, QueryScope


_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class DuckDBDocumentStore:
    """Fetch candidate documents from a DuckDB database."""

    def __init__(
        self,
        db_path: str,
        *,
        read_only: bool = True,
        initialize: bool = False,
    ) -> None:
        self.db_path = str(Path(db_path).expanduser().resolve())
        self.read_only = read_only
        if not read_only:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = duckdb.connect(self.db_path, read_only=read_only)
        if initialize and not read_only:
            self.initialize()

    def close(self) -> None:
        """Close the underlying DuckDB connection."""
        self._conn.close()

    def initialize(self) -> None:
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS documents (
                id VARCHAR PRIMARY KEY,
                corpus_id VARCHAR NOT NULL,
                text VARCHAR NOT NULL,
                embedding DOUBLE[] NOT NULL,
                metadata_json VARCHAR NOT NULL DEFAULT '{}'
            );
            """
        )

    def count_documents(self, *, corpus_id: str | None = None) -> int:
        if corpus_id is None:
            row = self._conn.execute("SELECT COUNT(*) FROM documents").fetchone()
        else:
            row = self._conn.execute(
                "SELECT COUNT(*) FROM documents WHERE corpus_id = ?",
                [corpus_id],
            ).fetchone()
        return int(row[0]) if row else 0

    def fetch_candidates(self, scope: QueryScope | None = None) -> list[Document]:
        clauses: list[str] = []
        params: list[Any] = []
        if scope is not None:
            if scope.corpus_id is not None:
                clauses.append("corpus_id = ?")
                params.append(scope.corpus_id)
            if scope.document_ids is not None:
                if not scope.document_ids:
                    return []
                ids = sorted(scope.document_ids)
                clauses.append(f"id IN ({', '.join(['?'] * len(ids))})")
                params.extend(ids)
            for field, value in scope.metadata.items():
                clause, clause_params = self._metadata_clause(field=field, value=value)
                clauses.append(clause)
                params.extend(clause_params)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = self._conn.execute(
            f"""
            SELECT id, corpus_id, text, embedding, metadata_json
            FROM documents
            {where}
            ORDER BY id ASC
            """,
            params,
        ).fetchall()
        return [self._row_to_document(row) for row in rows]

    @staticmethod
    def _row_to_document(row: tuple[Any, ...]) -> Document:
        metadata = json.loads(row[4]) if row[4] else {}
        metadata["corpus_id"] = str(row[1])
        return Document(
            id=str(row[0]),
            text=str(row[2]),
            embedding=tuple(float(value) for value in row[3]),
            metadata=metadata,
        )

    @staticmethod
    def _metadata_clause(*, field: str, value: Any) -> tuple[str, list[Any]]:
        if not _FIELD_RE.match(field):
            raise InvalidScopeError(f"Invalid metadata field name: {field!r}")
        json_expr = "json_extract_string(metadata_json, ?)"
        json_path = f"$.{field}"

        if isinstance(value, bool):
            return (
                f"lower(coalesce({json_expr}, '')) = ?",
                [json_path, "true" if value else "false"],
            )
        if isinstance(value, (int, float)):
            return (
                f"try_cast({json_expr} AS DOUBLE) = ?",
                [json_path, float(value)],
            )
        return (
            f"coalesce({json_expr}, '') = ?",
            [json_path, str(value)],
        )

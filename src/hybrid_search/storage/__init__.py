"""Document stores for hybrid search."""

from .base import DocumentStore
from .duckdb import DuckDBDocumentStore
from .memory import InMemoryDocumentStore

__all__ = [
    "DocumentStore",
    "DuckDBDocumentStore",
    "InMemoryDocumentStore",
]

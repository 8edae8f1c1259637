"""
Wiring helpers that assemble a ``HybridSearchEngine`` from configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from .config import SearchConfig
from .embeddings import EmbeddingProvider, GenAIEmbeddingProvider
from .search import HybridSearchEngine
from .storage import DocumentStore, DuckDBDocumentStore


def create_engine(
    config: SearchConfig,
    *,
    store: DocumentStore | None = None,
    embedding_provider: EmbeddingProvider | None = None,
) -> HybridSearchEngine:
    """Build an engine over *store* (DuckDB at ``config.db_path`` by default)."""
    resolved_store = store or DuckDBDocumentStore(config.db_path, read_only=True)
    resolved_provider = embedding_provider or GenAIEmbeddingProvider(
        dim=config.embedding_dim
    )
    return HybridSearchEngine(
        resolved_store,
        resolved_provider,
        default_weight=config.default_weight,
        max_workers=config.max_workers,
        embedding_timeout=config.embedding_timeout,
        expected_dimension=config.embedding_dim,
    )


def open_engine(
    config: SearchConfig,
    *,
    embedding_provider: EmbeddingProvider | None = None,
) -> tuple[HybridSearchEngine, Callable[[], None]]:
    """Open the configured DuckDB index and return an engine plus its cleanup."""
    if not Path(config.db_path).exists():
        raise FileNotFoundError(f"No index found at {config.db_path}")
    resolved_provider = embedding_provider or GenAIEmbeddingProvider(
        dim=config.embedding_dim
    )
    store = DuckDBDocumentStore(config.db_path, read_only=True)
    engine = create_engine(config, store=store, embedding_provider=resolved_provider)
    return engine, store.close

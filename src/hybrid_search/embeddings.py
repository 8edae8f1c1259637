"""
Embedding providers for query-time semantic search.

The search engine depends only on the ``EmbeddingProvider`` protocol. The
bundled ``GenAIEmbeddingProvider`` wraps the Google GenAI embedding API with
configurable model and output dimensionality.
"""

from __future__ import annotations

import os
from typing import Any, Protocol

from google.genai import Client as GenAIClient

from .errors import EmbeddingProviderError


_DEFAULT_MODEL = "gemini-embedding-001"
_DEFAULT_DIM = 768


class EmbeddingProvider(Protocol):
    """Maps text to a fixed-length embedding vector."""

    def embed(self, text: str) -> list[float]:
        """Return the embedding for *text* or raise ``EmbeddingProviderError``."""


class GenAIEmbeddingProvider:
    """Generate query embeddings via Google GenAI."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str | None = None,
        dim: int | None = None,
        client: Any | None = None,
    ) -> None:
        self.model = model or os.getenv("HYBRID_SEARCH_EMBEDDING_MODEL", _DEFAULT_MODEL)
        self.dim = dim or int(os.getenv("HYBRID_SEARCH_EMBEDDING_DIM", str(_DEFAULT_DIM)))

        if client is not None:
            self._client = client
        else:
            resolved_key = api_key or os.getenv("GOOGLE_API_KEY")
            if resolved_key is None:
                raise ValueError(
                    "GOOGLE_API_KEY not found. "
                    "Provide api_key or set the environment variable."
                )
            self._client = GenAIClient(api_key=resolved_key)

    def embed(self, text: str) -> list[float]:
        """Embed a single query text for retrieval."""
        try:
            result = self._client.models.embed_content(
                model=self.model,
                contents=[text],
                config={
                    "task_type": "RETRIEVAL_QUERY",
                    "output_dimensionality": self.dim,
                },
            )
        except Exception as exc:
            raise EmbeddingProviderError(f"{type(exc).__name__}: {exc}") from exc

        if not result.embeddings:
            raise EmbeddingProviderError("response contained no embeddings")
        return [float(value) for value in result.embeddings[0].values]

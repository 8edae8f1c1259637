"""Tests for the GenAI embedding provider."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

import pytest

from hybrid_search.embeddings import GenAIEmbeddingProvider
from hybrid_search.errors import EmbeddingProviderError


# ---------------------------------------------------------------------------
# Mock helpers
# ---------------------------------------------------------------------------


@dataclass
class _FakeEmbedding:
    values: list[float]


@dataclass
class _FakeEmbedResult:
    embeddings: list[_FakeEmbedding] | None


class _FakeModels:
    """Records calls and returns deterministic embeddings."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    def embed_content(
        self, *, model: str, contents: list[str], config: dict
    ) -> _FakeEmbedResult:
        self.calls.append({"model": model, "contents": contents, "config": config})
        dim = config.get("output_dimensionality", 768)
        return _FakeEmbedResult(embeddings=[_FakeEmbedding(values=[0.5] * dim)])


class _FakeClient:
    def __init__(self) -> None:
        self.models = _FakeModels()


class _BrokenModels:
    def __init__(self, result: Any = None, exc: Exception | None = None) -> None:
        self.result = result
        self.exc = exc

    def embed_content(self, **kwargs: Any) -> Any:  # noqa: ARG002
        if self.exc is not None:
            raise self.exc
        return self.result


class _BrokenClient:
    def __init__(self, **kwargs: Any) -> None:
        self.models = _BrokenModels(**kwargs)


# ---------------------------------------------------------------------------
# Unit tests (mock-based, no API key needed)
# ---------------------------------------------------------------------------


def test_embed_uses_query_task_type() -> None:
    client = _FakeClient()
    provider = GenAIEmbeddingProvider(client=client, dim=4)

    result = provider.embed("search query")

    assert result == [0.5, 0.5, 0.5, 0.5]
    call = client.models.calls[0]
    assert call["contents"] == ["search query"]
    assert call["config"]["task_type"] == "RETRIEVAL_QUERY"
    assert call["config"]["output_dimensionality"] == 4


def test_env_overrides(monkeypatch) -> None:
    client = _FakeClient()
    monkeypatch.setenv("HYBRID_SEARCH_EMBEDDING_MODEL", "custom-model-001")
    monkeypatch.setenv("HYBRID_SEARCH_EMBEDDING_DIM", "256")

    provider = GenAIEmbeddingProvider(client=client)

    assert provider.model == "custom-model-001"
    assert provider.dim == 256

    provider.embed("test")
    call = client.models.calls[0]
    assert call["model"] == "custom-model-001"
    assert call["config"]["output_dimensionality"] == 256


def test_missing_api_key_raises(monkeypatch) -> None:
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    with pytest.raises(ValueError, match="GOOGLE_API_KEY"):
        GenAIEmbeddingProvider(api_key=None, client=None)


def test_upstream_failure_is_wrapped() -> None:
    provider = GenAIEmbeddingProvider(
        client=_BrokenClient(exc=TimeoutError("deadline exceeded")), dim=4
    )

    with pytest.raises(EmbeddingProviderError) as excinfo:
        provider.embed("query")

    assert "deadline exceeded" in excinfo.value.reason
    assert isinstance(excinfo.value.__cause__, TimeoutError)


def test_empty_response_is_an_error() -> None:
    provider = GenAIEmbeddingProvider(
        client=_BrokenClient(result=_FakeEmbedResult(embeddings=None)), dim=4
    )

    with pytest.raises(EmbeddingProviderError, match="no embeddings"):
        provider.embed("query")


# ---------------------------------------------------------------------------
# Real API integration test (skipped unless GOOGLE_API_KEY is set)
# ---------------------------------------------------------------------------


@pytest.mark.skipif(
    not os.getenv("GOOGLE_API_KEY"),
    reason="GOOGLE_API_KEY not set, skipping real embedding test",
)
def test_real_embedding_api() -> None:
    provider = GenAIEmbeddingProvider(dim=128)

    query_emb = provider.embed("purchase price")

    assert len(query_emb) == 128
    assert all(isinstance(v, float) for v in query_emb)

"""
FastAPI server exposing hybrid search over HTTP.

The engine is resolved through the ``get_engine`` dependency so deployments
and tests can swap the store or embedding provider.
"""

from typing import Any, Iterator

import structlog
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .config import SearchConfig
from .errors import (
    EmbeddingProviderError,
    EmptyCorpusError,
    HybridSearchError,
    InvalidPaginationError,
    InvalidScopeError,
    InvalidWeightError,
)
from .factory import open_engine
from .models import QueryScope, SearchOptions
from .search import HybridSearchEngine

logger = structlog.get_logger(__name__)

app = FastAPI(title="Hybrid Search", description="Lexical + semantic ranked search")


class SearchRequest(BaseModel):
    """Request model for search queries."""

    query: str
    weight: float | None = None
    page: int = 1
    per_page: int | None = None
    corpus_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


def get_config() -> SearchConfig:
    return SearchConfig.from_env()


def get_engine(
    config: SearchConfig = Depends(get_config),
) -> Iterator[HybridSearchEngine]:
    """Open an engine over the configured index for the duration of a request."""
    engine, cleanup = open_engine(config)
    try:
        yield engine
    finally:
        cleanup()


def _status_for(exc: HybridSearchError) -> int:
    if isinstance(exc, (InvalidPaginationError, InvalidWeightError, InvalidScopeError)):
        return 422
    if isinstance(exc, EmptyCorpusError):
        return 404
    if isinstance(exc, EmbeddingProviderError):
        return 502
    return 500


@app.exception_handler(FileNotFoundError)
async def missing_index_handler(request: Request, exc: FileNotFoundError):
    return JSONResponse({"error": str(exc)}, status_code=404)


@app.get("/api/health")
async def health():
    return {"status": "ok"}


@app.post("/api/search")
def search(
    request: SearchRequest,
    config: SearchConfig = Depends(get_config),
    engine: HybridSearchEngine = Depends(get_engine),
):
    """Rank the corpus for a query and return one page of hits."""
    try:
        options = SearchOptions(
            weight=request.weight,
            page=request.page,
            per_page=config.per_page if request.per_page is None else request.per_page,
        )
        result = engine.search(
            request.query,
            options,
            scope=QueryScope(corpus_id=request.corpus_id, metadata=request.metadata),
        )
    except HybridSearchError as exc:
        logger.warning("Search request failed", error=str(exc), error_type=type(exc).__name__)
        return JSONResponse(
            {"error": str(exc), "type": type(exc).__name__},
            status_code=_status_for(exc),
        )

    return {
        "query": request.query,
        **result.to_dict(),
    }


def run_server(host: str = "127.0.0.1", port: int = 8000):
    """Run the FastAPI server."""
    import uvicorn

    uvicorn.run(app, host=host, port=port)

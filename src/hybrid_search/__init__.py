"""
Hybrid Search - lexical + semantic ranked retrieval.

This package scores a corpus of documents by keyword overlap and embedding
similarity, fuses both signals under a single tunable weight and returns
deterministically ordered, stably paginated result pages.

Example usage:
    >>> from hybrid_search import HybridSearchEngine, InMemoryDocumentStore, SearchOptions
    >>> engine = HybridSearchEngine(InMemoryDocumentStore(documents), provider)
    >>> page = engine.search("purchase price", SearchOptions(weight=0.7, per_page=5))
"""

from .embeddings import EmbeddingProvider, GenAIEmbeddingProvider
from .errors import (
    DegenerateVectorError,
    DimensionMismatchError,
    EmbeddingProviderError,
    EmptyCorpusError,
    HybridSearchError,
    InvalidPaginationError,
    InvalidScopeError,
    InvalidWeightError,
    NonFiniteVectorError,
    ScoringError,
)
from .models import (
    Document,
    ExcludedDocument,
    QueryScope,
    ResultPage,
    ScoredCandidate,
    SearchOptions,
)
from .search import (
    CosineSemanticScorer,
    HybridSearchEngine,
    RankingEngine,
    ScoreFusion,
    TermFrequencyScorer,
    TfIdfScorer,
)
from .storage import DocumentStore, DuckDBDocumentStore, InMemoryDocumentStore

__all__ = [
    # Engine
    "HybridSearchEngine",
    "RankingEngine",
    "ScoreFusion",
    "CosineSemanticScorer",
    "TermFrequencyScorer",
    "TfIdfScorer",
    # Models
    "Document",
    "ExcludedDocument",
    "QueryScope",
    "ResultPage",
    "ScoredCandidate",
    "SearchOptions",
    # Collaborators
    "EmbeddingProvider",
    "GenAIEmbeddingProvider",
    "DocumentStore",
    "DuckDBDocumentStore",
    "InMemoryDocumentStore",
    # Errors
    "HybridSearchError",
    "DimensionMismatchError",
    "DegenerateVectorError",
    "NonFiniteVectorError",
    "InvalidPaginationError",
    "InvalidScopeError",
    "InvalidWeightError",
    "ScoringError",
    "EmptyCorpusError",
    "EmbeddingProviderError",
]

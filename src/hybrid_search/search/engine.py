"""
Hybrid search façade.

Embeds the query once, scores every candidate lexically and semantically on
a bounded thread pool, fuses the full batch and returns one ranked page.
"""

from __future__ import annotations

import math
import time
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Sequence

import structlog

from ..embeddings import EmbeddingProvider
from ..errors import EmbeddingProviderError, EmptyCorpusError, ScoringError
from ..models import (
    Document,
    ExcludedDocument,
    QueryScope,
    ResultPage,
    ScoredCandidate,
    SearchOptions,
    validate_pagination,
    validate_weight,
)
from ..storage import DocumentStore
from .fusion import ScoreFusion
from .lexical import LexicalScorer, TermFrequencyScorer
from .ranker import RankingEngine
from .semantic import CosineSemanticScorer, SemanticScorer

logger = structlog.get_logger(__name__)

DEFAULT_WEIGHT = 0.5


class HybridSearchEngine:
    """Ranks stored documents by a blend of keyword and embedding relevance."""

    def __init__(
        self,
        store: DocumentStore,
        embedding_provider: EmbeddingProvider,
        *,
        lexical_scorer: LexicalScorer | None = None,
        semantic_scorer: SemanticScorer | None = None,
        fusion: ScoreFusion | None = None,
        ranking: RankingEngine | None = None,
        default_weight: float = DEFAULT_WEIGHT,
        max_workers: int = 4,
        embedding_timeout: float | None = None,
        expected_dimension: int | None = None,
        require_candidates: bool = False,
    ) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        if embedding_timeout is not None and embedding_timeout <= 0:
            raise ValueError(f"embedding_timeout must be > 0, got {embedding_timeout}")
        self.store = store
        self.embedding_provider = embedding_provider
        self.lexical_scorer = lexical_scorer or TermFrequencyScorer()
        self.semantic_scorer = semantic_scorer or CosineSemanticScorer()
        self.fusion = fusion or ScoreFusion()
        self.ranking = ranking or RankingEngine()
        self.default_weight = validate_weight(default_weight)
        self._max_workers = max_workers
        self._embedding_timeout = embedding_timeout
        self._expected_dimension = expected_dimension
        self._require_candidates = require_candidates

    def search(
        self,
        query: str,
        options: SearchOptions | None = None,
        *,
        scope: QueryScope | None = None,
    ) -> ResultPage:
        """Return the requested page of hybrid-ranked candidates for *query*."""
        options = options or SearchOptions()
        validate_pagination(options.page, options.per_page)
        weight = self.default_weight if options.weight is None else options.weight
        started = time.perf_counter()

        documents, excluded = self._fetch_candidates(scope)
        if not documents:
            if self._require_candidates:
                raise EmptyCorpusError("No candidate documents available for query scope.")
            logger.info("No candidates for query scope", scope=scope, excluded=len(excluded))
            return ResultPage(
                items=(),
                total=0,
                page=options.page,
                per_page=options.per_page,
                excluded=tuple(excluded),
            )

        query_embedding = self._embed_query(query)
        scored, failed = self._score_candidates(query, query_embedding, documents)
        excluded.extend(failed)

        fused = self.fusion.fuse(scored, weight)
        page = self.ranking.rank(fused, page=options.page, per_page=options.per_page)
        result = ResultPage(
            items=page.items,
            total=page.total,
            page=page.page,
            per_page=page.per_page,
            excluded=tuple(excluded),
        )

        logger.info(
            "Hybrid search completed",
            query_terms=len(query.split()),
            candidates=len(documents),
            ranked=result.total,
            excluded=result.excluded_count,
            weight=weight,
            page=result.page,
            per_page=result.per_page,
            returned=len(result.items),
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return result

    def _fetch_candidates(
        self, scope: QueryScope | None
    ) -> tuple[list[Document], list[ExcludedDocument]]:
        documents: list[Document] = []
        excluded: list[ExcludedDocument] = []
        seen: set[str] = set()
        for document in self.store.fetch_candidates(scope):
            if document.id in seen:
                reason = "duplicate document id"
                logger.warning("Excluding document", document_id=document.id, reason=reason)
                excluded.append(ExcludedDocument(document_id=document.id, reason=reason))
                continue
            seen.add(document.id)
            documents.append(document)
        return documents, excluded

    def _embed_query(self, query: str) -> tuple[float, ...]:
        if self._embedding_timeout is None:
            raw = self._call_provider(query)
        else:
            executor = ThreadPoolExecutor(max_workers=1)
            future = executor.submit(self._call_provider, query)
            try:
                raw = future.result(timeout=self._embedding_timeout)
            except FutureTimeoutError as exc:
                future.cancel()
                raise EmbeddingProviderError(
                    f"timed out after {self._embedding_timeout}s"
                ) from exc
            except CancelledError as exc:
                raise EmbeddingProviderError("embedding call was cancelled") from exc
            finally:
                executor.shutdown(wait=False)

        embedding = tuple(float(value) for value in raw)
        if not embedding:
            raise EmbeddingProviderError("provider returned an empty embedding")
        if not all(math.isfinite(value) for value in embedding):
            raise EmbeddingProviderError("provider returned non-finite values")
        if self._expected_dimension is not None and len(embedding) != self._expected_dimension:
            raise EmbeddingProviderError(
                f"expected dimension {self._expected_dimension}, got {len(embedding)}"
            )
        return embedding

    def _call_provider(self, query: str) -> Sequence[float]:
        try:
            return self.embedding_provider.embed(query)
        except EmbeddingProviderError:
            raise
        except Exception as exc:
            raise EmbeddingProviderError(f"{type(exc).__name__}: {exc}") from exc

    def _score_candidates(
        self,
        query: str,
        query_embedding: tuple[float, ...],
        documents: list[Document],
    ) -> tuple[list[ScoredCandidate], list[ExcludedDocument]]:
        scored: list[ScoredCandidate] = []
        excluded: list[ExcludedDocument] = []

        workers = min(self._max_workers, len(documents))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures: list[tuple[Document, Future[ScoredCandidate]]] = [
                (
                    document,
                    executor.submit(self._score_document, query, query_embedding, document),
                )
                for document in documents
            ]
            for document, future in futures:
                try:
                    scored.append(future.result())
                except CancelledError:
                    excluded.append(self._exclude(document, "scoring task was cancelled"))
                except Exception as exc:
                    excluded.append(self._exclude(document, f"{type(exc).__name__}: {exc}"))

        return scored, excluded

    def _score_document(
        self,
        query: str,
        query_embedding: tuple[float, ...],
        document: Document,
    ) -> ScoredCandidate:
        lexical = float(self.lexical_scorer.score(query, document.text))
        if not math.isfinite(lexical) or lexical < 0.0:
            raise ScoringError(f"lexical scorer returned invalid score {lexical!r}")
        semantic = float(self.semantic_scorer.score(query_embedding, document.embedding))
        if not math.isfinite(semantic):
            raise ScoringError(f"semantic scorer returned invalid score {semantic!r}")
        return ScoredCandidate(
            document=document,
            lexical_score=lexical,
            semantic_score=max(-1.0, min(1.0, semantic)),
        )

    @staticmethod
    def _exclude(document: Document, reason: str) -> ExcludedDocument:
        logger.warning("Excluding document", document_id=document.id, reason=reason)
        return ExcludedDocument(document_id=document.id, reason=reason)

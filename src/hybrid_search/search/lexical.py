"""
Keyword relevance scorers.

Scores are raw and unbounded; the fusion stage rescales them per batch.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Protocol

from ..models import Document


_TOKEN_RE = re.compile(r"\w+")


def tokenize(text: str) -> list[str]:
    """Split *text* into case-folded word tokens."""
    return _TOKEN_RE.findall(text.casefold())


def _query_terms(query_text: str) -> list[str]:
    terms: list[str] = []
    for term in tokenize(query_text):
        if term not in terms:
            terms.append(term)
    return terms


class LexicalScorer(Protocol):
    """Scores keyword overlap between a query and a document text."""

    def score(self, query_text: str, document_text: str) -> float:
        """Return a relevance score >= 0, where 0 means no overlap."""


class TermFrequencyScorer:
    """Counts every occurrence of each distinct query term in the document."""

    def score(self, query_text: str, document_text: str) -> float:
        terms = _query_terms(query_text)
        if not terms:
            return 0.0
        counts = Counter(tokenize(document_text))
        return float(sum(counts[term] for term in terms))


@dataclass(frozen=True)
class CorpusStatistics:
    """Document frequencies used for inverse document frequency weighting."""

    document_count: int
    document_frequency: Mapping[str, int] = field(default_factory=dict)

    @classmethod
    def from_texts(cls, texts: Iterable[str]) -> CorpusStatistics:
        frequency: Counter[str] = Counter()
        count = 0
        for text in texts:
            count += 1
            frequency.update(set(tokenize(text)))
        return cls(document_count=count, document_frequency=dict(frequency))

    @classmethod
    def from_documents(cls, documents: Iterable[Document]) -> CorpusStatistics:
        return cls.from_texts(doc.text for doc in documents)

    def idf(self, term: str) -> float:
        # Smoothed so that terms present in every document still weigh > 0.
        df = self.document_frequency.get(term, 0)
        return math.log(1.0 + (max(self.document_count - df, 0) + 0.5) / (df + 0.5))


class TfIdfScorer:
    """Term frequency weighted by corpus-wide inverse document frequency."""

    def __init__(self, statistics: CorpusStatistics) -> None:
        self.statistics = statistics

    def score(self, query_text: str, document_text: str) -> float:
        terms = _query_terms(query_text)
        if not terms:
            return 0.0
        counts = Counter(tokenize(document_text))
        return math.fsum(
            counts[term] * self.statistics.idf(term) for term in terms if counts[term]
        )

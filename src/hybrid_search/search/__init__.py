"""Scoring, fusion and ranking stages of the hybrid search pipeline."""

from .engine import DEFAULT_WEIGHT, HybridSearchEngine
from .fusion import ScoreFusion, ScoreRange, blend, min_max_normalize, normalize_cosine
from .lexical import (
    CorpusStatistics,
    LexicalScorer,
    TermFrequencyScorer,
    TfIdfScorer,
    tokenize,
)
from .ranker import RankingEngine, sort_candidates
from .semantic import CosineSemanticScorer, SemanticScorer

__all__ = [
    "DEFAULT_WEIGHT",
    "HybridSearchEngine",
    "ScoreFusion",
    "ScoreRange",
    "blend",
    "min_max_normalize",
    "normalize_cosine",
    "CorpusStatistics",
    "LexicalScorer",
    "TermFrequencyScorer",
    "TfIdfScorer",
    "tokenize",
    "RankingEngine",
    "sort_candidates",
    "CosineSemanticScorer",
    "SemanticScorer",
]

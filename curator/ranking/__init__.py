"""Candidate scoring, deduplication and selection."""

from .dedupe import dedupe, dedupe_key
from .ranker import HeuristicScorer
from .scorers import (
    ContentQualityScorer,
    DiversityScorer,
    FreshnessScorer,
    SourceCredibilityScorer,
    TopicRelevanceScorer,
    TrendingScorer,
)
from .selection import (
    SelectionPipeline,
    build_quality_metrics,
    quality_threshold,
    rank,
    section_for_category,
)

__all__ = [
    "dedupe",
    "dedupe_key",
    "HeuristicScorer",
    "TopicRelevanceScorer",
    "SourceCredibilityScorer",
    "ContentQualityScorer",
    "TrendingScorer",
    "FreshnessScorer",
    "DiversityScorer",
    "SelectionPipeline",
    "build_quality_metrics",
    "quality_threshold",
    "rank",
    "section_for_category",
]

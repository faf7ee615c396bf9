"""Data models for the curation engine."""

from .candidate import Candidate, SourceRef
from .curation import CurationResult, HealthReport, QualityMetrics, ScoredCandidate, UsageStats
from .preferences import (
    ArticleLengthPreference,
    AuthorPreference,
    ContentPreferences,
    Preferences,
    ReadingPatterns,
    TopicPreference,
    default_preferences,
)

__all__ = [
    "Candidate",
    "SourceRef",
    "ScoredCandidate",
    "CurationResult",
    "QualityMetrics",
    "UsageStats",
    "HealthReport",
    "Preferences",
    "TopicPreference",
    "ContentPreferences",
    "ArticleLengthPreference",
    "ReadingPatterns",
    "AuthorPreference",
    "default_preferences",
]

"""Curation provider interface and shared helpers."""

import time
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..models import Candidate, CurationResult, Preferences, ScoredCandidate, UsageStats
from ..ranking.selection import build_quality_metrics

DEFAULT_MAX_ARTICLES = 15


class CurationProvider(ABC):
    """Abstract base class for curation strategies."""

    name: str = "provider"
    cost_per_month: str = "$0"
    effectiveness: str = ""
    features: List[str] = []

    @abstractmethod
    def curate(
        self,
        candidates: Sequence[Candidate],
        preferences: Preferences,
        max_articles: int = DEFAULT_MAX_ARTICLES,
    ) -> CurationResult:
        """
        Select and rank candidates.

        Args:
            candidates: Deduplicated candidates
            preferences: Current preferences (read-only)
            max_articles: Maximum number of articles to return

        Returns:
            Ranked, sectioned selection with metrics
        """
        pass

    @abstractmethod
    def get_usage_stats(self) -> UsageStats:
        """Get usage statistics."""
        pass

    @abstractmethod
    def is_within_budget(self) -> bool:
        """Whether the strategy may still make paid calls this period."""
        pass


class UsageTracker:
    """Request count and estimated spend of a paid provider."""

    def __init__(self, monthly_budget: float) -> None:
        self.monthly_budget = monthly_budget
        self.requests_this_month = 0
        self.estimated_cost = 0.0

    def record(self, cost: float) -> None:
        self.requests_this_month += 1
        self.estimated_cost += max(0.0, cost)

    def is_within_budget(self) -> bool:
        return self.estimated_cost < self.monthly_budget

    def stats(self) -> UsageStats:
        return UsageStats(
            requests_this_month=self.requests_this_month,
            estimated_cost=self.estimated_cost,
            monthly_budget=self.monthly_budget,
            remaining_budget=self.monthly_budget - self.estimated_cost,
        )


def build_result(
    articles: List[ScoredCandidate],
    total_processed: int,
    curation_method: str,
    started: float,
    used_fallback: bool = False,
    processing_time_ms: Optional[float] = None,
) -> CurationResult:
    """Assemble a result with quality metrics and elapsed time."""
    if processing_time_ms is None:
        processing_time_ms = (time.perf_counter() - started) * 1000
    return CurationResult(
        articles=articles,
        total_processed=total_processed,
        curation_method=curation_method,
        processing_time_ms=processing_time_ms,
        quality_metrics=build_quality_metrics(articles),
        used_fallback=used_fallback,
    )

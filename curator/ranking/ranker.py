"""Heuristic scorer that combines the individual scoring components."""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from rich.console import Console

from ..models import Candidate, Preferences, ScoredCandidate
from ..utils import utc_now
from .scorers import (
    BaseScorer,
    ContentQualityScorer,
    DiversityScorer,
    FreshnessScorer,
    SourceCredibilityScorer,
    TopicRelevanceScorer,
    TrendingScorer,
)

console = Console()

MAX_SCORE = 100.0
# Factors that are reported even when they contribute nothing.
ALWAYS_REPORTED = {"source", "quality"}


class HeuristicScorer:
    """Score candidates on a 0-100 composite of six bounded signals."""

    def __init__(self, max_workers: int = 4) -> None:
        """
        Initialize heuristic scorer.

        Args:
            max_workers: Threads used by ``score_all``
        """
        self.max_workers = max(1, max_workers)
        self.topic_scorer = TopicRelevanceScorer()
        self.source_scorer = SourceCredibilityScorer()
        self.quality_scorer = ContentQualityScorer()
        self.trending_scorer = TrendingScorer()
        self.freshness_scorer = FreshnessScorer()
        self.diversity_scorer = DiversityScorer()

    @property
    def scorers(self) -> List[BaseScorer]:
        return [
            self.topic_scorer,
            self.source_scorer,
            self.quality_scorer,
            self.trending_scorer,
            self.freshness_scorer,
            self.diversity_scorer,
        ]

    def breakdown(
        self,
        candidate: Candidate,
        preferences: Preferences,
        now: Optional[datetime] = None,
    ) -> Dict[str, float]:
        """Capped sub-score per component, keyed by component name."""
        context = {"preferences": preferences, "now": now or utc_now()}
        return {scorer.name: scorer.score(candidate, context) for scorer in self.scorers}

    @staticmethod
    def _confidence(score: float, factor_count: int) -> float:
        score_confidence = min(score / 80.0, 1.0)
        factor_confidence = min(factor_count / 5.0, 1.0)
        return (score_confidence + factor_confidence) / 2

    def score(
        self,
        candidate: Candidate,
        preferences: Preferences,
        now: Optional[datetime] = None,
    ) -> ScoredCandidate:
        """Score a single candidate. The section is assigned later by selection."""
        scores = self.breakdown(candidate, preferences, now)

        factors = [
            f"{name}(+{value:.1f})"
            for name, value in scores.items()
            if value > 0 or name in ALWAYS_REPORTED
        ]
        total = sum(scores.values())

        return ScoredCandidate.from_candidate(
            candidate,
            selection_score=min(total, MAX_SCORE),
            selection_reason=f"Rule-based: {', '.join(factors)}",
            target_section="general",
            confidence_score=self._confidence(total, len(factors)),
        )

    def score_all(
        self,
        candidates: Sequence[Candidate],
        preferences: Preferences,
        now: Optional[datetime] = None,
    ) -> List[ScoredCandidate]:
        """
        Score candidates in parallel.

        Each candidate is scored independently; one that fails to score is
        dropped with a warning and does not affect the others. Input order is
        preserved.
        """
        if not candidates:
            return []

        now = now or utc_now()
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [
                executor.submit(self.score, candidate, preferences, now)
                for candidate in candidates
            ]

        scored = []
        for candidate, future in zip(candidates, futures):
            try:
                scored.append(future.result())
            except Exception as e:
                console.print(f"[yellow]Skipping candidate '{candidate.title}': {e}[/yellow]")
        return scored

"""Free rule-based curation provider."""

import time
from typing import Optional, Sequence

from rich.console import Console

from ..models import Candidate, CurationResult, Preferences, UsageStats
from ..ranking import HeuristicScorer, SelectionPipeline
from ..utils import utc_now
from .base import DEFAULT_MAX_ARTICLES, CurationProvider, build_result

console = Console()


class HeuristicProvider(CurationProvider):
    """Heuristic scoring followed by the selection pipeline. Never leaves budget."""

    name = "Rule-Based Curation"
    cost_per_month = "$0"
    effectiveness = "70%"
    features = [
        "Smart keyword matching",
        "Source credibility scoring",
        "Trending detection",
        "Content quality assessment",
        "Category balancing",
    ]

    curation_method = "Rule-based algorithm with trend analysis"

    def __init__(
        self,
        scorer: Optional[HeuristicScorer] = None,
        selection: Optional[SelectionPipeline] = None,
        max_workers: int = 4,
    ) -> None:
        self.scorer = scorer or HeuristicScorer(max_workers=max_workers)
        self.selection = selection or SelectionPipeline()

    def curate(
        self,
        candidates: Sequence[Candidate],
        preferences: Preferences,
        max_articles: int = DEFAULT_MAX_ARTICLES,
    ) -> CurationResult:
        """Score every candidate and run the selection pipeline."""
        started = time.perf_counter()

        if not candidates:
            console.print("[yellow]No candidates to curate[/yellow]")
            return build_result([], 0, self.curation_method, started)

        console.print(f"Free tier: curating {len(candidates)} articles with rule-based scoring")

        now = utc_now()
        scored = self.scorer.score_all(candidates, preferences, now)
        selected = self.selection.select(scored, preferences, max_articles, now)

        result = build_result(selected, len(candidates), self.curation_method, started)
        console.print(
            f"Free tier: selected {len(result.articles)} articles "
            f"(avg score: {result.quality_metrics.average_score:.1f})"
        )
        return result

    def get_usage_stats(self) -> UsageStats:
        return UsageStats()

    def is_within_budget(self) -> bool:
        return True

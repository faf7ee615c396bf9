"""Shared behaviour of the paid, reasoning-service backed providers."""

import time
from abc import abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from rich.console import Console

from ..models import Candidate, CurationResult, Preferences, ScoredCandidate, UsageStats
from ..ranking.selection import SelectionPipeline, rank, section_for_category
from ..utils import contains_term, hours_since, joined_text, utc_now
from .base import DEFAULT_MAX_ARTICLES, CurationProvider, UsageTracker, build_result
from .parsing import ExternalSelection, parse_selections

console = Console()

KNOWN_SECTIONS = {"highlights", "technology", "business", "science", "general", "discovery"}
MAX_SCORE = 100.0


class LLMCurationProvider(CurationProvider):
    """
    Curation through a single external reasoning call.

    Candidates are pre-filtered to bound payload size, sent in one request,
    and the reply is validated before use. Budget exhaustion, request errors
    and malformed replies all fall back to local scoring; ``curate`` never
    raises. Accepted selections get the same per-category cap as the free
    tier before ranking.
    """

    model: str = ""
    default_monthly_budget: float = 10.0
    # Prices per 1K tokens.
    cost_per_1k_tokens: Dict[str, Dict[str, float]] = {}
    score_scale: float = 100.0
    default_confidence: float = 0.85
    fallback_confidence: float = 0.5

    max_age_hours: float = 24.0
    min_title_length: int = 10
    min_excerpt_length: int = 50
    max_candidates: int = 50

    def __init__(self, monthly_budget: Optional[float] = None) -> None:
        if monthly_budget is None:
            monthly_budget = self.default_monthly_budget
        self.usage = UsageTracker(monthly_budget)

    @property
    @abstractmethod
    def curation_method(self) -> str:
        pass

    @property
    @abstractmethod
    def fallback_method(self) -> str:
        pass

    @abstractmethod
    def build_prompt(
        self,
        candidates: Sequence[Candidate],
        preferences: Preferences,
        max_articles: int,
    ) -> str:
        pass

    @abstractmethod
    def complete(self, prompt: str) -> Tuple[str, int, int]:
        """
        Send the prompt.

        Returns:
            Reply text, input tokens, output tokens
        """
        pass

    @abstractmethod
    def fallback_score(
        self,
        candidate: Candidate,
        preferences: Preferences,
        now: datetime,
    ) -> float:
        """Local approximation of the service's weighting, uncapped."""
        pass

    def fallback_section(self, candidate: Candidate, score: float) -> str:
        return section_for_category(candidate.category)

    def fallback_candidates(
        self,
        candidates: Sequence[Candidate],
        preferences: Preferences,
    ) -> List[Candidate]:
        return list(candidates)

    def passes_basic_filter(self, candidate: Candidate, now: datetime) -> bool:
        if hours_since(candidate.published_at, now) > self.max_age_hours:
            return False
        if len(candidate.title) < self.min_title_length:
            return False
        return len(candidate.excerpt or "") >= self.min_excerpt_length

    def pre_filter(
        self,
        candidates: Sequence[Candidate],
        preferences: Preferences,
        now: datetime,
    ) -> List[Candidate]:
        """Recent, substantial candidates, newest first, capped."""
        eligible = [c for c in candidates if self.passes_basic_filter(c, now)]
        eligible.sort(key=lambda c: c.published_at, reverse=True)
        return eligible[: self.max_candidates]

    def estimate_cost(self, input_tokens: int, output_tokens: int) -> float:
        rates = self.cost_per_1k_tokens.get(self.model)
        if not rates:
            return 0.0
        return (input_tokens / 1000) * rates["input"] + (output_tokens / 1000) * rates["output"]

    def track_usage(self, input_tokens: int, output_tokens: int) -> float:
        cost = self.estimate_cost(input_tokens, output_tokens)
        self.usage.record(cost)
        console.print(
            f"[dim]{self.name} usage: {input_tokens + output_tokens} tokens, "
            f"estimated cost: ${cost:.4f}[/dim]"
        )
        return cost

    def normalize_score(self, raw_score: float) -> float:
        """Convert a score on the provider's scale to 0-100."""
        score = raw_score
        # Replies above the scale are already on 0-100.
        if raw_score <= self.score_scale:
            score = raw_score * (MAX_SCORE / self.score_scale)
        return max(0.0, min(MAX_SCORE, score))

    def to_scored(
        self,
        selections: Sequence[ExternalSelection],
        pool: Sequence[Candidate],
    ) -> List[ScoredCandidate]:
        """Join selections to candidates; unknown ids are dropped."""
        by_id = {c.id: c for c in pool}
        scored = []
        seen = set()
        for selection in selections:
            candidate = by_id.get(selection.id)
            if candidate is None or selection.id in seen:
                continue
            seen.add(selection.id)

            section = selection.target_section.strip().lower()
            if section not in KNOWN_SECTIONS:
                section = section_for_category(candidate.category)

            confidence = selection.confidence_level
            if confidence is None:
                confidence = self.default_confidence

            scored.append(
                ScoredCandidate.from_candidate(
                    candidate,
                    selection_score=self.normalize_score(selection.selection_score),
                    selection_reason=selection.selection_reason or f"Selected by {self.name}",
                    target_section=section,
                    confidence_score=confidence,
                    ai_summary=selection.ai_summary,
                )
            )
        return scored

    def curate(
        self,
        candidates: Sequence[Candidate],
        preferences: Preferences,
        max_articles: int = DEFAULT_MAX_ARTICLES,
    ) -> CurationResult:
        started = time.perf_counter()

        if not candidates:
            console.print("[yellow]No candidates to curate[/yellow]")
            return build_result([], 0, self.curation_method, started)

        console.print(f"{self.name}: curating {len(candidates)} articles")

        if not self.is_within_budget():
            console.print(f"[yellow]{self.name} budget exceeded, falling back to local curation[/yellow]")
            return self.fallback_curation(candidates, preferences, max_articles, started)

        now = utc_now()
        try:
            pool = self.pre_filter(candidates, preferences, now)
            if not pool:
                raise ValueError("no candidates passed the pre-filter")
            console.print(f"Pre-filtered to {len(pool)} articles for analysis")

            prompt = self.build_prompt(pool, preferences, max_articles)
            text, input_tokens, output_tokens = self.complete(prompt)
            self.track_usage(input_tokens, output_tokens)

            selections = parse_selections(text)
            scored = SelectionPipeline().diversify(self.to_scored(selections, pool), preferences)
            articles = rank(scored)[:max_articles]
        except Exception as e:
            console.print(f"[red]{self.name} curation failed: {e}[/red]")
            return self.fallback_curation(candidates, preferences, max_articles, started)

        result = build_result(articles, len(candidates), self.curation_method, started)
        console.print(
            f"{self.name}: selected {len(result.articles)} articles "
            f"(avg score: {result.quality_metrics.average_score:.1f})"
        )
        return result

    def fallback_curation(
        self,
        candidates: Sequence[Candidate],
        preferences: Preferences,
        max_articles: int,
        started: Optional[float] = None,
    ) -> CurationResult:
        """Deterministic local selection used whenever the service cannot be used."""
        started = started if started is not None else time.perf_counter()
        console.print(f"Using fallback curation for {self.name}")

        now = utc_now()
        scored = []
        for candidate in self.fallback_candidates(candidates, preferences):
            score = self.fallback_score(candidate, preferences, now)
            scored.append(
                ScoredCandidate.from_candidate(
                    candidate,
                    selection_score=max(0.0, min(score, MAX_SCORE)),
                    selection_reason=f"Fallback selection ({self.name} unavailable)",
                    target_section=self.fallback_section(candidate, score),
                    confidence_score=self.fallback_confidence,
                )
            )

        selected = rank(scored)[: max(0, max_articles)]
        return build_result(selected, len(candidates), self.fallback_method, started, used_fallback=True)

    def get_usage_stats(self) -> UsageStats:
        return self.usage.stats()

    def is_within_budget(self) -> bool:
        return self.usage.is_within_budget()


def keyword_matches(candidate: Candidate, preferences: Preferences, min_interest: float = 0.0):
    """Yield ``(topic, interest, keyword, in_title)`` for each matching keyword."""
    content = joined_text(candidate.title, candidate.excerpt)
    for topic, prefs in preferences.topics.items():
        if prefs.interest_score < min_interest:
            continue
        for keyword in prefs.keywords:
            if contains_term(content, keyword):
                yield topic, prefs.interest_score, keyword, contains_term(candidate.title, keyword)


def source_in(candidate: Candidate, sources: Sequence[str]) -> bool:
    name = candidate.source.name.lower()
    return any(contains_term(name, s) for s in sources)

"""Anthropic Claude-backed curation provider (premium paid tier)."""

from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple

import anthropic

from ..models import Candidate, Preferences
from ..utils import hours_since
from .llm import LLMCurationProvider, keyword_matches, source_in
from .prompts import build_claude_prompt

HIGH_QUALITY_SOURCES = ["reuters", "ap", "bbc", "wsj", "ft", "npr"]
PREMIUM_SOURCES = ["reuters", "wsj", "ft", "economist", "atlantic"]


class ClaudeProvider(LLMCurationProvider):
    """Claude implementation of the curation provider."""

    name = "Claude 3 Haiku"
    cost_per_month = "$8-15"
    effectiveness = "100%"
    features = [
        "Superior reasoning and analysis",
        "Nuanced content understanding",
        "Exceptional personalization",
        "Complex preference integration",
        "Best-in-class writing quality",
    ]

    curation_method = "Claude 3 Haiku with advanced reasoning and personalization"
    fallback_method = "Advanced fallback curation (Claude unavailable)"

    default_monthly_budget = 15.0
    cost_per_1k_tokens = {
        "claude-3-haiku-20240307": {"input": 0.00025, "output": 0.00125},
        "claude-3-5-sonnet-20241022": {"input": 0.003, "output": 0.015},
    }
    # Claude is asked for 1-10 scores.
    score_scale = 10.0
    default_confidence = 0.9
    fallback_confidence = 0.6

    max_age_hours = 48.0
    min_title_length = 15
    min_excerpt_length = 80
    max_candidates = 40

    def __init__(
        self,
        api_key: str,
        monthly_budget: Optional[float] = None,
        model: str = "claude-3-haiku-20240307",
        timeout: float = 60.0,
        client: Optional[Any] = None,
    ) -> None:
        """
        Initialize Claude provider.

        Args:
            api_key: Anthropic API key
            monthly_budget: Budget in USD for the billing period
            model: Model name to use
            timeout: Request timeout in seconds
            client: Preconfigured client (for testing)
        """
        super().__init__(monthly_budget)
        self.model = model
        self.client = client or anthropic.Anthropic(
            api_key=api_key,
            timeout=timeout,
            max_retries=0,
        )

    def interest_score(self, candidate: Candidate, preferences: Preferences, now: datetime) -> float:
        """Pre-score used to pick the candidates worth sending."""
        score = 0.0
        matched_topics = {}
        for topic, interest, _, _ in keyword_matches(candidate, preferences, min_interest=0.3):
            matched_topics[topic] = interest
        score += sum(interest * 100 for interest in matched_topics.values())

        if source_in(candidate, HIGH_QUALITY_SOURCES):
            score += 20

        hours_old = hours_since(candidate.published_at, now)
        if hours_old < 6:
            score += 15
        elif hours_old < 12:
            score += 10
        elif hours_old < 24:
            score += 5

        return score

    def pre_filter(
        self,
        candidates: Sequence[Candidate],
        preferences: Preferences,
        now: datetime,
    ) -> List[Candidate]:
        """Recent, substantial candidates ranked by interest, capped."""
        eligible = [c for c in candidates if self.passes_basic_filter(c, now)]
        eligible.sort(key=lambda c: self.interest_score(c, preferences, now), reverse=True)
        return eligible[: self.max_candidates]

    def build_prompt(
        self,
        candidates: Sequence[Candidate],
        preferences: Preferences,
        max_articles: int,
    ) -> str:
        return build_claude_prompt(candidates, preferences, max_articles)

    def complete(self, prompt: str) -> Tuple[str, int, int]:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=4096,
            temperature=0.2,
            messages=[{"role": "user", "content": prompt}],
        )

        input_tokens = output_tokens = 0
        if response.usage:
            input_tokens = response.usage.input_tokens or 0
            output_tokens = response.usage.output_tokens or 0

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        return text.strip(), input_tokens, output_tokens

    def fallback_score(
        self,
        candidate: Candidate,
        preferences: Preferences,
        now: datetime,
    ) -> float:
        score = 0.0
        for _, interest, _, in_title in keyword_matches(candidate, preferences):
            score += interest * 20
            if in_title:
                score += 10

        if candidate.read_time is not None and 3 <= candidate.read_time <= 8:
            score += 15
        if candidate.excerpt and len(candidate.excerpt) > 200:
            score += 10
        if candidate.author:
            score += 5

        if source_in(candidate, PREMIUM_SOURCES):
            score += 20

        return score

    def fallback_section(self, candidate: Candidate, score: float) -> str:
        if score > 80:
            return "highlights"
        return super().fallback_section(candidate, score)

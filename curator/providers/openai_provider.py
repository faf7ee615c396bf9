"""OpenAI-backed curation provider (standard paid tier)."""

from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple

from openai import OpenAI

from ..models import Candidate, Preferences
from ..utils import hours_since
from .llm import LLMCurationProvider, keyword_matches, source_in
from .prompts import CURATOR_SYSTEM_PROMPT, build_openai_prompt

TRUSTED_SOURCES = ["reuters", "ap", "bbc", "wsj", "ft", "npr"]


class OpenAIProvider(LLMCurationProvider):
    """OpenAI implementation of the curation provider."""

    name = "OpenAI GPT-4o Mini"
    cost_per_month = "$3-7"
    effectiveness = "90%"
    features = [
        "AI reasoning and analysis",
        "Personalized content summaries",
        "Advanced topic discovery",
        "Context-aware selection",
        "Natural language insights",
    ]

    curation_method = "OpenAI GPT-4o Mini with intelligent reasoning"
    fallback_method = "Fallback rule-based (OpenAI unavailable)"

    default_monthly_budget = 10.0
    cost_per_1k_tokens = {
        "gpt-4o-mini": {"input": 0.00015, "output": 0.0006},
        "gpt-4o": {"input": 0.005, "output": 0.015},
        "gpt-3.5-turbo": {"input": 0.001, "output": 0.002},
    }
    score_scale = 100.0
    default_confidence = 0.85
    fallback_confidence = 0.3

    max_age_hours = 24.0
    min_title_length = 10
    min_excerpt_length = 50
    max_candidates = 50

    def __init__(
        self,
        api_key: str,
        monthly_budget: Optional[float] = None,
        model: str = "gpt-4o-mini",
        timeout: float = 60.0,
        base_url: Optional[str] = None,
        client: Optional[Any] = None,
    ) -> None:
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            monthly_budget: Budget in USD for the billing period
            model: Model name to use
            timeout: Request timeout in seconds
            base_url: Custom base URL (for testing)
            client: Preconfigured client (for testing)
        """
        super().__init__(monthly_budget)
        self.model = model
        self.client = client or OpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
        )

    def build_prompt(
        self,
        candidates: Sequence[Candidate],
        preferences: Preferences,
        max_articles: int,
    ) -> str:
        return build_openai_prompt(candidates, preferences, max_articles)

    def complete(self, prompt: str) -> Tuple[str, int, int]:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": CURATOR_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=0.3,
            max_tokens=4000,
        )

        input_tokens = output_tokens = 0
        if response.usage:
            input_tokens = response.usage.prompt_tokens or 0
            output_tokens = response.usage.completion_tokens or 0

        content = response.choices[0].message.content or ""
        return content.strip(), input_tokens, output_tokens

    def fallback_candidates(
        self,
        candidates: Sequence[Candidate],
        preferences: Preferences,
    ) -> List[Candidate]:
        """Candidates matching at least one topic keyword, or all when none do."""
        matching = [c for c in candidates if any(keyword_matches(c, preferences))]
        return matching or list(candidates)

    def fallback_score(
        self,
        candidate: Candidate,
        preferences: Preferences,
        now: datetime,
    ) -> float:
        score = 30.0
        for _, interest, _, in_title in keyword_matches(candidate, preferences):
            score += interest * 10
            if in_title:
                score += 5

        if source_in(candidate, TRUSTED_SOURCES):
            score += 10

        hours_old = hours_since(candidate.published_at, now)
        if hours_old < 6:
            score += 10
        elif hours_old < 24:
            score += 5

        return score

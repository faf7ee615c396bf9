"""Individual scoring components for heuristic curation."""

import re
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Tuple
from urllib.parse import urlparse

from ..models import Candidate, Preferences
from ..utils import contains_term, hours_since, joined_text

HIGH_CREDIBILITY_SOURCES = ["reuters", "ap", "bbc", "npr", "pbs", "wsj", "ft", "economist"]
MEDIUM_CREDIBILITY_SOURCES = ["cnn", "nytimes", "washingtonpost", "guardian", "bloomberg", "axios"]

TRENDING_KEYWORDS = [
    "breaking",
    "urgent",
    "developing",
    "update",
    "exclusive",
    "major",
    "significant",
    "important",
    "critical",
    "emergency",
]


class BaseScorer(ABC):
    """Base class for scoring components."""

    name: str = "base"
    max_score: float = 0.0

    @abstractmethod
    def score(self, candidate: Candidate, context: Optional[Dict] = None) -> float:
        """
        Score a candidate within ``[0, max_score]``.

        Args:
            candidate: Candidate to score
            context: Shared context (``preferences``, ``now``)

        Returns:
            Bounded sub-score
        """
        pass

    def clamp(self, value: float) -> float:
        return max(0.0, min(self.max_score, value))


class TopicRelevanceScorer(BaseScorer):
    """Score keyword and category overlap with the user's topics."""

    name = "topic"
    max_score = 40.0

    def __init__(
        self,
        keyword_weight: float = 10.0,
        title_bonus: float = 5.0,
        tag_bonus: float = 3.0,
        category_weight: float = 15.0,
    ) -> None:
        """
        Initialize topic scorer.

        Args:
            keyword_weight: Points per matching keyword, scaled by interest
            title_bonus: Extra points when the keyword is in the title
            tag_bonus: Extra points when the keyword is in a tag
            category_weight: Points for a direct category match, scaled by interest
        """
        self.keyword_weight = keyword_weight
        self.title_bonus = title_bonus
        self.tag_bonus = tag_bonus
        self.category_weight = category_weight

    def topic_relevance(self, candidate: Candidate, preferences: Preferences) -> Tuple[float, str]:
        """Best uncapped relevance across topics and the topic that produced it."""
        content = joined_text(
            candidate.title,
            candidate.excerpt,
            extra=list(candidate.tags) + [candidate.category],
        )

        best_score = 0.0
        best_topic = ""
        for topic, topic_prefs in preferences.topics.items():
            interest = topic_prefs.interest_score
            if interest <= 0:
                continue

            relevance = 0.0
            for keyword in topic_prefs.keywords:
                if not contains_term(content, keyword):
                    continue
                relevance += interest * self.keyword_weight
                if contains_term(candidate.title, keyword):
                    relevance += self.title_bonus
                if any(contains_term(tag, keyword) for tag in candidate.tags):
                    relevance += self.tag_bonus

            if candidate.category == topic or topic in candidate.tags:
                relevance += interest * self.category_weight

            if relevance > best_score:
                best_score = relevance
                best_topic = topic

        return best_score, best_topic

    def score(self, candidate: Candidate, context: Optional[Dict] = None) -> float:
        preferences = (context or {}).get("preferences")
        if preferences is None:
            return 0.0
        relevance, _ = self.topic_relevance(candidate, preferences)
        return self.clamp(relevance)


class SourceCredibilityScorer(BaseScorer):
    """Fixed lookup of source trust."""

    name = "source"
    max_score = 15.0

    def __init__(
        self,
        high_credibility: Iterable[str] = HIGH_CREDIBILITY_SOURCES,
        medium_credibility: Iterable[str] = MEDIUM_CREDIBILITY_SOURCES,
    ) -> None:
        self.high_credibility = [s.lower() for s in high_credibility]
        self.medium_credibility = [s.lower() for s in medium_credibility]

    @staticmethod
    def _tokens(text: str) -> List[str]:
        return [t for t in re.split(r"[^a-z0-9]+", text.lower()) if t]

    def _matches(self, candidate: Candidate, sources: List[str]) -> bool:
        # Short names like "ap" must match a whole token; longer ones may
        # appear inside a compacted name such as "thewashingtonpost".
        names = [candidate.source.id, candidate.source.name]
        tokens = set()
        compact = []
        for name in names:
            tokens.update(self._tokens(name))
            compact.append("".join(self._tokens(name)))

        for source in sources:
            if source in tokens:
                return True
            if len(source) > 3 and any(source in c for c in compact):
                return True
        return False

    @staticmethod
    def _is_institutional(candidate: Candidate) -> bool:
        hosts = [candidate.source.id, candidate.source.name]
        for url in (candidate.source.url, candidate.url):
            if url:
                hosts.append(urlparse(url).hostname or "")
        return any(h.lower().rstrip("/").endswith((".edu", ".gov")) for h in hosts if h)

    def score(self, candidate: Candidate, context: Optional[Dict] = None) -> float:
        if self._matches(candidate, self.high_credibility):
            return 15.0
        if self._matches(candidate, self.medium_credibility):
            return 10.0
        if self._is_institutional(candidate):
            return 12.0
        return 5.0


class ContentQualityScorer(BaseScorer):
    """Score structural signals of a substantial article."""

    name = "quality"
    max_score = 20.0

    def score(self, candidate: Candidate, context: Optional[Dict] = None) -> float:
        score = 0.0

        if 30 <= len(candidate.title) <= 100:
            score += 5
        if candidate.excerpt and 100 <= len(candidate.excerpt) <= 300:
            score += 5
        if len(candidate.tags) >= 2:
            score += 3
        if candidate.author and candidate.author.strip():
            score += 2
        if candidate.read_time is not None and 2 <= candidate.read_time <= 10:
            score += 5

        return self.clamp(score)


class TrendingScorer(BaseScorer):
    """Score urgency language and very recent publication."""

    name = "trending"
    max_score = 10.0

    def __init__(self, keywords: Iterable[str] = TRENDING_KEYWORDS, points_per_keyword: float = 2.0) -> None:
        self.keywords = [k.lower() for k in keywords]
        self.points_per_keyword = points_per_keyword

    def score(self, candidate: Candidate, context: Optional[Dict] = None) -> float:
        content = joined_text(candidate.title, candidate.excerpt)
        keyword_score = sum(
            self.points_per_keyword for keyword in self.keywords if contains_term(content, keyword)
        )
        score = min(keyword_score, self.max_score)

        hours_old = hours_since(candidate.published_at, (context or {}).get("now"))
        if hours_old < 2:
            score += 5
        elif hours_old < 6:
            score += 2

        return self.clamp(score)


class FreshnessScorer(BaseScorer):
    """Step function of article age."""

    name = "fresh"
    max_score = 10.0

    STEPS = ((1, 10.0), (3, 8.0), (6, 6.0), (12, 4.0), (24, 2.0))

    def score(self, candidate: Candidate, context: Optional[Dict] = None) -> float:
        hours_old = hours_since(candidate.published_at, (context or {}).get("now"))
        for max_hours, points in self.STEPS:
            if hours_old < max_hours:
                return points
        return 0.0


class DiversityScorer(BaseScorer):
    """Small seed for richly tagged candidates; real diversity is enforced at selection."""

    name = "diverse"
    max_score = 2.0

    def score(self, candidate: Candidate, context: Optional[Dict] = None) -> float:
        return self.max_score if len(candidate.tags) > 3 else 0.0

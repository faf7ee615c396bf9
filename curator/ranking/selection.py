"""Selection pipeline: threshold, diversify, boost, rank and section."""

from collections import Counter
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from ..models import Preferences, QualityMetrics, ScoredCandidate
from ..utils import hours_since, utc_now

FOCUS_CUTOFF = 0.7
FOCUS_THRESHOLD = 25.0
DEFAULT_THRESHOLD = 20.0

RECENCY_BOOSTS = ((1, 5.0), (3, 3.0), (6, 1.0))

HIGHLIGHTS_SECTION = "highlights"
DEFAULT_SECTION = "general"
CATEGORY_SECTIONS = ("technology", "business", "science")
HIGHLIGHT_SLOTS = 3
HIGHLIGHT_BAR = 60.0

MAX_SCORE = 100.0


def quality_threshold(preferences: Preferences) -> float:
    """Quality floor; stricter when the user favours focus over diversity."""
    if preferences.reading_patterns.diversity_vs_focus > FOCUS_CUTOFF:
        return FOCUS_THRESHOLD
    return DEFAULT_THRESHOLD


def section_for_category(category: Optional[str]) -> str:
    """Display section for a non-highlighted article."""
    if category in CATEGORY_SECTIONS:
        return category
    return DEFAULT_SECTION


def recency_boost(published: datetime, now: Optional[datetime] = None) -> float:
    hours_old = hours_since(published, now)
    for max_hours, boost in RECENCY_BOOSTS:
        if hours_old < max_hours:
            return boost
    return 0.0


def rank(articles: Sequence[ScoredCandidate]) -> List[ScoredCandidate]:
    """Stable descending sort by selection score."""
    return sorted(articles, key=lambda a: a.selection_score, reverse=True)


class SelectionPipeline:
    """Turn scored candidates into a bounded, diversified, sectioned selection."""

    def filter_threshold(
        self,
        articles: Sequence[ScoredCandidate],
        preferences: Preferences,
    ) -> List[ScoredCandidate]:
        threshold = quality_threshold(preferences)
        return [a for a in articles if a.selection_score >= threshold]

    def diversify(
        self,
        articles: Sequence[ScoredCandidate],
        preferences: Preferences,
    ) -> List[ScoredCandidate]:
        """Keep at most ``max_articles_per_category`` of the best per category."""
        max_per_category = preferences.reading_patterns.max_articles_per_category

        groups: Dict[str, List[ScoredCandidate]] = {}
        for article in articles:
            groups.setdefault(article.category or DEFAULT_SECTION, []).append(article)

        diversified = []
        for group in groups.values():
            diversified.extend(rank(group)[:max_per_category])
        return diversified

    def apply_recency_boost(
        self,
        articles: Sequence[ScoredCandidate],
        now: Optional[datetime] = None,
    ) -> List[ScoredCandidate]:
        boosted = []
        for article in articles:
            boost = recency_boost(article.published_at, now)
            if boost:
                article = article.model_copy(
                    update={"selection_score": min(article.selection_score + boost, MAX_SCORE)}
                )
            boosted.append(article)
        return boosted

    def assign_sections(self, articles: Sequence[ScoredCandidate]) -> List[ScoredCandidate]:
        """
        Tag each article with a display section without reordering.

        The top ``HIGHLIGHT_SLOTS`` articles by score go to highlights when
        they clear ``HIGHLIGHT_BAR``; the rest map to their category section.
        """
        by_score = sorted(
            range(len(articles)),
            key=lambda i: articles[i].selection_score,
            reverse=True,
        )
        highlighted = {
            i for i in by_score[:HIGHLIGHT_SLOTS] if articles[i].selection_score > HIGHLIGHT_BAR
        }

        sectioned = []
        for i, article in enumerate(articles):
            section = HIGHLIGHTS_SECTION if i in highlighted else section_for_category(article.category)
            sectioned.append(article.model_copy(update={"target_section": section}))
        return sectioned

    def select(
        self,
        articles: Sequence[ScoredCandidate],
        preferences: Preferences,
        max_articles: int,
        now: Optional[datetime] = None,
    ) -> List[ScoredCandidate]:
        """
        Run the selection steps in order.

        Args:
            articles: Scored candidates
            preferences: Current preferences
            max_articles: Target count
            now: Reference time for the recency boost

        Returns:
            At most ``max_articles`` articles, ranked and sectioned
        """
        if max_articles <= 0:
            return []

        now = now or utc_now()
        filtered = self.filter_threshold(articles, preferences)
        diversified = self.diversify(filtered, preferences)
        boosted = self.apply_recency_boost(diversified, now)
        ranked = rank(boosted)[:max_articles]
        return self.assign_sections(ranked)


def build_quality_metrics(articles: Sequence[ScoredCandidate]) -> QualityMetrics:
    """Mean score, per-section counts and distinct sources of a selection."""
    if not articles:
        return QualityMetrics()

    return QualityMetrics(
        average_score=sum(a.selection_score for a in articles) / len(articles),
        section_distribution=dict(Counter(a.target_section for a in articles)),
        sources_diversity=len({a.source.id for a in articles}),
    )

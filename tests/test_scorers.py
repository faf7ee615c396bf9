# tests/test_scorers.py
import pytest

from curator.models import Preferences, TopicPreference
from curator.ranking import (
    ContentQualityScorer,
    DiversityScorer,
    FreshnessScorer,
    HeuristicScorer,
    SourceCredibilityScorer,
    TopicRelevanceScorer,
    TrendingScorer,
)


@pytest.fixture()
def tech_preferences():
    return Preferences(
        topics={
            "technology": TopicPreference(
                interest_score=0.9,
                keywords=["ai", "software", "machine learning"],
            )
        }
    )


def test_fresh_ai_story_clears_highlight_bar(make_candidate, tech_preferences, now):
    candidate = make_candidate(
        "AI breakthrough in software",
        hours_old=0.5,
        source="Reuters",
        category="technology",
        tags=["ai", "software", "research", "startups"],
        author="Jane Doe",
        read_time=4,
    )
    scorer = HeuristicScorer()

    breakdown = scorer.breakdown(candidate, tech_preferences, now)
    scored = scorer.score(candidate, tech_preferences, now)

    assert breakdown["topic"] == 40.0
    assert breakdown["fresh"] == 10.0
    assert breakdown["trending"] >= 5.0
    assert scored.selection_score > 60
    assert scored.target_section == "general"


def test_sub_scores_respect_caps(make_candidate, tech_preferences, now):
    candidates = [
        make_candidate(
            "Breaking urgent exclusive major AI software update, critical emergency",
            hours_old=0.1,
            category="technology",
            tags=["ai", "software", "machine learning", "technology", "extra"],
            excerpt="ai software machine learning " * 10,
            author="Someone",
            read_time=5,
        ),
        make_candidate("Short", hours_old=100, excerpt=None),
    ]
    scorer = HeuristicScorer()
    for candidate in candidates:
        context_scores = scorer.breakdown(candidate, tech_preferences, now)
        for component in scorer.scorers:
            assert 0 <= context_scores[component.name] <= component.max_score
        assert 0 <= scorer.score(candidate, tech_preferences, now).selection_score <= 100


def test_reason_lists_source_and_quality_even_when_zero(make_candidate, now):
    candidate = make_candidate("Short", hours_old=48, excerpt=None)
    scored = HeuristicScorer().score(candidate, Preferences(), now)
    assert scored.selection_reason.startswith("Rule-based: ")
    assert "source(+5.0)" in scored.selection_reason
    assert "quality(+0.0)" in scored.selection_reason
    assert "topic" not in scored.selection_reason


def test_keywords_match_whole_words_only(make_candidate, tech_preferences):
    scorer = TopicRelevanceScorer()
    candidate = make_candidate("Said the captain of the team", category="sports")
    relevance, topic = scorer.topic_relevance(candidate, tech_preferences)
    assert relevance == 0
    assert topic == ""


def test_category_match_adds_weighted_points(make_candidate, tech_preferences):
    scorer = TopicRelevanceScorer()
    candidate = make_candidate("Quarterly gadget roundup", category="technology")
    relevance, topic = scorer.topic_relevance(candidate, tech_preferences)
    assert relevance == pytest.approx(0.9 * 15)
    assert topic == "technology"


@pytest.mark.parametrize(
    "name, source_id, expected",
    [
        ("Reuters", "reuters", 15.0),
        ("AP", "ap", 15.0),
        ("The Washington Post", "washington-post", 10.0),
        ("Rappler", "rappler", 5.0),
        ("MIT News", "news.mit.edu", 12.0),
        ("Personal Blog", "blog", 5.0),
    ],
)
def test_source_credibility(make_candidate, name, source_id, expected):
    candidate = make_candidate(source=name, source_id=source_id)
    assert SourceCredibilityScorer().score(candidate) == expected


def test_content_quality_components(make_candidate):
    candidate = make_candidate(
        "A headline of reasonable length for readers",
        excerpt="x" * 150,
        tags=["a", "b"],
        author="Writer",
        read_time=6,
    )
    assert ContentQualityScorer().score(candidate) == 20.0


def test_trending_keywords_and_recency(make_candidate, now):
    candidate = make_candidate("Breaking: major update on the story", hours_old=1)
    score = TrendingScorer().score(candidate, {"now": now})
    assert score == 10.0

    older = make_candidate("Breaking news from yesterday", hours_old=30)
    assert TrendingScorer().score(older, {"now": now}) == 2.0


@pytest.mark.parametrize(
    "hours_old, expected",
    [(0.5, 10.0), (2, 8.0), (5, 6.0), (10, 4.0), (20, 2.0), (30, 0.0)],
)
def test_freshness_steps(make_candidate, now, hours_old, expected):
    candidate = make_candidate(hours_old=hours_old)
    assert FreshnessScorer().score(candidate, {"now": now}) == expected


def test_diversity_seed(make_candidate):
    assert DiversityScorer().score(make_candidate(tags=["a", "b", "c", "d"])) == 2.0
    assert DiversityScorer().score(make_candidate(tags=["a", "b", "c"])) == 0.0


class ExplodingTopicScorer(TopicRelevanceScorer):
    def score(self, candidate, context=None):
        if "explode" in candidate.title:
            raise RuntimeError("boom")
        return super().score(candidate, context)


def test_score_all_drops_failing_candidates(make_candidate, preferences, now):
    scorer = HeuristicScorer(max_workers=3)
    scorer.topic_scorer = ExplodingTopicScorer()
    candidates = [
        make_candidate("First good story"),
        make_candidate("This one will explode"),
        make_candidate("Second good story"),
    ]

    scored = scorer.score_all(candidates, preferences, now)

    assert [s.title for s in scored] == ["First good story", "Second good story"]


def test_confidence_formula(make_candidate, tech_preferences, now):
    candidate = make_candidate(
        "AI breakthrough in software",
        hours_old=0.5,
        source="Reuters",
        category="technology",
        tags=["ai", "software", "research", "startups"],
    )
    scored = HeuristicScorer().score(candidate, tech_preferences, now)
    assert scored.confidence_score == pytest.approx(1.0)

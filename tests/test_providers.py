# tests/test_providers.py
from datetime import timedelta

import pytest

from curator.models import CurationResult
from curator.providers import ClaudeProvider, HeuristicProvider, OpenAIProvider


@pytest.fixture()
def pool(make_candidate):
    return [
        make_candidate(
            "New AI model improves software testing",
            hours_old=1,
            source="Reuters",
            category="technology",
            tags=["ai"],
            author="Jane Doe",
            read_time=5,
        ),
        make_candidate("Startup funding reaches record market high", hours_old=3, category="business"),
        make_candidate("Research study maps climate shifts", hours_old=6, category="science"),
        make_candidate("Local bakery celebrates anniversary", hours_old=10, category="lifestyle"),
    ]


def assert_valid_result(result, max_articles):
    assert isinstance(result, CurationResult)
    assert len(result.articles) <= max_articles
    assert all(0 <= a.selection_score <= 100 for a in result.articles)


def test_heuristic_provider_selects_and_sections(pool, preferences):
    provider = HeuristicProvider()
    result = provider.curate(pool, preferences, 3)

    assert_valid_result(result, 3)
    assert result.total_processed == 4
    assert result.curation_method == "Rule-based algorithm with trend analysis"
    assert not result.used_fallback
    assert result.articles[0].title == "New AI model improves software testing"
    assert provider.is_within_budget()
    assert provider.get_usage_stats().monthly_budget is None


def test_heuristic_provider_empty_input(preferences):
    result = HeuristicProvider().curate([], preferences)
    assert result.articles == []
    assert result.total_processed == 0


def test_openai_provider_uses_reply(pool, preferences, fake_openai, selections_json):
    reply = selections_json(
        {"id": pool[1].id, "selection_score": 70, "target_section": "business", "selection_reason": "Funding news"},
        {"id": pool[0].id, "selection_score": 92, "target_section": "highlights", "ai_summary": "AI tests code."},
        {"id": "not-a-candidate", "selection_score": 99, "target_section": "general"},
    )
    client = fake_openai(content=reply)
    provider = OpenAIProvider("test-key", client=client)

    result = provider.curate(pool, preferences, 5)

    assert_valid_result(result, 5)
    assert not result.used_fallback
    assert [a.id for a in result.articles] == [pool[0].id, pool[1].id]
    assert result.articles[0].target_section == "highlights"
    assert result.articles[0].ai_summary == "AI tests code."
    assert result.articles[0].confidence_score == pytest.approx(0.85)
    assert result.articles[1].selection_reason == "Funding news"
    assert len(client.calls) == 1
    assert client.calls[0]["model"] == "gpt-4o-mini"
    assert provider.get_usage_stats().requests_this_month == 1


def test_openai_pre_filter_window(make_candidate, preferences, fake_openai):
    provider = OpenAIProvider("test-key", client=fake_openai())
    candidates = [
        make_candidate("Fresh and substantial article", hours_old=2),
        make_candidate("Too old to be considered now", hours_old=30),
        make_candidate("Short", hours_old=1),
        make_candidate("No excerpt on this article", hours_old=1, excerpt="tiny"),
    ]
    pool = provider.pre_filter(candidates, preferences, candidates[0].published_at + timedelta(hours=2))
    assert [c.title for c in pool] == ["Fresh and substantial article"]


def test_claude_scores_are_rescaled(pool, preferences, fake_anthropic, selections_json):
    reply = selections_json(
        {"id": pool[0].id, "selection_score": 9.2, "target_section": "highlights", "confidence_level": 0.95},
        {"id": pool[1].id, "selection_score": 7, "target_section": "made-up-section"},
    )
    client = fake_anthropic(content=reply)
    provider = ClaudeProvider("test-key", client=client)

    result = provider.curate(pool, preferences, 5)

    assert not result.used_fallback
    assert [a.selection_score for a in result.articles] == [pytest.approx(92), pytest.approx(70)]
    assert result.articles[0].confidence_score == 0.95
    assert result.articles[1].confidence_score == 0.9
    assert result.articles[1].target_section == "business"
    assert client.calls[0]["model"] == "claude-3-haiku-20240307"


def test_claude_pre_filter_prefers_interesting_candidates(make_candidate, preferences, fake_anthropic):
    provider = ClaudeProvider("test-key", client=fake_anthropic())
    provider.max_candidates = 1
    boring = make_candidate("Town hall meeting scheduled for Tuesday", hours_old=1)
    relevant = make_candidate("Machine learning software ships to developers", hours_old=20)
    pool = provider.pre_filter([boring, relevant], preferences, boring.published_at)
    assert pool == [relevant]


@pytest.mark.parametrize(
    "error",
    [
        TimeoutError("timed out"),
        RuntimeError("service unavailable"),
    ],
)
def test_request_errors_fall_back(pool, preferences, fake_openai, error):
    client = fake_openai(error=error)
    provider = OpenAIProvider("test-key", client=client)

    result = provider.curate(pool, preferences, 2)

    assert_valid_result(result, 2)
    assert result.used_fallback
    assert result.curation_method == "Fallback rule-based (OpenAI unavailable)"
    assert all(a.confidence_score == 0.3 for a in result.articles)
    assert provider.get_usage_stats().requests_this_month == 0


@pytest.mark.parametrize(
    "reply",
    [
        "Sorry, I cannot help with that.",
        '[{"id": "x", "selection_score": "high", "target_section": "general"}]',
        "[not json]",
    ],
)
def test_garbage_replies_fall_back(pool, preferences, fake_anthropic, reply):
    provider = ClaudeProvider("test-key", client=fake_anthropic(content=reply))
    result = provider.curate(pool, preferences, 3)
    assert_valid_result(result, 3)
    assert result.used_fallback
    assert result.curation_method == "Advanced fallback curation (Claude unavailable)"


def test_empty_pre_filter_falls_back_without_call(make_candidate, preferences, fake_openai):
    client = fake_openai()
    provider = OpenAIProvider("test-key", client=client)
    stale = [make_candidate("An article from last week", hours_old=200)]

    result = provider.curate(stale, preferences, 5)

    assert result.used_fallback
    assert client.calls == []


def test_budget_exhaustion_routes_to_fallback(pool, preferences, fake_openai, selections_json):
    reply = selections_json({"id": pool[0].id, "selection_score": 80, "target_section": "technology"})
    # 200K input + ~33K output tokens on gpt-4o-mini is about $0.05.
    client = fake_openai(content=reply, prompt_tokens=200_000, completion_tokens=33_334)
    provider = OpenAIProvider("test-key", monthly_budget=0.01, client=client)

    first = provider.curate(pool, preferences, 3)
    assert not first.used_fallback
    assert provider.get_usage_stats().estimated_cost == pytest.approx(0.05, abs=1e-4)
    assert not provider.is_within_budget()

    second = provider.curate(pool, preferences, 3)
    assert second.used_fallback
    assert len(client.calls) == 1


def test_zero_budget_never_calls_out(pool, preferences, fake_anthropic):
    client = fake_anthropic()
    provider = ClaudeProvider("test-key", monthly_budget=0, client=client)
    result = provider.curate(pool, preferences, 3)
    assert result.used_fallback
    assert client.calls == []


def test_openai_fallback_prefers_keyword_matches(pool, preferences):
    provider = OpenAIProvider("test-key", client=object())
    result = provider.fallback_curation(pool, preferences, 10)

    titles = [a.title for a in result.articles]
    assert "Local bakery celebrates anniversary" not in titles
    assert titles[0] == "New AI model improves software testing"
    assert result.articles[0].target_section == "technology"


def test_claude_fallback_highlights_strong_matches(pool, preferences):
    provider = ClaudeProvider("test-key", client=object())
    result = provider.fallback_curation(pool, preferences, 10)

    assert len(result.articles) == 4
    top = result.articles[0]
    assert top.title == "New AI model improves software testing"
    assert top.confidence_score == 0.6
    assert all(a.selection_score <= 100 for a in result.articles)


def test_fallback_is_deterministic(pool, preferences):
    provider = OpenAIProvider("test-key", client=object())
    first = provider.fallback_curation(pool, preferences, 4)
    second = provider.fallback_curation(pool, preferences, 4)
    assert [(a.id, a.selection_score) for a in first.articles] == [
        (a.id, a.selection_score) for a in second.articles
    ]


def test_usage_stats_report_remaining_budget(fake_openai):
    provider = OpenAIProvider("test-key", client=fake_openai())
    provider.track_usage(10_000, 1_000)
    stats = provider.get_usage_stats()
    assert stats.requests_this_month == 1
    assert stats.estimated_cost == pytest.approx(0.0015 + 0.0006)
    assert stats.remaining_budget == pytest.approx(10 - stats.estimated_cost)


def test_paid_providers_build_real_clients_from_float_timeout():
    claude = ClaudeProvider("test-key", timeout=12.5)
    openai = OpenAIProvider("test-key", timeout=12.5)
    assert claude.client.timeout == 12.5
    assert openai.client.timeout == 12.5


def test_reply_selections_are_capped_per_category(make_candidate, preferences, fake_openai, selections_json):
    preferences.reading_patterns.max_articles_per_category = 2
    tech = [
        make_candidate(f"Technology story number {i} about chips", hours_old=i + 1, category="technology")
        for i in range(4)
    ]
    business = make_candidate("Quarterly earnings beat expectations", hours_old=2, category="business")
    reply = selections_json(
        *[
            {"id": c.id, "selection_score": 95 - i, "target_section": "technology"}
            for i, c in enumerate(tech)
        ],
        {"id": business.id, "selection_score": 60, "target_section": "business"},
    )
    provider = OpenAIProvider("test-key", client=fake_openai(content=reply))

    result = provider.curate(tech + [business], preferences, 10)

    assert not result.used_fallback
    assert [a.id for a in result.articles] == [tech[0].id, tech[1].id, business.id]


def test_bracketed_prose_in_reply_is_not_a_failure(pool, preferences, fake_anthropic):
    reply = (
        f"Looked at [ID: {pool[0].id}] first.\n"
        f'[{{"id": "{pool[0].id}", "selection_score": 8, "target_section": "technology"}}]\n'
        "More detail available [if needed]."
    )
    provider = ClaudeProvider("test-key", client=fake_anthropic(content=reply))

    result = provider.curate(pool, preferences, 3)

    assert not result.used_fallback
    assert [a.id for a in result.articles] == [pool[0].id]

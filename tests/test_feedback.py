# tests/test_feedback.py
import threading

import pytest

from curator.models import Preferences, TopicPreference
from curator.preferences import FeedbackAdapter, FeedbackSignal, PreferenceStore, build_feedback_update
from curator.preferences import save_preferences


@pytest.fixture()
def adapter(store):
    return FeedbackAdapter(store)


def test_approve_raises_category_interest(adapter, make_candidate):
    candidate = make_candidate(category="technology")
    updated = adapter.apply_feedback(candidate, FeedbackSignal.APPROVE)
    assert updated.topics["technology"].interest_score == pytest.approx(0.85)


def test_reject_lowers_category_interest(adapter, make_candidate):
    candidate = make_candidate(category="business")
    updated = adapter.apply_feedback(candidate, FeedbackSignal.REJECT)
    assert updated.topics["business"].interest_score == pytest.approx(0.55)


def test_scores_clamp_at_bounds(tmp_path, make_candidate):
    path = tmp_path / "prefs.json"
    save_preferences(
        Preferences(
            topics={
                "technology": TopicPreference(interest_score=0.98),
                "business": TopicPreference(interest_score=0.02),
            }
        ),
        path,
    )
    adapter = FeedbackAdapter(PreferenceStore(path))

    high = adapter.apply_feedback(make_candidate(category="technology"), FeedbackSignal.APPROVE)
    low = adapter.apply_feedback(make_candidate(category="business"), FeedbackSignal.REJECT)

    assert high.topics["technology"].interest_score == 1.0
    assert low.topics["business"].interest_score == 0.0


def test_opposite_signals_do_not_drift(adapter, make_candidate):
    candidate = make_candidate(category="science")
    for _ in range(25):
        adapter.apply_feedback(candidate, FeedbackSignal.APPROVE)
        prefs = adapter.apply_feedback(candidate, FeedbackSignal.REJECT)
    assert prefs.topics["science"].interest_score == pytest.approx(0.6)


def test_subtopics_and_author_adjusted(adapter, make_candidate):
    candidate = make_candidate(
        category="technology",
        tags=["artificial_intelligence", "unrelated"],
        author="Jane Doe",
    )
    updated = adapter.apply_feedback(candidate, FeedbackSignal.APPROVE)

    assert updated.topics["technology"].subtopics["artificial_intelligence"] == pytest.approx(0.85)
    assert updated.topics["technology"].subtopics["open_source"] == pytest.approx(0.6)
    assert "unrelated" not in updated.topics["technology"].subtopics
    assert updated.authors["Jane Doe"].score == pytest.approx(0.55)


def test_unknown_category_only_touches_author(preferences, make_candidate):
    candidate = make_candidate(category="sports", author="Sam Poe")
    update = build_feedback_update(preferences, candidate, FeedbackSignal.REJECT)
    assert update == {"authors": {"Sam Poe": {"score": 0.45}}}


def test_concurrent_feedback_applies_every_signal(adapter, store, make_candidate):
    candidate = make_candidate(category="business")
    threads = [
        threading.Thread(target=adapter.apply_feedback, args=(candidate, FeedbackSignal.APPROVE))
        for _ in range(6)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert store.get().topics["business"].interest_score == pytest.approx(0.9)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("approve", FeedbackSignal.APPROVE),
        ("UPVOTE", FeedbackSignal.APPROVE),
        ("+1", FeedbackSignal.APPROVE),
        ("reject", FeedbackSignal.REJECT),
        ("downvote", FeedbackSignal.REJECT),
        (" -1 ", FeedbackSignal.REJECT),
    ],
)
def test_signal_parsing(value, expected):
    assert FeedbackSignal.parse(value) is expected


def test_unknown_signal_rejected():
    with pytest.raises(ValueError):
        FeedbackSignal.parse("meh")

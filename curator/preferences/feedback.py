"""Adapt preferences from approve/reject feedback."""

from enum import Enum
from typing import Any, Dict

from rich.console import Console

from ..models import Candidate, Preferences
from .store import PreferenceStore

console = Console()

DEFAULT_ADJUSTMENT = 0.05
NEUTRAL_AUTHOR_SCORE = 0.5


class FeedbackSignal(str, Enum):
    """User judgment on a curated article."""

    APPROVE = "approve"
    REJECT = "reject"

    @classmethod
    def parse(cls, value: str) -> "FeedbackSignal":
        """Parse a signal, accepting ``upvote``/``downvote`` and ``+1``/``-1``."""
        aliases = {
            "approve": cls.APPROVE,
            "upvote": cls.APPROVE,
            "+1": cls.APPROVE,
            "reject": cls.REJECT,
            "downvote": cls.REJECT,
            "-1": cls.REJECT,
        }
        try:
            return aliases[value.strip().lower()]
        except KeyError:
            raise ValueError(f"Unknown feedback signal: {value!r}") from None


def adjust(score: float, delta: float) -> float:
    """Apply ``delta`` and clamp to [0, 1]."""
    return round(max(0.0, min(1.0, score + delta)), 6)


def build_feedback_update(
    preferences: Preferences,
    candidate: Candidate,
    signal: FeedbackSignal,
    adjustment: float = DEFAULT_ADJUSTMENT,
) -> Dict[str, Any]:
    """
    Partial preference document for one feedback event.

    Adjusts the candidate's category topic, every subtopic named by one of
    its tags, and its author (created at a neutral score when unknown).
    """
    delta = adjustment if signal == FeedbackSignal.APPROVE else -adjustment
    topics: Dict[str, Dict[str, Any]] = {}

    topic = preferences.topics.get(candidate.category)
    if topic is not None:
        topics[candidate.category] = {"interest_score": adjust(topic.interest_score, delta)}

    for tag in candidate.tags:
        for name, topic_prefs in preferences.topics.items():
            if not topic_prefs.subtopics or tag not in topic_prefs.subtopics:
                continue
            entry = topics.setdefault(name, {})
            entry.setdefault("subtopics", {})[tag] = adjust(topic_prefs.subtopics[tag], delta)

    update: Dict[str, Any] = {}
    if topics:
        update["topics"] = topics

    author = (candidate.author or "").strip()
    if author:
        current = preferences.authors.get(author)
        score = current.score if current is not None else NEUTRAL_AUTHOR_SCORE
        update["authors"] = {author: {"score": adjust(score, delta)}}

    return update


class FeedbackAdapter:
    """Turn feedback signals into preference updates."""

    def __init__(self, store: PreferenceStore, adjustment: float = DEFAULT_ADJUSTMENT) -> None:
        """
        Initialize feedback adapter.

        Args:
            store: Preference store to mutate
            adjustment: Fixed step applied per signal
        """
        self.store = store
        self.adjustment = adjustment

    def apply_feedback(self, candidate: Candidate, signal: FeedbackSignal) -> Preferences:
        """Apply one signal as a single atomic store update."""
        if isinstance(signal, str) and not isinstance(signal, FeedbackSignal):
            signal = FeedbackSignal.parse(signal)

        updated = self.store.modify(
            lambda prefs: build_feedback_update(prefs, candidate, signal, self.adjustment)
        )
        console.print(f"[green]Applied {signal.value} feedback for '{candidate.title}'[/green]")
        return updated

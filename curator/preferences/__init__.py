"""Preference persistence and feedback adaptation."""

from .feedback import (
    DEFAULT_ADJUSTMENT,
    FeedbackAdapter,
    FeedbackSignal,
    build_feedback_update,
)
from .store import (
    PreferenceStore,
    PreferencesError,
    PreferencesNotLoaded,
    PreferencesUnavailable,
    clamp_scores,
    deep_merge,
    save_preferences,
)

__all__ = [
    "PreferenceStore",
    "PreferencesError",
    "PreferencesNotLoaded",
    "PreferencesUnavailable",
    "clamp_scores",
    "deep_merge",
    "save_preferences",
    "FeedbackAdapter",
    "FeedbackSignal",
    "build_feedback_update",
    "DEFAULT_ADJUSTMENT",
]

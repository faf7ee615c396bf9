"""File-backed preference store with serialized updates."""

import copy
import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ValidationError
from rich.console import Console

from ..models import Preferences

console = Console()

PartialPreferences = Union[Mapping[str, Any], BaseModel]


class PreferencesError(Exception):
    """Base class for preference store errors."""


class PreferencesUnavailable(PreferencesError):
    """The backing document cannot be read, parsed or written."""


class PreferencesNotLoaded(PreferencesError):
    """Preferences were requested before ``load()``."""


def deep_merge(target: Mapping[str, Any], source: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge ``source`` into a copy of ``target``.

    Mappings merge recursively; scalars and lists from ``source`` replace
    the target value.
    """
    merged = copy.deepcopy(dict(target))
    for key, value in source.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _clamp(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    return max(0.0, min(1.0, float(value)))


def clamp_scores(document: Dict[str, Any]) -> Dict[str, Any]:
    """Clamp every score field of a preference document to [0, 1] in place."""
    for topic in (document.get("topics") or {}).values():
        if not isinstance(topic, dict):
            continue
        if "interest_score" in topic:
            topic["interest_score"] = _clamp(topic["interest_score"])
        subtopics = topic.get("subtopics")
        if isinstance(subtopics, dict):
            for name in subtopics:
                subtopics[name] = _clamp(subtopics[name])

    for author in (document.get("authors") or {}).values():
        if isinstance(author, dict) and "score" in author:
            author["score"] = _clamp(author["score"])

    patterns = document.get("reading_patterns")
    if isinstance(patterns, dict) and "diversity_vs_focus" in patterns:
        patterns["diversity_vs_focus"] = _clamp(patterns["diversity_vs_focus"])

    return document


class PreferenceStore:
    """
    Preference document cached in memory and persisted as JSON.

    All mutations go through one lock so concurrent updates are applied one
    after another and none is lost. Every mutation is written to disk before
    the call returns.
    """

    def __init__(self, path: Path) -> None:
        """
        Initialize preference store.

        Args:
            path: JSON file holding the preference document
        """
        self.path = Path(path)
        self._preferences: Optional[Preferences] = None
        self._lock = threading.RLock()

    @property
    def is_loaded(self) -> bool:
        return self._preferences is not None

    def load(self) -> Preferences:
        """Read preferences from disk once and cache them."""
        with self._lock:
            if self._preferences is not None:
                return self._preferences

            try:
                document = json.loads(self.path.read_text(encoding="utf-8"))
                if not isinstance(document, dict):
                    raise ValueError("preference document must be a JSON object")
                self._preferences = Preferences.model_validate(clamp_scores(document))
            except (OSError, ValueError, ValidationError) as e:
                raise PreferencesUnavailable(f"Could not load preferences from {self.path}: {e}") from e

            console.print(f"[dim]Loaded preferences from {self.path}[/dim]")
            return self._preferences

    def get(self) -> Preferences:
        """Cached preferences."""
        if self._preferences is None:
            raise PreferencesNotLoaded("Preferences have not been loaded yet")
        return self._preferences

    def update(self, partial: PartialPreferences) -> Preferences:
        """
        Deep-merge a partial document, clamp scores and persist.

        Args:
            partial: Partial preference document or model

        Returns:
            The updated preferences

        Raises:
            PreferencesUnavailable: If the document cannot be loaded or written
        """
        with self._lock:
            self.load()
            return self._apply(partial)

    def modify(self, build_update: Callable[[Preferences], PartialPreferences]) -> Preferences:
        """
        Read-modify-write under the store lock.

        ``build_update`` receives a copy of the current preferences and
        returns the partial document to merge.
        """
        with self._lock:
            current = self.load()
            partial = build_update(current.model_copy(deep=True))
            return self._apply(partial)

    def _apply(self, partial: PartialPreferences) -> Preferences:
        if isinstance(partial, BaseModel):
            partial = partial.model_dump(exclude_unset=True)

        merged = deep_merge(self._preferences.model_dump(), partial)
        updated = Preferences.model_validate(clamp_scores(merged))
        self._persist(updated)
        self._preferences = updated
        return updated

    def _persist(self, preferences: Preferences) -> None:
        data = json.dumps(preferences.model_dump(mode="json"), indent=2)
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".preferences-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise PreferencesUnavailable(f"Could not save preferences to {self.path}: {e}") from e


def save_preferences(preferences: Preferences, path: Path) -> None:
    """Write a preference document, replacing any existing file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(preferences.model_dump(mode="json"), f, indent=2)

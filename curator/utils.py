"""Shared text and time helpers."""

import re
from datetime import datetime, timezone
from typing import Iterable, Optional

import pendulum


def utc_now() -> pendulum.DateTime:
    """Current time in UTC."""
    return pendulum.now("UTC")


def hours_since(published: datetime, now: Optional[datetime] = None) -> float:
    """
    Age of a timestamp in hours.

    Naive timestamps are treated as UTC. Timestamps in the future count as
    zero hours old.
    """
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    if now is None:
        now = utc_now()
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    age_hours = (now.timestamp() - published.timestamp()) / 3600
    return max(0.0, age_hours)


def contains_term(text: str, term: str) -> bool:
    """Case-insensitive whole-word match of ``term`` in ``text``."""
    term = term.strip().lower()
    if not term or not text:
        return False
    pattern = r"(?<!\w)" + re.escape(term) + r"(?!\w)"
    return re.search(pattern, text.lower()) is not None


def joined_text(*parts: Optional[str], extra: Iterable[str] = ()) -> str:
    """Join optional text fragments into one lowercase string."""
    fragments = [p for p in parts if p]
    fragments.extend(e for e in extra if e)
    return " ".join(fragments).lower()

"""Title-based deduplication of candidates."""

import re
from typing import List, Sequence

from ..models import Candidate

DEDUPE_KEY_LENGTH = 50

_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def dedupe_key(title: str) -> str:
    """Normalized title prefix used to detect near-identical candidates."""
    normalized = _PUNCTUATION.sub("", title.lower())
    normalized = _WHITESPACE.sub(" ", normalized).strip()
    return normalized[:DEDUPE_KEY_LENGTH]


def dedupe(candidates: Sequence[Candidate]) -> List[Candidate]:
    """
    Collapse candidates sharing a normalized title key.

    Candidates are visited newest first so the freshest representative of
    each key survives. Equal timestamps keep their input order.

    Args:
        candidates: Candidates from the aggregator

    Returns:
        Unique candidates, newest first
    """
    newest_first = sorted(candidates, key=lambda c: c.published_at, reverse=True)

    seen = set()
    unique = []
    for candidate in newest_first:
        key = dedupe_key(candidate.title)
        if key in seen:
            continue
        seen.add(key)
        unique.append(candidate)

    return unique

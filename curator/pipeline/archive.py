"""Archive of the most recent curated selection, used to resolve feedback."""

import json
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from ..models import CurationResult, ScoredCandidate
from ..utils import utc_now


class CuratedArchive:
    """Last run's selected articles persisted as JSON."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def save(self, result: CurationResult) -> Path:
        """Replace the archive with the articles of ``result``."""
        payload = {
            "saved_at": utc_now().isoformat(),
            "curation_method": result.curation_method,
            "articles": [a.model_dump(mode="json") for a in result.articles],
        }

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)

        return self.path

    def load(self) -> List[ScoredCandidate]:
        """
        Archived articles, empty when nothing has been curated yet.

        Raises:
            ValueError: If the archive exists but is not a valid document
        """
        if not self.path.exists():
            return []

        try:
            with open(self.path, encoding="utf-8") as f:
                payload = json.load(f)
            return [ScoredCandidate.model_validate(a) for a in payload.get("articles", [])]
        except (json.JSONDecodeError, AttributeError, ValidationError) as e:
            raise ValueError(f"Invalid curated archive {self.path}: {e}") from e

    def find(self, article_id: str) -> Optional[ScoredCandidate]:
        for article in self.load():
            if article.id == article_id:
                return article
        return None

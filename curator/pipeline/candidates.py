"""Loading candidate articles from JSON."""

import json
from pathlib import Path
from typing import List

from pydantic import ValidationError
from rich.console import Console

from ..models import Candidate

console = Console()


def load_candidates(path: Path) -> List[Candidate]:
    """
    Load candidates from a JSON array.

    Invalid entries are skipped with a warning.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a JSON array
    """
    if not path.exists():
        raise FileNotFoundError(f"Candidates file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in candidates file: {e}") from e

    if not isinstance(data, list):
        raise ValueError("Candidates file must contain a JSON array")

    candidates = []
    for index, item in enumerate(data):
        try:
            candidates.append(Candidate.model_validate(item))
        except ValidationError as e:
            title = item.get("title", "unknown") if isinstance(item, dict) else "unknown"
            console.print(f"[yellow]Skipping invalid candidate #{index} ({title}): {e.error_count()} errors[/yellow]")

    return candidates

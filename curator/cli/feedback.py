"""Feedback command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..pipeline import CuratedArchive
from ..preferences import FeedbackAdapter, FeedbackSignal, PreferencesUnavailable, PreferenceStore
from .options import CONFIG_OPTION, open_config

console = Console()


def feedback_command(
    article_id: str = typer.Argument(..., help="Id of a curated article"),
    signal: str = typer.Argument(..., help="approve or reject (upvote/downvote accepted)"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Apply approve/reject feedback for a curated article."""
    try:
        feedback_signal = FeedbackSignal.parse(signal)
    except ValueError as e:
        console.print(f"[yellow]{e}; nothing changed[/yellow]")
        return

    try:
        config = open_config(config_path)
        article = CuratedArchive(config.archive_path).find(article_id)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if article is None:
        console.print(f"[yellow]Unknown article id {article_id}; nothing changed[/yellow]")
        return

    store = PreferenceStore(config.preferences_path)
    try:
        preferences = FeedbackAdapter(store).apply_feedback(article, feedback_signal)
    except PreferencesUnavailable as e:
        console.print(f"[red]Could not update preferences: {e}[/red]")
        raise typer.Exit(1)

    topic = preferences.topics.get(article.category)
    if topic is not None:
        console.print(f"[dim]{article.category} interest is now {topic.interest_score:.2f}[/dim]")

"""Run command implementation."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import ProviderConfig
from ..pipeline import CuratedArchive, CurationError, CurationPipeline, load_candidates
from ..preferences import PreferencesUnavailable, PreferenceStore
from ..providers import create_provider_from_config
from ..utils import utc_now
from .options import CONFIG_OPTION, open_config

console = Console()


def run_command(
    candidates_path: Path = typer.Option(
        ...,
        "--candidates",
        help="JSON file with candidate articles",
    ),
    max_articles: Optional[int] = typer.Option(
        None,
        "--max-articles",
        "-n",
        help="Maximum articles to select",
    ),
    tier: Optional[str] = typer.Option(
        None,
        "--tier",
        "-t",
        help="Override the configured provider tier",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Where to write the curation result. Default: results directory",
    ),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Curate a batch of candidate articles."""
    try:
        config = open_config(config_path)
        provider_config = config.config.provider
        if tier is not None:
            provider_config = ProviderConfig(**{**provider_config.model_dump(), "tier": tier})

        if max_articles is None:
            max_articles = config.config.curation.max_articles

        candidates = load_candidates(candidates_path)
        provider = create_provider_from_config(provider_config)
        store = PreferenceStore(config.preferences_path)
        pipeline = CurationPipeline(config, store, provider, CuratedArchive(config.archive_path))

        result = pipeline.run(candidates, max_articles)
    except (CurationError, PreferencesUnavailable) as e:
        console.print(f"[red]Curation failed: {e}[/red]")
        raise typer.Exit(1)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Pipeline interrupted by user[/yellow]")
        raise typer.Exit(1)

    if output is None:
        output = config.results_dir / f"curation_{utc_now().format('YYYY-MM-DD_HHmmss')}.json"
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump(result.model_dump(mode="json"), f, indent=2)

    console.print(f"✅ Selected {len(result.articles)} of {result.total_processed} articles")
    console.print(f"[dim]Result written to {output}[/dim]")

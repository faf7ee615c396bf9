"""Health command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..pipeline import CurationPipeline
from ..preferences import PreferenceStore
from ..providers import create_provider_from_config
from .options import CONFIG_OPTION, open_config

console = Console()


def health_command(
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Check provider budget, preferences and configuration."""
    try:
        config = open_config(config_path)
        provider = create_provider_from_config(config.config.provider)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    pipeline = CurationPipeline(config, PreferenceStore(config.preferences_path), provider)
    report = pipeline.health_check()

    table = Table(title="Health Check")
    table.add_column("Check", style="cyan")
    table.add_column("Status", style="bold")
    table.add_column("Details", style="dim")
    for name, passed in report.checks.items():
        status = "[green]✓[/green]" if passed else "[red]✗[/red]"
        table.add_row(name.title(), status, report.problems.get(name, ""))
    console.print(table)

    usage = report.usage
    budget = f"${usage.monthly_budget:.2f}" if usage.monthly_budget is not None else "unlimited"
    console.print(Panel(
        f"Provider: {report.provider_name} ({report.cost_per_month}, {report.effectiveness})\n"
        f"Requests this month: {usage.requests_this_month}\n"
        f"Estimated cost: ${usage.estimated_cost:.4f} of {budget}\n"
        f"Version: {report.version}",
        title=f"Status: {report.status}",
        style="green" if report.healthy else "red",
    ))

    if not report.healthy:
        raise typer.Exit(1)

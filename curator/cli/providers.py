"""Provider tier commands."""

import typer
from rich.console import Console
from rich.table import Table

from ..providers import available_tiers, recommend_tier

console = Console()
providers_app = typer.Typer(help="Inspect curation provider tiers")


@providers_app.command("list")
def providers_list() -> None:
    """List the available provider tiers."""
    table = Table(title="Curation Providers")
    table.add_column("Tier", style="cyan")
    table.add_column("Name", style="magenta")
    table.add_column("Cost", style="green")
    table.add_column("Effectiveness", style="yellow")
    table.add_column("Description", style="dim")

    for info in available_tiers():
        table.add_row(info.tier.value, info.name, info.cost, info.effectiveness, info.description)

    console.print(table)


@providers_app.command("recommend")
def providers_recommend(
    budget: float = typer.Option(..., "--budget", "-b", help="Monthly budget in USD", min=0.0),
    articles_per_day: int = typer.Option(15, "--articles-per-day", help="Articles curated per day", min=1),
) -> None:
    """Recommend a tier for a monthly budget."""
    tier = recommend_tier(budget, articles_per_day)
    info = next(i for i in available_tiers() if i.tier == tier)
    console.print(f"Recommended tier: [bold cyan]{tier.value}[/bold cyan] ({info.name}, {info.cost})")

"""Init command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import DEFAULT_CONFIG_PATH, Config, ConfigModel, ProviderConfig, save_config
from ..config.models import TIERS
from ..models import default_preferences
from ..preferences import save_preferences

console = Console()


def init_command(
    config_path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Config file to create",
    ),
    data_dir: Path = typer.Option(
        Path.home() / "DailyCurator",
        "--data-dir",
        "-d",
        help="Directory for preferences and results",
    ),
    tier: str = typer.Option("free", "--tier", "-t", help=f"Provider tier ({', '.join(TIERS)})"),
    monthly_budget: Optional[float] = typer.Option(
        None,
        "--budget",
        help="Monthly budget in USD for paid tiers",
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing preferences"),
) -> None:
    """Initialize curator configuration and seed preferences."""
    console.print(Panel.fit("Daily Curator - Initialization", style="bold blue"))

    try:
        provider = ProviderConfig(tier=tier, monthly_budget=monthly_budget)
    except ValueError as e:
        console.print(f"[red]Invalid provider settings: {e}[/red]")
        raise typer.Exit(1)

    model = ConfigModel(data_dir=str(data_dir), provider=provider)
    save_config(model, config_path)
    console.print(f"✅ Created config: {config_path}")

    config = Config.from_model(model, config_path)
    preferences_path = config.preferences_path
    if preferences_path.exists() and not force:
        console.print(f"[yellow]Keeping existing preferences: {preferences_path}[/yellow]")
    else:
        save_preferences(default_preferences(), preferences_path)
        console.print(f"✅ Created preferences: {preferences_path}")

    console.print(
        Panel(
            f"[green]✅ Daily Curator initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Data directory: {config.data_dir}\n\n"
            f"Next steps:\n"
            f"1. For paid tiers set [bold]OPENAI_API_KEY[/bold] or [bold]ANTHROPIC_API_KEY[/bold]\n"
            f"2. Run: [bold]curator run --candidates articles.json[/bold]",
            style="green",
        )
    )

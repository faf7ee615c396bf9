"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .feedback import feedback_command
from .health import health_command
from .init import init_command
from .providers import providers_app
from .run import run_command

app = typer.Typer(
    name="curator",
    help="Daily Curator - personalized article curation with preference feedback",
    no_args_is_help=True,
)

app.command("init")(init_command)
app.command("run")(run_command)
app.command("feedback")(feedback_command)
app.command("health")(health_command)
app.add_typer(providers_app, name="providers", help="Inspect curation provider tiers")


if __name__ == "__main__":
    app()

"""Options shared by several commands."""

from pathlib import Path
from typing import Optional

import typer

from ..config import Config

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Config file path. Default: ~/.config/curator/config.yaml",
)


def open_config(config_path: Optional[Path]) -> Config:
    return Config(config_path)

"""Configuration loader."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .models import ConfigModel

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "curator" / "config.yaml"


class Config:
    """Configuration manager."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize config manager."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH
        self.config_path = config_path
        self._config: Optional[ConfigModel] = None

    @classmethod
    def from_model(cls, model: ConfigModel, config_path: Optional[Path] = None) -> "Config":
        """Wrap an already loaded model."""
        config = cls(config_path)
        config._config = model
        return config

    @property
    def config(self) -> ConfigModel:
        """Get loaded config."""
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    @property
    def data_dir(self) -> Path:
        """Get data directory path."""
        path = Path(self.config.data_dir).expanduser()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def preferences_path(self) -> Path:
        return self.data_dir / "preferences.json"

    @property
    def archive_path(self) -> Path:
        return self.data_dir / "curated.json"

    @property
    def results_dir(self) -> Path:
        """Get results directory path."""
        results_dir = self.data_dir / "results"
        results_dir.mkdir(parents=True, exist_ok=True)
        return results_dir


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}

        return ConfigModel(**config_data)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}") from e
    except (TypeError, ValidationError) as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(exclude={"provider": {"api_key"}}), f, default_flow_style=False, sort_keys=False)

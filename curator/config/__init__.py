"""Configuration management for the curation engine."""

from .loader import DEFAULT_CONFIG_PATH, Config, load_config, save_config
from .models import ConfigModel, CurationDefaults, ProviderConfig

__all__ = [
    "Config",
    "ConfigModel",
    "CurationDefaults",
    "DEFAULT_CONFIG_PATH",
    "ProviderConfig",
    "load_config",
    "save_config",
]

"""Configuration entrypoint (re-exported from split modules)."""

from .config_loader import CONFIG_ENV_VAR, candidate_config_paths, load_settings
from .config_settings import Settings

__all__ = [
    "CONFIG_ENV_VAR",
    "Settings",
    "candidate_config_paths",
    "load_settings",
]

"""Configuration utilities."""

from .config_loader import ConfigLoader, get_config, DEFAULT_PROFILE, ENV_OVERRIDES, PROFILE_ENV_VAR

__all__ = [
    "ConfigLoader",
    "get_config",
    "DEFAULT_PROFILE",
    "ENV_OVERRIDES",
    "PROFILE_ENV_VAR",
]

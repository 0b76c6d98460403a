"""Configuration package for the hooks."""

from .config_loader import ConfigLoader, load_config
from .models import DEFAULT_CACHE_FILE, DEFAULT_SETTINGS_FILE, HookConfig

__all__ = [
    "ConfigLoader",
    "load_config",
    "HookConfig",
    "DEFAULT_CACHE_FILE",
    "DEFAULT_SETTINGS_FILE",
]

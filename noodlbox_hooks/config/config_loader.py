"""Configuration loading for the hooks."""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..errors import ConfigurationError
from ..hook_logging import get_logger
from .models import DEFAULT_SETTINGS_FILE, HookConfig, env_overrides

logger = get_logger()


class ConfigLoader:
    """Hook configuration loader.

    Precedence (highest to lowest):
    1. Explicit overrides
    2. Environment variables
    3. Settings file (~/.noodlbox/hooks.json)
    4. Defaults
    """

    def __init__(self, settings_file: Path | None = None):
        self.settings_file = Path(settings_file) if settings_file else DEFAULT_SETTINGS_FILE

    def load(self, **overrides: Any) -> HookConfig:
        """Load configuration from all sources.

        Never raises: a broken settings file is skipped and an invalid merged
        configuration falls back to environment values or defaults, because a
        hook must not fail because of its own settings.
        """
        config_dict: dict[str, Any] = {}

        try:
            file_settings = self.load_settings_file()
            config_dict.update(file_settings)
            if file_settings:
                logger.debug(f"Loaded {len(file_settings)} settings from {self.settings_file}")
        except ConfigurationError as e:
            logger.debug(str(e))

        env_values = env_overrides()
        config_dict.update(env_values)
        if env_values:
            logger.debug(f"Applied {len(env_values)} environment variables")

        config_dict.update(overrides)

        try:
            return HookConfig(**config_dict)
        except ValidationError as e:
            logger.debug(f"Invalid hook configuration, using defaults: {e}")
            try:
                return HookConfig(**env_values)
            except ValidationError:
                return HookConfig()

    def load_settings_file(self) -> dict[str, Any]:
        """Read the optional JSON settings file.

        Raises:
            ConfigurationError: If the file exists but is not a JSON object.
        """
        if not self.settings_file.exists():
            return {}

        try:
            with open(self.settings_file) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                f"Cannot read settings file: {e}",
                config_file=str(self.settings_file),
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Settings file must contain a JSON object",
                config_file=str(self.settings_file),
            )

        known = set(HookConfig.model_fields)
        unknown = sorted(set(data) - known)
        if unknown:
            logger.debug(f"Ignoring unknown settings: {', '.join(unknown)}")
        return {key: value for key, value in data.items() if key in known}


def load_config(settings_file: Path | None = None, **overrides: Any) -> HookConfig:
    """Load hook configuration (convenience wrapper around ConfigLoader)."""
    return ConfigLoader(settings_file).load(**overrides)

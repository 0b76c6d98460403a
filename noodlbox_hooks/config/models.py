"""Configuration model for the hooks."""

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_CACHE_FILE = Path.home() / ".noodlbox" / "cache" / "repositories.json"
DEFAULT_SETTINGS_FILE = Path.home() / ".noodlbox" / "hooks.json"


def _env_flag(name: str) -> bool | None:
    value = os.environ.get(name)
    if value is None:
        return None
    return value.strip().lower() == "true"


class HookConfig(BaseModel):
    """Hook configuration with validation."""

    # noodl CLI
    cli_path: str = Field(default="noodl")
    search_timeout_ms: int = Field(default=5000, ge=100, le=60000)
    list_timeout_ms: int = Field(default=10000, ge=100, le=120000)
    schema_timeout_ms: int = Field(default=5000, ge=100, le=120000)
    search_limit: int = Field(default=10, ge=1, le=100)
    include_content: bool = Field(default=True)

    # Repository cache written by the indexer
    cache_file: Path = Field(default=DEFAULT_CACHE_FILE)
    cache_ttl_ms: int = Field(default=600_000, ge=0)  # 10 minutes

    # Query extraction
    max_command_length: int = Field(default=1000, ge=1)
    min_query_length: int = Field(default=3, ge=1)

    # Session start
    auto_update: bool = Field(default=True)
    plugin_name: str = Field(default="noodlbox")

    # Logging
    debug: bool = Field(default=False)
    log_file: Path | None = Field(default=None)
    log_format: str = Field(default="text")

    @field_validator("cli_path", "plugin_name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in ("text", "json"):
            raise ValueError("log_format must be 'text' or 'json'")
        return v


def env_overrides() -> dict:
    """Collect config values set through environment variables."""
    values: dict = {
        "cli_path": os.environ.get("NOODLBOX_CLI_PATH"),
        "debug": _env_flag("NOODLBOX_HOOK_DEBUG"),
        "log_file": os.environ.get("NOODLBOX_HOOK_LOG_FILE"),
        "auto_update": _env_flag("NOODLBOX_HOOK_AUTO_UPDATE"),
        "search_timeout_ms": os.environ.get("NOODLBOX_SEARCH_TIMEOUT_MS"),
        "cache_file": os.environ.get("NOODLBOX_CACHE_FILE"),
    }
    return {key: value for key, value in values.items() if value not in (None, "")}

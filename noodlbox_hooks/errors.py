"""Structured error types for the hooks.

Hook handlers fail open: these errors are raised inside a component and
turned into "no result" values at its boundary, or into an empty hook
output by the dispatcher. They exist so that the reason for a silent
fallback can be logged and shown by the diagnostic CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Categories of hook errors."""

    INPUT = "input"  # Malformed hook payload on stdin
    CACHE = "cache"  # Repository cache missing, stale or malformed
    SUBPROCESS = "subprocess"  # noodl / git failures
    CONFIGURATION = "configuration"  # Invalid settings
    RUNTIME = "runtime"  # Unexpected errors


@dataclass
class HookError(Exception):
    """Base class for structured hook errors.

    Attributes:
        category: Error category for grouping.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Optional additional details dict.
        exit_code: Exit code to report when this error ends a run.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    exit_code: int = 1

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Format the error for display.

        Args:
            use_color: Whether to include ANSI color codes.

        Returns:
            Formatted error string with suggestion if available.
        """
        red = "\033[91m" if use_color else ""
        cyan = "\033[96m" if use_color else ""
        dim = "\033[2m" if use_color else ""
        reset = "\033[0m" if use_color else ""

        lines = [f"{red}Error:{reset} {self.message}"]

        if self.suggestion:
            lines.append(f"{cyan}Suggestion:{reset} {self.suggestion}")

        if self.details:
            for key, value in self.details.items():
                lines.append(f"{dim}  {key}: {value}{reset}")

        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format(use_color=False)


class HookInputError(HookError):
    """The hook payload on stdin could not be used."""

    def __init__(self, message: str, original_error: str | None = None):
        super().__init__(
            category=ErrorCategory.INPUT,
            message=message,
            suggestion="Hooks expect one JSON object on stdin",
            details={"error": original_error} if original_error else None,
            exit_code=1,
        )


class CacheFormatError(HookError):
    """The repository cache file exists but cannot be trusted."""

    def __init__(self, message: str, cache_file: str | None = None):
        super().__init__(
            category=ErrorCategory.CACHE,
            message=message,
            suggestion="Run 'noodl list' to refresh the repository cache",
            details={"cache_file": cache_file} if cache_file else None,
            exit_code=1,
        )


class NoodlCommandError(HookError):
    """A noodl subprocess could not be run to completion."""

    def __init__(self, message: str, command: list[str] | None = None):
        super().__init__(
            category=ErrorCategory.SUBPROCESS,
            message=message,
            suggestion="Check that noodl is installed or set NOODLBOX_CLI_PATH",
            details={"command": " ".join(command)} if command else None,
            exit_code=1,
        )


class ConfigurationError(HookError):
    """Error in the hook settings file or arguments."""

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        suggestion: str | None = None,
    ):
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion or "Check your settings file syntax and values",
            details={"config_file": config_file} if config_file else None,
            exit_code=2,
        )


__all__ = [
    "ErrorCategory",
    "HookError",
    "HookInputError",
    "CacheFormatError",
    "NoodlCommandError",
    "ConfigurationError",
]

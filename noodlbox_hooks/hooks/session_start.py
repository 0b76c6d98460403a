"""
SessionStart hook: tell the assistant which repositories noodlbox knows.

Runs once per fresh session (source == "startup") to:
1. Kick off a background marketplace update (fire-and-forget)
2. List indexed repositories (noodl list)
3. Load the static graph schema description (noodl schema)

Resumed, cleared and compacted sessions already carry this context.
Each step is best-effort; the hook never fails the session.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..config.models import HookConfig
from ..hook_logging import LogCategory, get_category_logger
from ..search.client import NoodlClient
from .background import spawn_marketplace_update
from .types import BRAND, HookOutput

logger = get_category_logger(LogCategory.DISPATCHER)


@dataclass
class SessionStartResult:
    """What the session start steps produced."""

    source: str = "startup"
    skipped: bool = False
    update_started: bool = False
    repositories: str | None = None
    schema: str | None = None
    errors: list[str] = field(default_factory=list)

    def context_parts(self) -> list[str]:
        parts = []
        if self.repositories:
            parts.append(f"<noodlbox-repositories>\n{self.repositories}\n</noodlbox-repositories>")
        if self.schema:
            parts.append(f"<noodlbox-schema>\n{self.schema}\n</noodlbox-schema>")
        return parts

    def to_output(self) -> HookOutput | None:
        """Build the hook output, or None when there is nothing to inject."""
        parts = self.context_parts()
        if not parts:
            return None
        return HookOutput(
            hook_event_name="SessionStart",
            additional_context="\n\n".join(parts),
            system_message=f"{BRAND} Session initialized with indexed repositories",
        )


class SessionStartExecutor:
    """Executor for the SessionStart hook.

    Example usage:
        executor = SessionStartExecutor(config, NoodlClient())
        output = executor.execute({"hook_event_name": "SessionStart", "source": "startup"})
    """

    def __init__(
        self,
        config: HookConfig,
        client: NoodlClient,
        spawn_update: Callable[[str], bool] = spawn_marketplace_update,
    ):
        self.config = config
        self.client = client
        self._spawn_update = spawn_update

    def run(self, event: dict[str, Any]) -> SessionStartResult:
        """Run the session start steps. Always returns, never raises."""
        source = event.get("source") or "startup"
        result = SessionStartResult(source=source)

        if source != "startup":
            logger.debug(f"Skipping session start for source={source}")
            result.skipped = True
            return result

        if self.config.auto_update:
            try:
                result.update_started = self._spawn_update(self.config.plugin_name)
            except Exception as e:
                result.errors.append(f"update: {e}")

        try:
            result.repositories = self.client.list_repositories()
        except Exception as e:
            result.errors.append(f"list: {e}")

        try:
            result.schema = self.client.schema()
        except Exception as e:
            result.errors.append(f"schema: {e}")

        if result.errors:
            logger.debug(f"Session start steps failed: {result.errors}")
        return result

    def execute(self, event: dict[str, Any]) -> HookOutput | None:
        return self.run(event).to_output()

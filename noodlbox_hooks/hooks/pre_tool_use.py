"""
PreToolUse hook: augment Glob/Grep/Bash searches with noodlbox results.

Decision order:
1. Not a search tool            -> no output (allow)
2. Cache says not indexed       -> no output, noodl is not spawned
3. No meaningful query          -> no output
4. Search fails                 -> no output, the built-in tool runs alone
5. Search succeeds              -> allow + additionalContext with the results

The git display name lookup is skipped when the search took more than half
of its timeout.
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..config.models import HookConfig
from ..hook_logging import LogCategory, get_category_logger
from ..query.extractors import extract_query_from_tool
from ..search.client import NoodlClient, SearchOutcome
from ..search.formatting import format_search_message, parse_search_results
from ..search.git import resolve_repo_display_name
from ..storage.repo_cache import RepoLookupResult, RepositoryCacheReader
from .types import BRAND, HookOutput

logger = get_category_logger(LogCategory.DISPATCHER)

SEARCH_TOOLS = frozenset({"Glob", "Grep", "Bash"})


@dataclass
class PreToolUseDecision:
    """Trace of one PreToolUse evaluation."""

    tool_name: str
    cwd: str
    lookup: RepoLookupResult | None = None
    query: str | None = None
    outcome: SearchOutcome | None = None
    repository_name: str | None = None
    reason: str = ""

    def to_output(self) -> HookOutput | None:
        if not self.outcome or not self.outcome.success or not self.query:
            return None

        summary = parse_search_results(self.outcome.text)
        message = format_search_message(self.query, summary, self.outcome.elapsed_ms)
        location = f" in {self.repository_name}" if self.repository_name else ""

        return HookOutput(
            hook_event_name="PreToolUse",
            permission_decision="allow",
            additional_context=(
                f'Noodlbox search for "{self.query}"{location}:\n{self.outcome.text}'
            ),
            system_message=f"\n{BRAND} {message}",
        )


class PreToolUseExecutor:
    """Executor for the PreToolUse hook."""

    def __init__(
        self,
        config: HookConfig,
        client: NoodlClient,
        cache_reader: RepositoryCacheReader,
        resolve_name: Callable[[str], str | None] = resolve_repo_display_name,
    ):
        self.config = config
        self.client = client
        self.cache_reader = cache_reader
        self._resolve_name = resolve_name

    def evaluate(self, event: dict[str, Any]) -> PreToolUseDecision:
        tool_name = event.get("tool_name") or ""
        cwd = event.get("cwd") or str(Path.cwd())
        decision = PreToolUseDecision(tool_name=tool_name, cwd=cwd)

        if tool_name not in SEARCH_TOOLS:
            decision.reason = "not a search tool"
            return decision

        decision.lookup = self.cache_reader.lookup(cwd)
        if decision.lookup.is_not_indexed:
            decision.reason = "repository not indexed"
            return decision

        decision.query = extract_query_from_tool(
            tool_name,
            event.get("tool_input"),
            max_command_length=self.config.max_command_length,
            min_length=self.config.min_query_length,
        )
        logger.debug(f"Extracted query: {decision.query!r}")
        if not decision.query or len(decision.query) < self.config.min_query_length:
            decision.query = None
            decision.reason = "no meaningful query"
            return decision

        decision.outcome = self.client.search(decision.query, cwd)
        if not decision.outcome.success:
            decision.reason = (
                "noodl reports repository not indexed"
                if decision.outcome.not_indexed
                else "search failed"
            )
            return decision

        if decision.lookup.is_indexed:
            decision.repository_name = decision.lookup.repository_name
        elif decision.outcome.elapsed_ms <= self.config.search_timeout_ms // 2:
            decision.repository_name = self._resolve_name(cwd)
        else:
            # Slow search: git could push the hook past the host timeout
            logger.debug("Skipping repository name lookup after a slow search")
        decision.reason = "search succeeded"
        return decision

    def execute(self, event: dict[str, Any]) -> HookOutput | None:
        decision = self.evaluate(event)
        logger.debug(
            f"PreToolUse {decision.tool_name}: {decision.reason}",
            extra={
                "event": "PreToolUse",
                "tool_name": decision.tool_name,
                "query": decision.query,
                "elapsed_ms": decision.outcome.elapsed_ms if decision.outcome else 0,
            },
        )
        return decision.to_output()

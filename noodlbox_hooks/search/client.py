"""Subprocess client for the noodl CLI.

All calls are synchronous with a timeout and never raise: failures come
back as a failed SearchOutcome or None so a hook can fall back to the
built-in tool.
"""

import os
import subprocess
import time
from dataclasses import dataclass

from ..errors import NoodlCommandError
from ..hook_logging import LogCategory, get_category_logger
from ..storage.search_cache import NullSearchCache, SearchResultCache, search_cache_key

logger = get_category_logger(LogCategory.SEARCH)

NOT_INDEXED_MARKERS = ("not indexed", "not found", "No analyzed repository")


@dataclass(frozen=True)
class SearchOutcome:
    """Result of one noodl search.

    Attributes:
        success: Whether noodl returned results.
        text: Search output with paths shortened (success only).
        elapsed_ms: Wall-clock duration of the call (success only).
        not_indexed: The failure means the directory is not indexed.
    """

    success: bool
    text: str = ""
    elapsed_ms: int = 0
    not_indexed: bool = False

    @classmethod
    def succeeded(cls, text: str, elapsed_ms: int) -> "SearchOutcome":
        return cls(success=True, text=text, elapsed_ms=elapsed_ms)

    @classmethod
    def failed(cls, not_indexed: bool = False) -> "SearchOutcome":
        return cls(success=False, not_indexed=not_indexed)


def shorten_paths(text: str, cwd: str) -> str:
    """Rewrite absolute paths under ``cwd`` to ``./`` relative ones.

    Idempotent: shortened text contains no ``cwd/`` prefix to rewrite again.
    The filesystem root is left alone since every path starts with it.
    """
    base = cwd.rstrip("/")
    if not base:
        return text
    return text.replace(base + "/", "./")


def is_not_indexed_message(*outputs: str) -> bool:
    """Check noodl output for "repository not indexed" markers."""
    for output in outputs:
        if output and any(marker in output for marker in NOT_INDEXED_MARKERS):
            return True
    return False


class NoodlClient:
    """Runs ``noodl search``, ``noodl list`` and ``noodl schema``.

    Example usage:
        client = NoodlClient(cli_path="noodl", search_timeout_ms=5000)
        outcome = client.search("handleAuth", "/work/app")
        if outcome.success:
            print(outcome.text)
    """

    def __init__(
        self,
        cli_path: str | None = None,
        search_timeout_ms: int = 5000,
        list_timeout_ms: int = 10000,
        schema_timeout_ms: int = 5000,
        search_limit: int = 10,
        include_content: bool = True,
        result_cache: SearchResultCache | None = None,
    ):
        self.cli_path = cli_path or os.environ.get("NOODLBOX_CLI_PATH", "noodl")
        self.search_timeout_ms = search_timeout_ms
        self.list_timeout_ms = list_timeout_ms
        self.schema_timeout_ms = schema_timeout_ms
        self.search_limit = search_limit
        self.include_content = include_content
        self.result_cache = result_cache if result_cache is not None else NullSearchCache()

    def build_search_command(self, query: str, cwd: str) -> list[str]:
        cmd = [self.cli_path, "search", query, cwd]
        if self.include_content:
            cmd.append("--include-content")
        cmd.extend(["--limit", str(self.search_limit)])
        return cmd

    def search(self, query: str, cwd: str) -> SearchOutcome:
        """Run a semantic search for ``query`` in the repository at ``cwd``."""
        key = search_cache_key(cwd, query)
        cached = self.result_cache.get(key)
        if cached is not None:
            logger.debug(f"Search cache hit: {key}", extra={"query": query})
            return cached

        start = time.monotonic()
        try:
            result = self._execute(self.build_search_command(query, cwd), self.search_timeout_ms)
        except NoodlCommandError as e:
            logger.debug(f"Search failed: {e.message}", extra={"query": query})
            return SearchOutcome.failed()

        elapsed_ms = int((time.monotonic() - start) * 1000)

        if result.returncode != 0:
            logger.debug(
                f"Search failed (exit {result.returncode}): "
                f"{result.stderr[:200]!r} {result.stdout[:200]!r}",
                extra={"query": query, "elapsed_ms": elapsed_ms},
            )
            return SearchOutcome.failed(
                not_indexed=is_not_indexed_message(result.stdout, result.stderr)
            )

        outcome = SearchOutcome.succeeded(shorten_paths(result.stdout, cwd), elapsed_ms)
        logger.debug(
            f"Search succeeded: {len(outcome.text)} chars in {elapsed_ms}ms",
            extra={"query": query, "elapsed_ms": elapsed_ms},
        )
        self.result_cache.set(key, outcome)
        return outcome

    def list_repositories(self) -> str | None:
        """Return the ``noodl list`` output, or None."""
        return self._run_text(["list"], self.list_timeout_ms)

    def schema(self) -> str | None:
        """Return the ``noodl schema`` output, or None."""
        return self._run_text(["schema"], self.schema_timeout_ms)

    def _run_text(self, args: list[str], timeout_ms: int) -> str | None:
        try:
            result = self._execute([self.cli_path, *args], timeout_ms)
        except NoodlCommandError as e:
            logger.debug(f"noodl {' '.join(args)} failed: {e.message}")
            return None

        if result.returncode != 0:
            logger.debug(f"noodl {' '.join(args)} exited with {result.returncode}")
            return None
        return result.stdout.strip() or None

    def _execute(self, cmd: list[str], timeout_ms: int) -> subprocess.CompletedProcess:
        """Run ``cmd`` and capture its output.

        Raises:
            NoodlCommandError: If the command timed out or could not start.
        """
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout_ms / 1000,
            )
        except subprocess.TimeoutExpired as e:
            raise NoodlCommandError(f"Timed out after {timeout_ms}ms", cmd) from e
        except (OSError, ValueError) as e:
            raise NoodlCommandError(f"Could not start {cmd[0]}: {e}", cmd) from e

"""
Hook entry point: one JSON event on stdin, at most one JSON decision on stdout.

Routes SessionStart, PreToolUse and PostToolUse events to their executors.
The hooks fail open: malformed input, unknown events and internal errors
all end with no output, which lets the original tool call proceed.

Exit codes: 0 = handled (with or without output), 1 = malformed input or
internal error. Never 2, so a hook can never block a tool call.
"""

import json
import sys
from typing import Any

from ..config import HookConfig, load_config
from ..errors import HookError, HookInputError
from ..hook_logging import LogCategory, get_category_logger, setup_logging
from ..search.client import NoodlClient
from ..storage.repo_cache import RepositoryCacheReader
from ..storage.search_cache import SearchResultCache
from .post_tool_use import PostToolUseExecutor
from .pre_tool_use import PreToolUseExecutor
from .session_start import SessionStartExecutor
from .types import HookOutput

logger = get_category_logger(LogCategory.DISPATCHER)


def read_input(raw: str) -> dict[str, Any]:
    """Parse the hook payload.

    Raises:
        HookInputError: If the payload is not a JSON object.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise HookInputError("Hook input is not valid JSON", str(e)) from e

    if not isinstance(data, dict):
        raise HookInputError("Hook input must be a JSON object")
    return data


class HookDispatcher:
    """Routes hook events to their executors."""

    def __init__(
        self,
        session_start: SessionStartExecutor,
        pre_tool_use: PreToolUseExecutor,
        post_tool_use: PostToolUseExecutor,
    ):
        self.handlers = {
            "SessionStart": session_start.execute,
            "PreToolUse": pre_tool_use.execute,
            "PostToolUse": post_tool_use.execute,
        }

    @classmethod
    def from_config(
        cls,
        config: HookConfig,
        result_cache: SearchResultCache | None = None,
    ) -> "HookDispatcher":
        client = NoodlClient(
            cli_path=config.cli_path,
            search_timeout_ms=config.search_timeout_ms,
            list_timeout_ms=config.list_timeout_ms,
            schema_timeout_ms=config.schema_timeout_ms,
            search_limit=config.search_limit,
            include_content=config.include_content,
            result_cache=result_cache,
        )
        cache_reader = RepositoryCacheReader(config.cache_file, ttl_ms=config.cache_ttl_ms)
        return cls(
            session_start=SessionStartExecutor(config, client),
            pre_tool_use=PreToolUseExecutor(config, client, cache_reader),
            post_tool_use=PostToolUseExecutor(),
        )

    def dispatch(self, event: dict[str, Any]) -> HookOutput | None:
        hook_event = event.get("hook_event_name") or ""
        handler = self.handlers.get(hook_event)
        if handler is None:
            logger.debug(f"Ignoring event {hook_event!r}")
            return None
        return handler(event)


def run_hook(raw: str, dispatcher: HookDispatcher) -> tuple[str | None, int]:
    """Run one hook invocation.

    Returns:
        Tuple of (JSON output or None, exit_code)
    """
    try:
        event = read_input(raw)
        output = dispatcher.dispatch(event)
    except HookError as e:
        logger.debug(str(e))
        return None, 1
    except Exception as e:
        logger.debug(f"Hook error: {e}", exc_info=True)
        return None, 1

    if output is None:
        return None, 0
    return output.to_json(), 0


def main() -> int:
    """Console entry point used by the host runtime."""
    try:
        config = load_config()
        setup_logging(
            debug=config.debug,
            log_file=config.log_file,
            log_format=config.log_format,
        )
        raw = sys.stdin.read()
        output, exit_code = run_hook(raw, HookDispatcher.from_config(config))
    except Exception:
        return 1

    if output is not None:
        sys.stdout.write(output + "\n")
        sys.stdout.flush()
    return exit_code


if __name__ == "__main__":
    sys.exit(main())

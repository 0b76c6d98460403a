"""PostToolUse hook: summarize noodlbox MCP query results for the user."""

import json
from typing import Any

from ..hook_logging import LogCategory, get_category_logger
from ..search.formatting import format_search_message, parse_search_results
from .types import BRAND, HookOutput

logger = get_category_logger(LogCategory.DISPATCHER)

# MCP tools are named mcp__<server>__<tool>
MCP_QUERY_TOOL = "query_with_context"


def response_text(tool_response: Any) -> str:
    """Flatten a tool_response (string, or object with ``result``) to text."""
    if isinstance(tool_response, str):
        return tool_response
    if isinstance(tool_response, dict) and tool_response.get("result"):
        result = tool_response["result"]
        return result if isinstance(result, str) else json.dumps(result)
    return json.dumps(tool_response)


class PostToolUseExecutor:
    """Executor for the PostToolUse hook."""

    def execute(self, event: dict[str, Any]) -> HookOutput | None:
        tool_name = event.get("tool_name") or ""
        if MCP_QUERY_TOOL not in tool_name:
            return None

        summary = parse_search_results(response_text(event.get("tool_response", "")))
        if not summary.entry_points:
            logger.debug("No entry points in MCP result, nothing to show")
            return None

        tool_input = event.get("tool_input")
        tool_input = tool_input if isinstance(tool_input, dict) else {}
        query = tool_input.get("q") or tool_input.get("query") or "query"
        message = format_search_message(str(query), summary, 0)

        return HookOutput(
            hook_event_name="PostToolUse",
            additional_context=f'Noodlbox search for "{query}":\n{message}',
            system_message=f"\n{BRAND} {message}",
        )

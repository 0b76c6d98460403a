"""
Hooks package for Claude Code integration.

Handlers for the lifecycle events noodlbox takes part in:
- SessionStart: list indexed repositories and the graph schema
- PreToolUse: augment Glob/Grep/Bash with semantic search results
- PostToolUse: summarize noodlbox MCP query results for the user

All handlers fail open: anything unexpected results in no output, which
lets the original tool call proceed unchanged.
"""

from .background import spawn_marketplace_update
from .dispatcher import HookDispatcher, main, read_input, run_hook
from .post_tool_use import PostToolUseExecutor
from .pre_tool_use import PreToolUseDecision, PreToolUseExecutor
from .session_start import SessionStartExecutor, SessionStartResult
from .types import HookOutput

__all__ = [
    "HookDispatcher",
    "HookOutput",
    "main",
    "read_input",
    "run_hook",
    # SessionStart
    "SessionStartExecutor",
    "SessionStartResult",
    "spawn_marketplace_update",
    # PreToolUse
    "PreToolUseExecutor",
    "PreToolUseDecision",
    # PostToolUse
    "PostToolUseExecutor",
]

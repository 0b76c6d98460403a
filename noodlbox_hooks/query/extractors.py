"""Extract semantic search queries from Glob, Grep and Bash tool inputs.

Every extractor returns None when the tool call does not warrant a semantic
search (pure extension globs, non-search commands, patterns that clean down
to almost nothing).
"""

import os
import re
from typing import Any

from ..hook_logging import LogCategory, get_category_logger
from .dialects import FIND_PATTERN_FLAGS, SearchToolDialect, dialect_for
from .patterns import clean_pattern
from .tokenizer import tokenize

logger = get_category_logger(LogCategory.QUERY)

MAX_COMMAND_LENGTH = 1000
MIN_QUERY_LENGTH = 3

# "**/*.py", "src/**/*.ts": nothing to search for besides the extension
_EXTENSION_GLOB = re.compile(r"^(\*\*/|\w+/\*\*/)*\*\.[a-z]+$", re.IGNORECASE)
_EXTENSION_GROUP_GLOB = re.compile(
    r"^(\*\*/|\w+/\*\*/)*\*\.\{[a-z,]+\}$", re.IGNORECASE
)
_BRACE_GROUP = re.compile(r"\{[^}]+\}")
_GLOB_SEPARATORS = re.compile(r"[/.]")

_STAR_RUN = re.compile(r"\*+")
_FILE_EXTENSION = re.compile(r"\.[A-Za-z0-9]+$")


def extract_query_from_glob(pattern: str | None) -> str | None:
    """Extract search words from a Glob pattern.

    ``src/auth/*.ts`` becomes ``src auth ts``; ``**/*.py`` yields None.
    """
    if not pattern or not isinstance(pattern, str):
        return None

    if _EXTENSION_GLOB.match(pattern) or _EXTENSION_GROUP_GLOB.match(pattern):
        logger.debug(f"Glob is a pure extension pattern, skipping: {pattern}")
        return None

    stripped = pattern.replace("**", "").replace("*", "")
    stripped = _BRACE_GROUP.sub("", stripped)
    parts = [
        part
        for part in _GLOB_SEPARATORS.split(stripped)
        if len(part) > 1 and not part.startswith(".")
    ]

    return " ".join(parts) if parts else None


def extract_query_from_grep(pattern: str | None) -> str | None:
    """Extract search words from a Grep regex pattern."""
    return clean_pattern(pattern)


def extract_query_from_bash(
    command: str | None,
    max_length: int = MAX_COMMAND_LENGTH,
    min_length: int = MIN_QUERY_LENGTH,
) -> str | None:
    """Extract the search pattern from a grep/rg/ag/ack/find command line."""
    if not command or not isinstance(command, str) or len(command) > max_length:
        return None

    tokens = tokenize(command)

    # Skip leading FOO=bar environment assignments
    index = 0
    while index < len(tokens) and "=" in tokens[index]:
        index += 1
    if index >= len(tokens):
        return None

    base_command = os.path.basename(tokens[index])
    args = tokens[index + 1 :]

    if base_command == "find":
        return _extract_from_find(args, min_length)

    dialect = dialect_for(base_command)
    if dialect is None:
        return None

    return _extract_from_search_tool(args, dialect, min_length)


def _accept(candidate: str | None, min_length: int) -> str | None:
    cleaned = clean_pattern(candidate)
    if cleaned and len(cleaned) >= min_length:
        return cleaned
    return None


def _extract_from_find(args: list[str], min_length: int) -> str | None:
    for position, token in enumerate(args):
        if token not in FIND_PATTERN_FLAGS or position + 1 >= len(args):
            continue

        value = args[position + 1].strip("*")
        value = _STAR_RUN.sub(" ", value)
        value = _FILE_EXTENSION.sub("", value)

        query = _accept(value, min_length)
        if query:
            return query

    return None


def _cluster_flag(token: str, dialect: SearchToolDialect) -> str | None:
    """Flag of a short option cluster that takes the next word.

    ``-rA 3`` -> ``-A``, ``-ie foo`` -> ``-e``. In ``-tmd`` the ``-t`` value is attached, so None.
    """
    for offset, char in enumerate(token[1:], start=2):
        flag = "-" + char
        if dialect.takes_value(flag) or dialect.is_pattern_flag(flag):
            return flag if offset == len(token) else None
    return None


def _extract_from_search_tool(
    args: list[str], dialect: SearchToolDialect, min_length: int
) -> str | None:
    position = 0
    while position < len(args):
        token = args[position]

        if token == "--":
            # Everything after "--" is positional, the first one is the pattern
            if position + 1 < len(args):
                return _accept(args[position + 1], min_length)
            return None

        if len(token) > 1 and token.startswith("-"):
            if dialect.is_pattern_flag(token):
                if position + 1 < len(args):
                    query = _accept(args[position + 1], min_length)
                    if query:
                        return query
                position += 2
                continue

            attached = dialect.attached_pattern(token)
            if attached is not None:
                query = _accept(attached, min_length)
                if query:
                    return query
            elif token.startswith("--"):
                if "=" not in token and dialect.takes_value(token):
                    position += 1
            elif dialect.takes_value(token):
                position += 1
            else:
                flag = _cluster_flag(token, dialect)
                if flag and dialect.is_pattern_flag(flag):
                    if position + 1 < len(args):
                        query = _accept(args[position + 1], min_length)
                        if query:
                            return query
                    position += 1
                elif flag:
                    position += 1
            position += 1
            continue

        logger.debug(f"Pattern argument for {dialect.name}: {token!r}")
        return _accept(token, min_length)

    return None


def extract_query_from_tool(
    tool_name: str,
    tool_input: dict[str, Any] | None,
    max_command_length: int = MAX_COMMAND_LENGTH,
    min_length: int = MIN_QUERY_LENGTH,
) -> str | None:
    """Extract a search query from a PreToolUse payload.

    Args:
        tool_name: Host tool name (Glob, Grep or Bash).
        tool_input: The tool's input object.
        max_command_length: Bash commands longer than this are ignored.
        min_length: Minimum length of a pattern taken from a Bash command.

    Returns:
        Query string, or None for other tools and non-search inputs.
    """
    tool_input = tool_input if isinstance(tool_input, dict) else {}

    if tool_name == "Glob":
        return extract_query_from_glob(tool_input.get("pattern", ""))
    if tool_name == "Grep":
        return extract_query_from_grep(tool_input.get("pattern", ""))
    if tool_name == "Bash":
        return extract_query_from_bash(
            tool_input.get("command", ""),
            max_length=max_command_length,
            min_length=min_length,
        )
    return None

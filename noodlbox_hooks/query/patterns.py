"""Reduce regex and glob patterns to plain search words."""

import re

# Order matters: "**" before "*", escapes before groups
_DOUBLE_WILDCARD = re.compile(r"\*\*")
_SINGLE_WILDCARD = re.compile(r"\*")
_ESCAPES_AND_GROUPS = re.compile(r"\\.|\[.*?\]|\(.*?\)|\{.*?\}")
_METACHARACTERS = re.compile(r"[\^$.|?+*\\]")
_WHITESPACE_RUN = re.compile(r"\s+")


def clean_pattern(pattern: str | None) -> str | None:
    """Strip regex/glob syntax from ``pattern``, keeping its readable words.

    Lossy on purpose: ``handle.*Request`` becomes ``handle Request``.

    Returns:
        The cleaned text, or None when nothing readable is left.
    """
    if not pattern or not isinstance(pattern, str):
        return None

    cleaned = _DOUBLE_WILDCARD.sub("", pattern)
    cleaned = _SINGLE_WILDCARD.sub(" ", cleaned)
    cleaned = _ESCAPES_AND_GROUPS.sub(" ", cleaned)
    cleaned = _METACHARACTERS.sub(" ", cleaned)
    cleaned = _WHITESPACE_RUN.sub(" ", cleaned).strip()

    return cleaned or None

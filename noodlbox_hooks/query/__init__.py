"""Query extraction from built-in search tool inputs."""

from .dialects import DIALECTS, SearchToolDialect, dialect_for
from .extractors import (
    extract_query_from_bash,
    extract_query_from_glob,
    extract_query_from_grep,
    extract_query_from_tool,
)
from .patterns import clean_pattern
from .tokenizer import tokenize

__all__ = [
    "tokenize",
    "clean_pattern",
    "SearchToolDialect",
    "DIALECTS",
    "dialect_for",
    "extract_query_from_glob",
    "extract_query_from_grep",
    "extract_query_from_bash",
    "extract_query_from_tool",
]

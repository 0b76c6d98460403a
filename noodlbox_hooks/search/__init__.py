"""noodl CLI client and search result formatting."""

from .client import NoodlClient, SearchOutcome, shorten_paths
from .formatting import SearchSummary, format_search_message, parse_search_results
from .git import resolve_repo_display_name

__all__ = [
    "NoodlClient",
    "SearchOutcome",
    "shorten_paths",
    "SearchSummary",
    "parse_search_results",
    "format_search_message",
    "resolve_repo_display_name",
]

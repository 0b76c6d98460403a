"""Parse noodl search output and render a short human summary.

noodl answers either with JSON (``{"results": [{"symbols": [...]}]}``,
possibly nested under ``result``) or with markdown text made of process
blocks listing ``name:`` entries. Both are reduced to entry points, each
with the execution flows that start there.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any

MAX_FLOW_STEPS = 4
MAX_SYMBOLS = 50
MAX_ENTRY_POINTS = 12
MAX_FLOWS_PER_ENTRY = 6
MAX_FLAT_SYMBOLS = 15
MAX_QUERY_DISPLAY = 35

_PROCESS_LINE = re.compile(r"\bprocess\b", re.IGNORECASE)
_NAME_LABEL = re.compile(r"\bname\**\s*:\s*\**\s*[`'\"]?([A-Za-z_$][\w$.]*)")
_STOP_WORDS = frozenset(
    {
        "name", "type", "file", "path", "process", "function", "method",
        "class", "symbol", "module", "null", "none", "undefined", "true",
        "false", "unknown",
    }
)


@dataclass
class SearchSummary:
    """Entry points and flows found in a search result.

    Attributes:
        entry_points: Entry point name -> list of flows (lists of names),
            in discovery order.
        symbols: Every symbol name seen, unique, capped at 50.
        fts_matches: Names flagged as direct full-text hits.
    """

    entry_points: dict[str, list[list[str]]] = field(default_factory=dict)
    symbols: list[str] = field(default_factory=list)
    fts_matches: set[str] = field(default_factory=set)

    def add_symbol(self, name: str) -> None:
        if name not in self.symbols and len(self.symbols) < MAX_SYMBOLS:
            self.symbols.append(name)

    def add_flow(self, entry_point: str, flow: list[str]) -> None:
        """Register ``flow`` under ``entry_point``, ignoring duplicates."""
        flows = self.entry_points.setdefault(entry_point, [])
        if not flow:
            return
        joined = " ".join(flow)
        if all(" ".join(existing) != joined for existing in flows):
            flows.append(flow)


def _structured_results(raw: str) -> list[Any] | None:
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError, ValueError):
        return None

    if not isinstance(data, dict):
        return None
    if isinstance(data.get("results"), list):
        return data["results"]
    nested = data.get("result")
    if isinstance(nested, dict) and isinstance(nested.get("results"), list):
        return nested["results"]
    return None


def _step_index(symbol: dict[str, Any]) -> float:
    value = symbol.get("step_index", 0)
    return value if isinstance(value, int | float) else 0


def _parse_structured(results: list[Any]) -> SearchSummary:
    summary = SearchSummary()

    for result in results:
        if not isinstance(result, dict) or not isinstance(result.get("symbols"), list):
            continue

        symbols = [
            s
            for s in result["symbols"]
            if isinstance(s, dict) and isinstance(s.get("name"), str) and s["name"]
        ]
        symbols.sort(key=_step_index)
        names = [s["name"] for s in symbols]
        if not names:
            continue

        for symbol in symbols:
            summary.add_symbol(symbol["name"])
            if symbol.get("is_fts_match"):
                summary.fts_matches.add(symbol["name"])

        summary.add_flow(names[0], names[1 : 1 + MAX_FLOW_STEPS])

    return summary


def _parse_text(raw: str) -> SearchSummary:
    summary = SearchSummary()

    blocks: list[list[str]] = []
    for line in raw.splitlines():
        if _PROCESS_LINE.search(line):
            blocks.append([])
        if blocks:
            blocks[-1].append(line)

    for block in blocks:
        names: list[str] = []
        for line in block:
            for name in _NAME_LABEL.findall(line):
                if name.lower() not in _STOP_WORDS and name not in names:
                    names.append(name)

        if len(names) < 2:
            continue

        for name in names:
            summary.add_symbol(name)
        summary.add_flow(names[0], names[1 : 1 + MAX_FLOW_STEPS])

    return summary


def parse_search_results(raw: str | None) -> SearchSummary:
    """Parse noodl output (JSON or text) into a SearchSummary."""
    if not raw or not isinstance(raw, str):
        return SearchSummary()

    results = _structured_results(raw)
    if results is not None:
        return _parse_structured(results)
    return _parse_text(raw)


def truncate_query(query: str, limit: int = MAX_QUERY_DISPLAY) -> str:
    if len(query) <= limit:
        return query
    return query[: limit - 3] + "..."


def format_search_message(query: str, summary: SearchSummary, elapsed_ms: int = 0) -> str:
    """Render a summary for display in the assistant UI.

    Example:
        Semantic search "handleAuth" (42ms)
          handleAuth (match)
            → validate → respond
    """
    header = f'Semantic search "{truncate_query(query)}"'
    if elapsed_ms > 0:
        header += f" ({elapsed_ms}ms)"

    lines = [header]

    if summary.entry_points:
        entries = list(summary.entry_points.items())
        for entry_point, flows in entries[:MAX_ENTRY_POINTS]:
            marker = " (match)" if entry_point in summary.fts_matches else ""
            lines.append(f"  {entry_point}{marker}")
            for flow in flows[:MAX_FLOWS_PER_ENTRY]:
                lines.append("    → " + " → ".join(flow))
            if len(flows) > MAX_FLOWS_PER_ENTRY:
                lines.append(f"    +{len(flows) - MAX_FLOWS_PER_ENTRY} more flows")
        if len(entries) > MAX_ENTRY_POINTS:
            lines.append(f"  +{len(entries) - MAX_ENTRY_POINTS} more entry points")
    elif summary.symbols:
        shown = summary.symbols[:MAX_FLAT_SYMBOLS]
        line = "  " + ", ".join(shown)
        if len(summary.symbols) > MAX_FLAT_SYMBOLS:
            line += f" +{len(summary.symbols) - MAX_FLAT_SYMBOLS} more"
        lines.append(line)

    return "\n".join(lines)

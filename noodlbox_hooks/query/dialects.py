"""Flag tables for the search tools recognized in Bash commands.

Each tool has its own set of options that consume the following word.
Treating one of them as a boolean flag would make its value look like the
search pattern (``rg -g '*.ts' handleAuth`` would search for ``*.ts``), so
the tables are kept per dialect and never merged.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchToolDialect:
    """Option grammar of one search tool family.

    Attributes:
        name: Dialect name used in logs.
        commands: Executable basenames that speak this dialect.
        value_flags: Options whose value is the next word.
        pattern_flags: Options whose value is the search pattern itself.
    """

    name: str
    commands: frozenset[str]
    value_flags: frozenset[str]
    pattern_flags: frozenset[str] = frozenset()

    def takes_value(self, flag: str) -> bool:
        return flag in self.value_flags

    def is_pattern_flag(self, flag: str) -> bool:
        return flag in self.pattern_flags

    def attached_pattern(self, token: str) -> str | None:
        """Return the pattern of ``-efoo`` / ``--regexp=foo`` style tokens."""
        for flag in self.pattern_flags:
            if flag.startswith("--"):
                if token.startswith(flag + "="):
                    return token[len(flag) + 1 :]
            elif len(flag) == 2 and token.startswith(flag) and len(token) > 2:
                return token[2:]
        return None


GREP = SearchToolDialect(
    name="grep",
    commands=frozenset({"grep", "egrep", "fgrep"}),
    value_flags=frozenset(
        {
            "-f", "-m", "-A", "-B", "-C", "-d", "-D",
            "--file", "--max-count", "--after-context", "--before-context",
            "--context", "--include", "--exclude", "--exclude-from",
            "--exclude-dir", "--label", "--binary-files", "--devices",
            "--directories", "--group-separator",
        }
    ),
    pattern_flags=frozenset({"-e", "--regexp"}),
)

RIPGREP = SearchToolDialect(
    name="rg",
    commands=frozenset({"rg"}),
    value_flags=frozenset(
        {
            "-f", "-g", "-t", "-T", "-m", "-A", "-B", "-C", "-M", "-j", "-E",
            "-r", "-d",
            "--file", "--glob", "--iglob", "--type", "--type-not", "--type-add",
            "--type-clear", "--max-count", "--after-context", "--before-context",
            "--context", "--max-columns", "--threads", "--encoding", "--replace",
            "--max-depth", "--max-filesize", "--sort", "--sortr", "--colors",
            "--color", "--path-separator", "--pre", "--pre-glob", "--ignore-file",
            "--context-separator", "--field-match-separator",
            "--field-context-separator", "--dfa-size-limit", "--regex-size-limit",
            "--engine",
        }
    ),
    pattern_flags=frozenset({"-e", "--regexp"}),
)

SILVER_SEARCHER = SearchToolDialect(
    name="ag",
    commands=frozenset({"ag"}),
    value_flags=frozenset(
        {
            "-A", "-B", "-C", "-G", "-g", "-m", "-p",
            "--after", "--before", "--context", "--file-search-regex",
            "--max-count", "--ignore", "--ignore-dir", "--path-to-ignore",
            "--depth", "--pager", "--workers",
        }
    ),
)

ACK = SearchToolDialect(
    name="ack",
    commands=frozenset({"ack"}),
    value_flags=frozenset(
        {
            "-A", "-B", "-C", "-m", "-g",
            "--after-context", "--before-context", "--context", "--max-count",
            "--ignore-dir", "--noignore-dir", "--ignore-file", "--type-set",
            "--type-add", "--type-del", "--output", "--pager", "--files-from",
            "--range-start", "--range-end",
        }
    ),
    pattern_flags=frozenset({"--match"}),
)

DIALECTS: tuple[SearchToolDialect, ...] = (GREP, RIPGREP, SILVER_SEARCHER, ACK)

# find has no pattern argument, only these name/path predicates
FIND_PATTERN_FLAGS = frozenset(
    {"-name", "-iname", "-path", "-ipath", "-regex", "-iregex"}
)


def dialect_for(command: str) -> SearchToolDialect | None:
    """Return the dialect for an executable basename, if it is a search tool."""
    for dialect in DIALECTS:
        if command in dialect.commands:
            return dialect
    return None

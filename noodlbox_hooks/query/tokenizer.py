"""Minimal shell command tokenizer.

Splits a command line into words honoring single quotes, double quotes and
backslash escapes. Unlike ``shlex.split`` it never raises: an unterminated
quote simply runs to the end of the input. Expansions, substitutions,
globs and redirections are not interpreted and stay literal.
"""

_WHITESPACE = " \t\r\n"


def tokenize(command: str) -> list[str]:
    """Split ``command`` into tokens.

    Examples:
        >>> tokenize("grep -n 'foo bar' baz")
        ['grep', '-n', 'foo bar', 'baz']
        >>> tokenize("grep 'abc")
        ['grep', 'abc']
    """
    tokens: list[str] = []
    current: list[str] = []
    # True once the current word has started, so '' yields an empty token
    in_word = False
    quote: str | None = None
    escaped = False

    for ch in command:
        if escaped:
            current.append(ch)
            escaped = False
            in_word = True
            continue

        if quote == "'":
            if ch == "'":
                quote = None
            else:
                current.append(ch)
            continue

        if ch == "\\":
            escaped = True
            continue

        if quote == '"':
            if ch == '"':
                quote = None
            else:
                current.append(ch)
            continue

        if ch in ("'", '"'):
            quote = ch
            in_word = True
        elif ch in _WHITESPACE:
            if in_word:
                tokens.append("".join(current))
                current = []
                in_word = False
        else:
            current.append(ch)
            in_word = True

    if in_word:
        tokens.append("".join(current))

    return tokens

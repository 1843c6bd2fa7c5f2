"""Text processing utilities for pspretty.

Provides the quoting and escaping rules for PowerShell string literals and
variable names.

Example:
    >>> from pspretty.utils.text import escape_double_quoted, quote_single
    >>> quote_single("it's")
    "'it''s'"
    >>> escape_double_quoted("a\\tb")
    'a`tb'
"""

from __future__ import annotations

import re

# Characters with a dedicated backtick escape inside double quotes
_DOUBLE_QUOTED_ESCAPES: dict[str, str] = {
    "\0": "`0",
    "\a": "`a",
    "\b": "`b",
    "\f": "`f",
    "\n": "`n",
    "\r": "`r",
    "\t": "`t",
    "\v": "`v",
    "`": "``",
    '"': '`"',
    "$": "`$",
    "\x1b": "`e",
}

# Characters the tokenizer accepts as a single quote
_SINGLE_QUOTES = re.compile("(['\u2018\u2019\u201a\u201b])")

# Variable names that can be written without ${...}; at most one scope prefix
_SIMPLE_VARIABLE_NAME = re.compile(r"(?:\w+:)?[\w?]+|[$^?]")


def escape_double_quoted(value: str) -> str:
    """Escape a string value for use between double quotes.

    Control characters with a backtick form, the backtick itself, double
    quotes and ``$`` are escaped; other ASCII passes through, and anything
    outside ASCII becomes a ``\\`u{HEX}`` escape.

    Args:
        value: The string's value

    Returns:
        Escaped text, without the enclosing quotes

    Examples:
        >>> escape_double_quoted('cost: $5 "now"')
        'cost: `$5 `"now`"'
        >>> escape_double_quoted("café")
        'caf`u{E9}'
    """
    parts: list[str] = []
    for char in value:
        escaped = _DOUBLE_QUOTED_ESCAPES.get(char)
        if escaped is not None:
            parts.append(escaped)
        elif ord(char) < 128:
            parts.append(char)
        else:
            parts.append(f"`u{{{ord(char):X}}}")
    return "".join(parts)


def quote_double(value: str) -> str:
    """Wrap an escaped value in double quotes."""
    return f'"{escape_double_quoted(value)}"'


def quote_single(value: str) -> str:
    """Wrap a value in single quotes, doubling embedded single quotes.

    The typographic quotes U+2018 to U+201B also end a single-quoted
    string, so each is doubled the same way.

    Examples:
        >>> quote_single("it's")
        "'it''s'"
        >>> quote_single("it’s")
        "'it’’s'"
    """
    return "'" + _SINGLE_QUOTES.sub(r"\1\1", value) + "'"


def here_string(value: str, *, expandable: bool, newline: str = "\n") -> str:
    """Wrap a raw body in here-string delimiters.

    The body is not escaped; the opening and closing markers sit on their
    own lines.

    Examples:
        >>> here_string("line 1\\nline 2", expandable=False)
        "@'\\nline 1\\nline 2\\n'@"
    """
    quote = '"' if expandable else "'"
    return f"@{quote}{newline}{value}{newline}{quote}@"


def format_variable_name(name: str) -> str:
    """Return a variable name as it must appear after ``$`` or ``@``.

    Simple names (word characters, one scope qualifier, ``?``) are written
    as-is; any other name is braced, with ``}`` and backticks escaped.

    Examples:
        >>> format_variable_name("env:PATH")
        'env:PATH'
        >>> format_variable_name("my var")
        '{my var}'
    """
    if _SIMPLE_VARIABLE_NAME.fullmatch(name):
        return name
    escaped = name.replace("`", "``").replace("}", "`}")
    return f"{{{escaped}}}"

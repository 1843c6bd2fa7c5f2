"""Tests for string quoting and variable-name formatting."""

import re

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pspretty.utils.text import (
    escape_double_quoted,
    format_variable_name,
    here_string,
    quote_double,
    quote_single,
)

_UNESCAPES = {
    "0": "\0",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "e": "\x1b",
    "`": "`",
    '"': '"',
    "$": "$",
}


def _unescape(text: str) -> str:
    """Reverse escape_double_quoted the way PowerShell reads it."""

    def replace(match: re.Match[str]) -> str:
        if match.group(1) is not None:
            return chr(int(match.group(1), 16))
        return _UNESCAPES[match.group(2)]

    return re.sub(r"`(?:u\{([0-9A-F]+)\}|(.))", replace, text, flags=re.DOTALL)


class TestEscapeDoubleQuoted:
    """Escaping for double-quoted strings."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("plain", "plain"),
            ("a\tb", "a`tb"),
            ("line\r\n", "line`r`n"),
            ("`", "``"),
            ('say "hi"', 'say `"hi`"'),
            ("$env", "`$env"),
            ("\0\a\b\f\v\x1b", "`0`a`b`f`v`e"),
            ("café", "caf`u{E9}"),
            ("😀", "`u{1F600}"),
        ],
    )
    def test_escapes(self, value: str, expected: str) -> None:
        assert escape_double_quoted(value) == expected

    def test_quote_double_wraps(self) -> None:
        assert quote_double("x$") == '"x`$"'

    @given(st.text())
    def test_round_trip(self, value: str) -> None:
        assert _unescape(escape_double_quoted(value)) == value

    @given(st.text())
    def test_output_is_ascii_without_bare_terminators(self, value: str) -> None:
        escaped = escape_double_quoted(value)
        assert escaped.isascii()
        # Every quote or dollar sign is preceded by a backtick escape
        assert not re.search(r"(?<!`)[\"$]", escaped.replace("``", ""))


def _unquote_single(body: str) -> str:
    return re.sub(r"(['\u2018-\u201b])\1", r"\1", body)


class TestQuoteSingle:
    """Single-quoted strings."""

    def test_doubles_quotes(self) -> None:
        assert quote_single("it's") == "'it''s'"
        assert quote_single("") == "''"

    @pytest.mark.parametrize("quote", ["\u2018", "\u2019", "\u201a", "\u201b"])
    def test_doubles_typographic_quotes(self, quote: str) -> None:
        assert quote_single(f"it{quote}s") == f"'it{quote}{quote}s'"

    @given(st.text() | st.text(alphabet="ab'\u2018\u2019\u201a\u201b"))
    def test_round_trip(self, value: str) -> None:
        quoted = quote_single(value)
        assert quoted.startswith("'")
        assert quoted.endswith("'")
        body = quoted[1:-1]
        # Every quote character in the body is part of a doubled pair
        assert re.fullmatch(r"(?:[^'\u2018-\u201b]|(['\u2018-\u201b])\1)*", body)
        assert _unquote_single(body) == value


class TestHereString:
    """Here-string delimiters."""

    def test_literal(self) -> None:
        assert here_string("a\nb", expandable=False) == "@'\na\nb\n'@"

    def test_expandable_with_crlf(self) -> None:
        assert here_string("x", expandable=True, newline="\r\n") == '@"\r\nx\r\n"@'


class TestFormatVariableName:
    """Variable names after $ or @."""

    @pytest.mark.parametrize("name", ["x", "_", "env:PATH", "global:count", "script:a_1", "?", "$", "^", "item2"])
    def test_simple_names(self, name: str) -> None:
        assert format_variable_name(name) == name

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("my var", "{my var}"),
            ("a-b", "{a-b}"),
            ("a}b", "{a`}b}"),
            ("a`b", "{a``b}"),
            ("a::b", "{a::b}"),
            ("a:b:c", "{a:b:c}"),
            (":x", "{:x}"),
        ],
    )
    def test_braced_names(self, name: str, expected: str) -> None:
        assert format_variable_name(name) == expected

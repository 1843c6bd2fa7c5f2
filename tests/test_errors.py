"""Tests for the exception hierarchy."""

import pytest

from pspretty.errors import (
    ParseError,
    PrettyPrinterError,
    RenderError,
    UnsupportedConstructError,
    construct_name,
)
from pspretty.location import SourceLocation
from pspretty.nodes import DataStatement, StringConstantType
from pspretty.parser import ParseDiagnostic
from pspretty.tokens import TokenKind


class TestHierarchy:
    """Every error derives from PrettyPrinterError."""

    @pytest.mark.parametrize("cls", [ParseError, RenderError, UnsupportedConstructError])
    def test_subclasses(self, cls: type) -> None:
        assert issubclass(cls, PrettyPrinterError)

    def test_unsupported_is_render_error(self) -> None:
        assert issubclass(UnsupportedConstructError, RenderError)


class TestParseErrorFormatting:
    """ParseError lists every diagnostic."""

    def test_lists_diagnostics(self) -> None:
        errors = [
            ParseDiagnostic("Missing closing '}'", "MissingEndCurlyBrace", SourceLocation(3, 1)),
            ParseDiagnostic("Unexpected token", "UnexpectedToken", SourceLocation(7, 12)),
        ]
        err = ParseError(errors, source_file="build.ps1")
        lines = str(err).splitlines()
        assert lines[0] == "A parse error was encountered while parsing the input script 'build.ps1'"
        assert lines[1] == "  3:1: Missing closing '}' [MissingEndCurlyBrace]"
        assert lines[2] == "  7:12: Unexpected token [UnexpectedToken]"
        assert err.errors == tuple(errors)
        assert err.source_file == "build.ps1"

    def test_without_source_file(self) -> None:
        err = ParseError([ParseDiagnostic("bad")])
        assert str(err) == "A parse error was encountered while parsing the input script\n  bad"


class TestUnsupportedConstructError:
    """Naming of the offending construct."""

    def test_default_message_for_node_class(self) -> None:
        err = UnsupportedConstructError(DataStatement)
        assert str(err) == "Unsupported construct: DataStatement"
        assert err.construct is DataStatement

    def test_custom_message(self) -> None:
        err = UnsupportedConstructError(TokenKind.COMMENT, "no spelling")
        assert str(err) == "no spelling"

    @pytest.mark.parametrize(
        ("construct", "expected"),
        [
            (DataStatement, "DataStatement"),
            (TokenKind.COMMENT, "TokenKind.COMMENT"),
            (StringConstantType.BARE_WORD, "StringConstantType.BARE_WORD"),
            (object(), "object"),
        ],
    )
    def test_construct_name(self, construct: object, expected: str) -> None:
        assert construct_name(construct) == expected

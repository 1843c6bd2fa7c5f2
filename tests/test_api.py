"""Tests for the high-level pretty-printing API."""

import json
import logging
from pathlib import Path

import pytest

from helpers import block, cmd, expr_stmt, script, var
from pspretty import (
    ParseError,
    PrettyPrinter,
    RenderConfig,
    UnsupportedConstructError,
    pretty_print,
    pretty_print_file,
    render,
)
from pspretty.nodes import DataStatement, IfStatement
from pspretty.parser import JsonAstParser, ParseDiagnostic, ParseResult
from pspretty.serialization import to_dict

IF_TREE = script(IfStatement(clauses=((expr_stmt(var("a")), block(cmd("Run"))),)))
IF_TEXT = "if ($a)\n{\n    Run\n}"


class FakeParser:
    """ScriptParser returning a canned result and recording its calls."""

    def __init__(self, result: ParseResult) -> None:
        self.result = result
        self.calls: list[tuple[str, object]] = []

    def parse_input(self, source: str, *, source_file: str | None = None) -> ParseResult:
        self.calls.append(("input", source))
        return self.result

    def parse_file(self, path: str | Path) -> ParseResult:
        self.calls.append(("file", path))
        return self.result


class TestPrettyPrinter:
    """Parse-then-render pipeline."""

    def test_default_parser_is_json(self) -> None:
        assert isinstance(PrettyPrinter().parser, JsonAstParser)

    def test_pretty_print_input(self) -> None:
        parser = FakeParser(ParseResult(ast=IF_TREE))
        assert PrettyPrinter(parser).pretty_print_input("if($a){Run}") == IF_TEXT
        assert parser.calls == [("input", "if($a){Run}")]

    def test_pretty_print_file(self, tmp_path: Path) -> None:
        parser = FakeParser(ParseResult(ast=IF_TREE))
        path = tmp_path / "x.ps1"
        assert PrettyPrinter(parser).pretty_print_file(path) == IF_TEXT
        assert parser.calls == [("file", path)]

    def test_parse_errors_raise_before_rendering(self) -> None:
        # The tree would fail to render; the parse error must win
        diagnostics = (ParseDiagnostic("Missing closing '}'", "MissingEndCurlyBrace"), ParseDiagnostic("Unexpected"))
        parser = FakeParser(ParseResult(ast=script(DataStatement(body=block())), errors=diagnostics))
        with pytest.raises(ParseError) as exc_info:
            PrettyPrinter(parser).pretty_print_input("if (")
        assert exc_info.value.errors == diagnostics

    def test_file_parse_error_names_file(self) -> None:
        parser = FakeParser(ParseResult(ast=None, errors=(ParseDiagnostic("bad"),)))
        with pytest.raises(ParseError, match="'broken.ps1'"):
            PrettyPrinter(parser).pretty_print_file("broken.ps1")

    def test_missing_tree_is_parse_error(self) -> None:
        parser = FakeParser(ParseResult(ast=None))
        with pytest.raises(ParseError, match="no syntax tree"):
            PrettyPrinter(parser).pretty_print_input("")

    def test_unsupported_construct_propagates(self) -> None:
        parser = FakeParser(ParseResult(ast=script(DataStatement(body=block()))))
        with pytest.raises(UnsupportedConstructError):
            PrettyPrinter(parser).pretty_print_input("data {}")

    def test_config(self) -> None:
        parser = FakeParser(ParseResult(ast=IF_TREE))
        printer = PrettyPrinter(parser, config=RenderConfig(indent_unit="\t"))
        assert printer.pretty_print_input("") == "if ($a)\n{\n\tRun\n}"
        assert printer.render(IF_TREE) == "if ($a)\n{\n\tRun\n}"

    def test_logs_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="pspretty")
        parser = FakeParser(ParseResult(ast=None, errors=(ParseDiagnostic("bad"),)))
        with pytest.raises(ParseError):
            PrettyPrinter(parser).pretty_print_input("x")
        messages = [record.getMessage() for record in caplog.records]
        assert any("Pretty-printing input" in m for m in messages)
        assert any("reported 1 error(s)" in m for m in messages)


class TestModuleFunctions:
    """pretty_print() and pretty_print_file() shortcuts."""

    def test_pretty_print_json_document(self) -> None:
        document = json.dumps({"ast": to_dict(IF_TREE)})
        assert pretty_print(document) == IF_TEXT

    def test_pretty_print_with_parser(self) -> None:
        assert pretty_print("ignored", parser=FakeParser(ParseResult(ast=IF_TREE))) == IF_TEXT

    def test_pretty_print_invalid_document(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            pretty_print("{oops")
        assert len(exc_info.value.errors) == 1

    def test_pretty_print_file(self, tmp_path: Path) -> None:
        path = tmp_path / "script.ast.json"
        path.write_text(json.dumps({"ast": to_dict(IF_TREE)}), encoding="utf-8")
        assert pretty_print_file(path) == IF_TEXT

    def test_pretty_print_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            pretty_print_file(tmp_path / "missing.json")

    def test_render(self) -> None:
        assert render(IF_TREE) == IF_TEXT

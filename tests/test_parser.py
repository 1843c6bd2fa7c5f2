"""Tests for the parser seam and JsonAstParser."""

import json
from pathlib import Path

from helpers import cmd, script
from pspretty.location import SourceLocation
from pspretty.parser import JsonAstParser, ParseDiagnostic, ParseResult
from pspretty.serialization import to_dict
from pspretty.tokens import Token, TokenKind


def _document(tree, tokens=(), errors=()) -> str:  # type: ignore[no-untyped-def]
    return json.dumps(
        {
            "ast": to_dict(tree),
            "tokens": [to_dict(token) for token in tokens],
            "errors": list(errors),
        }
    )


class TestParseDiagnostic:
    """Diagnostic formatting."""

    def test_str_with_location(self) -> None:
        diag = ParseDiagnostic("Unexpected token", "UnexpectedToken", SourceLocation(4, 2, source_file="x.ps1"))
        assert str(diag) == "x.ps1:4:2: Unexpected token [UnexpectedToken]"

    def test_str_without_location(self) -> None:
        assert str(ParseDiagnostic("bad")) == "bad"


class TestParseResult:
    """ParseResult.ok."""

    def test_ok(self) -> None:
        assert ParseResult(ast=script()).ok
        assert not ParseResult(ast=None).ok
        assert not ParseResult(ast=script(), errors=(ParseDiagnostic("bad"),)).ok


class TestJsonAstParser:
    """Reading interchange documents."""

    def test_parses_tree_and_tokens(self) -> None:
        tree = script(cmd("Get-Item"))
        tokens = (Token(TokenKind.GENERIC, "Get-Item"), Token(TokenKind.END_OF_INPUT))
        result = JsonAstParser().parse_input(_document(tree, tokens))
        assert result.ok
        assert result.ast == tree
        assert result.tokens == tokens
        assert result.errors == ()

    def test_tokens_and_errors_optional(self) -> None:
        result = JsonAstParser().parse_input(json.dumps({"ast": to_dict(script())}))
        assert result.ok
        assert result.tokens == ()

    def test_reports_parser_errors(self) -> None:
        error = {
            "message": "Missing closing '}'",
            "error_id": "MissingEndCurlyBrace",
            "location": {"_type": "SourceLocation", "lineno": 3, "col_offset": 1},
        }
        result = JsonAstParser().parse_input(_document(script(), errors=[error]))
        assert not result.ok
        assert result.errors == (ParseDiagnostic("Missing closing '}'", "MissingEndCurlyBrace", SourceLocation(3, 1)),)

    def test_invalid_json(self) -> None:
        result = JsonAstParser().parse_input("{not json", source_file="bad.json")
        assert result.ast is None
        assert len(result.errors) == 1
        diag = result.errors[0]
        assert diag.error_id == "InvalidJson"
        assert diag.location.lineno == 1
        assert diag.location.source_file == "bad.json"

    def test_missing_ast(self) -> None:
        result = JsonAstParser().parse_input(json.dumps({"tokens": []}))
        assert [e.error_id for e in result.errors] == ["MissingAst"]

    def test_unknown_node_type(self) -> None:
        result = JsonAstParser().parse_input(json.dumps({"ast": {"_type": "Bogus"}}))
        assert [e.error_id for e in result.errors] == ["MalformedAst"]
        assert "Bogus" in result.errors[0].message

    def test_ast_must_be_node(self) -> None:
        result = JsonAstParser().parse_input(json.dumps({"ast": {"_type": "TypeName", "name": "int"}}))
        assert [e.error_id for e in result.errors] == ["MalformedAst"]

    def test_malformed_token(self) -> None:
        document = {"ast": to_dict(script()), "tokens": [to_dict(script())]}
        result = JsonAstParser().parse_input(json.dumps(document))
        assert [e.error_id for e in result.errors] == ["MalformedAst"]

    def test_parse_file(self, tmp_path: Path) -> None:
        path = tmp_path / "script.ast.json"
        path.write_text(_document(script(cmd("Run"))), encoding="utf-8")
        result = JsonAstParser().parse_file(path)
        assert result.ok
        assert result.ast == script(cmd("Run"))

    def test_parse_file_reports_path(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("[", encoding="utf-8")
        result = JsonAstParser().parse_file(str(path))
        assert result.errors[0].location.source_file == str(path)

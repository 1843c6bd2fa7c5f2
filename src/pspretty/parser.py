"""Parser seam: the contract for producing a tree, and the JSON-backed default.

pspretty does not tokenize or parse PowerShell itself. A ScriptParser turns
script text (or a script file) into a ParseResult: the AST, the token stream
and any diagnostics. The printer refuses to render when diagnostics are
present.

The default implementation, JsonAstParser, reads an interchange document
produced by a PowerShell-side dumper (or by ``pspretty.serialization``):

    {"ast": {...}, "tokens": [{...}, ...], "errors": [{...}, ...]}

Each error is ``{"message": str, "error_id": str, "location": {...}}``;
``tokens`` and ``errors`` are optional.

Thread Safety:
    JsonAstParser holds no state; ParseResult and ParseDiagnostic are frozen.

"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from pspretty.location import UNKNOWN_LOCATION, SourceLocation
from pspretty.nodes import Node
from pspretty.serialization import from_dict, location_from_dict
from pspretty.tokens import Token


@dataclass(frozen=True, slots=True)
class ParseDiagnostic:
    """One error reported by the parser.

    Attributes:
        message: Human-readable description
        error_id: Parser's identifier for the error kind
        location: Where the error was detected

    """

    message: str
    error_id: str = ""
    location: SourceLocation = field(default=UNKNOWN_LOCATION)

    def __str__(self) -> str:
        prefix = f"{self.location}: " if self.location.is_known else ""
        suffix = f" [{self.error_id}]" if self.error_id else ""
        return f"{prefix}{self.message}{suffix}"


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Everything a parser produces for one script."""

    ast: Node | None
    tokens: tuple[Token, ...] = ()
    errors: tuple[ParseDiagnostic, ...] = ()

    @property
    def ok(self) -> bool:
        """True when the parse produced a tree and no diagnostics."""
        return self.ast is not None and not self.errors


class ScriptParser(Protocol):
    """Protocol for PowerShell parsers.

    Implementations report problems through ``ParseResult.errors`` rather
    than raising, so the caller sees every diagnostic at once.

    """

    def parse_input(self, source: str, *, source_file: str | None = None) -> ParseResult:
        """Parse script text.

        Args:
            source: Script text
            source_file: Path used in diagnostics (optional)

        Returns:
            Tree, tokens and diagnostics
        """
        ...

    def parse_file(self, path: str | Path) -> ParseResult:
        """Parse the script at ``path``."""
        ...


class JsonAstParser:
    """ScriptParser reading JSON interchange documents.

    Usage:
        >>> result = JsonAstParser().parse_input('{"ast": {"_type": "ScriptBlock"}}')
        >>> result.ok
        True

    """

    __slots__ = ()

    def parse_input(self, source: str, *, source_file: str | None = None) -> ParseResult:
        try:
            document = json.loads(source)
        except json.JSONDecodeError as e:
            location = SourceLocation(e.lineno, e.colno, offset=e.pos, source_file=source_file)
            return _failed(f"Invalid JSON AST document: {e.msg}", "InvalidJson", location)

        if not isinstance(document, dict) or not isinstance(document.get("ast"), dict):
            return _failed(
                "JSON AST document has no 'ast' object",
                "MissingAst",
                SourceLocation(0, 0, source_file=source_file),
            )

        try:
            ast = from_dict(document["ast"])
            tokens = tuple(from_dict(raw) for raw in document.get("tokens") or ())
            errors = tuple(_diagnostic_from_dict(raw) for raw in document.get("errors") or ())
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            return _failed(f"Malformed JSON AST document: {e}", "MalformedAst", UNKNOWN_LOCATION)

        if not isinstance(ast, Node):
            return _failed(f"Expected a node for 'ast', got {type(ast).__name__}", "MalformedAst", UNKNOWN_LOCATION)
        if not all(isinstance(token, Token) for token in tokens):
            return _failed("JSON AST document has a malformed token", "MalformedAst", UNKNOWN_LOCATION)

        return ParseResult(ast=ast, tokens=tokens, errors=errors)

    def parse_file(self, path: str | Path) -> ParseResult:
        path = Path(path)
        return self.parse_input(path.read_text(encoding="utf-8"), source_file=str(path))


def _diagnostic_from_dict(raw: dict[str, Any]) -> ParseDiagnostic:
    location = raw.get("location")
    return ParseDiagnostic(
        message=raw["message"],
        error_id=raw.get("error_id", ""),
        location=location_from_dict(location) if location else UNKNOWN_LOCATION,
    )


def _failed(message: str, error_id: str, location: SourceLocation) -> ParseResult:
    return ParseResult(ast=None, errors=(ParseDiagnostic(message, error_id, location),))

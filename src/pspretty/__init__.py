"""
pspretty — Canonical pretty-printer for PowerShell syntax trees

Takes the AST a PowerShell parser produced and writes it back out as
consistently formatted source: braces on their own line, four-space
indentation, single-spaced operators, blank lines after block statements.

Quick Start:
    >>> from pspretty import render
    >>> from pspretty.nodes import ScriptBlock, NamedBlock, Pipeline, CommandExpression, ConstantExpression
    >>> tree = ScriptBlock(end_block=NamedBlock(statements=(
    ...     Pipeline(elements=(CommandExpression(expression=ConstantExpression(value=1)),)),
    ... )))
    >>> render(tree)
    '1'

    >>> # Parse-and-render through a parser
    >>> from pspretty import PrettyPrinter
    >>> printer = PrettyPrinter()  # reads JSON AST documents by default
    >>> text = printer.pretty_print_file("script.ast.json")

Parsing itself happens outside this package; any object implementing the
``ScriptParser`` protocol can be plugged into ``PrettyPrinter``.
"""

from collections.abc import Iterable
from pathlib import Path

from pspretty.config import (
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from pspretty.errors import (
    ParseError,
    PrettyPrinterError,
    RenderError,
    UnsupportedConstructError,
)
from pspretty.location import SourceLocation
from pspretty.nodes import Node, ScriptBlock
from pspretty.parser import (
    JsonAstParser,
    ParseDiagnostic,
    ParseResult,
    ScriptParser,
)
from pspretty.renderers.script import ScriptRenderer
from pspretty.serialization import from_json, to_json
from pspretty.stringbuilder import StringBuilder
from pspretty.tokens import Token, TokenKind
from pspretty.utils.logger import get_logger

logger = get_logger(__name__)

__version__ = "0.1.0"


def render(
    node: Node,
    tokens: Iterable[Token] = (),
    *,
    config: RenderConfig | None = None,
) -> str:
    """Render an AST to formatted PowerShell.

    Args:
        node: Root of the tree (a ScriptBlock for a whole script)
        tokens: Token stream the tree was parsed from
        config: Render configuration (defaults to the active context config)

    Returns:
        Formatted script text

    Raises:
        UnsupportedConstructError: If the tree holds a construct with no
            formatting rule.
    """
    return ScriptRenderer(config=config).render(node, tokens)


class PrettyPrinter:
    """Parse-then-render pipeline around a pluggable parser.

    Usage:
        >>> printer = PrettyPrinter()
        >>> printer.pretty_print_input('{"ast": {"_type": "ScriptBlock"}}')
        ''

    Thread Safety:
        Holds only the parser and config references; safe to share when the
        parser is.

    """

    __slots__ = ("_parser", "_renderer")

    def __init__(
        self,
        parser: ScriptParser | None = None,
        config: RenderConfig | None = None,
    ) -> None:
        """Initialize printer.

        Args:
            parser: Parser used for input text and files (JsonAstParser if None)
            config: Fixed render configuration (active context config if None)
        """
        self._parser = parser or JsonAstParser()
        self._renderer = ScriptRenderer(config=config)

    @property
    def parser(self) -> ScriptParser:
        return self._parser

    def pretty_print_input(self, source: str, *, source_file: str | None = None) -> str:
        """Parse script text and render it.

        Raises:
            ParseError: If the parser reported any diagnostics.
            UnsupportedConstructError: If the tree cannot be rendered.
        """
        logger.debug("Pretty-printing input (%d chars)", len(source))
        result = self._parser.parse_input(source, source_file=source_file)
        return self._render_result(result, source_file)

    def pretty_print_file(self, path: str | Path) -> str:
        """Parse the script at ``path`` and render it.

        Raises:
            ParseError: If the parser reported any diagnostics.
            UnsupportedConstructError: If the tree cannot be rendered.
            OSError: If the file cannot be read.
        """
        logger.debug("Pretty-printing file %s", path)
        result = self._parser.parse_file(path)
        return self._render_result(result, str(path))

    def render(self, node: Node, tokens: Iterable[Token] = ()) -> str:
        """Render an already-parsed tree."""
        return self._renderer.render(node, tokens)

    def _render_result(self, result: ParseResult, source_file: str | None) -> str:
        if result.errors:
            logger.debug("Parser reported %d error(s) for %s", len(result.errors), source_file or "<input>")
            raise ParseError(result.errors, source_file=source_file)
        if result.ast is None:
            raise ParseError(
                (ParseDiagnostic("Parser produced no syntax tree", "MissingAst"),),
                source_file=source_file,
            )
        return self._renderer.render(result.ast, result.tokens)


def pretty_print(
    source: str,
    *,
    parser: ScriptParser | None = None,
    config: RenderConfig | None = None,
) -> str:
    """Parse script text with ``parser`` and render it.

    Example:
        >>> pretty_print('{"ast": {"_type": "ScriptBlock"}}')
        ''
    """
    return PrettyPrinter(parser, config=config).pretty_print_input(source)


def pretty_print_file(
    path: str | Path,
    *,
    parser: ScriptParser | None = None,
    config: RenderConfig | None = None,
) -> str:
    """Parse the script at ``path`` with ``parser`` and render it."""
    return PrettyPrinter(parser, config=config).pretty_print_file(path)


__all__ = [  # noqa: RUF022 — grouped by category for maintainability
    # Version
    "__version__",
    # High-level API
    "PrettyPrinter",
    "pretty_print",
    "pretty_print_file",
    "render",
    # Rendering
    "ScriptRenderer",
    "StringBuilder",
    # Parsing seam
    "JsonAstParser",
    "ParseDiagnostic",
    "ParseResult",
    "ScriptParser",
    # AST
    "Node",
    "ScriptBlock",
    "SourceLocation",
    "Token",
    "TokenKind",
    # Serialization
    "from_json",
    "to_json",
    # Configuration
    "RenderConfig",
    "get_render_config",
    "render_config_context",
    "reset_render_config",
    "set_render_config",
    # Errors
    "ParseError",
    "PrettyPrinterError",
    "RenderError",
    "UnsupportedConstructError",
]

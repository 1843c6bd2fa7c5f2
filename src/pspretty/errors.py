"""Exception classes for pspretty.

Provides standardized exceptions for error handling throughout pspretty.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pspretty.parser import ParseDiagnostic


class PrettyPrinterError(Exception):
    """Base exception for all pspretty errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(PrettyPrinterError):
    """The external parser reported errors for the input script.

    Raised before rendering is attempted; carries every diagnostic the
    parser produced so callers can report all of them at once.
    """

    def __init__(
        self,
        errors: Iterable[ParseDiagnostic],
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error from parser diagnostics.

        Args:
            errors: Diagnostics reported by the parser (at least one)
            source_file: Path of the script that failed to parse (optional)
        """
        self.errors: tuple[ParseDiagnostic, ...] = tuple(errors)
        self.source_file = source_file

        message = "A parse error was encountered while parsing the input script"
        if source_file:
            message = f"{message} {source_file!r}"
        lines = [message]
        lines.extend(f"  {error}" for error in self.errors)
        super().__init__("\n".join(lines))


class RenderError(PrettyPrinterError):
    """Error during rendering.

    Raised when the renderer's buffer invariants are violated
    (for example, a dedent below indentation depth zero).
    """

    pass


class UnsupportedConstructError(RenderError):
    """The tree holds a construct that has no formatting rule.

    Fatal for the render call: no partial output is returned.
    """

    def __init__(self, construct: Any, message: str | None = None) -> None:
        """Initialize with the offending construct.

        Args:
            construct: The node class, node, token kind or sub-kind that
                could not be rendered
            message: Description (defaults to one naming the construct)
        """
        self.construct = construct
        super().__init__(message or f"Unsupported construct: {construct_name(construct)}")


def construct_name(construct: Any) -> str:
    """Return a readable name for a node, node class or enum member."""
    if isinstance(construct, type):
        return construct.__name__
    name = getattr(construct, "name", None)
    if isinstance(name, str) and hasattr(type(construct), "__members__"):
        return f"{type(construct).__name__}.{name}"
    return type(construct).__name__

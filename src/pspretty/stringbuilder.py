"""StringBuilder with indentation tracking for O(n) script output.

Appends to a list, joins once at the end: O(n) total vs O(n²) for repeated
string concatenation. On top of plain appends it owns the indentation
depth, so formatting rules never touch indentation state directly: they
call ``indent()``/``dedent()``, and every ``newline()`` writes the prefix
for the current depth.

Thread Safety:
StringBuilder instances are local to each render() call.
No shared mutable state.

"""

from __future__ import annotations

from pspretty.errors import RenderError


class StringBuilder:
    """Append-only text accumulator with an indentation depth.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("{").indent().append("1").dedent().append("}")
            >>> sb.build()
            '{\\n    1\\n}'

    Invariant:
        ``depth`` never goes below zero; a dedent at depth zero raises
        RenderError.

    Thread Safety:
        Instance is local to each render() call.
        No shared mutable state.

    """

    __slots__ = ("_depth", "_indent_unit", "_newline", "_parts")

    def __init__(self, indent_unit: str = "    ", newline: str = "\n") -> None:
        """Initialize empty StringBuilder.

        Args:
            indent_unit: Text written once per indentation level after a newline
            newline: Line terminator
        """
        self._parts: list[str] = []
        self._depth = 0
        self._indent_unit = indent_unit
        self._newline = newline

    @property
    def depth(self) -> int:
        """Current indentation depth."""
        return self._depth

    def append(self, s: str) -> StringBuilder:
        """Append a string to the builder.

        Args:
            s: String to append (empty strings are skipped)

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
        return self

    def newline(self, count: int = 1) -> StringBuilder:
        """End the current line and start an indented one.

        Args:
            count: Number of line terminators; values above 1 leave blank
                lines, which carry no indentation

        Returns:
            self for method chaining
        """
        self._parts.append(self._newline * count)
        if self._depth:
            self._parts.append(self._indent_unit * self._depth)
        return self

    def indent(self) -> StringBuilder:
        """Increase depth by one and start a new line at that depth."""
        self._depth += 1
        return self.newline()

    def dedent(self) -> StringBuilder:
        """Decrease depth by one and start a new line at that depth.

        Raises:
            RenderError: If the depth is already zero.
        """
        if self._depth == 0:
            raise RenderError("Unbalanced dedent: indentation depth is already 0")
        self._depth -= 1
        return self.newline()

    def build(self) -> str:
        """Join all parts into final string.

        Returns:
            Concatenated string of all appended parts
        """
        return "".join(self._parts)

    def clear(self) -> StringBuilder:
        """Clear all accumulated parts and reset the depth.

        Returns:
            self for method chaining
        """
        self._parts.clear()
        self._depth = 0
        return self

    def __len__(self) -> int:
        """Return number of parts (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        """Return True if any parts have been appended."""
        return bool(self._parts)

"""Source location tracking for nodes, tokens and parse diagnostics.

Provides SourceLocation, the Python counterpart of a script extent: where a
node or token started and ended in the parsed script.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position of a construct in the parsed script.

    All positions are 1-indexed (lineno and col_offset start at 1).
    Synthetic nodes use ``SourceLocation.unknown()`` (line and column 0).

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column offset (1-indexed)
        offset: Absolute start offset in the script text
        end_offset: Absolute end offset in the script text
        end_lineno: Ending line number (optional)
        end_col_offset: Ending column offset (optional)
        source_file: Script path (optional)

    Examples:
            >>> loc = SourceLocation(3, 5, source_file="build.ps1")
            >>> str(loc)
            'build.ps1:3:5'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    end_lineno: int | None = None
    end_col_offset: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "script.ps1:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @property
    def is_known(self) -> bool:
        """True unless this is the placeholder used for synthetic nodes."""
        return self.lineno > 0

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create an unknown/placeholder location.

        Use for AST nodes created synthetically or when location is unavailable.
        """
        return cls(lineno=0, col_offset=0)


UNKNOWN_LOCATION = SourceLocation.unknown()

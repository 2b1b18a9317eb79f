"""Source location tracking for error messages and warnings.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position of a line or block in Pod source.

    Positions are 1-indexed. A location with ``lineno == 0`` is a placeholder
    for nodes built programmatically rather than parsed.

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column offset (1-indexed)
        end_lineno: Ending line number (optional)
        source_file: Source file path (optional)

    Examples:
        >>> loc = SourceLocation(3, 1, source_file="IO-Handle.rakudoc")
        >>> str(loc)
        'IO-Handle.rakudoc:3:1'

    """

    lineno: int
    col_offset: int
    end_lineno: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.rakudoc:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create a placeholder location for synthetic nodes."""
        return cls(lineno=0, col_offset=0)

"""Exception and warning classes for podrender.

Parse errors abort a run. Reference warnings never do: they are collected
while rendering and reported once the output has been produced.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from podrender.location import SourceLocation


class PodError(Exception):
    """Base exception for all podrender errors."""

    pass


class ParseError(PodError):
    """Malformed Pod input.

    Raised for unterminated or mismatched delimited blocks, directives
    without a block name, malformed config and empty headings.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")

    @classmethod
    def at(cls, message: str, location: SourceLocation) -> ParseError:
        """Build a ParseError positioned at a source location."""
        return cls(
            message,
            lineno=location.lineno,
            col_offset=location.col_offset,
            source_file=location.source_file,
        )


class RenderError(PodError):
    """Unsupported node or output format during rendering."""

    pass


class ConfigError(PodError):
    """Invalid configuration file or value."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        prefix = f"{path}: " if path else ""
        super().__init__(f"{prefix}{message}")


class ReferenceWarning(UserWarning):
    """A cross-reference whose target could not be resolved.

    Non-fatal. The reference is rendered as plain text and the warning is
    collected on the render result.
    """

    def __init__(self, target: str, location: SourceLocation | None = None) -> None:
        self.target = target
        self.location = location
        where = f"{location}: " if location is not None and location.lineno else ""
        super().__init__(f"{where}unresolved reference {target!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReferenceWarning):
            return NotImplemented
        return self.target == other.target and self.location == other.location

    def __hash__(self) -> int:
        return hash((self.target, self.location))

"""StringBuilder for O(n) string accumulation.

Renderers append fragments to a list and join once at the end instead of
concatenating strings repeatedly.

Thread Safety:
StringBuilder instances are local to each render() call.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator.

    Usage:
            >>> sb = StringBuilder()
            >>> _ = sb.append("<p>").append("Hello").append("</p>")
            >>> sb.build()
            '<p>Hello</p>'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a string (empty strings are skipped); returns self for chaining."""
        if s:
            self._parts.append(s)
        return self

    def append_line(self, s: str = "") -> StringBuilder:
        """Append a string followed by a newline."""
        if s:
            self._parts.append(s)
        self._parts.append("\n")
        return self

    def build(self) -> str:
        """Join all parts into the final string."""
        return "".join(self._parts)

    def __bool__(self) -> bool:
        """Return True if any parts have been appended."""
        return bool(self._parts)

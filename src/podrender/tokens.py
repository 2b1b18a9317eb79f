"""Token and TokenType definitions for the podrender lexer.

The lexer produces one token per source line (plus EOF). Directive tokens
carry the parsed block name, its inline text and its config pairs so the
parser never has to re-scan a line.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from podrender.location import SourceLocation


class TokenType(Enum):
    """Token types produced by the lexer."""

    # Document structure
    EOF = auto()
    BLANK_LINE = auto()

    # Directives
    BEGIN = auto()  # =begin NAME [config]
    END = auto()  # =end NAME
    FOR = auto()  # =for NAME [config]
    ABBREVIATED = auto()  # =NAME text   (also "= text" heading shorthand)

    # Content lines
    TEXT_LINE = auto()  # Ordinary paragraph line
    INDENTED_LINE = auto()  # Indented line starting an implicit code block
    VERBATIM_LINE = auto()  # Line inside =begin code ... =end code


@dataclass(frozen=True, slots=True)
class Token:
    """A single classified source line.

    Attributes:
        type: The token type
        value: Raw line text (newline stripped); for directives, the text
            following the block name and config
        location: Where the line starts
        name: Block name for directive tokens ("" otherwise)
        config: Config pairs parsed from ``:key<value>`` syntax

    """

    type: TokenType
    value: str
    location: SourceLocation
    name: str = ""
    config: tuple[tuple[str, Any], ...] = field(default=())

    @property
    def lineno(self) -> int:
        """Line number (convenience accessor)."""
        return self.location.lineno

    def config_value(self, key: str, default: Any = None) -> Any:
        """Look up a config value by key."""
        for k, v in self.config:
            if k == key:
                return v
        return default

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        name = f" {self.name}" if self.name else ""
        return f"Token({self.type.name}{name}, {val!r}, {self.location.lineno})"

"""Lexer operating modes and directive name constants."""

from __future__ import annotations

from enum import Enum, auto


class LexerMode(Enum):
    """Lexer operating modes.

    The lexer switches between modes based on context:
    - BLOCK: Between or inside ordinary blocks, classifying each line
    - DELIMITED_VERBATIM: Inside ``=begin code`` / ``=begin comment``
    - PARAGRAPH_VERBATIM: Inside ``=for code`` / ``=code`` (ends at blank line)
    - IMPLICIT_CODE: Inside an indented code paragraph (ends at blank line)

    """

    BLOCK = auto()
    DELIMITED_VERBATIM = auto()
    PARAGRAPH_VERBATIM = auto()
    IMPLICIT_CODE = auto()


# Blocks whose content is kept line-for-line rather than classified
VERBATIM_BLOCKS = frozenset({"code", "comment"})

# Directive names with a structural meaning (not abbreviated block names)
STRUCTURAL_DIRECTIVES = frozenset({"begin", "end", "for"})

"""Directive classifier mixin.

Classifies lines starting with ``=`` into BEGIN/END/FOR/ABBREVIATED tokens
and parses Pod block config (``:lang<raku>``, ``:!numbered``,
``:kind("Type")``).
"""

from __future__ import annotations

import re
from typing import Any

from podrender.errors import ParseError
from podrender.lexer.modes import STRUCTURAL_DIRECTIVES, VERBATIM_BLOCKS, LexerMode
from podrender.location import SourceLocation
from podrender.tokens import Token, TokenType

# "= Title", "== Subtitle" ... up to six
_HEADING_SHORTHAND = re.compile(r"(={1,6})[ \t]+(.*)$")
# "=name" or "=name rest"
_DIRECTIVE = re.compile(r"=([A-Za-z][\w-]*)(?:[ \t]+(.*))?$")
_CONFIG_KEY = re.compile(r":(!?)([A-Za-z][\w-]*)")

_CLOSERS = {"<": ">", "(": ")", "[": "]"}


def _coerce_scalar(raw: str) -> Any:
    raw = raw.strip()
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in "'\"":
        return raw[1:-1]
    if raw in ("True", "False"):
        return raw == "True"
    try:
        return int(raw)
    except ValueError:
        return raw


def parse_block_config(text: str, location: SourceLocation) -> tuple[tuple[tuple[str, Any], ...], str]:
    """Parse leading config pairs from the text after a block name.

    Args:
        text: Remainder of the directive line
        location: Location used for error reporting

    Returns:
        (config pairs, remaining text after the last pair)

    Raises:
        ParseError: On an unterminated ``<...>``, ``(...)`` or ``[...]`` value

    Example:
        >>> parse_block_config(':lang<raku> :!numbered', SourceLocation(1, 1))
        ((('lang', 'raku'), ('numbered', False)), '')
    """
    pairs: list[tuple[str, Any]] = []
    pos = 0
    length = len(text)
    while True:
        while pos < length and text[pos] in " \t":
            pos += 1
        m = _CONFIG_KEY.match(text, pos)
        if m is None:
            break
        negated, key = m.group(1), m.group(2)
        pos = m.end()
        if pos < length and text[pos] in _CLOSERS:
            if negated:
                raise ParseError.at(f"negated config key ':!{key}' cannot take a value", location)
            opener = text[pos]
            close = text.find(_CLOSERS[opener], pos + 1)
            if close == -1:
                raise ParseError.at(
                    f"unterminated value for config key ':{key}' (missing {_CLOSERS[opener]!r})",
                    location,
                )
            inner = text[pos + 1 : close]
            pos = close + 1
            if opener == "<":
                words = tuple(inner.split())
                value: Any = words[0] if len(words) == 1 else words
            elif opener == "(":
                stripped = inner.strip()
                if stripped[:1] in ("'", '"') and (len(stripped) < 2 or stripped[-1] != stripped[0]):
                    raise ParseError.at(f"unterminated string for config key ':{key}'", location)
                value = _coerce_scalar(inner)
            else:
                value = tuple(_coerce_scalar(part) for part in inner.split(",") if part.strip())
        else:
            value = not negated
        pairs.append((key, value))
    return tuple(pairs), text[pos:].strip()


class DirectiveClassifierMixin:
    """Mixin providing directive line classification.

    Updates lexer mode when a directive opens a verbatim block.

    """

    # These will be set by the Lexer class
    _mode: LexerMode
    _verbatim_name: str
    _verbatim_depth: int

    def _try_classify_directive(self, line: str, location: SourceLocation) -> Token | None:
        """Try to classify a column-1 ``=`` line as a directive.

        Args:
            line: Full line content (newline stripped)
            location: Location of the line

        Returns:
            Directive token, or None if the line is ordinary text.

        Raises:
            ParseError: On malformed block config
        """
        m = _HEADING_SHORTHAND.match(line)
        if m is not None:
            level = len(m.group(1))
            return Token(TokenType.ABBREVIATED, m.group(2).strip(), location, name=f"head{level}")

        m = _DIRECTIVE.match(line)
        if m is None:
            return None

        directive, rest = m.group(1), (m.group(2) or "").strip()
        if directive not in STRUCTURAL_DIRECTIVES:
            token = Token(TokenType.ABBREVIATED, rest, location, name=directive)
            if directive in VERBATIM_BLOCKS:
                self._mode = LexerMode.PARAGRAPH_VERBATIM
                self._verbatim_name = directive
            return token

        parts = rest.split(None, 1)
        name = parts[0] if parts else ""
        after_name = parts[1] if len(parts) > 1 else ""
        if directive == "end":
            return Token(TokenType.END, after_name.strip(), location, name=name)

        config, remainder = parse_block_config(after_name, location)
        if directive == "begin":
            if remainder:
                raise ParseError.at(
                    f"unexpected text after '=begin {name}' config: {remainder!r}", location
                )
            if name in VERBATIM_BLOCKS:
                self._mode = LexerMode.DELIMITED_VERBATIM
                self._verbatim_name = name
                self._verbatim_depth = 0
            return Token(TokenType.BEGIN, "", location, name=name, config=config)

        if name in VERBATIM_BLOCKS:
            self._mode = LexerMode.PARAGRAPH_VERBATIM
            self._verbatim_name = name
        return Token(TokenType.FOR, remainder, location, name=name, config=config)

    def _is_verbatim_end(self, line: str) -> bool:
        """Check whether a line closes the current delimited verbatim block.

        Nested ``=begin NAME`` / ``=end NAME`` pairs of the same name are
        kept as content.
        """
        m = _DIRECTIVE.match(line)
        if m is None or m.group(1) not in ("begin", "end"):
            return False
        words = (m.group(2) or "").split()
        name = words[0] if words else ""
        if name != self._verbatim_name:
            return False
        if m.group(1) == "begin":
            self._verbatim_depth += 1
            return False
        if self._verbatim_depth:
            self._verbatim_depth -= 1
            return False
        return True

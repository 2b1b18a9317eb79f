"""Block parser producing the immutable document model.

Consumes the line token stream from Lexer and builds typed Block nodes.

Architecture:
- `TokenNavigationMixin`: token stream traversal (advance, peek, expect)
- `Parser`: block grammar; delimited ``=begin``/``=end`` blocks are parsed
  recursively and their names checked against an explicit stack

Thread Safety:
- Parser instances are single-use; create one per parse
- Configuration is read from ContextVar (thread-local)
- The resulting blocks are frozen dataclasses, safe to share

"""

from __future__ import annotations

import re
import textwrap
from collections.abc import Sequence

from podrender.config import ParseConfig, get_parse_config
from podrender.errors import ParseError
from podrender.formatting import match_cross_reference
from podrender.lexer import Lexer
from podrender.location import SourceLocation
from podrender.nodes import Block, CodeSample, CrossReference, Heading, ListItem, Paragraph
from podrender.tokens import Token, TokenType
from podrender.utils.logger import get_logger
from podrender.utils.text import collapse_whitespace

logger = get_logger(__name__)

_HEAD = re.compile(r"head([1-6])?$")
_ITEM = re.compile(r"item([1-6])?$")
_HEADING_ALIASES = {"TITLE": 1, "SUBTITLE": 2}
# Abbreviated directives that are accepted and dropped
_IGNORED = frozenset({"comment", "config"})


class TokenNavigationMixin:
    """Mixin providing token stream navigation methods.

    Required Host Attributes:
        - _tokens: Sequence[Token]
        - _pos: int
        - _current: Token

    """

    _tokens: Sequence[Token]
    _pos: int
    _current: Token

    def _at_end(self) -> bool:
        """Check if at end of token stream."""
        return self._current.type == TokenType.EOF

    def _advance(self) -> Token:
        """Consume the current token and return it."""
        token = self._current
        if self._pos + 1 < len(self._tokens):
            self._pos += 1
            self._current = self._tokens[self._pos]
        return token

    def _peek(self, offset: int = 1) -> Token | None:
        """Peek at token at offset from current position."""
        pos = self._pos + offset
        if pos < len(self._tokens):
            return self._tokens[pos]
        return None

    def _collect(self, *types: TokenType) -> list[Token]:
        """Consume consecutive tokens of the given types."""
        collected: list[Token] = []
        while self._current.type in types:
            collected.append(self._advance())
        return collected


class Parser(TokenNavigationMixin):
    """Recursive descent parser for Pod.

    Usage:
            >>> Parser("= Title\\n\\nSome text.\\n").parse()
        (Heading(level=1, text='Title'), Paragraph(text='Some text.'))

    Configuration:
        Reads ParseConfig from ContextVar. Use parse_config_context() before
        creating a Parser if you need non-default configuration.

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_tokens",
        "_pos",
        "_current",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize parser with source text.

        Args:
            source: Pod source text
            source_file: Optional source file path for error messages
        """
        self._source = source
        self._source_file = source_file
        self._tokens: list[Token] = []
        self._pos = 0

    @property
    def _config(self) -> ParseConfig:
        """Get current parse configuration (thread-local)."""
        return get_parse_config()

    def parse(self) -> tuple[Block, ...]:
        """Parse source into blocks.

        Returns:
            Tuple of Block nodes in source order

        Raises:
            ParseError: On malformed or unterminated blocks
        """
        self._tokens = list(Lexer(self._source, self._source_file).tokenize())
        self._pos = 0
        self._current = self._tokens[0]

        blocks: list[Block] = []
        while not self._at_end():
            if self._current.type == TokenType.END:
                raise self._unmatched_end(self._current)
            blocks.extend(self._parse_block())

        logger.debug("Parsed %d blocks from %d tokens", len(blocks), len(self._tokens))
        return tuple(blocks)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _parse_block(self) -> list[Block]:
        """Parse the block starting at the current token.

        Returns a list because containers yield several blocks and comments
        yield none.
        """
        token = self._current
        match token.type:
            case TokenType.BLANK_LINE:
                self._advance()
                return []
            case TokenType.TEXT_LINE:
                lines = self._collect(TokenType.TEXT_LINE)
                return self._make_paragraph([t.value for t in lines], lines[0].location)
            case TokenType.INDENTED_LINE:
                return [self._parse_implicit_code()]
            case TokenType.ABBREVIATED:
                return self._parse_abbreviated()
            case TokenType.FOR:
                return self._parse_paragraph_block()
            case TokenType.BEGIN:
                return self._parse_delimited()
            case _:
                raise ParseError.at(f"unexpected {token.type.name.lower()} token", token.location)

    # =========================================================================
    # Block constructors
    # =========================================================================

    def _make_paragraph(self, lines: list[str], location: SourceLocation) -> list[Block]:
        text = collapse_whitespace(" ".join(lines))
        if not text:
            return []
        xref = match_cross_reference(text)
        if xref is not None:
            target, label = xref
            return [CrossReference(target, label, location=location)]
        return [Paragraph(text, location=location)]

    def _make_named(
        self, name: str, lines: list[str], token: Token, *, numbered: bool = False
    ) -> list[Block] | None:
        """Build a heading, list item or paragraph from a named block.

        Returns None when ``name`` is not a heading, item or para block.
        """
        text = collapse_whitespace(" ".join(lines))
        head = _HEAD.match(name)
        if head is not None or name in _HEADING_ALIASES:
            level = _HEADING_ALIASES.get(name) or int(head.group(1) or 1)
            if not text:
                raise ParseError.at(f"'={name}' heading has no text", token.location)
            return [Heading(level, text, location=token.location)]

        item = _ITEM.match(name)
        if item is not None:
            if token.type == TokenType.ABBREVIATED and text.startswith("# "):
                numbered = True
                text = text[2:].lstrip()
            if not text:
                raise ParseError.at(f"'={name}' list item has no text", token.location)
            level = int(item.group(1) or 1)
            return [ListItem(text, level=level, numbered=numbered, location=token.location)]

        if name == "para":
            return self._make_paragraph([text], token.location)
        return None

    def _make_code(self, lines: list[str], token: Token) -> CodeSample:
        language = token.config_value("lang", self._config.default_language)
        if isinstance(language, tuple):
            language = " ".join(str(part) for part in language)
        return CodeSample(str(language), "\n".join(lines), location=token.location)

    # =========================================================================
    # Block grammar
    # =========================================================================

    def _parse_implicit_code(self) -> CodeSample:
        """Indented paragraphs; runs separated only by blank lines merge."""
        first = self._current
        lines = [t.value for t in self._collect(TokenType.INDENTED_LINE)]
        while self._current.type == TokenType.BLANK_LINE:
            offset = 1
            while (nxt := self._peek(offset)) is not None and nxt.type == TokenType.BLANK_LINE:
                offset += 1
            if nxt is None or nxt.type != TokenType.INDENTED_LINE:
                break
            lines.extend("" for _ in self._collect(TokenType.BLANK_LINE))
            lines.extend(t.value for t in self._collect(TokenType.INDENTED_LINE))
        text = textwrap.dedent("\n".join(lines))
        return CodeSample(self._config.default_language, text, location=first.location)

    def _parse_abbreviated(self) -> list[Block]:
        """``=NAME text`` plus continuation lines up to the next blank line."""
        token = self._advance()
        name = token.name

        if name == "code":
            lines = [token.value] if token.value else []
            lines.extend(t.value for t in self._collect(TokenType.VERBATIM_LINE))
            return [self._make_code(lines, token)]
        if name == "comment":
            self._collect(TokenType.VERBATIM_LINE)
            return []

        lines = [token.value] if token.value else []
        lines.extend(t.value for t in self._collect(TokenType.TEXT_LINE))
        if name in _IGNORED:
            return []

        blocks = self._make_named(name, lines, token)
        if blocks is not None:
            return blocks
        if self._config.strict:
            raise ParseError.at(f"unknown directive '={name}'", token.location)
        logger.debug("Passing through unknown directive '=%s' at %s", name, token.location)
        return self._make_paragraph([f"={name}", *lines], token.location)

    def _parse_paragraph_block(self) -> list[Block]:
        """``=for NAME [config]`` followed by lines up to the next blank line."""
        token = self._advance()
        name = token.name
        if not name:
            raise ParseError.at("'=for' requires a block name", token.location)

        first = [token.value] if token.value else []
        if name == "code":
            lines = first + [t.value for t in self._collect(TokenType.VERBATIM_LINE)]
            return [self._make_code(lines, token)]
        if name == "comment":
            self._collect(TokenType.VERBATIM_LINE)
            return []

        lines = first + [t.value for t in self._collect(TokenType.TEXT_LINE)]
        blocks = self._make_named(name, lines, token, numbered=bool(token.config_value("numbered")))
        if blocks is not None:
            return blocks
        # Semantic blocks (=for pod, =for DESCRIPTION, ...) hold one paragraph
        return self._make_paragraph(lines, token.location)

    def _parse_delimited(self) -> list[Block]:
        """``=begin NAME`` ... ``=end NAME``."""
        begin = self._advance()
        name = begin.name
        if not name:
            raise ParseError.at("'=begin' requires a block name", begin.location)

        if name in ("code", "comment"):
            lines = [t.value for t in self._collect(TokenType.VERBATIM_LINE)]
            self._expect_end(begin)
            return [self._make_code(lines, begin)] if name == "code" else []

        if _HEAD.match(name) or _ITEM.match(name) or name in _HEADING_ALIASES or name == "para":
            lines: list[str] = []
            while self._current.type in (
                TokenType.TEXT_LINE,
                TokenType.INDENTED_LINE,
                TokenType.BLANK_LINE,
            ):
                lines.append(self._advance().value.strip())
            if self._current.type not in (TokenType.END, TokenType.EOF):
                raise ParseError.at(
                    f"'=begin {name}' block cannot contain other blocks", self._current.location
                )
            self._expect_end(begin)
            numbered = bool(begin.config_value("numbered"))
            return self._make_named(name, lines, begin, numbered=numbered) or []

        # Container (=begin pod, unknown semantic blocks): parse content as blocks
        blocks: list[Block] = []
        while self._current.type not in (TokenType.END, TokenType.EOF):
            blocks.extend(self._parse_block())
        self._expect_end(begin)
        return blocks

    def _expect_end(self, begin: Token) -> None:
        """Consume the ``=end`` matching ``begin`` or raise ParseError."""
        token = self._current
        if token.type == TokenType.EOF:
            raise ParseError.at(f"unterminated '=begin {begin.name}' block", begin.location)
        if token.type != TokenType.END or token.name != begin.name:
            raise self._unmatched_end(token, begin)
        self._advance()

    def _unmatched_end(self, token: Token, begin: Token | None = None) -> ParseError:
        if not token.name:
            return ParseError.at("'=end' requires a block name", token.location)
        if begin is None:
            return ParseError.at(
                f"'=end {token.name}' without matching '=begin {token.name}'", token.location
            )
        return ParseError.at(
            f"'=end {token.name}' does not match '=begin {begin.name}' (line {begin.lineno})",
            token.location,
        )

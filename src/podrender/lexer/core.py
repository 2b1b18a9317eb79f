"""Line-window lexer for Pod source.

Scans one line at a time: find the line end, classify the line, commit the
position. Every step advances, so tokenizing is O(n) in the source length.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from podrender.lexer.classifiers import DirectiveClassifierMixin
from podrender.lexer.modes import LexerMode
from podrender.location import SourceLocation
from podrender.tokens import Token, TokenType


class Lexer(DirectiveClassifierMixin):
    """Tokenize Pod source into one token per line.

    Usage:
            >>> for token in Lexer("= Title\\n\\nSome text.\\n").tokenize():
            ...     print(token)
        Token(ABBREVIATED head1, 'Title', 1)
        Token(BLANK_LINE, '', 2)
        Token(TEXT_LINE, 'Some text.', 3)
        Token(EOF, '', 4)

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_source_file",
        "_pos",
        "_lineno",
        "_mode",
        "_verbatim_name",
        "_verbatim_depth",
        # True at start of input, after a blank line and after =begin/=end
        "_at_boundary",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize lexer with source text.

        Args:
            source: Pod source text
            source_file: Optional source file path for locations
        """
        # Normalize line endings once so line scanning only sees "\n"
        self._source = source.replace("\r\n", "\n").replace("\r", "\n")
        self._source_len = len(self._source)
        self._source_file = source_file
        self._pos = 0
        self._lineno = 1
        self._mode = LexerMode.BLOCK
        self._verbatim_name = ""
        self._verbatim_depth = 0
        self._at_boundary = True

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into token stream.

        Yields:
            Token objects one at a time, ending with EOF

        Raises:
            ParseError: On malformed directive config
        """
        while self._pos < self._source_len:
            line, location = self._next_line()
            yield self._dispatch_mode(line, location)
        yield Token(TokenType.EOF, "", self._location())

    def _dispatch_mode(self, line: str, location: SourceLocation) -> Token:
        """Classify a line according to the current mode."""
        if self._mode == LexerMode.DELIMITED_VERBATIM:
            return self._scan_delimited_verbatim(line, location)
        if self._mode == LexerMode.PARAGRAPH_VERBATIM:
            return self._scan_paragraph_verbatim(line, location)
        if self._mode == LexerMode.IMPLICIT_CODE:
            return self._scan_implicit_code(line, location)
        return self._scan_block(line, location)

    # =========================================================================
    # Window navigation
    # =========================================================================

    def _location(self) -> SourceLocation:
        return SourceLocation(lineno=self._lineno, col_offset=1, source_file=self._source_file)

    def _next_line(self) -> tuple[str, SourceLocation]:
        """Return the current line and commit past its newline."""
        location = self._location()
        end = self._source.find("\n", self._pos)
        if end == -1:
            end = self._source_len
        line = self._source[self._pos : end]
        self._pos = end + 1
        self._lineno += 1
        return line, location

    # =========================================================================
    # Mode scanners
    # =========================================================================

    def _scan_block(self, line: str, location: SourceLocation) -> Token:
        if not line.strip():
            self._at_boundary = True
            return Token(TokenType.BLANK_LINE, "", location)

        if line.startswith("="):
            token = self._try_classify_directive(line, location)
            if token is not None:
                self._at_boundary = token.type in (TokenType.BEGIN, TokenType.END)
                return token

        if self._at_boundary and line[0] in " \t":
            self._at_boundary = False
            self._mode = LexerMode.IMPLICIT_CODE
            return Token(TokenType.INDENTED_LINE, line.rstrip(), location)

        self._at_boundary = False
        return Token(TokenType.TEXT_LINE, line.strip(), location)

    def _scan_delimited_verbatim(self, line: str, location: SourceLocation) -> Token:
        if self._is_verbatim_end(line):
            self._mode = LexerMode.BLOCK
            self._at_boundary = True
            name = self._verbatim_name
            self._verbatim_name = ""
            return Token(TokenType.END, "", location, name=name)
        return Token(TokenType.VERBATIM_LINE, line.rstrip(), location)

    def _scan_paragraph_verbatim(self, line: str, location: SourceLocation) -> Token:
        if not line.strip():
            self._mode = LexerMode.BLOCK
            self._verbatim_name = ""
            self._at_boundary = True
            return Token(TokenType.BLANK_LINE, "", location)
        return Token(TokenType.VERBATIM_LINE, line.rstrip(), location)

    def _scan_implicit_code(self, line: str, location: SourceLocation) -> Token:
        if not line.strip():
            self._mode = LexerMode.BLOCK
            self._at_boundary = True
            return Token(TokenType.BLANK_LINE, "", location)
        if line.startswith("="):
            self._mode = LexerMode.BLOCK
            return self._scan_block(line, location)
        return Token(TokenType.INDENTED_LINE, line.rstrip(), location)

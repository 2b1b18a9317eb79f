"""Tests for Pod block config parsing (``:key<value>`` pairs)."""

import pytest

from podrender.errors import ParseError
from podrender.lexer import parse_block_config
from podrender.location import SourceLocation

LOC = SourceLocation(7, 1, source_file="cfg.rakudoc")


class TestParseBlockConfig:
    @pytest.mark.parametrize(
        "text,expected",
        [
            (":lang<raku>", (("lang", "raku"),)),
            (":numbered", (("numbered", True),)),
            (":!numbered", (("numbered", False),)),
            (':kind("Type")', (("kind", "Type"),)),
            (":kind('Type')", (("kind", "Type"),)),
            (":count(3)", (("count", 3),)),
            (":flag(True)", (("flag", True),)),
            (":langs<raku perl>", (("langs", ("raku", "perl")),)),
            (":tags[a, 'b', 2]", (("tags", ("a", "b", 2)),)),
        ],
    )
    def test_values(self, text: str, expected: tuple) -> None:
        pairs, remainder = parse_block_config(text, LOC)
        assert pairs == expected
        assert remainder == ""

    def test_multiple_pairs_and_remainder(self) -> None:
        pairs, remainder = parse_block_config(":a<1> :!b\t:c rest of line", LOC)
        assert pairs == (("a", "1"), ("b", False), ("c", True))
        assert remainder == "rest of line"

    def test_no_config(self) -> None:
        assert parse_block_config("plain text", LOC) == ((), "plain text")
        assert parse_block_config("", LOC) == ((), "")

    @pytest.mark.parametrize(
        "text,message",
        [
            (":lang<raku", "unterminated value"),
            (":kind(Type", "unterminated value"),
            (':kind("Type)', "unterminated string"),
            (":!lang<raku>", "cannot take a value"),
        ],
    )
    def test_malformed(self, text: str, message: str) -> None:
        with pytest.raises(ParseError, match=message) as exc_info:
            parse_block_config(text, LOC)
        assert exc_info.value.lineno == 7
        assert exc_info.value.source_file == "cfg.rakudoc"

"""Tests for inline formatting codes."""

from __future__ import annotations

import pytest

from podrender.formatting import (
    decode_entity,
    match_cross_reference,
    parse_formatting,
    plain_text,
    scan_code,
    split_link,
)
from podrender.nodes import Bold, Code, Footnote, IndexTerm, Italic, Link, Text, Underline


class TestParseFormatting:
    def test_plain_text(self) -> None:
        assert parse_formatting("just words") == (Text("just words"),)

    def test_empty(self) -> None:
        assert parse_formatting("") == ()

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("B<bold>", Bold((Text("bold"),))),
            ("I<it>", Italic((Text("it"),))),
            ("R<replaceable>", Italic((Text("replaceable"),))),
            ("U<under>", Underline((Text("under"),))),
            ("C<say 1>", Code("say 1")),
            ("K<ctrl-c>", Code("ctrl-c", kind="K")),
            ("T<output>", Code("output", kind="T")),
            ("N<a note>", Footnote((Text("a note"),))),
        ],
    )
    def test_single_codes(self, source: str, expected: object) -> None:
        assert parse_formatting(source) == (expected,)

    def test_nesting(self) -> None:
        assert parse_formatting("B<bold I<and italic>>") == (
            Bold((Text("bold "), Italic((Text("and italic"),)))),
        )

    def test_code_is_verbatim(self) -> None:
        assert parse_formatting("C<B<not bold>>") == (Code("B<not bold>"),)

    def test_code_balances_angles(self) -> None:
        assert parse_formatting("C<Array[Int]<3>> end") == (Code("Array[Int]<3>"), Text(" end"))

    def test_double_angles(self) -> None:
        assert parse_formatting("C<< $a <=> $b >>") == (Code("$a <=> $b"),)

    def test_guillemets(self) -> None:
        assert parse_formatting("C«1 > 0»") == (Code("1 > 0"),)

    def test_verbatim_code_merges_into_text(self) -> None:
        assert parse_formatting("a V<B<x>> b") == (Text("a B<x> b"),)

    def test_zero_width_dropped(self) -> None:
        assert parse_formatting("=Z<>head1") == (Text("=head1"),)

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("E<lt>", "<"),
            ("E<gt>", ">"),
            ("E<0xAB>", "«"),
            ("E<171>", "«"),
            ("E<lt;gt>", "<>"),
            ("E<eacute>", "é"),
            ("E<nosuchentity>", "nosuchentity"),
        ],
    )
    def test_entities(self, source: str, expected: str) -> None:
        assert parse_formatting(source) == (Text(expected),)

    def test_index_term(self) -> None:
        assert parse_formatting("X<hash|hashes;Hash>") == (
            IndexTerm((Text("hash"),), entries=("hashes", "Hash")),
        )
        assert parse_formatting("X<term>") == (IndexTerm((Text("term"),), entries=("term",)),)

    def test_links(self) -> None:
        assert parse_formatting("L<IO::Path>") == (Link("IO::Path", (Text("IO::Path"),)),)
        assert parse_formatting("L<B<open>|/routine/open>") == (
            Link("/routine/open", (Bold((Text("open"),)),), has_label=True),
        )

    @pytest.mark.parametrize(
        "source",
        ["Q<unknown>", "B<unterminated", "Array<Int>", "B", "B < spaced >", "a < b"],
    )
    def test_literal_fallback(self, source: str) -> None:
        assert parse_formatting(source) == (Text(source),)


class TestHelpers:
    def test_scan_code_span(self) -> None:
        span = scan_code("x B<y> z", 2)
        assert span is not None
        assert (span.letter, span.body, span.start, span.end) == ("B", "y", 2, 6)

    def test_split_link(self) -> None:
        assert split_link("C<a|b>|target") == ("target", "C<a|b>")
        assert split_link(" spaced ") == ("spaced", None)

    def test_match_cross_reference(self) -> None:
        assert match_cross_reference("L<a|b>") == ("b", "a")
        assert match_cross_reference("L<a> trailing") is None
        assert match_cross_reference("B<a>") is None
        assert match_cross_reference("L< >") is None

    def test_decode_entity_bad_number(self) -> None:
        assert decode_entity("0xZZ") == "0xZZ"

    def test_plain_text(self) -> None:
        inlines = parse_formatting("B<a> C<b> L<c|d> N<hidden> X<e|f>")
        assert plain_text(inlines) == "a b c  e"

"""Property-based tests for podrender using Hypothesis.

These tests verify invariants that should hold for any input:
1. Parsing either succeeds or raises ParseError, never anything else
2. Parse-then-render is deterministic in every output format
3. Rendering a Document to Pod and re-parsing yields an equal Document,
   both for generated Documents and for Documents parsed from Pod-flavoured text
"""

import string

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from podrender import ParseError, RenderConfig, parse, render
from podrender.nodes import CodeSample, CrossReference, Document, Heading, ListItem, Paragraph
from podrender.renderers.pod import PodRenderer

FORMATS = ["text", "html", "pod"]

# Arbitrary Pod-flavoured text: directives, codes and indentation are likely
pod_fragments = st.sampled_from(
    [
        "=head1 ",
        "= ",
        "=item ",
        "=item # ",
        "=begin pod",
        "=end pod",
        "=begin code",
        "=end code",
        "=for code",
        "=comment",
        "=para",
        "=foo",
        "    ",
        "\n",
        "\n\n",
        "B<",
        "L<",
        "C<<",
        ">",
        ">>",
        "|",
        ":lang<raku>",
        "word",
        "#",
    ]
)
pod_sources = st.lists(st.one_of(pod_fragments, st.text(max_size=5)), max_size=30).map("".join)

# Canonical block content: text the parser stores unchanged
words = st.text(alphabet=string.ascii_letters + string.digits, min_size=1, max_size=8)
texts = st.lists(words, min_size=1, max_size=6).map(" ".join).filter(lambda s: s[0].isalpha())
code_lines = st.text(alphabet=string.ascii_letters + " ;$(){}", max_size=20).map(str.rstrip)
code_texts = st.lists(code_lines, max_size=5).map("\n".join)
targets = st.from_regex(r"[A-Za-z][A-Za-z0-9]*(::[A-Za-z][A-Za-z0-9]*)?", fullmatch=True)

blocks = st.one_of(
    st.builds(Heading, st.integers(min_value=1, max_value=6), texts),
    st.builds(Paragraph, texts),
    st.builds(CodeSample, st.sampled_from(["", "raku", "python"]), code_texts),
    st.builds(ListItem, texts, st.integers(min_value=1, max_value=4), st.booleans()),
    st.builds(CrossReference, targets, st.none() | texts),
)
documents = st.lists(blocks, max_size=8).map(lambda bs: Document(children=tuple(bs)))


class TestParseProperties:
    @given(source=pod_sources)
    @settings(max_examples=300)
    def test_parse_only_raises_parse_error(self, source: str) -> None:
        try:
            doc = parse(source)
        except ParseError:
            return
        assert isinstance(doc, Document)

    @given(source=pod_sources)
    @settings(max_examples=100)
    def test_parse_is_deterministic(self, source: str) -> None:
        try:
            first = parse(source)
        except ParseError as e:
            with pytest.raises(ParseError) as again:
                parse(source)
            assert str(again.value) == str(e)
            return
        assert parse(source) == first


class TestRenderProperties:
    @pytest.mark.parametrize("fmt", FORMATS)
    @given(source=pod_sources)
    @settings(max_examples=100)
    def test_render_is_deterministic(self, fmt: str, source: str) -> None:
        try:
            doc = parse(source)
        except ParseError:
            return
        config = RenderConfig(format=fmt)
        assert render(doc, config) == render(parse(source), config)

    @given(doc=documents)
    @settings(max_examples=200)
    def test_pod_round_trip(self, doc: Document) -> None:
        assert parse(PodRenderer().render(doc)) == doc

    @given(doc=documents)
    @settings(max_examples=100)
    def test_pod_output_is_fixed_point(self, doc: Document) -> None:
        pod = PodRenderer().render(doc)
        assert PodRenderer().render(parse(pod)) == pod

    @given(source=pod_sources)
    @settings(max_examples=300)
    def test_pod_round_trip_of_parsed_source(self, source: str) -> None:
        try:
            doc = parse(source)
        except ParseError:
            return
        assert parse(PodRenderer().render(doc)) == doc

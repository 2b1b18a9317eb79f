"""Tests for podrender.serialization: Document JSON round-trip."""

import json

import pytest

from podrender import parse
from podrender.location import SourceLocation
from podrender.nodes import (
    Bold,
    CodeSample,
    CrossReference,
    Document,
    Heading,
    IndexTerm,
    Link,
    ListItem,
    Paragraph,
    Text,
)
from podrender.serialization import from_dict, from_json, to_dict, to_json

_LOC = SourceLocation(lineno=3, col_offset=1, source_file="doc.rakudoc")


class TestToDict:
    def test_type_discriminator_and_fields(self) -> None:
        data = to_dict(Heading(2, "Methods", location=_LOC))
        assert data == {
            "_type": "Heading",
            "level": 2,
            "text": "Methods",
            "location": {
                "_type": "SourceLocation",
                "lineno": 3,
                "col_offset": 1,
                "end_lineno": None,
                "source_file": "doc.rakudoc",
            },
        }

    def test_children_become_lists(self) -> None:
        data = to_dict(Document(children=(Paragraph("a"), ListItem("b", level=2))))
        assert [child["_type"] for child in data["children"]] == ["Paragraph", "ListItem"]
        assert data["children"][1]["level"] == 2

    def test_inline_nodes(self) -> None:
        node = IndexTerm((Bold((Text("x"),)),), entries=("x", "y"))
        assert from_dict(to_dict(node)) == node


class TestFromDict:
    def test_missing_type(self) -> None:
        with pytest.raises(ValueError, match="Missing '_type'"):
            from_dict({"text": "x"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown node type: 'Table'"):
            from_dict({"_type": "Table"})

    def test_location_restored(self) -> None:
        node = from_dict(to_dict(Paragraph("p", location=_LOC)))
        assert node.location == _LOC

    def test_missing_optional_fields_use_defaults(self) -> None:
        assert from_dict({"_type": "ListItem", "text": "x"}) == ListItem("x")


class TestJson:
    def test_round_trip_parsed_document(self) -> None:
        source = (
            "=head1 Name\n\nB<Bold> L<link|/x>\n\n=item # one\n\n"
            "=begin code :lang<raku>\nsay 1;\n=end code\n\nL<IO::Path>\n"
        )
        doc = parse(source, source_file="x.rakudoc")
        restored = from_json(to_json(doc))
        assert restored == doc
        assert [b.location for b in restored] == [b.location for b in doc]

    def test_deterministic_sorted_keys(self) -> None:
        doc = Document(children=(CodeSample("raku", "x"), CrossReference("a", "b")))
        out = to_json(doc)
        assert out == to_json(doc)
        assert list(json.loads(out)) == sorted(json.loads(out))

    def test_indent(self) -> None:
        assert "\n  " in to_json(Document(children=(Paragraph("a"),)), indent=2)

    def test_non_ascii_kept(self) -> None:
        assert "«" in to_json(Document(children=(Paragraph("«»"),)))

    def test_from_json_requires_document(self) -> None:
        with pytest.raises(ValueError, match="Expected Document"):
            from_json(json.dumps(to_dict(Paragraph("x"))))

    def test_link_has_label_flag(self) -> None:
        node = Link("/x", (Text("x"),), has_label=True)
        assert from_dict(to_dict(node)) == node
        assert to_dict(node)["has_label"] is True

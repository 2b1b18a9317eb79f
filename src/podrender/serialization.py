"""Document serialization: JSON round-trip for podrender nodes.

Converts nodes to/from JSON-compatible dicts. Used by ``podrender dump``
and handy for caching parsed documents or comparing them in tests.

All output is deterministic (sorted keys).

Example:
    from podrender import parse
    from podrender.serialization import to_json, from_json

    doc = parse("=head1 Hello\\n\\nB<World>")
    restored = from_json(to_json(doc))
    assert doc == restored

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from podrender.location import SourceLocation
from podrender.nodes import (
    Bold,
    Code,
    CodeSample,
    CrossReference,
    Document,
    Footnote,
    Heading,
    IndexTerm,
    Italic,
    Link,
    ListItem,
    Node,
    Paragraph,
    Text,
    Underline,
)

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type[Node]] = {
    cls.__name__: cls
    for cls in (
        Document,
        Heading,
        Paragraph,
        CodeSample,
        ListItem,
        CrossReference,
        Text,
        Bold,
        Italic,
        Underline,
        Code,
        Link,
        Footnote,
        IndexTerm,
    )
}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Recursively serializes child nodes and SourceLocation objects.

    Args:
        node: Any podrender node.

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}
    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    if isinstance(value, Node):
        return to_dict(value)
    if isinstance(value, SourceLocation):
        return {
            "_type": "SourceLocation",
            "lineno": value.lineno,
            "col_offset": value.col_offset,
            "end_lineno": value.end_lineno,
            "source_file": value.source_file,
        }
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed node from a dict.

    Uses the ``_type`` discriminator to determine the node class.

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name in data:
            kwargs[f.name] = _deserialize_value(data[f.name])
    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name == "SourceLocation":
            return SourceLocation(
                lineno=value["lineno"],
                col_offset=value["col_offset"],
                end_lineno=value.get("end_lineno"),
                source_file=value.get("source_file"),
            )
        if type_name is not None:
            return from_dict(value)
        return value
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document to a JSON string with sorted keys."""
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent, ensure_ascii=False)


def from_json(data: str) -> Document:
    """Deserialize a Document from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a Document.

    """
    node = from_dict(json.loads(data))
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    return node

"""Typed document model for podrender.

All nodes are frozen dataclasses with slots. A Document is built once per
source text and never mutated afterwards.

Node Hierarchy:
Node (base)
├── Document
├── Block (block-level elements)
│   ├── Heading
│   ├── Paragraph
│   ├── CodeSample
│   ├── ListItem
│   └── CrossReference
└── Inline (formatting codes, produced on demand from block text)
    ├── Text
    ├── Bold
    ├── Italic
    ├── Underline
    ├── Code
    ├── Link
    ├── Footnote
    └── IndexTerm

Equality:
``location`` is keyword-only and excluded from comparison, so a node built
by hand compares equal to the same node parsed from source:

    >>> Heading(1, "Title") == parse("= Title").children[0]
    True

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from podrender.location import SourceLocation

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all nodes.

    All nodes track their source location for error messages and warnings.

    """

    location: SourceLocation = field(
        default_factory=SourceLocation.unknown,
        kw_only=True,
        repr=False,
        compare=False,
    )


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Heading(Node):
    """Section heading.

    Pod: ``=head2 Methods`` or ``== Methods``

    """

    level: int
    text: str


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """Ordinary paragraph; wrapped source lines are joined by single spaces."""

    text: str


@dataclass(frozen=True, slots=True)
class CodeSample(Node):
    """Code sample, verbatim.

    Pod: ``=begin code :lang<raku>`` ... ``=end code``, or an indented block.

    """

    language: str
    text: str


@dataclass(frozen=True, slots=True)
class ListItem(Node):
    """List item.

    Pod: ``=item text``, ``=item2 text``, ``=item # numbered``

    """

    text: str
    level: int = 1
    numbered: bool = False


@dataclass(frozen=True, slots=True)
class CrossReference(Node):
    """A paragraph consisting of a single link to another document.

    Pod: ``L<IO::Path>`` or ``L<the open routine|/routine/open>``

    """

    target: str
    label: str | None = None

    @property
    def display(self) -> str:
        """Text shown for the reference."""
        return self.label if self.label is not None else self.target


type Block = Heading | Paragraph | CodeSample | ListItem | CrossReference


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Parsed representation of one documentation source file.

    Iterating a Document yields its blocks in source order.

    """

    children: tuple[Block, ...] = ()

    def __iter__(self) -> Iterator[Block]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)

    def __getitem__(self, index: int) -> Block:
        return self.children[index]

    @property
    def title(self) -> str | None:
        """Text of the first heading, if any."""
        for block in self.children:
            if isinstance(block, Heading):
                return block.text
        return None


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal text."""

    content: str


@dataclass(frozen=True, slots=True)
class Bold(Node):
    """``B<...>``"""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Italic(Node):
    """``I<...>`` and ``R<...>`` (replaceable item)."""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Underline(Node):
    """``U<...>``"""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Code(Node):
    """Verbatim code-like span.

    ``kind`` is the formatting code letter: ``C`` (code), ``K`` (keyboard
    input) or ``T`` (terminal output).

    """

    content: str
    kind: str = "C"


@dataclass(frozen=True, slots=True)
class Link(Node):
    """``L<target>`` or ``L<label|target>``.

    ``children`` holds the display text; it equals the target when no label
    was given.

    """

    target: str
    children: tuple[Inline, ...]
    has_label: bool = False


@dataclass(frozen=True, slots=True)
class Footnote(Node):
    """``N<...>``, rendered as a numbered note after the document."""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class IndexTerm(Node):
    """``X<text|entry;entry>``; only the text is displayed."""

    children: tuple[Inline, ...]
    entries: tuple[str, ...] = ()


type Inline = Text | Bold | Italic | Underline | Code | Link | Footnote | IndexTerm


BLOCK_TYPES: tuple[type, ...] = (Heading, Paragraph, CodeSample, ListItem, CrossReference)

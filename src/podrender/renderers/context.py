"""Per-render state shared by the renderers.

Every render() call builds a fresh RenderContext, so one renderer instance
can be reused (and shared between threads) without leaking state from one
document into the next.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from podrender.errors import ReferenceWarning
from podrender.nodes import Document, Heading, Inline
from podrender.references import ReferenceResolver


@dataclass(frozen=True, slots=True)
class RenderResult:
    """Output of a render plus the warnings collected while producing it.

    Attributes:
        output: Rendered text
        warnings: Unresolved references, in document order
    """

    output: str
    warnings: tuple[ReferenceWarning, ...] = ()

    @property
    def ok(self) -> bool:
        """True when every reference resolved."""
        return not self.warnings


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Attributes:
        resolver: Resolves cross-reference targets and collects warnings
        footnotes: ``N<...>`` contents in order of appearance
        seen_slugs: Heading anchors already emitted (HTML)
        list_counters: Running numbers of numbered list items, by level
    """

    resolver: ReferenceResolver
    footnotes: list[tuple[Inline, ...]] = field(default_factory=list)
    seen_slugs: set[str] = field(default_factory=set)
    list_counters: dict[int, int] = field(default_factory=dict)

    @classmethod
    def for_document(cls, doc: Document, references: Mapping[str, str]) -> RenderContext:
        headings = [block for block in doc.children if isinstance(block, Heading)]
        return cls(resolver=ReferenceResolver(references, headings))

    def add_footnote(self, children: tuple[Inline, ...]) -> int:
        """Register a footnote and return its 1-based number."""
        self.footnotes.append(children)
        return len(self.footnotes)

    def next_list_number(self, level: int) -> int:
        """Advance the counter for ``level`` and reset deeper levels."""
        for deeper in [lvl for lvl in self.list_counters if lvl > level]:
            del self.list_counters[deeper]
        self.list_counters[level] = self.list_counters.get(level, 0) + 1
        return self.list_counters[level]

    def result(self, output: str) -> RenderResult:
        return RenderResult(output, tuple(self.resolver.warnings))

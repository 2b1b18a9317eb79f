"""Plain-text renderer.

Headings are underlined (``=`` for level 1, ``-`` for level 2), code samples
are indented four spaces, list items use ``*`` or running numbers, and
footnotes are appended as ``[n] ...``. Resolved links show their location
in parentheses; unresolved ones show only their text.

Example:
    >>> from podrender import parse
    >>> TextRenderer().render(parse("= Title\\n\\nSome text.\\n"))
    'Title\\n=====\\n\\nSome text.\\n'
"""

from __future__ import annotations

import textwrap

from podrender.config import RenderConfig
from podrender.errors import ReferenceWarning, RenderError
from podrender.formatting import parse_formatting, plain_text
from podrender.nodes import (
    Block,
    Bold,
    Code,
    CodeSample,
    CrossReference,
    Document,
    Footnote,
    Heading,
    IndexTerm,
    Inline,
    Italic,
    Link,
    ListItem,
    Paragraph,
    Text,
    Underline,
)
from podrender.renderers.context import RenderContext, RenderResult
from podrender.stringbuilder import StringBuilder

_UNDERLINES = {1: "=", 2: "-"}


class TextRenderer:
    """Render a Document to plain text."""

    __slots__ = ("_config", "_last_context")

    def __init__(self, config: RenderConfig | None = None) -> None:
        self._config = config or RenderConfig()
        self._last_context: RenderContext | None = None

    def render(self, node: Document) -> str:
        """Render document to plain text."""
        return self.render_result(node).output

    def render_result(self, node: Document) -> RenderResult:
        """Render document and collect reference warnings."""
        ctx = RenderContext.for_document(node, self._config.references)
        sb = StringBuilder()
        previous: Block | None = None
        for block in node.children:
            if previous is not None:
                both_items = isinstance(previous, ListItem) and isinstance(block, ListItem)
                sb.append("\n" if both_items else "\n\n")
            if not isinstance(block, ListItem):
                ctx.list_counters.clear()
            self._render_block(block, sb, ctx)
            previous = block

        if ctx.footnotes:
            sb.append("\n\n")
            notes = [
                f"[{i}] {self._render_inlines(children, ctx)}"
                for i, children in enumerate(ctx.footnotes, start=1)
            ]
            sb.append("\n".join(notes))

        if sb:
            sb.append("\n")
        self._last_context = ctx
        return ctx.result(sb.build())

    def get_warnings(self) -> list[ReferenceWarning]:
        """Warnings collected during the last render() call."""
        if self._last_context is None:
            return []
        return self._last_context.resolver.warnings

    # =========================================================================
    # Blocks
    # =========================================================================

    def _render_block(self, block: Block, sb: StringBuilder, ctx: RenderContext) -> None:
        match block:
            case Heading():
                text = self._render_text(block.text, block, ctx)
                sb.append(text)
                underline = _UNDERLINES.get(block.level)
                if underline:
                    sb.append("\n").append(underline * max(len(text), 1))
            case Paragraph():
                sb.append(self._wrap(self._render_text(block.text, block, ctx)))
            case CodeSample():
                sb.append(textwrap.indent(block.text, "    "))
            case ListItem():
                indent = "  " * (block.level - 1)
                if block.numbered:
                    marker = f"{ctx.next_list_number(block.level)}. "
                else:
                    marker = "* "
                body = self._render_text(block.text, block, ctx)
                sb.append(self._wrap(body, indent + marker, indent + " " * len(marker)))
            case CrossReference():
                label = self._render_text(block.display, block, ctx)
                href = ctx.resolver.resolve(block.target, block.location)
                sb.append(self._with_href(label, href))
            case _:
                raise RenderError(f"cannot render {type(block).__name__} as text")

    def _wrap(self, text: str, initial: str = "", subsequent: str = "") -> str:
        width = self._config.text_width
        if width is None:
            return initial + text
        return textwrap.fill(
            text,
            width=width,
            initial_indent=initial,
            subsequent_indent=subsequent,
            break_on_hyphens=False,
        )

    @staticmethod
    def _with_href(label: str, href: str | None) -> str:
        if href is None or href == label:
            return label
        return f"{label} ({href})"

    # =========================================================================
    # Inlines
    # =========================================================================

    def _render_text(self, text: str, block: Block, ctx: RenderContext) -> str:
        return self._render_inlines(parse_formatting(text, block.location), ctx)

    def _render_inlines(self, inlines: tuple[Inline, ...], ctx: RenderContext) -> str:
        return "".join(self._render_inline(inline, ctx) for inline in inlines)

    def _render_inline(self, inline: Inline, ctx: RenderContext) -> str:
        match inline:
            case Text():
                return inline.content
            case Code():
                return inline.content
            case Bold() | Italic() | Underline() | IndexTerm():
                return self._render_inlines(inline.children, ctx)
            case Link():
                label = self._render_inlines(inline.children, ctx)
                href = ctx.resolver.resolve(inline.target, inline.location)
                return self._with_href(label, href)
            case Footnote():
                return f"[{ctx.add_footnote(inline.children)}]"
            case _:
                return plain_text((inline,))

"""HTML renderer using the StringBuilder pattern.

Thread Safety:
Rendering state lives in a RenderContext created fresh for each render()
call. The instance keeps the last render's warnings and headings for
get_warnings() and get_headings(), so use one HtmlRenderer per thread.

Heading anchors are generated during the walk; duplicates get ``-1``,
``-2`` ... suffixes. Consecutive list items are grouped into nested
``<ul>``/``<ol>`` elements by level.
"""

from __future__ import annotations

from dataclasses import dataclass

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
from podrender.utils.logger import get_logger
from podrender.utils.text import heading_anchor, html_escape

logger = get_logger(__name__)

_CODE_TAGS = {"C": "code", "K": "kbd", "T": "samp"}


@dataclass(frozen=True, slots=True)
class HeadingInfo:
    """Heading metadata collected during rendering (for a table of contents)."""

    level: int
    text: str
    slug: str


class HtmlRenderer:
    """Render a Document to HTML.

    Usage:
        >>> from podrender import parse
        >>> HtmlRenderer().render(parse("= Title\\n\\nSome text.\\n"))
        '<h1 id="title">Title</h1>\\n<p>Some text.</p>\\n'

    """

    __slots__ = ("_config", "_last_context", "_headings")

    def __init__(self, config: RenderConfig | None = None) -> None:
        self._config = config or RenderConfig()
        self._last_context: RenderContext | None = None
        self._headings: list[HeadingInfo] = []

    def render(self, node: Document) -> str:
        """Render document to HTML."""
        return self.render_result(node).output

    def render_result(self, node: Document) -> RenderResult:
        """Render document and collect reference warnings."""
        ctx = RenderContext.for_document(node, self._config.references)
        headings: list[HeadingInfo] = []
        # Open lists as (level, tag), innermost last
        open_lists: list[tuple[int, str]] = []

        sb = StringBuilder()
        for block in node.children:
            if isinstance(block, ListItem):
                self._render_list_item(block, open_lists, sb, ctx)
                continue
            self._close_lists(open_lists, sb)
            self._render_block(block, sb, ctx, headings)
        self._close_lists(open_lists, sb)

        if ctx.footnotes:
            self._render_footnotes(sb, ctx)

        body = sb.build()
        if self._config.standalone:
            body = self._wrap_page(body, node)

        self._last_context = ctx
        self._headings = headings
        return ctx.result(body)

    def get_warnings(self) -> list[ReferenceWarning]:
        """Warnings collected during the last render() call."""
        if self._last_context is None:
            return []
        return self._last_context.resolver.warnings

    def get_headings(self) -> list[HeadingInfo]:
        """Headings collected during the last render() call."""
        return list(self._headings)

    # =========================================================================
    # Blocks
    # =========================================================================

    def _render_block(
        self,
        block: Block,
        sb: StringBuilder,
        ctx: RenderContext,
        headings: list[HeadingInfo],
    ) -> None:
        match block:
            case Heading():
                self._render_heading(block, sb, ctx, headings)
            case Paragraph():
                sb.append("<p>").append(self._render_text(block.text, block, ctx))
                sb.append_line("</p>")
            case CodeSample():
                self._render_code(block, sb)
            case CrossReference():
                label = self._render_text(block.display, block, ctx)
                href = ctx.resolver.resolve(block.target, block.location)
                sb.append('<p class="xref">').append(self._link(label, href)).append_line("</p>")
            case _:
                raise RenderError(f"cannot render {type(block).__name__} as HTML")

    def _render_heading(
        self,
        heading: Heading,
        sb: StringBuilder,
        ctx: RenderContext,
        headings: list[HeadingInfo],
    ) -> None:
        inlines = parse_formatting(heading.text, heading.location)
        text = plain_text(inlines)
        slug = heading_anchor(text, ctx.seen_slugs)
        headings.append(HeadingInfo(heading.level, text, slug))
        level = min(max(heading.level, 1), 6)
        sb.append(f'<h{level} id="{html_escape(slug)}">')
        sb.append(self._render_inlines(inlines, ctx))
        sb.append_line(f"</h{level}>")

    def _render_code(self, code: CodeSample, sb: StringBuilder) -> None:
        lang = code.language.split()[0] if code.language.strip() else ""
        if self._config.highlight and lang:
            try:
                from podrender.highlighting import highlight

                sb.append_line(highlight(code.text, lang))
                return
            except Exception:
                # Highlighter failures fall back to plain rendering
                logger.debug("Syntax highlighting failed for language %r", lang, exc_info=True)

        lang_class = f' class="language-{html_escape(lang)}"' if lang else ""
        sb.append(f"<pre><code{lang_class}>")
        sb.append(html_escape(code.text))
        sb.append_line("</code></pre>")

    def _render_list_item(
        self,
        item: ListItem,
        open_lists: list[tuple[int, str]],
        sb: StringBuilder,
        ctx: RenderContext,
    ) -> None:
        tag = "ol" if item.numbered else "ul"
        while open_lists and open_lists[-1][0] > item.level:
            sb.append(f"</li>\n</{open_lists.pop()[1]}>\n")
        if open_lists and open_lists[-1][0] == item.level and open_lists[-1][1] != tag:
            sb.append(f"</li>\n</{open_lists.pop()[1]}>\n")

        if open_lists and open_lists[-1][0] == item.level:
            sb.append("</li>\n")
        else:
            sb.append(f"<{tag}>\n")
            open_lists.append((item.level, tag))
        sb.append("<li>").append(self._render_text(item.text, item, ctx))

    @staticmethod
    def _close_lists(open_lists: list[tuple[int, str]], sb: StringBuilder) -> None:
        while open_lists:
            sb.append(f"</li>\n</{open_lists.pop()[1]}>\n")

    def _render_footnotes(self, sb: StringBuilder, ctx: RenderContext) -> None:
        sb.append_line('<section class="footnotes">')
        sb.append_line("<ol>")
        # Footnotes may themselves contain footnotes; the list grows while we walk it
        i = 0
        while i < len(ctx.footnotes):
            number = i + 1
            content = self._render_inlines(ctx.footnotes[i], ctx)
            sb.append(f'<li id="fn-{number}">').append(content)
            sb.append_line(f' <a href="#fnref-{number}">&#8617;</a></li>')
            i += 1
        sb.append_line("</ol>")
        sb.append_line("</section>")

    def _wrap_page(self, body: str, doc: Document) -> str:
        title = self._config.title
        if title is None:
            heading = doc.title
            title = plain_text(parse_formatting(heading)) if heading else ""
        sb = StringBuilder()
        sb.append_line("<!DOCTYPE html>")
        sb.append_line("<html>")
        sb.append_line("<head>")
        sb.append_line('<meta charset="utf-8">')
        sb.append_line(f"<title>{html_escape(title)}</title>")
        sb.append_line("</head>")
        sb.append_line("<body>")
        sb.append(body)
        sb.append_line("</body>")
        sb.append_line("</html>")
        return sb.build()

    # =========================================================================
    # Inlines
    # =========================================================================

    def _render_text(self, text: str, block: Block, ctx: RenderContext) -> str:
        return self._render_inlines(parse_formatting(text, block.location), ctx)

    def _render_inlines(self, inlines: tuple[Inline, ...], ctx: RenderContext) -> str:
        return "".join(self._render_inline(inline, ctx) for inline in inlines)

    @staticmethod
    def _link(label_html: str, href: str | None) -> str:
        if href is None:
            return label_html
        return f'<a href="{html_escape(href)}">{label_html}</a>'

    def _render_inline(self, inline: Inline, ctx: RenderContext) -> str:
        match inline:
            case Text():
                return html_escape(inline.content)
            case Code():
                tag = _CODE_TAGS.get(inline.kind, "code")
                return f"<{tag}>{html_escape(inline.content)}</{tag}>"
            case Bold():
                return f"<strong>{self._render_inlines(inline.children, ctx)}</strong>"
            case Italic():
                return f"<em>{self._render_inlines(inline.children, ctx)}</em>"
            case Underline():
                return f"<u>{self._render_inlines(inline.children, ctx)}</u>"
            case IndexTerm():
                return f'<span class="index-term">{self._render_inlines(inline.children, ctx)}</span>'
            case Link():
                label = self._render_inlines(inline.children, ctx)
                return self._link(label, ctx.resolver.resolve(inline.target, inline.location))
            case Footnote():
                n = ctx.add_footnote(inline.children)
                return f'<sup id="fnref-{n}"><a href="#fn-{n}">{n}</a></sup>'
            case _:
                raise RenderError(f"cannot render inline {type(inline).__name__} as HTML")

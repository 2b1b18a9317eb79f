"""Pod renderer: emits the source dialect.

Re-parsing the output yields an equal Document block-for-block, which makes
this renderer the inverse of the parser. Cross-reference targets are written
back unchanged, so no references are resolved and no warnings are produced.

Code samples are written as ``=begin code`` blocks. A sample holding its own
unbalanced ``=begin code`` / ``=end code`` lines is written as a ``=for code``
paragraph block, which ends at the first blank line. Samples that have both
are written as an indented block; that form cannot carry a language.
"""

from __future__ import annotations

import re

from podrender.config import RenderConfig
from podrender.errors import RenderError
from podrender.nodes import Block, CodeSample, CrossReference, Document, Heading, ListItem, Paragraph
from podrender.renderers.context import RenderResult
from podrender.stringbuilder import StringBuilder

_CODE_DIRECTIVE = re.compile(r"=(begin|end)[ \t]+code(?:[ \t]|$)")


def _delimitable(text: str) -> bool:
    """True when ``text`` can sit between ``=begin code`` and ``=end code``."""
    depth = 0
    for line in text.split("\n"):
        m = _CODE_DIRECTIVE.match(line)
        if m is None:
            continue
        depth += 1 if m.group(1) == "begin" else -1
        if depth < 0:
            return False
    return depth == 0


def _lang_config(language: str) -> str:
    if not language:
        return ""
    # :lang<a b> re-parses as words joined by single spaces
    if " ".join(language.split()) == language and "<" not in language and ">" not in language:
        return f" :lang<{language}>"
    quote = "'" if '"' in language else '"'
    return f" :lang({quote}{language}{quote})"


def _link_code(target: str, label: str | None) -> str:
    body = target if label is None else f"{label}|{target}"
    if "<" in body or ">" in body:
        return f"L«{body}»"
    return f"L<{body}>"


class PodRenderer:
    """Render a Document back to Pod source.

    Usage:
        >>> from podrender import parse
        >>> PodRenderer().render(parse("=head1 Title\\n\\nSome text.\\n"))
        '=head1 Title\\n\\nSome text.\\n'

    """

    __slots__ = ("_config",)

    def __init__(self, config: RenderConfig | None = None) -> None:
        self._config = config or RenderConfig()

    def render(self, node: Document) -> str:
        """Render document to Pod."""
        return self.render_result(node).output

    def render_result(self, node: Document) -> RenderResult:
        """Render document; the result never carries warnings."""
        sb = StringBuilder()
        for i, block in enumerate(node.children):
            if i:
                sb.append("\n\n")
            sb.append(self._render_block(block))
        if sb:
            sb.append("\n")
        return RenderResult(sb.build())

    def _render_block(self, block: Block) -> str:
        match block:
            case Heading():
                return f"=head{block.level} {block.text}"
            case Paragraph():
                return f"=para {block.text}" if block.text.startswith("=") else block.text
            case CodeSample():
                return self._render_code(block)
            case ListItem():
                name = "item" if block.level == 1 else f"item{block.level}"
                if block.numbered:
                    return f"={name} # {block.text}"
                if block.text.startswith("#"):
                    # Abbreviated "=item # ..." would read as a numbered item
                    return f"=for {name}\n{block.text}"
                return f"={name} {block.text}"
            case CrossReference():
                return _link_code(block.target, block.label)
            case _:
                raise RenderError(f"cannot render {type(block).__name__} as Pod")

    @staticmethod
    def _render_code(code: CodeSample) -> str:
        if _delimitable(code.text):
            sb = StringBuilder()
            sb.append_line(f"=begin code{_lang_config(code.language)}")
            if code.text:
                sb.append_line(code.text)
            sb.append("=end code")
            return sb.build()
        lines = code.text.split("\n")
        if all(line.strip() for line in lines):
            # Paragraph blocks keep =end code lines as content
            return f"=for code{_lang_config(code.language)}\n{code.text}"
        return "\n".join(
            f"    {line}" if line.strip() else "" for line in lines
        ).strip("\n")

"""
podrender: Pod documentation parser and renderer.

Parses Pod-dialect documentation (``=head1``, ``=item``, ``=begin code`` ...)
into an immutable, typed document model and renders it as plain text, HTML
or back to Pod.

Quick Start:
    >>> from podrender import parse, render
    >>> doc = parse("= Title\\n\\nSome text.\\n")
    >>> doc.children
    (Heading(level=1, text='Title'), Paragraph(text='Some text.'))
    >>> print(render(doc), end="")
    Title
    =====
    <BLANKLINE>
    Some text.

Rendering with cross-references:
    >>> from podrender import RenderConfig, render_document
    >>> config = RenderConfig(format="html", references={"IO::Path": "/type/IO::Path"})
    >>> result = render_document(parse("See L<IO::Path> and L<Nope>."), config)
    >>> [w.target for w in result.warnings]
    ['Nope']

Installation:
    pip install podrender              # Parser, renderers and CLI
    pip install podrender[syntax]      # + Syntax highlighting via Rosettes
"""

from podrender.config import (
    OutputFormat,
    ParseConfig,
    RenderConfig,
    get_parse_config,
    load_config,
    load_references,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from podrender.errors import ConfigError, ParseError, PodError, ReferenceWarning, RenderError
from podrender.formatting import parse_formatting, plain_text
from podrender.lexer import Lexer
from podrender.location import SourceLocation
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
from podrender.parser import Parser
from podrender.references import ReferenceResolver
from podrender.renderers import (
    DocumentRenderer,
    HtmlRenderer,
    PodRenderer,
    RenderResult,
    TextRenderer,
    get_renderer,
)
from podrender.serialization import from_dict, from_json, to_dict, to_json
from podrender.tokens import Token, TokenType

__version__ = "0.1.0"


def parse(
    source: str,
    *,
    source_file: str | None = None,
    config: ParseConfig | None = None,
) -> Document:
    """Parse Pod source into a Document.

    Args:
        source: Pod source text
        source_file: Optional source file path for error messages
        config: Parse configuration (uses the context's config if None)

    Returns:
        Document whose children are the parsed blocks, in source order

    Raises:
        ParseError: If the source is malformed

    Example:
        >>> parse("=head2 Methods").children[0]
        Heading(level=2, text='Methods')
    """
    if config is None:
        return _parse(source, source_file)
    with parse_config_context(config):
        return _parse(source, source_file)


def _parse(source: str, source_file: str | None) -> Document:
    blocks = Parser(source, source_file=source_file).parse()
    loc = SourceLocation(
        lineno=1,
        col_offset=1,
        end_lineno=source.count("\n") + 1,
        source_file=source_file,
    )
    return Document(location=loc, children=blocks)


def render_document(doc: Document, config: RenderConfig | None = None) -> RenderResult:
    """Render a Document and collect reference warnings.

    Args:
        doc: Document to render
        config: Render configuration (plain text, no references if None)

    Returns:
        RenderResult with the output string and the unresolved references

    Raises:
        RenderError: If the document holds a node the renderer cannot emit
    """
    return get_renderer(config).render_result(doc)


def render(doc: Document, config: RenderConfig | None = None) -> str:
    """Render a Document to a string.

    Unresolved references are rendered as plain text; use
    :func:`render_document` to inspect the warnings.

    Example:
        >>> render(parse("=head1 Hello"), RenderConfig(format="html"))
        '<h1 id="hello">Hello</h1>\\n'
    """
    return render_document(doc, config).output


__all__ = [
    # Main API
    "parse",
    "render",
    "render_document",
    # Configuration
    "OutputFormat",
    "ParseConfig",
    "RenderConfig",
    "get_parse_config",
    "load_config",
    "load_references",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
    # Errors
    "ConfigError",
    "ParseError",
    "PodError",
    "ReferenceWarning",
    "RenderError",
    # Lexer / Parser
    "Lexer",
    "Parser",
    "Token",
    "TokenType",
    "SourceLocation",
    # Renderers
    "DocumentRenderer",
    "HtmlRenderer",
    "PodRenderer",
    "ReferenceResolver",
    "RenderResult",
    "TextRenderer",
    "get_renderer",
    # Formatting codes
    "parse_formatting",
    "plain_text",
    # Serialization
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
    # Nodes
    "Block",
    "Bold",
    "Code",
    "CodeSample",
    "CrossReference",
    "Document",
    "Footnote",
    "Heading",
    "IndexTerm",
    "Inline",
    "Italic",
    "Link",
    "ListItem",
    "Paragraph",
    "Text",
    "Underline",
]

"""podrender renderers.

Renderers convert a Document into an output format.

Available Renderers:
- TextRenderer: plain text with underlined headings
- HtmlRenderer: HTML fragment or standalone page, using StringBuilder
- PodRenderer: Pod source, the inverse of the parser

Thread Safety:
All renderers keep per-render state in a RenderContext local to each
render() call. Safe for concurrent use from multiple threads.

"""

from podrender.config import OutputFormat, RenderConfig
from podrender.errors import RenderError
from podrender.renderers.context import RenderContext, RenderResult
from podrender.renderers.html import HeadingInfo, HtmlRenderer
from podrender.renderers.pod import PodRenderer
from podrender.renderers.protocol import DocumentRenderer
from podrender.renderers.text import TextRenderer

RENDERERS: dict[OutputFormat, type[DocumentRenderer]] = {
    OutputFormat.TEXT: TextRenderer,
    OutputFormat.HTML: HtmlRenderer,
    OutputFormat.POD: PodRenderer,
}


def get_renderer(config: RenderConfig | None = None) -> DocumentRenderer:
    """Create the renderer for ``config.format``.

    Raises:
        RenderError: If no renderer is registered for the format
    """
    config = config or RenderConfig()
    renderer_cls = RENDERERS.get(config.format)
    if renderer_cls is None:
        raise RenderError(f"no renderer for output format {config.format!r}")
    return renderer_cls(config)  # type: ignore[call-arg]


__all__ = [
    "RENDERERS",
    "DocumentRenderer",
    "HeadingInfo",
    "HtmlRenderer",
    "PodRenderer",
    "RenderContext",
    "RenderResult",
    "TextRenderer",
    "get_renderer",
]

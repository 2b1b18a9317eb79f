"""DocumentRenderer protocol shared by all renderers.

Example:
    from podrender.renderers.protocol import DocumentRenderer

    def render_page(renderer: DocumentRenderer, doc: Document) -> str:
        return renderer.render(doc)

"""

from typing import Protocol

from podrender.nodes import Document
from podrender.renderers.context import RenderResult


class DocumentRenderer(Protocol):
    """Protocol for document renderers.

    ``render`` returns the output string; ``render_result`` returns it
    together with the reference warnings collected along the way.

    """

    def render(self, node: Document) -> str:
        """Render a Document to a string."""
        ...

    def render_result(self, node: Document) -> RenderResult:
        """Render a Document and return output plus warnings."""
        ...

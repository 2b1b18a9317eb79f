"""Optional syntax highlighting for code samples.

When podrender[syntax] is installed, Rosettes is used automatically.
Any callable taking ``(code, language)`` and returning HTML can be
installed instead with :func:`set_highlighter`.

Usage:
    from podrender.highlighting import set_highlighter

    def my_highlighter(code: str, language: str) -> str:
        return f'<pre class="language-{language}"><code>{code}</code></pre>'

    set_highlighter(my_highlighter)
"""

from __future__ import annotations

from collections.abc import Callable

from podrender.utils.logger import get_logger
from podrender.utils.text import html_escape

logger = get_logger(__name__)

Highlighter = Callable[[str, str], str]

_highlighter: Highlighter | None = None
_tried_rosettes: bool = False


def set_highlighter(highlighter: Highlighter | None) -> None:
    """Set the global syntax highlighter (None clears it)."""
    global _highlighter
    _highlighter = highlighter


def _try_import_rosettes() -> bool:
    """Try to install Rosettes as the highlighter."""
    global _highlighter, _tried_rosettes

    if _tried_rosettes:
        return _highlighter is not None
    _tried_rosettes = True

    try:
        import rosettes  # type: ignore[import-not-found]
    except ImportError:
        logger.debug("rosettes not installed; code samples render unhighlighted")
        return False

    def rosettes_highlight(code: str, language: str) -> str:
        result: str = rosettes.highlight(code, language=language)
        return result

    _highlighter = rosettes_highlight
    return True


def has_highlighter() -> bool:
    """Check if a syntax highlighter is available."""
    if _highlighter is not None:
        return True
    return _try_import_rosettes()


def highlight(code: str, language: str) -> str:
    """Highlight code with the configured highlighter.

    Falls back to a plain ``<pre><code>`` block when none is available.
    """
    if _highlighter is None:
        _try_import_rosettes()
    if _highlighter is not None:
        return _highlighter(code, language)
    lang_class = f' class="language-{html_escape(language)}"' if language else ""
    return f"<pre><code{lang_class}>{html_escape(code)}</code></pre>"

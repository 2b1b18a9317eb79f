"""Text helpers shared by the renderers.

Example:
    >>> from podrender.utils.text import slugify
    >>> slugify("method close")
    'method-close'
"""

from __future__ import annotations

import html as html_module
import re


def slugify(text: str, separator: str = "-") -> str:
    """Convert heading text to an anchor slug.

    Unicode word characters are kept; everything else collapses into
    ``separator``.

    Examples:
        >>> slugify("class IO::Handle")
        'class-iohandle'
        >>> slugify("  routine  open ")
        'routine-open'
        >>> slugify("Café")
        'café'
    """
    if not text:
        return ""
    text = text.lower().strip()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[-\s]+", separator, text)
    return text.strip(separator)


def heading_anchor(text: str, seen: set[str]) -> str:
    """Slug for a heading, unique among ``seen``; adds the result to ``seen``.

    Headings without word characters get ``section``; repeats get ``-1``,
    ``-2``, ... suffixes.

    Examples:
        >>> seen: set[str] = set()
        >>> [heading_anchor(t, seen) for t in ["Intro", "Intro", "!!!"]]
        ['intro', 'intro-1', 'section']
    """
    slug = slugify(text) or "section"
    candidate = slug
    n = 0
    while candidate in seen:
        n += 1
        candidate = f"{slug}-{n}"
    seen.add(candidate)
    return candidate


def html_escape(s: str) -> str:
    """Escape &, <, > and double quotes; single quotes are left alone."""
    return html_module.escape(s, quote=False).replace('"', "&quot;")


def collapse_whitespace(text: str) -> str:
    """Join wrapped source lines into single-spaced paragraph text."""
    return " ".join(text.split())

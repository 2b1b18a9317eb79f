"""Cross-reference resolution.

A target resolves, in order, against:

1. the supplied name → location mapping
2. itself, when it is an absolute URL (``https://...``, ``mailto:...``)
3. a heading of the document being rendered, when it is ``#anchor``

Anything else is unresolved: the renderer shows the reference as plain text
and a ReferenceWarning is collected.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from podrender.errors import ReferenceWarning
from podrender.formatting import parse_formatting, plain_text
from podrender.location import SourceLocation
from podrender.nodes import Heading
from podrender.utils.logger import get_logger
from podrender.utils.text import heading_anchor, slugify

logger = get_logger(__name__)

_URL_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:(//)?\S")


def is_absolute_url(target: str) -> bool:
    """True for ``scheme:`` targets such as ``https://raku.org``.

    ``IO::Path`` is not a URL: a scheme must be followed by a non-colon.
    """
    return bool(_URL_SCHEME.match(target)) and "::" not in target.split("/", 1)[0]


class ReferenceResolver:
    """Resolve reference targets for one render.

    Usage:
        >>> resolver = ReferenceResolver({"IO::Path": "/type/IO::Path"})
        >>> resolver.resolve("IO::Path")
        '/type/IO::Path'
        >>> resolver.resolve("Nope") is None
        True
        >>> [w.target for w in resolver.warnings]
        ['Nope']

    """

    __slots__ = ("_references", "_anchors", "_warnings")

    def __init__(
        self,
        references: Mapping[str, str] | None = None,
        headings: Iterable[Heading] = (),
    ) -> None:
        self._references = references or {}
        # Same anchors, in the same order, as the HTML renderer assigns
        seen: set[str] = set()
        for heading in headings:
            heading_anchor(plain_text(parse_formatting(heading.text)), seen)
        self._anchors = seen
        self._warnings: list[ReferenceWarning] = []

    @property
    def warnings(self) -> list[ReferenceWarning]:
        """Warnings collected so far, in the order they were raised."""
        return list(self._warnings)

    def lookup(self, target: str) -> str | None:
        """Resolve without recording a warning."""
        if target in self._references:
            return self._references[target]
        if is_absolute_url(target):
            return target
        if target.startswith("#"):
            anchor = slugify(target[1:])
            if anchor and anchor in self._anchors:
                return f"#{anchor}"
        return None

    def resolve(self, target: str, location: SourceLocation | None = None) -> str | None:
        """Resolve a target, recording a ReferenceWarning when it fails."""
        href = self.lookup(target)
        if href is None:
            warning = ReferenceWarning(target, location)
            self._warnings.append(warning)
            logger.debug("Unresolved reference %r at %s", target, location)
        return href

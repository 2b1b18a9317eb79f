"""Utility modules for podrender.

Provides:
- text: slugify, heading_anchor, html_escape, collapse_whitespace
- logger: get_logger for logging
"""

from podrender.utils.logger import get_logger
from podrender.utils.text import collapse_whitespace, heading_anchor, html_escape, slugify

__all__ = [
    "collapse_whitespace",
    "get_logger",
    "heading_anchor",
    "html_escape",
    "slugify",
]

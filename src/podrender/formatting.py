"""Inline formatting codes: ``B<bold>``, ``C<code>``, ``L<label|target>`` ...

Block text is stored as written; renderers call :func:`parse_formatting` to
turn it into inline nodes. Parsing is lenient: an unknown code letter or an
unterminated code is kept as literal text.

Delimiters may be single angles, repeated angles (``C<< $a <=> $b >>``) or
guillemets (``C«...»``). Inside single angles, nested ``<``/``>`` pairs are
balanced so ``C<Array[Int]<3>>`` keeps its inner brackets.

Example:
    >>> parse_formatting("B<Note:> see L<open|/routine/open>")
    (Bold(children=(Text(content='Note:'),)), Text(content=' see '), Link(...))

"""

from __future__ import annotations

import html
from dataclasses import dataclass

from podrender.location import SourceLocation
from podrender.nodes import (
    Bold,
    Code,
    Footnote,
    IndexTerm,
    Inline,
    Italic,
    Link,
    Text,
    Underline,
)

# Codes whose content is taken verbatim (no nested formatting)
VERBATIM_CODES = frozenset("CKTV")
# Codes that take nested formatting
NESTING_CODES = frozenset("BILNRUXZ")
KNOWN_CODES = VERBATIM_CODES | NESTING_CODES | {"E"}

_ENTITY_NAMES = {
    "lt": "<",
    "gt": ">",
    "amp": "&",
    "quot": '"',
    "apos": "'",
    "nbsp": " ",
    "laquo": "«",
    "raquo": "»",
}


@dataclass(frozen=True, slots=True)
class CodeSpan:
    """A formatting code located in a string.

    Attributes:
        letter: Code letter (``B``, ``L`` ...)
        body: Content between the delimiters
        start: Index of the code letter
        end: Index just past the closing delimiter
    """

    letter: str
    body: str
    start: int
    end: int


def scan_code(text: str, pos: int) -> CodeSpan | None:
    """Scan a formatting code starting at ``text[pos]``.

    Returns None when ``text[pos]`` does not start a known, terminated code,
    or when the letter is glued to a preceding word character
    (``Array<Int>`` is not a code).
    """
    letter = text[pos]
    if letter not in KNOWN_CODES or pos + 1 >= len(text):
        return None
    if pos > 0 and (text[pos - 1].isalnum() or text[pos - 1] == "_"):
        return None

    opener = text[pos + 1]
    if opener == "«":
        close = text.find("»", pos + 2)
        if close == -1:
            return None
        return CodeSpan(letter, text[pos + 2 : close], pos, close + 1)
    if opener != "<":
        return None

    # Count repeated angles: C<< ... >> must be closed by the same count
    count = 0
    i = pos + 1
    while i < len(text) and text[i] == "<":
        count += 1
        i += 1
    if count > 1:
        closer = ">" * count
        close = text.find(closer, i)
        if close == -1:
            return None
        return CodeSpan(letter, text[i:close].strip(), pos, close + count)

    depth = 1
    j = i
    while j < len(text):
        ch = text[j]
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
            if depth == 0:
                return CodeSpan(letter, text[i:j], pos, j + 1)
        j += 1
    return None


def split_top_level(body: str, separator: str) -> tuple[str, str] | None:
    """Split ``body`` at the first ``separator`` outside nested codes."""
    depth = 0
    for i, ch in enumerate(body):
        if ch in "<«":
            depth += 1
        elif ch in ">»":
            depth = max(depth - 1, 0)
        elif ch == separator and depth == 0:
            return body[:i], body[i + 1 :]
    return None


def split_link(body: str) -> tuple[str, str | None]:
    """Split an ``L<...>`` body into (target, label).

    Example:
        >>> split_link("C<open>|/routine/open")
        ('/routine/open', 'C<open>')
        >>> split_link("IO::Path")
        ('IO::Path', None)
    """
    parts = split_top_level(body, "|")
    if parts is None:
        return body.strip(), None
    label, target = parts
    return target.strip(), label.strip()


def match_cross_reference(text: str) -> tuple[str, str | None] | None:
    """Return (target, label) if ``text`` is exactly one ``L<...>`` code."""
    if not text.startswith("L"):
        return None
    span = scan_code(text, 0)
    if span is None or span.end != len(text):
        return None
    target, label = split_link(span.body)
    if not target:
        return None
    return target, label


def decode_entity(body: str) -> str:
    """Decode the body of an ``E<...>`` code.

    Accepts names (``lt``), decimal (``171``), hex (``0xAB``) and
    semicolon-separated sequences (``E<lt;gt>``).
    """
    out: list[str] = []
    for part in body.split(";"):
        part = part.strip()
        if not part:
            continue
        if part in _ENTITY_NAMES:
            out.append(_ENTITY_NAMES[part])
        elif part.lower().startswith("0x"):
            try:
                out.append(chr(int(part[2:], 16)))
            except (ValueError, OverflowError):
                out.append(part)
        elif part.isdigit():
            try:
                out.append(chr(int(part)))
            except (ValueError, OverflowError):
                out.append(part)
        else:
            decoded = html.unescape(f"&{part};")
            out.append(decoded if decoded != f"&{part};" else part)
    return "".join(out)


def parse_formatting(text: str, location: SourceLocation | None = None) -> tuple[Inline, ...]:
    """Parse formatting codes in block text into inline nodes.

    Args:
        text: Block text as stored on a Paragraph, Heading or ListItem
        location: Location of the owning block, copied onto every node

    Returns:
        Tuple of inline nodes; adjacent text is merged
    """
    loc = location or SourceLocation.unknown()
    nodes: list[Inline] = []
    buf: list[str] = []

    def flush() -> None:
        if buf:
            nodes.append(Text("".join(buf), location=loc))
            buf.clear()

    pos = 0
    length = len(text)
    while pos < length:
        ch = text[pos]
        span = scan_code(text, pos) if ch in KNOWN_CODES else None
        if span is None:
            buf.append(ch)
            pos += 1
            continue

        pos = span.end
        letter, body = span.letter, span.body
        if letter == "Z":
            continue
        if letter == "E":
            buf.append(decode_entity(body))
            continue
        if letter == "V":
            buf.append(body)
            continue

        flush()
        if letter in "CKT":
            nodes.append(Code(body, kind=letter, location=loc))
        elif letter == "B":
            nodes.append(Bold(parse_formatting(body, loc), location=loc))
        elif letter in "IR":
            nodes.append(Italic(parse_formatting(body, loc), location=loc))
        elif letter == "U":
            nodes.append(Underline(parse_formatting(body, loc), location=loc))
        elif letter == "N":
            nodes.append(Footnote(parse_formatting(body, loc), location=loc))
        elif letter == "X":
            parts = split_top_level(body, "|")
            shown, entries = (parts[0], parts[1]) if parts else (body, body)
            nodes.append(
                IndexTerm(
                    parse_formatting(shown, loc),
                    entries=tuple(e.strip() for e in entries.split(";") if e.strip()),
                    location=loc,
                )
            )
        else:  # L
            target, label = split_link(body)
            children = parse_formatting(label if label is not None else target, loc)
            nodes.append(Link(target, children, has_label=label is not None, location=loc))
    flush()
    return tuple(nodes)


def plain_text(nodes: tuple[Inline, ...]) -> str:
    """Flatten inline nodes to their visible text (footnotes omitted)."""
    parts: list[str] = []
    for node in nodes:
        match node:
            case Text():
                parts.append(node.content)
            case Code():
                parts.append(node.content)
            case Footnote():
                pass
            case Bold() | Italic() | Underline() | Link() | IndexTerm():
                parts.append(plain_text(node.children))
    return "".join(parts)

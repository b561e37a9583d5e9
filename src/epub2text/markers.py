"""Inline image markers embedded in flattened chapter text.

A marker is a single self-closing tag on its own paragraph:

    \\n\\n<img src="OEBPS/images/cover.jpg" yrel="1.6"/>\\n\\n

``src`` is the resolved resource path (attribute-escaped) and ``yrel`` is the
height/width ratio written with ``repr`` so it parses back to the same float.
"""

from __future__ import annotations

import html
import math
import re

from epub2text.types import ImgEntry

_MARKER_RE = re.compile(r'<img src="(?P<src>[^"]*)" yrel="(?P<yrel>[^"]*)"/>')


def _escape_attr(value: str) -> str:
    # Newlines are escaped too so a marker never spans a paragraph break
    return html.escape(value, quote=True).replace("\n", "&#10;").replace("\r", "&#13;")


def image_marker_xml(entry: ImgEntry) -> str:
    return f'<img src="{_escape_attr(entry.path)}" yrel="{entry.aspect_ratio!r}"/>'


def encode_image_marker(path: str, aspect_ratio: float) -> str:
    """Return the marker for ``path``, framed by blank lines."""
    ratio = float(aspect_ratio)
    if not math.isfinite(ratio) or ratio <= 0:
        raise ValueError(f"aspect_ratio must be a positive number, got {aspect_ratio!r}")
    return f"\n\n{image_marker_xml(ImgEntry(path=path, aspect_ratio=ratio))}\n\n"


def _entry_from_match(m: re.Match[str]) -> ImgEntry | None:
    try:
        ratio = float(m.group("yrel"))
    except ValueError:
        return None
    if not math.isfinite(ratio) or ratio <= 0:
        return None
    return ImgEntry(path=html.unescape(m.group("src")), aspect_ratio=ratio)


def decode_image_marker(text: str) -> ImgEntry | None:
    """Parse a marker (framing whitespace allowed); None if ``text`` isn't one."""
    m = _MARKER_RE.fullmatch(text.strip())
    if m is None:
        return None
    return _entry_from_match(m)


def find_image_markers(body: str) -> list[ImgEntry]:
    entries: list[ImgEntry] = []
    for m in _MARKER_RE.finditer(body):
        entry = _entry_from_match(m)
        if entry is not None:
            entries.append(entry)
    return entries


def split_blocks(body: str) -> list[str | ImgEntry]:
    """Split flattened text into paragraphs and image entries.

    Blocks are separated by blank lines; empty blocks are dropped and
    single newlines inside a paragraph are kept.
    """

    blocks: list[str | ImgEntry] = []
    for raw in body.split("\n\n"):
        block = raw.strip()
        if not block:
            continue
        entry = decode_image_marker(block)
        blocks.append(entry if entry is not None else block)
    return blocks


__all__ = [
    "decode_image_marker",
    "encode_image_marker",
    "find_image_markers",
    "image_marker_xml",
    "split_blocks",
]

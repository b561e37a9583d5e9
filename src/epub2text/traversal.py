"""Flatten a parsed chapter tree into plain text.

Two walks share the same tag rules:

- ``paragraph_text`` handles a ``<p>``: inline children are concatenated,
  the whole paragraph is trimmed, and a non-empty result is followed by a
  blank line.
- ``structured_text`` handles everything else (body, containers, unknown
  tags). A text node directly under the outermost call is emitted trimmed
  and without a separator; deeper text nodes get a blank line after them.

Tag names are compared case-insensitively; unknown elements are always
recursed into, so no markup can stop the walk.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from bs4 import NavigableString, PageElement, Tag
from bs4.element import PreformattedString, Script, Stylesheet, TemplateString

# Receives an <img> element, returns the text that replaces it
ImageHandler = Callable[[Tag], str]

# Comments, doctype, CDATA and raw <script>/<style>/<template> content
_NON_TEXT_STRINGS = (PreformattedString, Script, Stylesheet, TemplateString)

_WHITESPACE_RE = re.compile(r"[ \t\n\r\f\u00a0]+")
_INVISIBLE_RE = re.compile(r"[\u200b\u00ad]")

# Block-level tags read as word breaks when an element's text is collected
_BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "body", "caption", "center",
        "dd", "details", "dir", "div", "dl", "dt", "fieldset", "figcaption",
        "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6", "header",
        "hgroup", "hr", "li", "main", "menu", "nav", "ol", "p", "pre", "section",
        "summary", "table", "tbody", "td", "tfoot", "th", "thead", "tr", "ul",
    }
)


def tag_name(node: PageElement) -> str | None:
    if isinstance(node, Tag):
        return node.name.lower()
    return None


def is_text_node(node: PageElement) -> bool:
    return isinstance(node, NavigableString) and not isinstance(node, _NON_TEXT_STRINGS)


def normalise_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", _INVISIBLE_RE.sub("", text))


def node_text(node: NavigableString) -> str:
    """Text of a single text node, whitespace runs collapsed (not trimmed)."""
    return normalise_whitespace(str(node))


def _collect_text(element: Tag, parts: list[str]) -> None:
    for child in element.children:
        name = tag_name(child)
        if name == "br":
            parts.append(" ")
        elif is_text_node(child):
            parts.append(str(child))
        elif isinstance(child, Tag):
            block = name in _BLOCK_TAGS
            if block:
                parts.append(" ")
            _collect_text(child, parts)
            if block:
                parts.append(" ")


def element_text(element: Tag) -> str:
    """Visible text of an element, trimmed.

    ``<br>`` and block-level children separate words with a space.
    """
    parts: list[str] = []
    _collect_text(element, parts)
    return normalise_whitespace("".join(parts)).strip()


def _inline_text(node: Tag, on_image: ImageHandler) -> str:
    parts: list[str] = []
    for child in node.children:
        name = tag_name(child)
        if name == "br":
            parts.append("\n")
        elif name == "img":
            parts.append(on_image(child))
        elif is_text_node(child):
            parts.append(node_text(child))
        elif isinstance(child, Tag):
            parts.append(_inline_text(child, on_image))
    return "".join(parts)


def paragraph_text(node: Tag, on_image: ImageHandler) -> str:
    paragraph = _inline_text(node, on_image).strip()
    if not paragraph:
        return ""
    return paragraph + "\n\n"


def structured_text(node: Tag, on_image: ImageHandler, *, outermost: bool = True) -> str:
    parts: list[str] = []
    for child in node.children:
        name = tag_name(child)
        if name == "p":
            parts.append(paragraph_text(child, on_image))
        elif name == "br":
            parts.append("\n")
        elif name == "hr":
            parts.append("\n\n")
        elif name == "img":
            parts.append(on_image(child))
        elif is_text_node(child):
            text = node_text(child).strip()
            if outermost:
                parts.append(text)
            elif text:
                parts.append(text + "\n\n")
        elif isinstance(child, Tag):
            parts.append(structured_text(child, on_image, outermost=False))
    return "".join(parts)


__all__ = [
    "ImageHandler",
    "element_text",
    "is_text_node",
    "node_text",
    "normalise_whitespace",
    "paragraph_text",
    "structured_text",
    "tag_name",
]

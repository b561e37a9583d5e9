"""Chapter document parsing: markup bytes in, title and flattened body out.

The chapter's first heading (h1-h6, anywhere in the body) becomes the title
and is removed from the tree. Images are either stripped up front or turned
into inline markers, depending on ``ChapterParseOptions.include_images``.
The remaining body is flattened by ``traversal.structured_text``.
"""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, FeatureNotFound, Tag
from bs4.builder import ParserRejectedMarkup

from epub2text.errors import UnparsableDocumentError
from epub2text.feature_logger import log_feature_decision, log_parse_configuration
from epub2text.markers import encode_image_marker
from epub2text.options import ChapterParseOptions
from epub2text.paths import resolve_resource_path
from epub2text.resources import lookup_aspect_ratio
from epub2text.traversal import element_text, structured_text
from epub2text.types import ParsedChapter, ResourceTable

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^h[1-6]$", re.IGNORECASE)
_IMG_RE = re.compile(r"^img$", re.IGNORECASE)
_HEAD_RE = re.compile(r"^head$", re.IGNORECASE)


def _decode_markup(data: bytes | str, document_path: str) -> str:
    if isinstance(data, str):
        return data
    try:
        return bytes(data).decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise UnparsableDocumentError(document_path, exc) from exc


def _parse_markup(markup: str, document_path: str, options: ChapterParseOptions) -> Tag:
    """Parse markup and return the element whose children form the chapter body."""
    try:
        soup = BeautifulSoup(markup, options.markup_parser.value)
    except (FeatureNotFound, ParserRejectedMarkup) as exc:
        raise UnparsableDocumentError(document_path, exc) from exc

    if soup.body is not None:
        return soup.body

    # html.parser never adds an implicit <body>; the <html> element (or the
    # fragment itself) stands in for it so its text stays top-level
    head = soup.find(_HEAD_RE)
    if head is not None:
        head.decompose()
    if soup.html is not None:
        return soup.html
    return soup


def _image_marker(
    node: Tag,
    document_path: str,
    resources: ResourceTable,
    fallback_aspect_ratio: float,
) -> str:
    # A missing src reads as "" and resolves to the document's directory
    src = node.get("src")
    if not isinstance(src, str):
        log_feature_decision("Images", "missing src", {"document": document_path})
        src = ""
    path = resolve_resource_path(document_path, src)
    ratio = lookup_aspect_ratio(resources, path, fallback_aspect_ratio)
    return encode_image_marker(path, ratio)


def parse_chapter(
    data: bytes | str,
    document_path: str,
    resources: ResourceTable,
    options: ChapterParseOptions | None = None,
) -> ParsedChapter:
    """Parse one chapter document into its title and flattened body text.

    Args:
        data: Raw chapter markup (UTF-8 bytes) or an already decoded string
        document_path: Root-relative path of the chapter inside its container;
            image links are resolved against its directory
        resources: Read-only resource table keyed by root-relative path
        options: Parse options (defaults strip images)

    Returns:
        ParsedChapter with the first heading's text (or None) and the body

    Raises:
        UnparsableDocumentError: If the bytes cannot be decoded or parsed
    """
    options = options or ChapterParseOptions()
    log_parse_configuration(options, document_path)

    body = _parse_markup(_decode_markup(data, document_path), document_path, options)

    title: str | None = None
    heading = body.find(_HEADING_RE)
    if isinstance(heading, Tag):
        title = element_text(heading)
        log_feature_decision("Title", "found", {"tag": heading.name})
        heading.decompose()
    else:
        log_feature_decision("Title", "missing")

    if not options.include_images:
        images = body.find_all(_IMG_RE)
        for img in images:
            img.decompose()
        log_feature_decision("Images", "stripped", {"count": len(images)})

    def on_image(node: Tag) -> str:
        return _image_marker(node, document_path, resources, options.fallback_aspect_ratio)

    text = structured_text(body, on_image)
    logger.debug("Parsed %s: %d characters", document_path, len(text))
    return ParsedChapter(title=title, body=text)


__all__ = ["parse_chapter"]

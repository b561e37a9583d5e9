"""epub2text - flatten e-book chapter XHTML into reader-ready plain text."""

from __future__ import annotations

__version__ = "0.1.0"

from .chapter import parse_chapter as parse_chapter
from .errors import Epub2TextError as Epub2TextError
from .errors import UnparsableDocumentError as UnparsableDocumentError
from .options import ChapterParseOptions as ChapterParseOptions
from .options import MarkupParser as MarkupParser
from .types import ImgEntry as ImgEntry
from .types import ParsedChapter as ParsedChapter
from .types import ResourceEntry as ResourceEntry
from .types import ResourceTable as ResourceTable

__all__ = [
    "ChapterParseOptions",
    "Epub2TextError",
    "ImgEntry",
    "MarkupParser",
    "ParsedChapter",
    "ResourceEntry",
    "ResourceTable",
    "UnparsableDocumentError",
    "__version__",
    "parse_chapter",
]

"""Parse options for epub2text chapter conversion.

Note: Defaults reproduce the baseline output, in which images are stripped
from the chapter before the text is flattened.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

DEFAULT_ASPECT_RATIO = 1.45


class MarkupParser(Enum):
    """BeautifulSoup tree builders accepted for chapter markup."""

    HTML_PARSER = "html.parser"  # stdlib-backed, always available
    LXML = "lxml"
    HTML5LIB = "html5lib"


@dataclass
class ChapterParseOptions:
    """Options controlling how a chapter document is flattened.

    Defaults strip images, so output is text only until a renderer that
    understands image markers consumes it.
    """

    # Turn <img> elements into inline image markers instead of removing them
    include_images: bool = False

    # Tree builder handed to BeautifulSoup
    markup_parser: MarkupParser = MarkupParser.HTML_PARSER

    # Height/width ratio used when an image is missing or cannot be decoded
    fallback_aspect_ratio: float = DEFAULT_ASPECT_RATIO

    def __post_init__(self) -> None:
        ratio = self.fallback_aspect_ratio
        if not math.isfinite(ratio) or ratio <= 0:
            raise ValueError(f"fallback_aspect_ratio must be a positive number, got {ratio!r}")

    @classmethod
    def from_cli(
        cls,
        *,
        images: str = "off",
        parser: str = "html.parser",
        fallback_aspect_ratio: float = DEFAULT_ASPECT_RATIO,
    ) -> ChapterParseOptions:
        """Build ChapterParseOptions from CLI argument values.

        Args:
            images: Image handling ("on", "off")
            parser: Markup parser name ("html.parser", "lxml", "html5lib")
            fallback_aspect_ratio: Ratio used for missing/undecodable images

        Returns:
            ChapterParseOptions instance with mapped enum values

        Raises:
            ValueError: If any argument has an invalid value
        """
        if images == "on":
            include_images = True
        elif images == "off":
            include_images = False
        else:
            raise ValueError(f"Invalid images '{images}'. Valid values: ['on', 'off']")

        try:
            markup_parser = MarkupParser(parser)
        except ValueError as exc:
            valid_values = [p.value for p in MarkupParser]
            raise ValueError(f"Invalid parser '{parser}'. Valid values: {valid_values}") from exc

        return cls(
            include_images=include_images,
            markup_parser=markup_parser,
            fallback_aspect_ratio=fallback_aspect_ratio,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization/logging."""
        return {
            "include_images": self.include_images,
            "markup_parser": self.markup_parser.value,
            "fallback_aspect_ratio": self.fallback_aspect_ratio,
        }

    def __repr__(self) -> str:
        return (
            f"ChapterParseOptions("
            f"include_images={self.include_images}, "
            f"markup_parser={self.markup_parser.value}, "
            f"fallback_aspect_ratio={self.fallback_aspect_ratio}"
            f")"
        )


__all__ = [
    "DEFAULT_ASPECT_RATIO",
    "ChapterParseOptions",
    "MarkupParser",
]

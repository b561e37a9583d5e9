"""Centralized decision logging for the epub2text chapter pipeline.

Records which options were active and which fallbacks were taken while a
chapter was flattened. Messages are for debugging; none of them change output.
"""

from __future__ import annotations

import logging
from typing import Any

from epub2text.options import ChapterParseOptions

logger = logging.getLogger(__name__)


def log_parse_configuration(options: ChapterParseOptions, document_path: str) -> None:
    """Log the options a chapter is parsed with.

    Args:
        options: Parse options in effect
        document_path: Container path of the chapter being parsed
    """
    logger.debug("Parsing %s:", document_path)
    logger.debug("  Images: %s", "markers" if options.include_images else "stripped")
    logger.debug("  Markup parser: %s", options.markup_parser.value)
    logger.debug("  Fallback aspect ratio: %.3f", options.fallback_aspect_ratio)


def log_feature_decision(
    feature: str, decision: str, context: dict[str, Any] | None = None
) -> None:
    """Log a processing decision.

    Args:
        feature: Name of the feature making the decision (e.g., "Title", "Images")
        decision: The decision made (e.g., "found", "stripped", "skipped")
        context: Optional context information
    """
    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        logger.debug("%s: %s (%s)", feature, decision, context_str)
    else:
        logger.debug("%s: %s", feature, decision)


def log_fallback(feature: str, reason: str, details: str | None = None) -> None:
    """Log a non-fatal fallback.

    Args:
        feature: Name of the feature falling back (e.g., "Aspect ratio")
        reason: Why the fallback happened (e.g., "missing_resource")
        details: Optional additional details
    """
    if details:
        logger.debug("%s fallback: %s (%s)", feature, reason, details)
    else:
        logger.debug("%s fallback: %s", feature, reason)


__all__ = [
    "log_fallback",
    "log_feature_decision",
    "log_parse_configuration",
]

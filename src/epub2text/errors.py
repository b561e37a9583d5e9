"""Exception types raised by epub2text."""

from __future__ import annotations


class Epub2TextError(Exception):
    """Base class for all epub2text errors."""


class UnparsableDocumentError(Epub2TextError):
    """Raised when a chapter document cannot be read as markup at all."""

    def __init__(self, document_path: str, cause: Exception | None = None) -> None:
        self.document_path = document_path
        self.cause = cause

        message = f"Failed to parse document {document_path}"
        if cause:
            message += f": {cause}"
        super().__init__(message)


__all__ = [
    "Epub2TextError",
    "UnparsableDocumentError",
]

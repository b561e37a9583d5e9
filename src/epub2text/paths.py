from __future__ import annotations

import posixpath
from urllib.parse import unquote


def resolve_resource_path(base_document_path: str, relative_link: str) -> str:
    """Resolve a percent-encoded link against the document that contains it.

    The result uses the resource table's keying: root-relative, forward
    slashes, no leading slash, ``.``/``..`` segments collapsed.

    - "../images/a.png" from "OEBPS/text/ch1.xhtml" -> "OEBPS/images/a.png"
    - links escaping the container keep their leading ".." and simply match
      no resource
    """

    # A leading slash still resolves under the document's directory
    link = unquote(relative_link).replace("\\", "/").lstrip("/")
    base_dir = posixpath.dirname(base_document_path.replace("\\", "/"))
    resolved = posixpath.normpath(posixpath.join(base_dir, link))
    resolved = resolved.lstrip("/")
    if resolved == ".":
        return ""
    return resolved


__all__ = ["resolve_resource_path"]

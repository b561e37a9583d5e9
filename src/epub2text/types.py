from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True)
class ResourceEntry:
    """Raw bytes of a container resource.

    - data: file contents as stored in the container
    - width/height: optional pixel size when the caller already knows it;
      when both are positive the bytes are not decoded
    """

    data: bytes
    width: int | None = None
    height: int | None = None


# Keyed by root-relative POSIX path, e.g. "OEBPS/images/cover.jpg"
ResourceTable: TypeAlias = Mapping[str, ResourceEntry | bytes]


@dataclass(frozen=True)
class ImgEntry:
    path: str
    aspect_ratio: float  # height / width


@dataclass(frozen=True)
class ParsedChapter:
    title: str | None
    body: str

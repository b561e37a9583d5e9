"""Resource table access: loading, lookup, and image aspect ratios.

The resource table maps root-relative POSIX paths to raw bytes, held in
memory or read lazily from an unpacked directory. Chapter parsing only reads
from it; image bytes are decoded with Pillow purely to learn their dimensions.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Iterator, Mapping
from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from epub2text.feature_logger import log_fallback
from epub2text.options import DEFAULT_ASPECT_RATIO
from epub2text.types import ResourceEntry, ResourceTable

logger = logging.getLogger(__name__)


class DirectoryResources(Mapping[str, ResourceEntry]):
    """Resource table backed by an unpacked container directory.

    Keys are paths relative to ``root`` with forward slashes, matching
    ``resolve_resource_path``. A file is read only when it is looked up, so
    chapters and unused assets stay on disk.
    """

    def __init__(self, root: Path) -> None:
        self.root = root.resolve()

    def _file_for(self, key: str) -> Path | None:
        if not key or key.startswith("/"):
            return None
        try:
            path = (self.root / key).resolve()
            # Keys such as "../x" must not reach outside the container
            if not path.is_relative_to(self.root) or not path.is_file():
                return None
        except (OSError, ValueError):
            return None
        return path

    def __getitem__(self, key: str) -> ResourceEntry:
        path = self._file_for(key)
        if path is None:
            raise KeyError(key)
        logger.debug("Reading resource %s", key)
        return ResourceEntry(data=path.read_bytes())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._file_for(key) is not None

    def __iter__(self) -> Iterator[str]:
        for path in sorted(self.root.rglob("*")):
            if path.is_file():
                yield path.relative_to(self.root).as_posix()

    def __len__(self) -> int:
        return sum(1 for _ in self)


def load_resource_table(root: Path) -> DirectoryResources:
    table = DirectoryResources(root)
    logger.debug("Using resources under %s", table.root)
    return table


def get_resource(resources: ResourceTable, path: str) -> ResourceEntry | None:
    value = resources.get(path)
    if value is None:
        return None
    if isinstance(value, bytes | bytearray):
        return ResourceEntry(data=bytes(value))
    return value


def image_aspect_ratio(data: bytes) -> float | None:
    """Return height/width of an encoded image, or None if it can't be decoded."""
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", Image.DecompressionBombWarning)
            with Image.open(BytesIO(data)) as img:
                width, height = img.size
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
        logger.debug("Could not decode image bytes: %s", exc)
        return None
    if width <= 0 or height <= 0:
        return None
    return height / width


def lookup_aspect_ratio(
    resources: ResourceTable,
    path: str,
    fallback: float = DEFAULT_ASPECT_RATIO,
) -> float:
    """Aspect ratio for the image stored at ``path``, or ``fallback``."""
    entry = get_resource(resources, path)
    if entry is None:
        log_fallback("Aspect ratio", "missing_resource", path)
        return fallback

    if (entry.width or 0) > 0 and (entry.height or 0) > 0:
        return entry.height / entry.width

    ratio = image_aspect_ratio(entry.data)
    if ratio is None:
        log_fallback("Aspect ratio", "undecodable_image", path)
        return fallback
    return ratio


__all__ = [
    "DirectoryResources",
    "get_resource",
    "image_aspect_ratio",
    "load_resource_table",
    "lookup_aspect_ratio",
]

"""Shared helpers for storage backends: compression, content types, upload selection."""

from __future__ import annotations

import gzip
import mimetypes
import os
import zlib
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Callable, Iterator

UPLOAD_EXTENSIONS = ("html", "js", "wasm", "png", "json", "jpeg", "jpg", "tiff", "bmp", "gif")
"""File extensions included when publishing."""

MAX_CONCURRENCY = 50
"""Maximum number of concurrent uploads or downloads."""

_CONTENT_TYPES = {
    "html": "text/html",
    "js": "application/javascript",
    "wasm": "application/wasm",
    "png": "image/png",
    "json": "application/json",
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "tiff": "image/tiff",
    "bmp": "image/bmp",
    "gif": "image/gif",
}

_OCTET_STREAM = "application/octet-stream"


class StorageError(Exception):
    """Raised when a storage operation fails."""


@dataclass(frozen=True)
class PublishResult:
    """Outcome of publishing a report."""

    report_url: str | None = None


@dataclass(frozen=True)
class UploadItem:
    """A file ready to upload: its object key, content type and gzip body."""

    path: Path
    relative_path: str
    key: str
    content_type: str
    body: bytes
    content_encoding: str = "gzip"


def maybe_decompress(data: bytes, content_encoding: str | None) -> bytes:
    """Gunzip ``data`` if the encoding mentions gzip; fall back to the raw bytes on failure."""
    if content_encoding is None or "gzip" not in content_encoding.lower():
        return bytes(data)
    try:
        return gzip.decompress(data)
    except (OSError, EOFError, zlib.error):
        return bytes(data)


def gzip_compress(data: bytes) -> bytes:
    """Gzip ``data`` at the default compression level."""
    return gzip.compress(data, compresslevel=6, mtime=0)


def guess_content_type(path: str | PathLike[str]) -> str:
    """Guess a MIME type from the file name, defaulting to octet-stream."""
    suffix = Path(path).suffix
    ext = suffix[1:].lower() if suffix else ""
    if ext in _CONTENT_TYPES:
        return _CONTENT_TYPES[ext]
    guessed, _ = mimetypes.guess_type(os.fspath(path), strict=False)
    return guessed or _OCTET_STREAM


def iter_upload_files(source_dir: str | PathLike[str]) -> Iterator[Path]:
    """Yield every non-directory file under ``source_dir`` with an uploadable extension."""
    root = Path(source_dir)
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath, name)
            suffix = path.suffix
            if suffix and suffix[1:] in UPLOAD_EXTENSIONS:
                yield path


def prepare_uploads(
    source_dir: str | PathLike[str], build_key: Callable[[str], str]
) -> list[UploadItem]:
    """Read and compress every uploadable file, naming each with ``build_key(relative_path)``."""
    root = Path(source_dir)
    items = []
    for path in iter_upload_files(root):
        relative = path.relative_to(root).as_posix()
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise StorageError(f"I/O error: {exc}") from exc
        items.append(
            UploadItem(
                path=path,
                relative_path=relative,
                key=build_key(relative),
                content_type=guess_content_type(path),
                body=gzip_compress(data),
            )
        )
    return items
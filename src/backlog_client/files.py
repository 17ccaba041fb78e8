"""
Downloaded files and how to present them.

Backlog does not always report a useful content type for user uploads, so
classification falls back from an explicit hint, to the MIME type, to the
filename extension, to sniffing the first bytes of the payload. Sniffing is a
best-effort heuristic; callers that need certainty pass a hint.
"""

from __future__ import annotations

import base64
import codecs
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Dict, Optional, Union
from urllib.parse import unquote

from .errors import InvalidParameterError, UnsupportedPresentationError

DEFAULT_FILENAME = "downloaded_file"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Leading bytes inspected when sniffing for text.
SNIFF_BYTES = 512

TEXT_CONTENT_TYPES = frozenset(
    {
        "application/json",
        "application/xml",
        "application/javascript",
        "application/x-httpd-php",
        "application/x-sh",
    }
)

TEXT_EXTENSIONS = frozenset(
    {
        ".txt",
        ".md",
        ".markdown",
        ".csv",
        ".tsv",
        ".json",
        ".xml",
        ".yaml",
        ".yml",
        ".log",
        ".ini",
        ".toml",
        ".html",
        ".htm",
        ".css",
        ".js",
        ".ts",
        ".py",
        ".sh",
        ".sql",
    }
)

_FILENAME_STAR_RE = re.compile(r"filename\*\s*=\s*([^']*)'[^']*'([^;]+)", re.IGNORECASE)
_FILENAME_RE = re.compile(r'filename\s*=\s*(?:"([^"]*)"|([^;]+))', re.IGNORECASE)


class PresentationFormat(str, Enum):
    IMAGE = "image"
    TEXT = "text"
    RAW = "raw"

    @classmethod
    def parse(cls, value: Union[str, "PresentationFormat"]) -> "PresentationFormat":
        if isinstance(value, cls):
            return value
        token = (value or "").strip().lower() if isinstance(value, str) else value
        try:
            return cls(token)
        except ValueError as exc:
            raise InvalidParameterError(
                f"Invalid format {value!r}. Valid options: 'image', 'text', 'raw'"
            ) from exc


Hint = Optional[Union[str, PresentationFormat]]


@dataclass(frozen=True)
class DownloadedFile:
    filename: str
    content_type: str
    content: bytes

    @property
    def format(self) -> PresentationFormat:
        return classify(self.content_type, self.filename, self.content)

    @property
    def size(self) -> int:
        return len(self.content)


def classify(
    content_type: Optional[str],
    filename: Optional[str],
    content: bytes,
    hint: Hint = None,
) -> PresentationFormat:
    if hint is not None:
        return PresentationFormat.parse(hint)

    mime = _base_mime(content_type)
    if mime.startswith("image/"):
        return PresentationFormat.IMAGE
    if (
        mime.startswith("text/")
        or mime in TEXT_CONTENT_TYPES
        or _has_text_extension(filename)
        or looks_like_text(content)
    ):
        return PresentationFormat.TEXT
    return PresentationFormat.RAW


def looks_like_text(content: bytes, limit: int = SNIFF_BYTES) -> bool:
    """True when the first `limit` bytes decode as UTF-8 and contain no NUL."""
    sample = content[:limit]
    if not sample:
        return True
    if b"\x00" in sample:
        return False
    # final=False: a multi-byte sequence cut at the window edge is fine.
    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        decoder.decode(sample, final=False)
    except UnicodeDecodeError:
        return False
    return True


def parse_disposition_filename(value: Optional[str]) -> Optional[str]:
    """Filename from a Content-Disposition header; RFC 5987 form preferred."""
    if not value:
        return None
    match = _FILENAME_STAR_RE.search(value)
    if match:
        charset = match.group(1).strip() or "utf-8"
        try:
            name = unquote(match.group(2).strip().strip('"'), encoding=charset)
        except LookupError:
            name = unquote(match.group(2).strip().strip('"'))
        if name:
            return name
    match = _FILENAME_RE.search(value)
    if match:
        name = (match.group(1) if match.group(1) is not None else match.group(2)).strip()
        return name or None
    return None


def render_file(file: DownloadedFile, hint: Hint = None) -> Dict[str, Any]:
    """
    Turn a file into a JSON-ready payload in its presentation format.
    - text:  {"format", "filename", "content_type", "text"}
    - image: {"format", "filename", "content_type", "data"} (base64)
    - raw:   {"format", "filename", "content_type", "content"} (base64)
    """
    fmt = classify(file.content_type, file.filename, file.content, hint)
    payload: Dict[str, Any] = {
        "format": fmt.value,
        "filename": file.filename,
        "content_type": file.content_type,
    }
    if fmt is PresentationFormat.TEXT:
        try:
            payload["text"] = file.content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise UnsupportedPresentationError(
                f"File {file.filename!r} is not a valid UTF-8 text file."
            ) from exc
    elif fmt is PresentationFormat.IMAGE:
        if not _base_mime(file.content_type).startswith("image/"):
            raise UnsupportedPresentationError(
                f"File {file.filename!r} is not an image. "
                f"Reported content type: {file.content_type}"
            )
        payload["data"] = _b64(file.content)
    else:
        payload["content"] = _b64(file.content)
    return payload


def _base_mime(content_type: Optional[str]) -> str:
    return (content_type or "").split(";", 1)[0].strip().lower()


def _has_text_extension(filename: Optional[str]) -> bool:
    if not filename:
        return False
    return PurePosixPath(filename).suffix.lower() in TEXT_EXTENSIONS


def _b64(content: bytes) -> str:
    return base64.b64encode(content).decode("ascii")


__all__ = [
    "DEFAULT_FILENAME",
    "DEFAULT_CONTENT_TYPE",
    "SNIFF_BYTES",
    "TEXT_CONTENT_TYPES",
    "TEXT_EXTENSIONS",
    "PresentationFormat",
    "DownloadedFile",
    "classify",
    "looks_like_text",
    "parse_disposition_filename",
    "render_file",
]

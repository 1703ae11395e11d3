"""Media type helpers: extension groups, MIME lookups, header sniffing."""

from __future__ import annotations

import mimetypes
from collections.abc import Iterable
from enum import Enum
from pathlib import Path, PurePosixPath

import structlog

from core.exceptions import MediaReadError

log = structlog.get_logger()

RECOGNIZED_IMAGE_EXTENSIONS: tuple[str, ...] = (".png", ".jpg", ".jpeg", ".gif")
RECOGNIZED_VIDEO_EXTENSIONS: tuple[str, ...] = (
    ".ogv",
    ".mp4",
    ".m4v",
    ".mov",
    ".wmv",
    ".avi",
    ".mpg",
    ".3gp",
    ".3g2",
)
RECOGNIZED_DOCUMENT_EXTENSIONS: tuple[str, ...] = (".doc", ".docx", ".odt", ".pdf")
RECOGNIZED_PRESENTATION_EXTENSIONS: tuple[str, ...] = (".ppt", ".pptx", ".pps", ".ppsx", ".key")
RECOGNIZED_SPREADSHEET_EXTENSIONS: tuple[str, ...] = (".xls", ".xlsx")

# Bytes needed to recognise every signature below
_SNIFF_BYTES = 12


class MediaKind(Enum):
    IMAGE = "image"
    DOCUMENT = "document"
    PRESENTATION = "presentation"
    SPREADSHEET = "spreadsheet"
    VIDEO = "video"


# Placeholder lookup order
_KIND_EXTENSIONS: tuple[tuple[MediaKind, tuple[str, ...]], ...] = (
    (MediaKind.IMAGE, RECOGNIZED_IMAGE_EXTENSIONS),
    (MediaKind.DOCUMENT, RECOGNIZED_DOCUMENT_EXTENSIONS),
    (MediaKind.PRESENTATION, RECOGNIZED_PRESENTATION_EXTENSIONS),
    (MediaKind.SPREADSHEET, RECOGNIZED_SPREADSHEET_EXTENSIONS),
    (MediaKind.VIDEO, RECOGNIZED_VIDEO_EXTENSIONS),
)


# ---------------------------------------------------------------------------
# Extension groups
# ---------------------------------------------------------------------------


def is_recognized(url: str | None, recognized_extensions: Iterable[str]) -> bool:
    """True if ``url`` ends with one of ``recognized_extensions`` (case-sensitive)."""
    if url is None:
        return False
    return any(url.endswith(ext) for ext in recognized_extensions)


def is_valid_image(url: str | None) -> bool:
    return is_recognized(url, RECOGNIZED_IMAGE_EXTENSIONS)


def is_video(url: str | None) -> bool:
    return is_recognized(url, RECOGNIZED_VIDEO_EXTENSIONS)


def is_document(url: str | None) -> bool:
    return is_recognized(url, RECOGNIZED_DOCUMENT_EXTENSIONS)


def is_presentation(url: str | None) -> bool:
    return is_recognized(url, RECOGNIZED_PRESENTATION_EXTENSIONS)


def is_spreadsheet(url: str | None) -> bool:
    return is_recognized(url, RECOGNIZED_SPREADSHEET_EXTENSIONS)


def get_media_kind(url: str | None) -> MediaKind | None:
    """Which placeholder group ``url`` falls in, or None if unrecognised."""
    for kind, extensions in _KIND_EXTENSIONS:
        if is_recognized(url, extensions):
            return kind
    return None


# ---------------------------------------------------------------------------
# MIME types
# ---------------------------------------------------------------------------


def get_extension_for_mime_type(mime_type: str | None) -> str:
    """File extension (no dot, lowercase) for ``mime_type``; never None.

    Unknown types fall back to the MIME subtype, e.g. ``application/x-foo`` -> ``x-foo``.
    """
    if not mime_type:
        return ""
    extension = mimetypes.guess_extension(mime_type)
    if extension:
        return extension.lstrip(".").lower()
    _, _, subtype = mime_type.partition("/")
    return (subtype or mime_type).lower()


def get_media_file_name(file_name: str, mime_type: str | None) -> str:
    """Lower-cased ``file_name``, with an extension derived from ``mime_type`` if it has none."""
    name = file_name.lower()
    if PurePosixPath(name).suffix:
        return name

    if mime_type:
        extension = get_extension_for_mime_type(mime_type)
        if extension:
            name = f"{name}.{extension}"
    else:
        log.warning("media_name_without_type", file_name=file_name)
    return name


def sniff_image_mime(data: bytes) -> str:
    """Detect PNG/JPEG/GIF/WebP from header bytes. ``""`` if none match."""
    if data[:8] == b"\x89PNG\r\n\x1a\n":
        return "image/png"
    if data[:3] == b"\xff\xd8\xff":
        return "image/jpeg"
    if data[:6] in (b"GIF87a", b"GIF89a"):
        return "image/gif"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return ""


def _read_header(path: Path) -> bytes:
    try:
        with path.open("rb") as f:
            return f.read(_SNIFF_BYTES)
    except OSError as exc:
        raise MediaReadError(f"Cannot read {path}: {exc}") from exc


def get_media_file_mime_type(path: str | Path) -> str:
    """MIME type of a media file: from its name, else from its first bytes.

    Returns ``""`` when the type can't be determined or the file can't be read.
    """
    media_path = Path(path)
    mime_type, _ = mimetypes.guess_type(media_path.name.lower())

    if not mime_type:
        try:
            mime_type = sniff_image_mime(_read_header(media_path))
        except MediaReadError as exc:
            log.warning("media_mime_sniff_failed", path=str(media_path), error=exc.message)
            mime_type = ""

    if not mime_type:
        return ""
    # RFC 3016 elementary stream type; servers expect the container type
    if mime_type.lower() == "video/mp4v-es":
        return "video/mp4"
    return mime_type

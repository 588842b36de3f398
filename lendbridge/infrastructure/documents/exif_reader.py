from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from datetime import datetime
from io import BytesIO
from typing import Any

from PIL import ExifTags, Image, UnidentifiedImageError

from lendbridge.domain.errors import InvalidInput

# EXIF sub-IFD holding DateTimeOriginal, UserComment and friends
_EXIF_IFD = 0x8769


@dataclass
class DocumentMetadata:
    file_hash: str
    file_size_bytes: int
    file_extension: str | None
    width: int
    height: int
    format: str | None
    exif_data: dict[str, Any] = field(default_factory=dict)


def _jsonable(value: Any) -> Any:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="ignore").strip("\x00 ").strip()
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, (tuple, list)):
        return [_jsonable(v) for v in value]
    # IFDRational and other numeric wrappers
    try:
        return float(value)
    except (TypeError, ValueError):
        return str(value)


def _named(tags: dict[int, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for tag_id, value in tags.items():
        name = ExifTags.TAGS.get(tag_id)
        if not name or name in ("MakerNote", "ExifOffset", "GPSInfo"):
            continue
        out[name] = _jsonable(value)
    return out


def read_exif(image: Image.Image) -> dict[str, Any]:
    exif = image.getexif()
    data = _named(dict(exif))
    data.update(_named(dict(exif.get_ifd(_EXIF_IFD))))
    # drop empty values so "no metadata" is an empty dict
    return {k: v for k, v in data.items() if v not in (None, "", [])}


def extract_metadata(payload: bytes, filename: str | None = None) -> DocumentMetadata:
    """Hash an uploaded image and pull its EXIF metadata with Pillow."""
    if not payload:
        raise InvalidInput("Empty file")
    try:
        img = Image.open(BytesIO(payload))
        img.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise InvalidInput(f"Invalid image file: {exc}") from exc

    ext = filename.rsplit(".", 1)[-1].lower() if filename and "." in filename else None
    return DocumentMetadata(
        file_hash=hashlib.sha256(payload).hexdigest(),
        file_size_bytes=len(payload),
        file_extension=ext,
        width=img.width,
        height=img.height,
        format=img.format,
        exif_data=read_exif(img),
    )

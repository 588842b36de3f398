import hashlib
from io import BytesIO

import pytest
from PIL import Image

from lendbridge.domain.errors import InvalidInput
from lendbridge.infrastructure.documents.exif_reader import extract_metadata


def make_jpeg_with_exif() -> bytes:
    img = Image.new("RGB", (8, 6), (200, 100, 50))
    exif = Image.Exif()
    exif[0x010F] = "Canon"  # Make
    exif[0x0131] = "Adobe Photoshop 25.0"  # Software
    buf = BytesIO()
    img.save(buf, format="JPEG", exif=exif.tobytes())
    return buf.getvalue()


def make_png() -> bytes:
    buf = BytesIO()
    Image.new("RGB", (4, 4), (0, 0, 0)).save(buf, format="PNG")
    return buf.getvalue()


def test_reads_exif_tags_by_name():
    payload = make_jpeg_with_exif()
    meta = extract_metadata(payload, "id-card.JPG")
    assert meta.file_hash == hashlib.sha256(payload).hexdigest()
    assert meta.file_size_bytes == len(payload)
    assert meta.file_extension == "jpg"
    assert (meta.width, meta.height) == (8, 6)
    assert meta.format == "JPEG"
    assert meta.exif_data["Make"] == "Canon"
    assert meta.exif_data["Software"] == "Adobe Photoshop 25.0"


def test_image_without_exif_has_empty_metadata():
    meta = extract_metadata(make_png(), "scan.png")
    assert meta.exif_data == {}
    assert meta.format == "PNG"


def test_non_image_is_rejected():
    with pytest.raises(InvalidInput):
        extract_metadata(b"%PDF-1.4 not an image", "statement.pdf")
    with pytest.raises(InvalidInput):
        extract_metadata(b"", "empty.jpg")

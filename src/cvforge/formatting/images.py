"""Photo inspection: magic-byte MIME sniffing and embeddable references."""

from __future__ import annotations

import base64
from dataclasses import dataclass

# Photo size in document output, in centimetres.
PHOTO_WIDTH_CM = 4.0
PHOTO_HEIGHT_CM = 5.0

_JPEG_MAGIC = b"\xff\xd8\xff"
_PNG_MAGIC = b"\x89PNG"
DEFAULT_MIME_TYPE = "image/png"


@dataclass(frozen=True)
class ImageDescriptor:
    """What a document template needs to embed a photo."""

    data: bytes
    width_cm: float
    height_cm: float


def detect_mime_type(data: bytes) -> str:
    """Classify *data* by its first bytes. Unknown or short input → PNG."""
    if len(data) < 4:
        return DEFAULT_MIME_TYPE
    if data[:3] == _JPEG_MAGIC:
        return "image/jpeg"
    if data[:4] == _PNG_MAGIC:
        return "image/png"
    return DEFAULT_MIME_TYPE


def to_data_url(data: bytes) -> str:
    """Return a ``data:`` URL so templates can embed the photo without file access."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{detect_mime_type(data)};base64,{encoded}"


def image_descriptor(
    data: bytes,
    *,
    width_cm: float = PHOTO_WIDTH_CM,
    height_cm: float = PHOTO_HEIGHT_CM,
) -> ImageDescriptor:
    return ImageDescriptor(
        data=data,
        width_cm=width_cm,
        height_cm=height_cm,
    )

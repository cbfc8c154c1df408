"""
Helpers for the encoded-image representation used throughout the app.

Both the user's original photo and the generated headshot are kept as
``data:<mime>;base64,<payload>`` strings so the view can render either one
without caring where it came from.
"""

from __future__ import annotations

import base64
import binascii
import io
from typing import Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:  # avoid importing Pillow at module import time
    from PIL import Image

DEFAULT_MIME_TYPE = "image/png"

_FORMAT_TO_MIME = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "WEBP": "image/webp",
    "GIF": "image/gif",
    "BMP": "image/bmp",
    "TIFF": "image/tiff",
}

_EXT_TO_MIME = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
}


def mime_type_for_suffix(suffix: str) -> Optional[str]:
    return _EXT_TO_MIME.get(suffix.lower())


def sniff_mime_type(data: bytes) -> Optional[str]:
    """Return the MIME type Pillow recognizes for ``data``, or None."""
    from PIL import Image, UnidentifiedImageError

    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
    except (UnidentifiedImageError, OSError):
        return None
    return _FORMAT_TO_MIME.get(fmt or "")


def to_data_uri(data: bytes, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    payload = base64.b64encode(data).decode("ascii")
    return wrap_base64(payload, mime_type)


def wrap_base64(payload: str, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    return f"data:{mime_type};base64,{payload}"


def split_data_uri(encoded: str) -> Tuple[Optional[str], str]:
    """
    Split an encoded image into (mime_type, base64 payload).

    A bare base64 string (no ``data:`` prefix) is accepted and returns
    mime_type None.
    """
    if encoded.startswith("data:") and "," in encoded:
        header, payload = encoded.split(",", 1)
        mime = header[len("data:"):].split(";", 1)[0] or None
        return mime, payload
    return None, encoded


def decode_data_uri(encoded: str) -> bytes:
    """Return the raw image bytes behind an encoded image."""
    _mime, payload = split_data_uri(encoded)
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Not a valid base64 image payload: {e}") from e


def open_image(encoded: str) -> "Image.Image":
    """Decode an encoded image into an RGB PIL image for display."""
    from PIL import Image, ImageOps

    img = Image.open(io.BytesIO(decode_data_uri(encoded)))
    img = ImageOps.exif_transpose(img)
    if img.mode != "RGB":
        img = img.convert("RGB")
    return img

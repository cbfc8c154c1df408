from __future__ import annotations

import io
from pathlib import Path
from typing import Union

from PIL import Image

from prophoto.config import EXPORT_FILENAME
from prophoto.core.encoding import decode_data_uri, split_data_uri


def export_image(encoded_image: str, destination: Union[str, Path]) -> Path:
    """
    Save an encoded image as a PNG file.

    If ``destination`` is an existing directory the file is named
    professional-resume-photo.png inside it. PNG payloads are written as-is;
    anything else is re-encoded to PNG with Pillow.
    """
    dest = Path(destination)
    if dest.is_dir():
        dest = dest / EXPORT_FILENAME

    mime, _payload = split_data_uri(encoded_image)
    data = decode_data_uri(encoded_image)
    if mime not in (None, "image/png"):
        with Image.open(io.BytesIO(data)) as img:
            buf = io.BytesIO()
            img.save(buf, format="PNG")
            data = buf.getvalue()

    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_bytes(data)
    return dest

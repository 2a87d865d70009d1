from __future__ import annotations

import base64
import binascii
import io
import re

from PIL import Image, UnidentifiedImageError

from ..core.constants import MAX_SELFIE_BYTES
from ..core.exceptions import ValidationError

_DATA_URL = re.compile(r"^data:(image/[\w.+-]+);base64,(.+)$", re.DOTALL)


def validate_selfie(data_url: str) -> str:
    """Check that data_url is a base64 image data URL Pillow can read.

    Returns the data URL unchanged; it is stored as-is.
    """

    if not data_url or not data_url.strip():
        raise ValidationError("No selfie was taken.")

    match = _DATA_URL.match(data_url.strip())
    if not match:
        raise ValidationError("Selfie must be an image data URL")

    try:
        raw = base64.b64decode(match.group(2), validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Selfie is not valid base64")

    if len(raw) > MAX_SELFIE_BYTES:
        raise ValidationError("Selfie image is too large")

    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError):
        raise ValidationError("Selfie is not a readable image")

    return data_url.strip()

import base64
import binascii
import io
from typing import Tuple

from PIL import Image, UnidentifiedImageError


# 1x1 white PNG returned whenever an image provider fails.
PLACEHOLDER_IMAGE = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)

MIME_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpeg",
    "image/jpg": "jpeg",
    "image/webp": "webp",
    "image/gif": "gif",
}


def encode_data_uri(data: bytes, mime: str) -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    """
    Split a base64 data URI into its MIME type and raw bytes.

    Raises ValueError for anything that is not a base64 data URI.
    """
    if not isinstance(uri, str) or not uri.startswith("data:"):
        raise ValueError("Not a data URI.")
    try:
        header, payload = uri.split(",", 1)
    except ValueError:
        raise ValueError("Data URI has no payload.") from None

    meta = header[len("data:"):].split(";")
    if "base64" not in meta[1:]:
        raise ValueError("Only base64 data URIs are supported.")
    mime = meta[0] or "application/octet-stream"

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"Invalid base64 payload: {exc}") from exc
    return mime, data


def extension_for(mime: str) -> str:
    return MIME_EXTENSIONS.get(mime.lower(), "img")


def to_image_data_uri(data: bytes) -> str:
    """
    Check that `data` is a decodable image and wrap it as a data URI.

    The MIME type comes from the detected format rather than from whatever
    the provider claimed. Raises ValueError when Pillow cannot read it.
    """
    if not data:
        raise ValueError("Empty image payload.")
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise ValueError(f"Unreadable image payload: {exc}") from exc

    mime = Image.MIME.get(fmt or "", "image/png")
    return encode_data_uri(data, mime)

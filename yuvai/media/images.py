"""Image upload validation and data URL conversion.

Images travel through the app as self-contained ``data:`` URLs, both for
user uploads and for generated pictures.
"""

import base64
import binascii
import re

# Constants
MAX_IMAGE_SIZE = 10 * 1024 * 1024  # 10MB
DEFAULT_MIME_TYPE = "image/png"

_DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)


class ImageParseError(Exception):
    """Raised when an image cannot be validated or decoded."""

    pass


def sniff_mime_type(data: bytes) -> str | None:
    """Detect the image type from its leading bytes.

    Returns:
        The MIME type, or None if the signature is not a supported image.
    """
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if data.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if data[:6] in (b"GIF87a", b"GIF89a"):
        return "image/gif"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return None


def _validate_image_bytes(data: bytes) -> str:
    """Validate raw image bytes before encoding.

    Args:
        data: Raw bytes of the uploaded image.

    Returns:
        The sniffed MIME type.

    Raises:
        ImageParseError: If validation fails.
    """
    if not data:
        raise ImageParseError("Empty file provided")

    if len(data) > MAX_IMAGE_SIZE:
        size_mb = len(data) / (1024 * 1024)
        raise ImageParseError(f"Image size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)")

    mime_type = sniff_mime_type(data)
    if mime_type is None:
        raise ImageParseError("Invalid image: only PNG, JPEG, GIF and WEBP pictures are supported")
    return mime_type


def image_to_data_url(data: bytes, mime_type: str | None = None) -> str:
    """Encode image bytes as a base64 data URL.

    Args:
        data: Raw image bytes.
        mime_type: Declared MIME type. The sniffed type wins when the
            declared one is missing or not an image type.

    Returns:
        A ``data:<mime>;base64,<payload>`` string.

    Raises:
        ImageParseError: If the bytes are empty, too large, or not an image.
    """
    sniffed = _validate_image_bytes(data)
    if not mime_type or not mime_type.startswith("image/"):
        mime_type = sniffed
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def parse_data_url(url: str) -> tuple[bytes, str]:
    """Decode a base64 data URL.

    Args:
        url: A ``data:`` URL as produced by :func:`image_to_data_url`.

    Returns:
        Tuple of the raw bytes and their MIME type.

    Raises:
        ImageParseError: If the URL is malformed or the payload is not base64.
    """
    match = _DATA_URL_PATTERN.match(url or "")
    if match is None:
        raise ImageParseError("Invalid image reference: expected a base64 data URL")

    try:
        data = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageParseError(f"Corrupt image data: {e}") from e

    if not data:
        raise ImageParseError("Invalid image reference: empty payload")

    return data, match.group("mime")

"""Image handling for uploads and generated pictures.

Responsibilities:
    - Upload validation (size limit, image signature)
    - Conversion of raw bytes to embeddable base64 data URLs
    - Decoding data URLs back to bytes for model requests
"""

from yuvai.media.images import (
    MAX_IMAGE_SIZE,
    ImageParseError,
    image_to_data_url,
    parse_data_url,
    sniff_mime_type,
)

__all__ = [
    "MAX_IMAGE_SIZE",
    "ImageParseError",
    "image_to_data_url",
    "parse_data_url",
    "sniff_mime_type",
]

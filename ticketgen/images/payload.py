import base64
import binascii
import logging
import re
import struct
from typing import Optional, Tuple

from ticketgen.models import QuestionImage

logger = logging.getLogger(__name__)

DATA_URI_PREFIX = "data:"
DEFAULT_CONTENT_TYPE = "image/png"

# data:<mime>;base64
DATA_URI_META_PATTERN = re.compile(r'^data:(.*);base64$', re.IGNORECASE | re.DOTALL)

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'
GIF_SIGNATURES = (b'GIF87a', b'GIF89a')
BMP_SIGNATURE = b'BM'
JPEG_SOI = b'\xff\xd8'

# Start-of-frame markers; C4 (DHT), C8 (JPG) and CC (DAC) are excluded
JPEG_SOF_MARKERS = frozenset(
    list(range(0xC0, 0xC4)) + list(range(0xC5, 0xC8)) +
    list(range(0xC9, 0xCC)) + list(range(0xCD, 0xD0))
)
JPEG_EOI = 0xD9
JPEG_SOS = 0xDA

Dimensions = Tuple[Optional[int], Optional[int]]
UNKNOWN_DIMENSIONS: Dimensions = (None, None)


def decode_data_uri(reference: Optional[str]) -> Optional[Tuple[str, bytes]]:
    """Decode an embedded ``data:<mime>;base64,<payload>`` image reference.

    Args:
        reference: Value of an image ``src`` attribute

    Returns:
        Tuple of (content type, raw bytes), or None if the reference is not an
        embedded payload. External references are never fetched.
    """
    if not reference or not reference.startswith(DATA_URI_PREFIX):
        return None

    meta, sep, payload = reference.partition(",")
    if not sep or not payload.strip():
        return None

    match = DATA_URI_META_PATTERN.match(meta)
    if match and match.group(1).strip():
        content_type = match.group(1).strip()
    elif match:
        content_type = DEFAULT_CONTENT_TYPE
    else:
        # Not base64 encoded
        return None

    try:
        data = base64.b64decode("".join(payload.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        logger.debug(f"Skipping undecodable image payload: {e}")
        return None

    if not data:
        return None

    return content_type, data


def _png_dimensions(data: bytes) -> Dimensions:
    if len(data) < 24 or not data.startswith(PNG_SIGNATURE):
        return UNKNOWN_DIMENSIONS
    width, height = struct.unpack('>II', data[16:24])
    return width, height


def _gif_dimensions(data: bytes) -> Dimensions:
    if len(data) < 10 or data[:6] not in GIF_SIGNATURES:
        return UNKNOWN_DIMENSIONS
    width, height = struct.unpack('<HH', data[6:10])
    return width, height


def _bmp_dimensions(data: bytes) -> Dimensions:
    if len(data) < 26 or not data.startswith(BMP_SIGNATURE):
        return UNKNOWN_DIMENSIONS
    width, height = struct.unpack('<ii', data[18:26])
    # Top-down bitmaps store a negative height
    return width, abs(height)


def _jpeg_dimensions(data: bytes) -> Dimensions:
    if not data.startswith(JPEG_SOI):
        return UNKNOWN_DIMENSIONS

    size = len(data)
    pos = 2
    while pos < size:
        if data[pos] != 0xFF:
            break
        # Fill bytes
        while pos < size and data[pos] == 0xFF:
            pos += 1
        if pos >= size:
            break
        marker = data[pos]
        pos += 1

        if marker in (JPEG_EOI, JPEG_SOS):
            break
        # TEM and RSTn have no length field
        if marker == 0x01 or 0xD0 <= marker <= 0xD7:
            continue

        if pos + 2 > size:
            break
        (length,) = struct.unpack('>H', data[pos:pos + 2])
        if length < 2:
            break

        if marker in JPEG_SOF_MARKERS:
            # length(2) precision(1) height(2) width(2)
            if pos + 7 > size:
                break
            height, width = struct.unpack('>HH', data[pos + 3:pos + 7])
            if width > 0 and height > 0:
                return width, height

        pos += length

    return UNKNOWN_DIMENSIONS


_PROBES = (_png_dimensions, _gif_dimensions, _bmp_dimensions, _jpeg_dimensions)


def probe_dimensions(data: bytes) -> Dimensions:
    """Read intrinsic pixel dimensions from a PNG, GIF, BMP or JPEG header.

    The format is detected from the file signature, not the declared MIME
    type. Nothing is decoded beyond the container header.

    Returns:
        Tuple of (width, height), or (None, None) if the format is not
        recognized or the header reports a zero dimension
    """
    for probe in _PROBES:
        width, height = probe(data)
        if width is None:
            continue
        if width > 0 and height > 0:
            return width, height
        return UNKNOWN_DIMENSIONS
    return UNKNOWN_DIMENSIONS


def decode_image(reference: Optional[str]) -> Optional[QuestionImage]:
    """Turn an image reference into a QuestionImage with intrinsic dimensions.

    Returns None for references that are not embedded payloads.
    """
    decoded = decode_data_uri(reference)
    if decoded is None:
        return None

    content_type, data = decoded
    width, height = probe_dimensions(data)
    if width is None:
        logger.debug(f"Could not read dimensions of {content_type} image ({len(data)} bytes)")

    return QuestionImage(content_type=content_type, data=data, width=width, height=height)

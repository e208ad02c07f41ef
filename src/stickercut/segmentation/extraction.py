"""
Cropping and background removal for individual stickers.

Both automatic sheet segmentation and manual rectangle selection go
through extract_segment.
"""

from __future__ import annotations

import base64
import io
import uuid
from dataclasses import dataclass
from typing import Optional

from PIL import Image

from ..image.loader import PixelBuffer
from ..logging import get_logger
from .classifier import background_mask
from .geometry import Rect

logger = get_logger(__name__)

PNG_DATA_URL_PREFIX = "data:image/png;base64,"

# The far edge of the padded box is exclusive, so padding must be at least
# 1 to keep the last row and column of ink.
MIN_PADDING = 1


@dataclass(frozen=True)
class Segment:
    """One extracted sticker with a transparent background."""

    id: str
    data_url: str       # PNG payload as a base64 data URL
    x: int              # Origin of the crop in the source sheet
    y: int
    width: int
    height: int
    name: str           # Default name assigned at extraction

    def png_bytes(self) -> bytes:
        return decode_png_payload(self.data_url)


def decode_png_payload(payload: str) -> bytes:
    """
    Decode a base64 PNG payload, with or without a ``data:...;base64,`` prefix.

    Raises:
        ValueError: If a data URL has no comma or the base64 is malformed
    """
    if payload.startswith("data:"):
        header, sep, payload = payload.partition(",")
        if not sep:
            raise ValueError(f"Malformed data URL header: {header[:40]!r}")
    return base64.b64decode(payload, validate=True)


def encode_png_data_url(image: Image.Image) -> str:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return PNG_DATA_URL_PREFIX + base64.b64encode(buf.getvalue()).decode("ascii")


def clamp_padded_rect(rect: Rect, width: int, height: int, padding: int):
    """
    Pad a rect on every side and clamp it to the image.

    Returns:
        (x, y, w, h) of the clamped box; w or h may be <= 0
    """
    x0 = max(0, rect.min_x - padding)
    y0 = max(0, rect.min_y - padding)
    x1 = min(width, rect.max_x + padding)
    y1 = min(height, rect.max_y + padding)
    return x0, y0, x1 - x0, y1 - y0


def extract_segment(
    buffer: PixelBuffer,
    rect: Rect,
    default_name: str = "sticker",
    padding: int = 5,
) -> Optional[Segment]:
    """
    Crop ``rect`` out of the sheet and make its background transparent.

    Background is re-evaluated on the cropped pixels, so any near-white or
    near-transparent pixel inside the crop ends up with alpha 0.

    Returns:
        The new Segment, or None if the clamped box is empty

    Raises:
        ValueError: If padding is below MIN_PADDING
    """
    if padding < MIN_PADDING:
        raise ValueError(f"padding must be at least {MIN_PADDING}, got {padding}")

    x, y, w, h = clamp_padded_rect(rect, buffer.width, buffer.height, padding)
    if w <= 0 or h <= 0:
        logger.debug(f"Nothing to extract for {rect}: clamped size {w}x{h}")
        return None

    crop = buffer.pixels[y:y + h, x:x + w].copy()
    crop[background_mask(crop), 3] = 0

    segment = Segment(
        id=str(uuid.uuid4()),
        data_url=encode_png_data_url(Image.fromarray(crop)),
        x=x,
        y=y,
        width=w,
        height=h,
        name=default_name,
    )
    logger.debug(f"Extracted {segment.name} at ({x}, {y}) size {w}x{h}")
    return segment

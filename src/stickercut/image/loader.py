from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..logging import get_logger

logger = get_logger(__name__)


class ImageLoadError(Exception):
    """Raised when an image file cannot be opened or decoded."""


@dataclass(frozen=True)
class PixelBuffer:
    """Decoded RGBA raster, stored as an (height, width, 4) uint8 array."""

    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self) -> None:
        expected = (self.height, self.width, 4)
        if self.pixels.shape != expected:
            raise ValueError(
                f"Pixel array shape {self.pixels.shape} does not match {expected}"
            )
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Pixel array must be uint8, got {self.pixels.dtype}")

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> PixelBuffer:
        """Wrap an existing (H, W, 4) uint8 array without copying it."""
        height, width = pixels.shape[:2]
        return cls(width=width, height=height, pixels=pixels)

    @classmethod
    def from_image(cls, image: Image.Image) -> PixelBuffer:
        """Convert a Pillow image of any mode to an RGBA buffer."""
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        pixels = np.array(image, dtype=np.uint8)
        return cls.from_array(pixels)

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels)


def load_image(path: Path | str) -> PixelBuffer:
    """
    Open an image file and decode it to an RGBA pixel buffer.

    Raises:
        ImageLoadError: If the file is missing or is not a decodable image
    """
    path = Path(path)
    if not path.exists():
        raise ImageLoadError(f"Image file does not exist: {path}")

    try:
        with Image.open(path) as img:
            img.load()
            buffer = PixelBuffer.from_image(img)
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageLoadError(f"Failed to decode image: {path}") from exc

    logger.debug(f"Loaded {path} as {buffer.width}x{buffer.height} RGBA")
    return buffer

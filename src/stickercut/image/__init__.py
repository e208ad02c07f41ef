"""Image decoding into RGBA pixel buffers."""

from .loader import ImageLoadError, PixelBuffer, load_image

__all__ = [
    "ImageLoadError",
    "PixelBuffer",
    "load_image",
]

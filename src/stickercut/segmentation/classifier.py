"""Background/foreground pixel classification."""

import numpy as np

# Alpha below this is treated as transparent regardless of color.
ALPHA_CUTOFF = 20

# Channels strictly above this on all of R, G and B count as white paper.
WHITE_CUTOFF = 240


def is_background(r: int, g: int, b: int, a: int) -> bool:
    """Return True for near-transparent or near-white pixels."""
    if a < ALPHA_CUTOFF:
        return True
    return r > WHITE_CUTOFF and g > WHITE_CUTOFF and b > WHITE_CUTOFF


def background_mask(pixels: np.ndarray) -> np.ndarray:
    """
    Vectorised form of is_background over an (H, W, 4) RGBA array.

    Returns:
        Boolean array of shape (H, W), True where the pixel is background
    """
    r = pixels[..., 0]
    g = pixels[..., 1]
    b = pixels[..., 2]
    a = pixels[..., 3]
    white = (r > WHITE_CUTOFF) & (g > WHITE_CUTOFF) & (b > WHITE_CUTOFF)
    return (a < ALPHA_CUTOFF) | white

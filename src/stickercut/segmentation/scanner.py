"""
Connected-component scanning over a sticker sheet.

Foreground pixels are grouped with an iterative 4-connected flood fill and
each surviving group is reduced to its bounding box.
"""

from typing import List

import numpy as np

from ..image.loader import PixelBuffer
from ..logging import get_logger
from .classifier import background_mask
from .geometry import Rect

logger = get_logger(__name__)


def scan_components(
    buffer: PixelBuffer,
    min_pixel_count: int = 50,
    min_extent: int = 5,
) -> List[Rect]:
    """
    Find the bounding boxes of all foreground components in a sheet.

    A component survives only if it has more than ``min_pixel_count`` pixels
    and its max-min delta exceeds ``min_extent`` on both axes. The delta is
    one less than the true pixel extent.

    Args:
        buffer: Decoded sheet
        min_pixel_count: Components with this many pixels or fewer are noise
        min_extent: Minimum max-min delta on each axis

    Returns:
        Raw rects in the raster order of their seed pixel
    """
    width, height = buffer.width, buffer.height
    foreground = ~background_mask(buffer.pixels)
    flat = foreground.ravel()

    # Byte-indexed views keep the inner loop on plain Python ints.
    is_fg = flat.tobytes()
    visited = bytearray(width * height)

    rects: List[Rect] = []
    components = 0

    for seed in np.flatnonzero(flat).tolist():
        if visited[seed]:
            continue

        components += 1
        seed_y, seed_x = divmod(seed, width)
        min_x = max_x = seed_x
        min_y = max_y = seed_y
        count = 0

        visited[seed] = 1
        stack = [seed]

        while stack:
            idx = stack.pop()
            cy, cx = divmod(idx, width)
            if cx < min_x:
                min_x = cx
            elif cx > max_x:
                max_x = cx
            if cy < min_y:
                min_y = cy
            elif cy > max_y:
                max_y = cy
            count += 1

            if cx + 1 < width:
                n = idx + 1
                if is_fg[n] and not visited[n]:
                    visited[n] = 1
                    stack.append(n)
            if cx > 0:
                n = idx - 1
                if is_fg[n] and not visited[n]:
                    visited[n] = 1
                    stack.append(n)
            if cy + 1 < height:
                n = idx + width
                if is_fg[n] and not visited[n]:
                    visited[n] = 1
                    stack.append(n)
            if cy > 0:
                n = idx - width
                if is_fg[n] and not visited[n]:
                    visited[n] = 1
                    stack.append(n)

        if count > min_pixel_count and (max_x - min_x) > min_extent and (max_y - min_y) > min_extent:
            rects.append(Rect(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y))
        else:
            logger.debug(
                f"Discarded component at ({seed_x}, {seed_y}): "
                f"{count} px, {max_x - min_x}x{max_y - min_y} delta"
            )

    logger.debug(f"Scanned {components} components, kept {len(rects)}")
    return rects

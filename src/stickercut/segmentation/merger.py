"""Coalescing of nearby component boxes into whole stickers."""

from typing import List, Sequence, Set

from ..logging import get_logger
from .geometry import Rect

logger = get_logger(__name__)


def is_merge_eligible(a: Rect, b: Rect, distance_threshold: int) -> bool:
    """True when the separating gap is below the threshold on both axes."""
    x_gap, y_gap = a.axis_gaps(b)
    return x_gap < distance_threshold and y_gap < distance_threshold


def _merge_pass(rects: Sequence[Rect], distance_threshold: int) -> List[Rect]:
    merged: List[Rect] = []
    consumed: Set[int] = set()

    for i, rect in enumerate(rects):
        if i in consumed:
            continue
        consumed.add(i)

        current = rect
        for j in range(i + 1, len(rects)):
            if j in consumed:
                continue
            other = rects[j]
            if is_merge_eligible(current, other, distance_threshold):
                current = current.union(other)
                consumed.add(j)

        merged.append(current)

    return merged


def merge_rects(rects: Sequence[Rect], distance_threshold: int = 15) -> List[Rect]:
    """
    Merge rects whose axis gaps are both below ``distance_threshold``.

    Passes repeat until one pass merges nothing, since a union built late in
    a pass can bring earlier rects into range.
    """
    current = tuple(rects)
    passes = 0

    while True:
        passes += 1
        merged = _merge_pass(current, distance_threshold)
        if len(merged) == len(current):
            break
        current = tuple(merged)

    logger.debug(f"Merged {len(rects)} rects into {len(merged)} after {passes} passes")
    return merged

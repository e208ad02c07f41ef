from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Rect:
    """Axis-aligned box in image pixels. Both min and max bounds are inclusive."""

    min_x: int
    max_x: int
    min_y: int
    max_y: int

    @classmethod
    def from_corners(cls, x0: int, y0: int, x1: int, y1: int) -> Rect:
        """Build a rect from two opposite corners given in any order."""
        return cls(
            min_x=min(x0, x1),
            max_x=max(x0, x1),
            min_y=min(y0, y1),
            max_y=max(y0, y1),
        )

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    def axis_gaps(self, other: Rect) -> Tuple[int, int]:
        """
        Separating gap between two rects on each axis.

        A gap is 0 when the rects overlap or touch on that axis.
        """
        x_gap = max(0, self.min_x - other.max_x, other.min_x - self.max_x)
        y_gap = max(0, self.min_y - other.max_y, other.min_y - self.max_y)
        return x_gap, y_gap

    def union(self, other: Rect) -> Rect:
        return Rect(
            min_x=min(self.min_x, other.min_x),
            max_x=max(self.max_x, other.max_x),
            min_y=min(self.min_y, other.min_y),
            max_y=max(self.max_y, other.max_y),
        )

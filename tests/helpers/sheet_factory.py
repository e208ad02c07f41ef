"""Helper functions for building synthetic sticker sheets."""

from pathlib import Path
from typing import Iterable, Tuple

from PIL import Image, ImageDraw

from stickercut.image.loader import PixelBuffer

# (x0, y0, x1, y1), inclusive corners as accepted by ImageDraw.rectangle
Box = Tuple[int, int, int, int]


def make_sheet_image(
    size: Tuple[int, int] = (200, 200),
    boxes: Iterable[Box] = (),
    background: Tuple[int, int, int, int] = (255, 255, 255, 255),
    fill: Tuple[int, int, int, int] = (0, 0, 0, 255),
) -> Image.Image:
    """Draw solid boxes on a plain RGBA canvas."""
    img = Image.new('RGBA', size, color=background)
    draw = ImageDraw.Draw(img)
    for box in boxes:
        draw.rectangle(box, fill=fill)
    return img


def make_sheet(
    size: Tuple[int, int] = (200, 200),
    boxes: Iterable[Box] = (),
    background: Tuple[int, int, int, int] = (255, 255, 255, 255),
    fill: Tuple[int, int, int, int] = (0, 0, 0, 255),
) -> PixelBuffer:
    return PixelBuffer.from_image(make_sheet_image(size, boxes, background, fill))


def save_sheet(tmp_path: Path, size=(200, 200), boxes=(), name: str = "sheet.png") -> Path:
    """Write a synthetic sheet to disk as PNG and return its path."""
    path = tmp_path / name
    make_sheet_image(size, boxes).save(path, format='PNG')
    return path

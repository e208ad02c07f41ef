"""Full-sheet segmentation: scan, merge, extract."""

from typing import Callable, List, Optional

from ..config import Settings
from ..image.loader import PixelBuffer
from ..logging import get_logger
from .extraction import Segment, extract_segment
from .merger import merge_rects
from .scanner import scan_components

logger = get_logger(__name__)

ProgressCallback = Callable[[str], None]


def process_sticker_sheet(
    buffer: PixelBuffer,
    on_progress: Optional[ProgressCallback] = None,
    settings: Optional[Settings] = None,
) -> List[Segment]:
    """
    Split a sticker sheet into background-stripped segments.

    Segments are named ``sticker_1``, ``sticker_2``, ... in merge order. An
    empty list means nothing on the sheet stood out from the background.
    """
    if settings is None:
        settings = Settings()

    def report(message: str) -> None:
        logger.info(message)
        if on_progress is not None:
            on_progress(message)

    report("Scanning image for content...")
    raw_rects = scan_components(
        buffer,
        min_pixel_count=settings.min_pixel_count,
        min_extent=settings.min_extent,
    )

    report(f"Detected {len(raw_rects)} components. Grouping...")
    merged_rects = merge_rects(raw_rects, settings.merge_threshold)

    report(f"Identified {len(merged_rects)} stickers. Extracting...")
    segments: List[Segment] = []
    for i, rect in enumerate(merged_rects):
        segment = extract_segment(
            buffer, rect, default_name=f"sticker_{i + 1}", padding=settings.padding
        )
        if segment is not None:
            segments.append(segment)

    return segments

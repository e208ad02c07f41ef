"""
Sticker segmentation engine.

Finds foreground components on a white or transparent sheet, merges
fragments that belong to one sticker and crops each sticker out with its
background made transparent.
"""

from .classifier import background_mask, is_background
from .extraction import Segment, extract_segment
from .geometry import Rect
from .merger import merge_rects
from .pipeline import process_sticker_sheet
from .scanner import scan_components

__all__ = [
    'Rect',
    'Segment',
    'background_mask',
    'extract_segment',
    'is_background',
    'merge_rects',
    'process_sticker_sheet',
    'scan_components',
]

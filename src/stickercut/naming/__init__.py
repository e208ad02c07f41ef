"""AI naming of stickers and the session state it updates."""

from .gemini import FALLBACK_NAME, NamingError, generate_sticker_name, is_naming_available
from .session import (
    NamingCompleted,
    NamingStarted,
    Renamed,
    SegmentState,
    StickerSession,
)

__all__ = [
    "FALLBACK_NAME",
    "NamingCompleted",
    "NamingError",
    "NamingStarted",
    "Renamed",
    "SegmentState",
    "StickerSession",
    "generate_sticker_name",
    "is_naming_available",
]

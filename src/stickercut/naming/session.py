"""
Per-session ownership of extracted stickers and their display state.

Segments returned by the engine are frozen values. The mutable part, the
display name and whether a naming request is in flight, lives in
SegmentState records keyed by segment id. Naming workers and user renames
never touch those records directly: they post events onto a queue which the
session applies in arrival order.
"""

from __future__ import annotations

import queue
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, replace
from functools import partial
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from ..config import Settings
from ..image.loader import PixelBuffer
from ..logging import get_logger
from ..segmentation.extraction import Segment, extract_segment
from ..segmentation.geometry import Rect
from ..segmentation.pipeline import ProgressCallback, process_sticker_sheet
from .gemini import FALLBACK_NAME, create_client, generate_sticker_name

logger = get_logger(__name__)

Namer = Callable[[str], str]


@dataclass
class SegmentState:
    name: str
    is_naming: bool = False


@dataclass(frozen=True)
class NamingStarted:
    segment_id: str


@dataclass(frozen=True)
class NamingCompleted:
    segment_id: str
    name: str


@dataclass(frozen=True)
class Renamed:
    segment_id: str
    name: str


SessionEvent = Union[NamingStarted, NamingCompleted, Renamed]


class StickerSession:
    """Holds one loaded sheet, its segments and their display state."""

    def __init__(self, settings: Optional[Settings] = None, namer: Optional[Namer] = None) -> None:
        self.settings = settings if settings is not None else Settings()
        if namer is None:
            # One client serves every naming request of the session.
            namer = partial(generate_sticker_name, model=self.settings.naming_model, client=create_client())
        self._namer = namer
        self._events: queue.Queue = queue.Queue()
        self._sheet: Optional[PixelBuffer] = None
        self._segments: List[Segment] = []
        self._states: Dict[str, SegmentState] = {}

    @property
    def sheet(self) -> Optional[PixelBuffer]:
        return self._sheet

    @property
    def segments(self) -> List[Segment]:
        return list(self._segments)

    def attach_sheet(self, buffer: PixelBuffer) -> None:
        """Start over on a new sheet without segmenting it."""
        self.reset()
        self._sheet = buffer

    def load_sheet(
        self,
        buffer: PixelBuffer,
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[Segment]:
        """Replace the session contents with the segments of a new sheet."""
        self.attach_sheet(buffer)
        segments = process_sticker_sheet(buffer, on_progress, self.settings)
        for segment in segments:
            self._add(segment)
        if not segments:
            logger.warning("No stickers detected. Check that the sheet has a white background.")
        return segments

    def add_manual_crop(self, rect: Rect) -> Optional[Segment]:
        """
        Extract a user-selected rectangle from the loaded sheet.

        Returns None when no sheet is loaded or the rect holds nothing.
        """
        if self._sheet is None:
            logger.warning("Manual crop requested before a sheet was loaded")
            return None

        segment = extract_segment(
            self._sheet,
            rect,
            default_name=f"sticker_{len(self._segments) + 1}",
            padding=self.settings.padding,
        )
        if segment is not None:
            self._add(segment)
        return segment

    def rename(self, segment_id: str, name: str) -> None:
        self.post(Renamed(segment_id, name))
        self.apply_pending_events()

    def post(self, event: SessionEvent) -> None:
        """Queue a state change. Safe to call from any thread."""
        self._events.put(event)

    def apply_pending_events(self) -> int:
        """Apply every queued event in order and return how many were applied."""
        applied = 0
        while True:
            try:
                event = self._events.get_nowait()
            except queue.Empty:
                return applied

            state = self._states.get(event.segment_id)
            if state is None:
                logger.debug(f"Dropping {type(event).__name__} for unknown segment {event.segment_id}")
                continue

            if isinstance(event, NamingStarted):
                state.is_naming = True
            elif isinstance(event, NamingCompleted):
                state.name = event.name
                state.is_naming = False
            elif isinstance(event, Renamed):
                state.name = event.name
            applied += 1

    def state(self, segment_id: str) -> SegmentState:
        """
        Snapshot of a segment's display state.

        Raises:
            KeyError: If the segment is not part of this session
        """
        self.apply_pending_events()
        return replace(self._states[segment_id])

    def named_segments(self) -> List[Tuple[Segment, str]]:
        """Segments paired with their current display names, in session order."""
        self.apply_pending_events()
        return [(segment, self._states[segment.id].name) for segment in self._segments]

    def run_naming(
        self,
        segments: Optional[Iterable[Segment]] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> None:
        """
        Name segments with the configured namer, a batch at a time.

        Requests within a batch run concurrently and may finish in any order.
        A failing request resolves to the fallback name without affecting the
        others.
        """
        items = list(segments) if segments is not None else list(self._segments)
        if not items:
            return

        for segment in items:
            self.post(NamingStarted(segment.id))
        self.apply_pending_events()

        batch_size = max(1, self.settings.naming_batch_size)
        completed = 0

        with ThreadPoolExecutor(max_workers=batch_size) as pool:
            for start in range(0, len(items), batch_size):
                batch = items[start:start + batch_size]
                futures = [pool.submit(self._name_one, segment) for segment in batch]
                for future in as_completed(futures):
                    future.result()
                    completed += 1
                    if len(items) > 1:
                        message = f"Naming {completed}/{len(items)}..."
                        logger.info(message)
                        if on_progress is not None:
                            on_progress(message)
                self.apply_pending_events()

    def reset(self) -> None:
        """Discard the sheet, all segments and any queued events."""
        self._sheet = None
        self._segments = []
        self._states = {}
        while True:
            try:
                self._events.get_nowait()
            except queue.Empty:
                break

    def _add(self, segment: Segment) -> None:
        self._segments.append(segment)
        self._states[segment.id] = SegmentState(name=segment.name)

    def _name_one(self, segment: Segment) -> None:
        try:
            name = self._namer(segment.data_url)
        except Exception as exc:
            logger.error(f"Naming failed for {segment.name}: {exc}")
            name = FALLBACK_NAME
        self.post(NamingCompleted(segment.id, name))

"""
JSON manifest describing an export of stickers.

Lists every sticker with its file name and where it was cut from the sheet.
"""

import json
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

from ..segmentation.extraction import Segment
from ..logging import get_logger

logger = get_logger(__name__)

MANIFEST_VERSION = "1.0.0"


@dataclass(frozen=True)
class ManifestItem:
    """Single sticker in the manifest."""
    segment_id: str                 # Segment uuid
    name: str                       # Display name at export time
    file_name: str                  # Output file name
    origin: Dict[str, int]          # Crop origin in the source sheet
    dimensions: Dict[str, int]      # Crop width and height

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Manifest:
    """Complete manifest for one processed sheet."""
    version: str
    source_image: str
    extraction_timestamp: str
    total_items: int
    items: List[ManifestItem]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "source_image": self.source_image,
            "extraction_timestamp": self.extraction_timestamp,
            "total_items": self.total_items,
            "items": [item.to_dict() for item in self.items],
        }


def build_manifest(
    source_image: Path,
    named_segments: Sequence[Tuple[Segment, str]],
    file_paths: Sequence[Path],
) -> Manifest:
    """
    Build a manifest from exported stickers.

    Args:
        source_image: Path of the processed sheet
        named_segments: Segments paired with their display names
        file_paths: Written file for each segment, in the same order
    """
    items = []
    for (segment, name), path in zip(named_segments, file_paths):
        items.append(ManifestItem(
            segment_id=segment.id,
            name=name,
            file_name=path.name,
            origin={"x": segment.x, "y": segment.y},
            dimensions={"width": segment.width, "height": segment.height},
        ))

    manifest = Manifest(
        version=MANIFEST_VERSION,
        source_image=str(source_image),
        extraction_timestamp=datetime.now().isoformat(),
        total_items=len(items),
        items=items,
    )
    logger.info(f"Built manifest with {len(items)} items")
    return manifest


def write_manifest_json(manifest: Manifest, output_dir: Path) -> Path:
    """
    Write manifest to ``manifest.json`` in the output directory.

    Returns:
        Path to the written manifest file
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    manifest_path = output_dir / "manifest.json"

    try:
        with open(manifest_path, 'w', encoding='utf-8') as f:
            json.dump(manifest.to_dict(), f, indent=2, ensure_ascii=False)
    except OSError as exc:
        logger.error(f"Failed to write manifest to {manifest_path}: {exc}")
        raise

    logger.info(f"Wrote manifest to {manifest_path}")
    return manifest_path

"""Writing named stickers to PNG files and zip archives."""

import io
import zipfile
from pathlib import Path
from typing import List, Sequence, Tuple

from ..logging import get_logger
from ..segmentation.extraction import decode_png_payload

logger = get_logger(__name__)

# (display name, base64 PNG payload with or without a data URL prefix)
NamedPayload = Tuple[str, str]


def unique_file_names(names: Sequence[str]) -> List[str]:
    """
    Make names unique by appending _1, _2, ... to later collisions.

    The first occurrence keeps its name unchanged.
    """
    used = set()
    result = []
    for name in names:
        stem = name.replace("/", "_").replace("\\", "_")
        file_name = stem
        counter = 1
        while file_name in used:
            file_name = f"{stem}_{counter}"
            counter += 1
        used.add(file_name)
        result.append(file_name)
    return result


def _planned_files(items: Sequence[NamedPayload]) -> List[Tuple[str, bytes]]:
    stems = unique_file_names([name for name, _ in items])
    return [(f"{stem}.png", decode_png_payload(payload)) for stem, (_, payload) in zip(stems, items)]


def build_archive(items: Sequence[NamedPayload]) -> bytes:
    """Pack named stickers into an in-memory zip with one PNG per sticker."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for file_name, data in _planned_files(items):
            zf.writestr(file_name, data)
    logger.debug(f"Built archive with {len(items)} stickers")
    return buf.getvalue()


def write_archive(items: Sequence[NamedPayload], archive_path: Path) -> Path:
    archive_path.parent.mkdir(parents=True, exist_ok=True)
    archive_path.write_bytes(build_archive(items))
    logger.info(f"Wrote {len(items)} stickers to {archive_path}")
    return archive_path


def write_png_files(items: Sequence[NamedPayload], output_dir: Path) -> List[Path]:
    """
    Save each sticker as ``<name>.png`` in output_dir.

    Returns:
        Written paths, in the order of ``items``
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for file_name, data in _planned_files(items):
        path = output_dir / file_name
        path.write_bytes(data)
        paths.append(path)
    logger.info(f"Saved {len(paths)} stickers to {output_dir}")
    return paths

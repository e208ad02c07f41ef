from pathlib import Path

import typer

from .config import Settings
from .image.loader import ImageLoadError, PixelBuffer, load_image
from .logging import get_logger
from .naming.gemini import is_naming_available
from .naming.session import StickerSession
from .output.archive import write_archive, write_png_files
from .output.manifest import build_manifest, write_manifest_json
from .segmentation.geometry import Rect

app = typer.Typer(help="stickercut - split sticker sheets into transparent stickers", no_args_is_help=True)


def _load_sheet(image_path: Path) -> PixelBuffer:
    logger = get_logger(__name__)
    try:
        logger.info(f"Loading image: {image_path}")
        buffer = load_image(image_path)
    except ImageLoadError as exc:
        logger.error(f"Failed to load image: {exc}")
        raise typer.Exit(code=1) from exc

    logger.info(f"Loaded {buffer.width}x{buffer.height} sheet")
    return buffer


def _name_segments(session: StickerSession, name: bool) -> None:
    logger = get_logger(__name__)
    if not name:
        return
    if not is_naming_available():
        logger.warning("GEMINI_API_KEY is not set, keeping default names")
        return
    logger.info("Asking Gemini for sticker names...")
    session.run_naming()


def _export(
    session: StickerSession,
    image_path: Path,
    out: Path,
    make_zip: bool,
    write_manifest: bool,
) -> None:
    logger = get_logger(__name__)
    named = session.named_segments()
    payloads = [(display_name, segment.data_url) for segment, display_name in named]

    try:
        paths = write_png_files(payloads, out)
        if make_zip:
            archive_path = write_archive(payloads, out / "stickers.zip")
            typer.echo(f"Archive: {archive_path}")
        if write_manifest:
            manifest = build_manifest(image_path, named, paths)
            write_manifest_json(manifest, out)
    except OSError as exc:
        logger.error(f"Failed to save stickers: {exc}")
        raise typer.Exit(code=1) from exc

    typer.echo(f"Saved {len(paths)} stickers to {out}")
    for path in paths:
        typer.echo(f"   {path.name}")


@app.command()
def split(
    image_path: Path = typer.Argument(..., exists=True, readable=True, help="Path to the sticker sheet image"),
    out: Path = typer.Option(Path("output"), "--out", "-o", help="Output directory for sticker PNGs"),
    threshold: int = typer.Option(15, "--threshold", "-t", min=0, help="Merge gap threshold in pixels"),
    padding: int = typer.Option(5, min=1, help="Padding around each sticker in pixels"),
    name: bool = typer.Option(True, "--name/--no-name", help="Name stickers with Gemini"),
    make_zip: bool = typer.Option(False, "--zip/--no-zip", help="Also write stickers.zip"),
    write_manifest: bool = typer.Option(True, "--manifest/--no-manifest", help="Write JSON manifest file"),
) -> None:
    """
    Detect every sticker on a sheet and save each one as a transparent PNG.
    """
    logger = get_logger(__name__)
    settings = Settings(output_dir=out, merge_threshold=threshold, padding=padding)
    session = StickerSession(settings)
    segments = session.load_sheet(_load_sheet(image_path))
    if not segments:
        typer.echo("No stickers detected. Please ensure the image has a white or transparent background.")
        return

    logger.info(f"Extracted {len(segments)} stickers")
    _name_segments(session, name)
    _export(session, image_path, out, make_zip, write_manifest)


@app.command()
def crop(
    image_path: Path = typer.Argument(..., exists=True, readable=True, help="Path to the sticker sheet image"),
    x0: int = typer.Argument(..., help="Left edge of the selection"),
    y0: int = typer.Argument(..., help="Top edge of the selection"),
    x1: int = typer.Argument(..., help="Right edge of the selection"),
    y1: int = typer.Argument(..., help="Bottom edge of the selection"),
    out: Path = typer.Option(Path("output"), "--out", "-o", help="Output directory for sticker PNGs"),
    padding: int = typer.Option(5, min=1, help="Padding around the selection in pixels"),
    name: bool = typer.Option(True, "--name/--no-name", help="Name the sticker with Gemini"),
    write_manifest: bool = typer.Option(True, "--manifest/--no-manifest", help="Write JSON manifest file"),
) -> None:
    """
    Cut a single sticker out of a hand-picked rectangle of the sheet.
    """
    settings = Settings(output_dir=out, padding=padding)
    session = StickerSession(settings)
    session.attach_sheet(_load_sheet(image_path))

    segment = session.add_manual_crop(Rect.from_corners(x0, y0, x1, y1))
    if segment is None:
        typer.echo("Selection is outside the image, nothing to extract.")
        return

    _name_segments(session, name)
    _export(session, image_path, out, make_zip=False, write_manifest=write_manifest)


def main() -> None:
    app()


if __name__ == "__main__":
    main()

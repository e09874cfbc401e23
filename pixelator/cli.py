"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from pixelator.config import PixelatorConfig
from pixelator.engine import pixelate_raster
from pixelator.errors import PixelatorError
from pixelator.image_io import (
    build_comparison,
    encode_image,
    encode_raster,
    load_raster,
    output_path_for,
    write_encoded,
)

app = typer.Typer(
    name="pixelator",
    help="Pixelate images by averaging square blocks of pixels.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()

logger = logging.getLogger("pixelator")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=True)],
    )


def _collect_images(
    folder: Path,
    extensions: frozenset[str],
    skip_prefix: str | None,
) -> list[Path]:
    """Image files in *folder*, minus earlier outputs named with *skip_prefix*."""
    return sorted(
        f for f in folder.iterdir()
        if f.is_file()
        and f.suffix.lower() in extensions
        and not (skip_prefix and f.name.startswith(skip_prefix))
    )


def _process_file(
    path: Path,
    scale: int,
    keep_dimensions: bool,
    force_crop: bool,
    center_crop: bool,
    overwrite: bool,
    compare: bool,
    cfg: PixelatorConfig,
) -> tuple[Path, tuple[int, ...], tuple[int, ...]]:
    """Load, pixelate and save one image; returns (output, in shape, out shape)."""
    raster = load_raster(path)
    result = pixelate_raster(
        raster, scale,
        keep_dimensions=keep_dimensions,
        force_crop=force_crop,
        center_crop=center_crop,
    )
    out_path = output_path_for(path, overwrite, cfg.output_prefix)
    data = encode_raster(result, out_path)

    # Encode everything first; the output (which may replace the input) is
    # written last and extra files are removed if it fails.
    written: list[Path] = []
    if compare:
        comp_path = path.with_name(f"{path.stem}_comparison.{cfg.output_format}")
        canvas = build_comparison(raster, result, cfg.comparison_height)
        write_encoded(encode_image(canvas, comp_path), comp_path)
        written.append(comp_path)
        logger.debug("Comparison written to %s", escape(str(comp_path)))

    try:
        write_encoded(data, out_path)
    except PixelatorError:
        for extra in written:
            extra.unlink(missing_ok=True)
        raise

    return out_path, raster.shape, result.shape


def _describe(
    out_path: Path,
    in_shape: tuple[int, ...],
    out_shape: tuple[int, ...],
    elapsed: float,
) -> str:
    return (
        f"  [green]✓[/green] {escape(out_path.name)}  "
        f"[dim]{in_shape[1]}x{in_shape[0]} -> {out_shape[1]}x{out_shape[0]}"
        f"  time={elapsed:.2f}s[/dim]"
    )


# Defaults come from PixelatorConfig - single source of truth
_DEFAULTS = PixelatorConfig()


@app.command()
def pixelate(
    path: Path = typer.Argument(..., help="Image file, or a folder of images"),
    scale: int = typer.Argument(
        ..., min=_DEFAULTS.min_scale, max=_DEFAULTS.max_scale,
        help="Side length of each square block",
    ),
    keep_dimensions: bool = typer.Option(
        _DEFAULTS.keep_dimensions, "--keep-dimensions", "-k",
        help="Keep the output the same size as the input",
    ),
    force_crop: bool = typer.Option(
        _DEFAULTS.force_crop, "--force-crop", "-f",
        help="Crop the image so it is divisible by the scale factor",
    ),
    center_crop: bool = typer.Option(
        _DEFAULTS.center_crop, "--centre", "-c",
        help="Centre the image if cropping is required",
    ),
    overwrite: bool = typer.Option(
        _DEFAULTS.overwrite, "--overwrite", "-o", help="Overwrite the input image",
    ),
    all_flags: bool = typer.Option(
        False, "--all", "-a", help="Shorthand for -k -f -c",
    ),
    compare: bool = typer.Option(
        False, "--compare", help="Also save an Original | Pixelated comparison",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Pixelate PATH by SCALE, writing pixelated_<name> beside each input."""
    _setup_logging(verbose)

    if all_flags:
        keep_dimensions = force_crop = center_crop = True

    if not path.exists():
        console.print(f"[red]error:[/red] could not open '{escape(str(path))}'")
        raise typer.Exit(1)

    options = dict(
        scale=scale,
        keep_dimensions=keep_dimensions,
        force_crop=force_crop,
        center_crop=center_crop,
        overwrite=overwrite,
        compare=compare,
        cfg=_DEFAULTS,
    )

    # -- single file ---------------------------------------------------
    if path.is_file():
        t0 = time.perf_counter()
        try:
            out_path, in_shape, out_shape = _process_file(path, **options)
        except PixelatorError as err:
            console.print(f"[red]error:[/red] {escape(str(err))}")
            raise typer.Exit(1) from err
        console.print(_describe(out_path, in_shape, out_shape, time.perf_counter() - t0))
        return

    # -- directory -----------------------------------------------------
    # With -o no prefixed outputs are produced, so prefixed names are user files
    skip_prefix = None if overwrite else _DEFAULTS.output_prefix
    images = _collect_images(path, _DEFAULTS.SUPPORTED_EXTENSIONS, skip_prefix)
    if not images:
        console.print(f"\n[yellow]No images found in {escape(str(path))}/[/yellow]\n")
        raise typer.Exit(0)

    console.print(Panel.fit(
        f"[bold]PIXELATOR[/bold]\n"
        f"Scale: {scale}  |  Images: {len(images)}\n"
        f"Keep dimensions: {keep_dimensions}  |  Force crop: {force_crop}"
        f"  |  Centre: {center_crop}",
        border_style="cyan",
    ))

    done = failed = 0
    for img_path in images:
        t0 = time.perf_counter()
        try:
            out_path, in_shape, out_shape = _process_file(img_path, **options)
        except PixelatorError as err:
            logger.error("%s: %s; skipping", escape(str(img_path)), escape(str(err)))
            failed += 1
            continue
        done += 1
        console.print(_describe(out_path, in_shape, out_shape, time.perf_counter() - t0))

    style = "green" if not failed else "yellow"
    console.print(Panel.fit(
        f"[bold {style}]DONE[/bold {style}] - {done} written, {failed} skipped",
        border_style=style,
    ))
    if failed and not done:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()

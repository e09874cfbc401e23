"""Image loading, saving, output naming and comparison images."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO

import numpy as np
from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from pixelator.errors import ImageReadError, ImageWriteError

logger = logging.getLogger(__name__)

# Modes whose pixel data maps straight onto an unsigned integer array
_NATIVE_MODES = frozenset({"L", "LA", "RGB", "RGBA", "I;16"})
_NO_ALPHA_SUFFIXES = frozenset({".jpg", ".jpeg", ".jfif", ".bmp"})


def _to_raster_mode(img: Image.Image) -> Image.Image:
    if img.mode in _NATIVE_MODES:
        return img
    if img.mode == "P":
        return img.convert("RGBA" if "transparency" in img.info else "RGB")
    return img.convert("RGB")


def load_raster(path: str | Path | BinaryIO) -> np.ndarray:
    """Decode an image file into an ``(H, W)`` or ``(H, W, C)`` array.

    Greyscale, RGB and alpha variants keep their channels; palette images
    are expanded to RGB(A) and anything else is converted to RGB.

    Raises:
        ImageReadError: the file is missing or cannot be decoded.
    """
    try:
        with Image.open(path) as img:
            arr = np.array(_to_raster_mode(img))
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as err:
        raise ImageReadError(path) from err
    logger.debug("Loaded %s: %s %s", path, arr.shape, arr.dtype)
    return arr


def encode_image(img: Image.Image, path: str | Path) -> bytes:
    """Encode *img* in memory in the format named by the suffix of *path*.

    Raises:
        ImageWriteError: unknown suffix, or the format rejects the image.
    """
    path = Path(path)
    fmt = Image.registered_extensions().get(path.suffix.lower())
    buf = io.BytesIO()
    try:
        img.save(buf, format=fmt)
    except (OSError, ValueError, KeyError) as err:
        raise ImageWriteError(path) from err
    return buf.getvalue()


def encode_raster(raster: np.ndarray, path: str | Path) -> bytes:
    """Encode *raster* for *path*; alpha is dropped for formats that cannot store it."""
    img = Image.fromarray(raster)
    if Path(path).suffix.lower() in _NO_ALPHA_SUFFIXES and img.mode in ("LA", "RGBA"):
        img = img.convert(img.mode[:-1])
    return encode_image(img, path)


def write_encoded(data: bytes, path: str | Path) -> None:
    """Write already-encoded image bytes, creating parent folders."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as err:
        raise ImageWriteError(path) from err


def save_raster(raster: np.ndarray, path: str | Path) -> None:
    """Encode *raster* to *path*; the format follows the file suffix.

    Encoding finishes before the file is opened, so a failed encode never
    truncates an existing file.

    Raises:
        ImageWriteError: the file cannot be written or encoded.
    """
    write_encoded(encode_raster(raster, path), path)


def output_path_for(
    path: str | Path,
    overwrite: bool,
    prefix: str = "pixelated_",
) -> Path:
    """Where the result for *path* goes: *path* itself, or a prefixed sibling."""
    path = Path(path)
    if overwrite:
        return path
    return path.with_name(f"{prefix}{path.name}")


def to_display(raster: np.ndarray) -> Image.Image:
    """8-bit RGB or RGBA image of *raster* for previews and comparisons."""
    if raster.dtype == np.uint16:
        raster = (raster >> 8).astype(np.uint8)
    img = Image.fromarray(raster)
    if img.mode not in ("RGB", "RGBA"):
        img = img.convert("RGBA" if "A" in img.mode else "RGB")
    return img


def _panel(raster: np.ndarray, height: int) -> Image.Image:
    img = to_display(raster).convert("RGB")
    width = max(1, round(img.width * height / img.height))
    return img.resize((width, height), Image.NEAREST)


def build_comparison(
    original: np.ndarray,
    pixelated: np.ndarray,
    panel_height: int = 384,
) -> Image.Image:
    """Render a 2-panel comparison: Original | Pixelated.

    Both panels are scaled (nearest-neighbour, aspect ratio kept) to
    *panel_height* so the blocks stay crisp.
    """
    label_height = 36
    gap = 8
    panels = [_panel(original, panel_height), _panel(pixelated, panel_height)]
    labels = [
        f"Original {original.shape[1]}x{original.shape[0]}",
        f"Pixelated {pixelated.shape[1]}x{pixelated.shape[0]}",
    ]

    total_w = sum(p.width for p in panels) + gap * (len(panels) - 1)
    total_h = panel_height + label_height

    canvas = Image.new("RGB", (total_w, total_h), (30, 30, 30))
    draw = ImageDraw.Draw(canvas)

    try:
        font = ImageFont.truetype(
            "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", 18,
        )
    except OSError:
        font = ImageFont.load_default()

    x = 0
    for panel, label in zip(panels, labels, strict=True):
        canvas.paste(panel, (x, label_height))

        bbox = draw.textbbox((0, 0), label, font=font)
        text_w = bbox[2] - bbox[0]
        tx = x + (panel.width - text_w) // 2
        draw.text((tx, 6), label, fill=(220, 220, 220), font=font)
        x += panel.width + gap

    return canvas


def make_comparison(
    original: np.ndarray,
    pixelated: np.ndarray,
    output_path: str | Path,
    panel_height: int = 384,
) -> None:
    """Render the comparison and save it to *output_path*."""
    canvas = build_comparison(original, pixelated, panel_height)
    write_encoded(encode_image(canvas, output_path), output_path)

"""Block-averaging pixelation on NumPy rasters.

A raster is an ``(H, W)`` or ``(H, W, C)`` array of ``uint8`` or ``uint16``.
The working rectangle is split into ``scale x scale`` blocks, each block
collapses to its mean colour, and the block-resolution image is
replicated back up so every block is a flat square.
"""

from __future__ import annotations

import logging

import numpy as np

from pixelator.crop import WorkingRect, crop, resolve_working_rect
from pixelator.errors import EmptyRasterError, InvalidScaleError

logger = logging.getLogger(__name__)

# Block sums of these stay exact in int64
_DTYPES = (np.dtype(np.uint8), np.dtype(np.uint16))


def _check_raster(raster: np.ndarray) -> None:
    if not isinstance(raster, np.ndarray) or raster.ndim not in (2, 3):
        raise ValueError("raster must be an array of shape (H, W) or (H, W, C)")
    if raster.dtype not in _DTYPES:
        raise ValueError(f"raster must be uint8 or uint16, got {raster.dtype}")
    h, w = raster.shape[:2]
    if h == 0 or w == 0 or (raster.ndim == 3 and raster.shape[2] == 0):
        raise EmptyRasterError(w, h)


def block_means(raster: np.ndarray, scale: int) -> np.ndarray:
    """Collapse each ``scale x scale`` block to its per-channel mean.

    The mean is rounded to the nearest integer with ties away from zero,
    computed exactly as ``(2 * sum + n) // (2 * n)``.

    Args:
        raster: (H, W[, C]) uint8 or uint16 array, H and W multiples of *scale*.
        scale:  Block side length.

    Returns:
        (H / scale, W / scale[, C]) array with the dtype of *raster*.
    """
    if raster.dtype not in _DTYPES:
        raise ValueError(f"raster must be uint8 or uint16, got {raster.dtype}")
    h, w = raster.shape[:2]
    if h % scale or w % scale:
        raise ValueError(f"{w}x{h} raster does not tile into {scale}x{scale} blocks")

    channels = raster.shape[2:]
    blocks = raster.reshape(h // scale, scale, w // scale, scale, *channels)
    sums = blocks.sum(axis=(1, 3), dtype=np.int64)
    n = scale * scale
    return ((2 * sums + n) // (2 * n)).astype(raster.dtype)


def expand_blocks(small: np.ndarray, scale: int) -> np.ndarray:
    """Replicate every pixel of *small* into a ``scale x scale`` square."""
    return np.repeat(np.repeat(small, scale, axis=0), scale, axis=1)


def resize_nearest(raster: np.ndarray, width: int, height: int) -> np.ndarray:
    """Nearest-neighbour resize to *width* x *height*.

    Destination pixel ``(x, y)`` samples source
    ``(x * src_w // width, y * src_h // height)``.
    """
    src_h, src_w = raster.shape[:2]
    if (src_w, src_h) == (width, height):
        return raster
    rows = np.arange(height) * src_h // height
    cols = np.arange(width) * src_w // width
    return raster[rows[:, np.newaxis], cols]


def pixelate(
    raster: np.ndarray,
    rect: WorkingRect,
    scale: int,
    keep_dimensions: bool = False,
) -> np.ndarray:
    """Pixelate the part of *raster* covered by *rect*.

    Pixels outside *rect* are dropped.  With *keep_dimensions* the result
    is stretched (nearest-neighbour) back to the full input size.

    Returns:
        A new array; *raster* is left untouched.
    """
    _check_raster(raster)
    if scale < 1:
        raise InvalidScaleError(scale)

    h, w = raster.shape[:2]
    if (
        rect.x < 0 or rect.y < 0
        or rect.x + rect.width > w or rect.y + rect.height > h
    ):
        raise ValueError(f"{rect} lies outside the {w}x{h} raster")
    if rect.width == 0 or rect.height == 0:
        raise EmptyRasterError(rect.width, rect.height)

    small = block_means(crop(raster, rect), scale)
    out = expand_blocks(small, scale)
    logger.debug(
        "Pixelated %dx%d region at (%d, %d) via %dx%d blocks",
        rect.width, rect.height, rect.x, rect.y, small.shape[1], small.shape[0],
    )

    if keep_dimensions:
        out = resize_nearest(out, w, h)
    return out


def pixelate_raster(
    raster: np.ndarray,
    scale: int,
    keep_dimensions: bool = False,
    force_crop: bool = False,
    center_crop: bool = False,
) -> np.ndarray:
    """Resolve the working rectangle for *raster* and pixelate it.

    This is the single entry point the CLI and the web front-end use.
    """
    _check_raster(raster)
    h, w = raster.shape[:2]
    rect = resolve_working_rect(w, h, scale, force_crop, center_crop)
    if (rect.width, rect.height) != (w, h):
        logger.info(
            "Cropping %dx%d to %dx%d at (%d, %d)",
            w, h, rect.width, rect.height, rect.x, rect.y,
        )
    return pixelate(raster, rect, scale, keep_dimensions)

"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PixelatorConfig:
    """Defaults for a pixelation run.

    Attributes:
        min_scale:         Smallest scale factor the CLI accepts.
        max_scale:         Largest scale factor the CLI accepts.
        keep_dimensions:   Resize the result back to the input canvas size.
        force_crop:        Crop non-divisible images instead of rejecting them.
        center_crop:       Centre the crop instead of anchoring it top-left.
        overwrite:         Write over the input file.
        output_prefix:     Prepended to the file name when not overwriting.
        comparison_height: Panel height of the side-by-side comparison image.
        output_format:     Image format for comparison images.
    """

    # Scale
    min_scale: int = 2
    max_scale: int = 8

    # Geometry policies
    keep_dimensions: bool = False
    force_crop: bool = False
    center_crop: bool = False

    # Output
    overwrite: bool = False
    output_prefix: str = "pixelated_"
    comparison_height: int = 384
    output_format: str = "png"

    SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
        {".jpg", ".jpeg", ".png", ".bmp", ".tiff", ".tif", ".webp", ".gif", ".jfif"}
    )

"""
Pixelator
=========

Reduce an image to a blocky mosaic: every ``scale x scale`` block of
pixels is replaced by its mean colour.  Images whose sides are not
multiples of the scale can be cropped (top-left or centred) and the
result can be stretched back to the original canvas size.
"""

__version__ = "1.0.0"

from pixelator.config import PixelatorConfig
from pixelator.crop import WorkingRect, crop, resolve_working_rect
from pixelator.engine import (
    block_means,
    expand_blocks,
    pixelate,
    pixelate_raster,
    resize_nearest,
)
from pixelator.errors import (
    EmptyRasterError,
    ImageReadError,
    ImageWriteError,
    InvalidScaleError,
    NotDivisibleError,
    PixelatorError,
    ScaleTooLargeError,
)
from pixelator.image_io import (
    build_comparison,
    encode_image,
    encode_raster,
    load_raster,
    make_comparison,
    output_path_for,
    save_raster,
    to_display,
    write_encoded,
)

__all__ = [
    "EmptyRasterError",
    "ImageReadError",
    "ImageWriteError",
    "InvalidScaleError",
    "NotDivisibleError",
    "PixelatorConfig",
    "PixelatorError",
    "ScaleTooLargeError",
    "WorkingRect",
    "block_means",
    "build_comparison",
    "crop",
    "encode_image",
    "encode_raster",
    "expand_blocks",
    "load_raster",
    "make_comparison",
    "output_path_for",
    "pixelate",
    "pixelate_raster",
    "resize_nearest",
    "resolve_working_rect",
    "save_raster",
    "to_display",
    "write_encoded",
]

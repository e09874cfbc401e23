"""Working-rectangle resolution.

Pixelation needs a region whose sides are whole multiples of the scale
factor. When the input is not already such a region the caller either
opts into cropping (top-left anchored or centred) or gets an error.
"""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

from pixelator.errors import (
    EmptyRasterError,
    InvalidScaleError,
    NotDivisibleError,
    ScaleTooLargeError,
)


class WorkingRect(NamedTuple):
    """Sub-region ``(x, y, width, height)`` of the input raster."""

    x: int
    y: int
    width: int
    height: int


def resolve_working_rect(
    width: int,
    height: int,
    scale: int,
    force_crop: bool = False,
    center_crop: bool = False,
) -> WorkingRect:
    """Find the region of a *width* x *height* raster to pixelate.

    An evenly divisible input is used whole, whatever the policies say.
    Otherwise *force_crop* must be set; the largest divisible region is then
    anchored top-left, or centred when *center_crop* is set.  Odd margins
    favour the top-left through floor division.

    Raises:
        InvalidScaleError:  *scale* < 1.
        EmptyRasterError:   zero width or height.
        NotDivisibleError:  cropping would be needed but was not requested.
        ScaleTooLargeError: a side is shorter than *scale*.
    """
    if scale < 1:
        raise InvalidScaleError(scale)
    if width <= 0 or height <= 0:
        raise EmptyRasterError(width, height)

    if width % scale == 0 and height % scale == 0:
        return WorkingRect(0, 0, width, height)

    if not force_crop:
        raise NotDivisibleError(width, height, scale)

    if width < scale:
        raise ScaleTooLargeError("width", width, scale)
    if height < scale:
        raise ScaleTooLargeError("height", height, scale)

    new_w = width - width % scale
    new_h = height - height % scale

    if center_crop:
        return WorkingRect((width - new_w) // 2, (height - new_h) // 2, new_w, new_h)
    return WorkingRect(0, 0, new_w, new_h)


def crop(raster: np.ndarray, rect: WorkingRect) -> np.ndarray:
    """Return the view of *raster* covered by *rect* (no copy)."""
    return raster[rect.y:rect.y + rect.height, rect.x:rect.x + rect.width]

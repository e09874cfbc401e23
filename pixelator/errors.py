"""Error taxonomy shared by the core and the I/O layer.

Every error carries the values needed to build a message, so callers can
either print ``str(err)`` or format their own text from the attributes.
"""

from __future__ import annotations

from pathlib import Path


class PixelatorError(ValueError):
    """Base class for all pixelation failures."""


class InvalidScaleError(PixelatorError):
    def __init__(self, scale: int) -> None:
        self.scale = scale
        super().__init__(f"scale factor must be at least 1 (got {scale})")


class EmptyRasterError(PixelatorError):
    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        super().__init__(f"image has zero area ({width}x{height})")


class NotDivisibleError(PixelatorError):
    """Dimensions are not multiples of the scale and cropping was not requested."""

    def __init__(self, width: int, height: int, scale: int) -> None:
        self.width = width
        self.height = height
        self.scale = scale
        super().__init__(
            f"image dimensions {width}x{height} must be divisible by the "
            f"scale factor {scale}. you can force crop the image using the -f flag"
        )


class ScaleTooLargeError(PixelatorError):
    def __init__(self, dimension: str, size: int, scale: int) -> None:
        self.dimension = dimension
        self.size = size
        self.scale = scale
        super().__init__(
            f"scale factor {scale} is larger than the image {dimension} ({size})"
        )


class ImageReadError(PixelatorError):
    def __init__(self, source: object) -> None:
        self.source = source
        if isinstance(source, (str, Path)):
            super().__init__(f"could not decode image at '{source}'")
        else:
            super().__init__("could not decode image")


class ImageWriteError(PixelatorError):
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"could not save image at '{self.path}'")

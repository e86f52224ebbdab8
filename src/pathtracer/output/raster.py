"""Byte raster and continuous-to-byte color conversion.

A ``Raster`` is a width x height grid of 8-bit RGB triplets stored row-major
in a NumPy ``uint8`` array of shape (height, width, 3). Pixels are addressed
as ``raster[x, y]`` with x selecting the column and y the row; row 0 is the
first row handed to an output sink.

Quantization maps a channel c in [0, 1] to ``floor(255.99 * c)`` computed in
single precision. The 255.99 factor lets c = 1.0 reach 255 without rounding
c slightly below 1.0 up to 256. Out-of-range results saturate to the byte
range and NaN becomes 0, so no channel ever wraps around.

Example:
    >>> color_from_vec3((1.0, 0.0, 0.5))
    Color(r=255, g=0, b=127)
    >>> raster = Raster(2, 1)
    >>> raster[1, 0] = Color(10, 20, 30)
    >>> raster[1, 0]
    Color(r=10, g=20, b=30)
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import NamedTuple

import numpy as np
import numpy.typing as npt

# Scale applied before truncating a [0, 1] channel to a byte
QUANTIZE_SCALE = np.float32(255.99)


class Color(NamedTuple):
    """An 8-bit RGB triplet."""

    r: int
    g: int
    b: int


BLACK = Color(0, 0, 0)


def quantize_image(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Quantize an array of [0, 1] channels to bytes.

    Args:
        image: Array of any shape with channel values in [0, 1]. Values
            outside that range saturate at 0 or 255; NaN maps to 0.

    Returns:
        Array of the same shape with dtype uint8.
    """
    scaled = QUANTIZE_SCALE * np.asarray(image, dtype=np.float32)
    scaled = np.nan_to_num(scaled, nan=0.0, posinf=255.0, neginf=0.0)
    return np.clip(scaled, 0.0, 255.0).astype(np.uint8)


def color_from_vec3(v: Sequence[float]) -> Color:
    """Quantize a single continuous color to a Color.

    Args:
        v: Three channel values in [0, 1].
    """
    r, g, b = quantize_image(np.asarray(v, dtype=np.float32)).tolist()
    return Color(r, g, b)


class Raster:
    """A width x height grid of Colors.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        pixels: uint8 array of shape (height, width, 3).
    """

    def __init__(self, width: int, height: int, background: Color = BLACK) -> None:
        """Create a raster filled with a background color.

        Raises:
            ValueError: If width or height is negative.
        """
        if width < 0 or height < 0:
            raise ValueError(f"Raster dimensions must be non-negative, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.empty((height, width, 3), dtype=np.uint8)
        self.fill(background)

    @classmethod
    def with_background(cls, width: int, height: int, color: Color) -> Raster:
        """Create a raster filled with the given color."""
        return cls(width, height, background=color)

    @classmethod
    def from_float_image(cls, image: npt.NDArray[np.floating]) -> Raster:
        """Build a raster by quantizing a (height, width, 3) float image.

        Raises:
            ValueError: If the image is not of shape (height, width, 3).
        """
        if image.ndim != 3 or image.shape[2] != 3:
            raise ValueError(f"Expected an image of shape (H, W, 3), got {image.shape}")
        height, width = image.shape[:2]
        raster = cls(width, height)
        raster.pixels[...] = quantize_image(image)
        return raster

    def fill(self, color: Color) -> None:
        """Overwrite every pixel with one color."""
        self.pixels[...] = color

    def to_numpy(self) -> npt.NDArray[np.uint8]:
        """Return a copy of the pixel array."""
        return self.pixels.copy()

    def iter_pixels(self) -> Iterator[Color]:
        """Yield every pixel in row-major order starting at row 0."""
        for r, g, b in self.pixels.reshape(-1, 3).tolist():
            yield Color(r, g, b)

    def __getitem__(self, index: tuple[int, int]) -> Color:
        x, y = index
        r, g, b = self.pixels[y, x].tolist()
        return Color(r, g, b)

    def __setitem__(self, index: tuple[int, int], color: Color) -> None:
        x, y = index
        self.pixels[y, x] = color

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Raster):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.pixels, other.pixels)
        )

    def __repr__(self) -> str:
        return f"Raster(width={self.width}, height={self.height})"

"""
PixImage: a rectangular grid of RGB pixels.

Each pixel has red, green, and blue intensities in the range 0...255. The
pixels live in one owned ``uint8`` buffer of shape (width, height, 3) indexed
``[x, y, channel]``; every pixel starts out black.
"""
from __future__ import annotations

from typing import Any, Sequence, Tuple

import numpy as np


RED, GREEN, BLUE = 0, 1, 2
MIN_INTENSITY = 0
MAX_INTENSITY = 255

Pixel = Tuple[int, int, int]


def _check_dimension(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"PixImage {name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"PixImage {name} must be non-negative, got {value}")
    return int(value)


class PixImage:
    """Mutable RGB raster with value equality."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, width: int, height: int) -> None:
        self._width = _check_dimension("width", width)
        self._height = _check_dimension("height", height)
        self._pixels = np.zeros((self._width, self._height, 3), dtype=np.uint8)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_grayscale(cls, pixels: Sequence[Sequence[int]]) -> "PixImage":
        """
        Build a grayscale image from intensities indexed ``pixels[x][y]``.

        Red, green and blue all receive the same intensity. Values are written
        through ``set_pixel``, so out-of-range entries leave the pixel black.

        Raises:
            ValueError: If the rows have different lengths
        """
        width = len(pixels)
        height = len(pixels[0]) if width else 0
        if any(len(column) != height for column in pixels):
            raise ValueError("from_grayscale expects every column to have the same height")

        image = cls(width, height)
        for x in range(width):
            for y in range(height):
                value = int(pixels[x][y])
                image.set_pixel(x, y, value, value, value)
        return image

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixImage":
        """
        Build an image from a (width, height, 3) integer array.

        Unlike ``set_pixel`` this rejects out-of-range values loudly.
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError("from_array expects an array of shape (width, height, 3)")
        if array.size and (array.min() < MIN_INTENSITY or array.max() > MAX_INTENSITY):
            raise ValueError("from_array expects channel values in the range 0...255")

        image = cls(array.shape[0], array.shape[1])
        image._pixels[...] = array.astype(np.uint8)
        return image

    def to_array(self) -> np.ndarray:
        """Copy of the pixel buffer, shape (width, height, 3), dtype uint8."""
        return self._pixels.copy()

    def copy(self) -> "PixImage":
        return PixImage.from_array(self._pixels)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _check_bounds(self, x: int, y: int) -> None:
        # numpy would silently wrap negative indices
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside a {self._width}x{self._height} image"
            )

    def get_red(self, x: int, y: int) -> int:
        self._check_bounds(x, y)
        return int(self._pixels[x, y, RED])

    def get_green(self, x: int, y: int) -> int:
        self._check_bounds(x, y)
        return int(self._pixels[x, y, GREEN])

    def get_blue(self, x: int, y: int) -> int:
        self._check_bounds(x, y)
        return int(self._pixels[x, y, BLUE])

    def get_pixel(self, x: int, y: int) -> Pixel:
        self._check_bounds(x, y)
        red, green, blue = self._pixels[x, y]
        return int(red), int(green), int(blue)

    def set_pixel(self, x: int, y: int, red: int, green: int, blue: int) -> None:
        """
        Set the pixel at (x, y) to the given intensities.

        If any of the three intensities is outside 0...255 nothing changes and
        no error is raised.
        """
        self._check_bounds(x, y)
        for value in (red, green, blue):
            if value < MIN_INTENSITY or value > MAX_INTENSITY:
                return
        self._pixels[x, y] = (red, green, blue)

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def box_blur(self, num_iterations: int) -> "PixImage":
        from box_blur import box_blur

        return box_blur(self, num_iterations)

    def sobel_edges(self, border: str = "edge") -> "PixImage":
        from sobel import sobel_edges

        return sobel_edges(self, border=border)

    # ------------------------------------------------------------------
    # Comparison and rendering
    # ------------------------------------------------------------------

    def equals(self, other: Any) -> bool:
        """True if ``other`` has the same dimensions and identical pixels."""
        if not isinstance(other, PixImage):
            return False
        if self._width != other.width or self._height != other.height:
            return False
        return bool(np.array_equal(self._pixels, other._pixels))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixImage):
            return NotImplemented
        return self.equals(other)

    def __str__(self) -> str:
        lines = []
        for y in range(self._height):
            for x in range(self._width):
                red, green, blue = self._pixels[x, y]
                lines.append(f"{red}:{green}:{blue}\n")
        return "".join(lines)

    def __repr__(self) -> str:
        return f"PixImage(width={self._width}, height={self._height})"

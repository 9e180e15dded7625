"""
Sobel edge detection for PixImage.

Gradients are computed separately for red, green and blue; the squared
gradients of all three channels are summed into one energy per pixel and the
energy is mapped to a grayscale intensity with a logarithmic curve.
"""
from __future__ import annotations

from typing import Literal, Union

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from piximage import MAX_INTENSITY, MIN_INTENSITY, PixImage
from utils import window_bounds


BorderMode = Literal["edge", "window"]
BORDER_MODES = ("edge", "window")

# Indexed [a][b]: a is the x offset (x-1, x, x+1), b the y offset.
SOBEL_X = np.array(
    [[1, 0, -1],
     [2, 0, -2],
     [1, 0, -1]],
    dtype=np.int64,
)
SOBEL_Y = np.array(
    [[1, 2, 1],
     [0, 0, 0],
     [-1, -2, -1]],
    dtype=np.int64,
)

# Upper end of the energy range mag2gray is calibrated for
MAX_ENERGY = 24_969_600


def _gradient_edge(pixels: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """All nine taps; neighbors off the image repeat the nearest edge pixel."""
    padded = np.pad(pixels, ((1, 1), (1, 1), (0, 0)), mode="edge")
    windows = sliding_window_view(padded, kernel.shape, axis=(0, 1))
    return np.tensordot(windows, kernel, axes=([3, 4], [0, 1]))


def _gradient_window(pixels: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """
    Kernel applied positionally to the clamped neighbor window.

    Near a border the window shrinks and the kernel is read from its top-left
    corner, so only the leading rows/columns of weights are used.
    """
    width, height = pixels.shape[:2]
    output = np.zeros(pixels.shape, dtype=np.int64)

    for x in range(width):
        for y in range(height):
            startx, endx, starty, endy = window_bounds(x, y, width, height)
            region = pixels[startx:endx + 1, starty:endy + 1]
            weights = kernel[: endx - startx + 1, : endy - starty + 1]
            output[x, y] = np.tensordot(region, weights, axes=([0, 1], [0, 1]))

    return output


def gradient(image: PixImage, kernel: np.ndarray, border: BorderMode = "edge") -> np.ndarray:
    """
    Per-channel convolution of ``image`` with a 3x3 kernel.

    Args:
        image: Source image
        kernel: 3x3 integer kernel indexed [x offset][y offset]
        border: "edge" to replicate border pixels, "window" to clamp the
            neighbor window and apply the kernel positionally

    Returns:
        int64 array of shape (width, height, 3)

    Raises:
        ValueError: If the border mode is unknown
    """
    if border not in BORDER_MODES:
        raise ValueError(f"Unknown border mode: {border!r} (expected one of {BORDER_MODES})")

    pixels = image.to_array().astype(np.int64)
    if pixels.size == 0:
        return pixels

    kernel = np.asarray(kernel, dtype=np.int64)
    if border == "edge":
        return _gradient_edge(pixels, kernel)
    return _gradient_window(pixels, kernel)


def sobel_energy(image: PixImage, border: BorderMode = "edge") -> np.ndarray:
    """Sum of squared x and y gradients over the three channels, shape (width, height)."""
    gx = gradient(image, SOBEL_X, border)
    gy = gradient(image, SOBEL_Y, border)
    return (gx * gx + gy * gy).sum(axis=2)


def mag2gray(energy: Union[int, np.ndarray]) -> Union[int, np.ndarray]:
    """
    Map an energy (squared gradient magnitude) to a grayscale intensity.

    The map is logarithmic, shifted so that energies of 5,080 and below map to
    zero, truncated toward zero and clamped to 0...255.

    Args:
        energy: Non-negative scalar or array of energies

    Returns:
        An int for scalar input, a uint8 array otherwise
    """
    values = np.asarray(energy, dtype=np.float64)
    if np.any(values < 0):
        raise ValueError("mag2gray expects non-negative energy")

    intensity = np.trunc(30.0 * np.log(1.0 + values) - 256.0)
    intensity = np.clip(intensity, MIN_INTENSITY, MAX_INTENSITY).astype(np.uint8)

    if intensity.ndim == 0:
        return int(intensity)
    return intensity


def sobel_edges(image: PixImage, border: BorderMode = "edge") -> PixImage:
    """
    Apply the Sobel operator to ``image``.

    Returns:
        A new grayscale image of the same size; whiter pixels are stronger edges
    """
    if image.width == 0 or image.height == 0:
        return PixImage(image.width, image.height)

    gray = mag2gray(sobel_energy(image, border))
    return PixImage.from_array(np.repeat(gray[:, :, np.newaxis], 3, axis=2))

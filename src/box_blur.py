"""
Iterative box blur.

Each pass replaces every pixel with the average of itself and its neighbors:
nine pixels in the interior, six along an edge, four in a corner. Sums are
divided by the neighbor count with the quotient rounded toward zero. Red,
green and blue are blurred separately.
"""
from __future__ import annotations

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from piximage import PixImage
from utils import trunc_divide


WINDOW_SHAPE = (3, 3)


def _neighbor_counts(width: int, height: int) -> np.ndarray:
    """Number of in-bounds pixels in each pixel's clamped window."""
    padded = np.pad(np.ones((width, height), dtype=np.int64), 1, mode="constant")
    return sliding_window_view(padded, WINDOW_SHAPE).sum(axis=(-2, -1))


def blur_pass(image: PixImage) -> PixImage:
    """
    Apply a single box blur pass.

    Off-image neighbors are padded with zeros so they add nothing to the sum,
    and the divisor counts only the in-bounds neighbors.

    Args:
        image: Source image (not modified)

    Returns:
        Newly constructed blurred image
    """
    width, height = image.width, image.height
    if width == 0 or height == 0:
        return PixImage(width, height)

    pixels = image.to_array().astype(np.int64)
    padded = np.pad(pixels, ((1, 1), (1, 1), (0, 0)), mode="constant", constant_values=0)
    windows = sliding_window_view(padded, WINDOW_SHAPE, axis=(0, 1))
    totals = windows.sum(axis=(-2, -1))

    counts = _neighbor_counts(width, height)
    averaged = trunc_divide(totals, counts[:, :, np.newaxis])

    return PixImage.from_array(averaged)


def box_blur(image: PixImage, num_iterations: int) -> PixImage:
    """
    Return a blurred version of ``image``.

    Args:
        image: Source image
        num_iterations: Number of repeated blur passes

    Returns:
        ``image`` itself (not a copy) if num_iterations is zero or negative,
        otherwise a newly constructed image

    Raises:
        ValueError: If num_iterations is not an integer
    """
    if isinstance(num_iterations, bool) or not isinstance(num_iterations, (int, np.integer)):
        raise ValueError(f"box_blur expects an integer iteration count, got {num_iterations!r}")

    if num_iterations <= 0:
        return image

    result = image
    for _ in range(int(num_iterations)):
        result = blur_pass(result)
    return result

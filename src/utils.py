"""
Utility functions shared by the PixImage transforms and the self-check harness.
"""
from __future__ import annotations

import os
from typing import Any, Dict, Tuple, Union

import numpy as np
import yaml


# ============================================================================
# Settings
# ============================================================================

def load_settings(path: str) -> Dict[str, Any]:
    """Load a YAML configuration file."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)

    if not isinstance(data, dict):
        raise ValueError("Settings file must define a dictionary at the top level")

    return data


# ============================================================================
# Pixel Arithmetic
# ============================================================================

IntOrArray = Union[int, np.ndarray]


def window_bounds(x: int, y: int, width: int, height: int) -> Tuple[int, int, int, int]:
    """
    Inclusive neighbor window of (x, y), clamped to the image.

    Returns:
        (startx, endx, starty, endy); the window always contains (x, y) and
        spans 1-3 columns by 1-3 rows.
    """
    startx = x - 1 if x - 1 >= 0 else x
    endx = x + 1 if x + 1 < width else x
    starty = y - 1 if y - 1 >= 0 else y
    endy = y + 1 if y + 1 < height else y
    return startx, endx, starty, endy


def trunc_divide(numerator: IntOrArray, denominator: IntOrArray) -> IntOrArray:
    """
    Integer division rounded toward zero.

    Python's ``//`` floors, which differs for negative quotients.
    """
    if isinstance(numerator, np.ndarray) or isinstance(denominator, np.ndarray):
        num = np.asarray(numerator, dtype=np.int64)
        den = np.asarray(denominator, dtype=np.int64)
        quotient = np.abs(num) // np.abs(den)
        return np.where((num < 0) ^ (den < 0), -quotient, quotient)

    quotient = abs(int(numerator)) // abs(int(denominator))
    return -quotient if (numerator < 0) != (denominator < 0) else quotient


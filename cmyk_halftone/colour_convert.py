# cmyk_halftone/colour_convert.py
from __future__ import annotations

"""
RGB <-> CMYK conversions with contrast pre-adjustment. Vectorised NumPy.

Exports:
  apply_contrast(rgb, contrast)
  rgb_to_cmyk(rgb)
  cmyk_to_rgb(cmyk)
  cmyk_channel(rgb, index, contrast)
"""

import numpy as np

from .constants import CONTRAST_PIVOT


def apply_contrast(rgb: np.ndarray, contrast: float) -> np.ndarray:
    """
    Scale RGB around mid grey and clip back into [0,1].
    Accepts any shape (..., 3). Returns float64.
    """
    arr = np.asarray(rgb, dtype=np.float64)
    return np.clip((arr - CONTRAST_PIVOT) * float(contrast) + CONTRAST_PIVOT, 0.0, 1.0)


def rgb_to_cmyk(rgb: np.ndarray) -> np.ndarray:
    """
    RGB (0..1) -> CMYK (0..1) with K extracted from the brightest component.

    Pure black (k >= 1) maps to (0, 0, 0, 1) so c/m/y never divide by zero.
    Preserves input shape (..., 3) -> (..., 4). Returns float64.
    """
    arr = np.asarray(rgb, dtype=np.float64)
    r, g, b = arr[..., 0], arr[..., 1], arr[..., 2]
    k = 1.0 - np.maximum(np.maximum(r, g), b)
    black = k >= 1.0
    denom = np.where(black, 1.0, 1.0 - k)

    out = np.empty(arr.shape[:-1] + (4,), dtype=np.float64)
    out[..., 0] = np.where(black, 0.0, (1.0 - r - k) / denom)
    out[..., 1] = np.where(black, 0.0, (1.0 - g - k) / denom)
    out[..., 2] = np.where(black, 0.0, (1.0 - b - k) / denom)
    out[..., 3] = np.where(black, 1.0, k)
    return out


def cmyk_to_rgb(cmyk: np.ndarray) -> np.ndarray:
    """Standard inverse: r = (1 - c)(1 - k), etc. Shape (..., 4) -> (..., 3)."""
    arr = np.asarray(cmyk, dtype=np.float64)
    k = arr[..., 3:4]
    return (1.0 - arr[..., :3]) * (1.0 - k)


def cmyk_channel(rgb: np.ndarray, index: int, contrast: float) -> np.ndarray:
    """Contrast-adjust, convert, and return one CMYK channel (0=C .. 3=K)."""
    return rgb_to_cmyk(apply_contrast(rgb, contrast))[..., index]


__all__ = ["apply_contrast", "rgb_to_cmyk", "cmyk_to_rgb", "cmyk_channel"]

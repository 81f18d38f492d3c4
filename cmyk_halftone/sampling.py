# cmyk_halftone/sampling.py
from __future__ import annotations

"""
Geometry and texture sampling helpers.

- pixel_centres(y0, y1, width): output pixel centres in pixel units
- rotate(x, y, angle): 2D rotation about the origin
- sample_bilinear(image, u, v): clamp-to-edge bilinear lookup at normalised coords
"""

import math
from typing import Tuple

import numpy as np

from .core_types import F64Image


def pixel_centres(y0: int, y1: int, width: int) -> Tuple[np.ndarray, np.ndarray]:
    """(px, py) float64 grids of shape (y1-y0, width) holding x+0.5, y+0.5."""
    xs = np.arange(width, dtype=np.float64) + 0.5
    ys = np.arange(y0, y1, dtype=np.float64) + 0.5
    px, py = np.meshgrid(xs, ys)
    return px, py


def rotate(x: np.ndarray, y: np.ndarray, angle: float) -> Tuple[np.ndarray, np.ndarray]:
    """Rotate points counter-clockwise (in x-right, y-up terms) by angle radians."""
    s = math.sin(angle)
    c = math.cos(angle)
    return x * c - y * s, x * s + y * c


def sample_bilinear(image: F64Image, u: np.ndarray, v: np.ndarray) -> np.ndarray:
    """
    Bilinear lookup of an (H,W,3) image at normalised coords (u, v) in [0,1].

    Texel centres sit at (i + 0.5) / size; coords outside the image clamp to
    the edge texels. A constant neighbourhood returns its value exactly.
    Returns float64 (..., 3) matching u's shape.
    """
    height, width = image.shape[0], image.shape[1]
    fx = np.clip(np.asarray(u, dtype=np.float64) * width - 0.5, 0.0, width - 1)
    fy = np.clip(np.asarray(v, dtype=np.float64) * height - 0.5, 0.0, height - 1)
    x0 = np.floor(fx).astype(np.intp)
    y0 = np.floor(fy).astype(np.intp)
    x1 = np.minimum(x0 + 1, width - 1)
    y1 = np.minimum(y0 + 1, height - 1)
    tx = (fx - x0)[..., None]
    ty = (fy - y0)[..., None]

    c00 = image[y0, x0]
    c10 = image[y0, x1]
    c01 = image[y1, x0]
    c11 = image[y1, x1]
    top = c00 + (c10 - c00) * tx
    bottom = c01 + (c11 - c01) * tx
    return top + (bottom - top) * ty


__all__ = ["pixel_centres", "rotate", "sample_bilinear"]

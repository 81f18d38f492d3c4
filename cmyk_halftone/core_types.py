# cmyk_halftone/core_types.py
from __future__ import annotations

"""
Core type aliases, errors, and lightweight helpers.
"""

import math
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray
from PIL import Image

# Basic aliases

RGBFloat = Tuple[float, float, float]  # each in [0,1]
HexStr = str

U8Image = NDArray[np.uint8]  # (H, W, 3|4)
F64Image = NDArray[np.float64]  # (H, W, 3) RGB in [0,1]
F32Buffer = NDArray[np.float32]  # (H, W, 4) RGBA in [0,1]
Coverage = NDArray[np.float64]  # (H, W) ink coverage in [0,1]

SourceLike = Union[np.ndarray, Image.Image]


class InvalidInputError(ValueError):
    """Structurally invalid render input (empty image, bad shape, bad size)."""


# Small helpers


def clamp_value(
    value: float, lo: float, hi: float, default: Optional[float] = None
) -> float:
    """Clamp value to [lo, hi]. NaN maps to `default` (lo when not given)."""
    if math.isnan(value):
        return lo if default is None else default
    return lo if value < lo else hi if value > hi else value


def hex_to_rgb(hex_str: str) -> Tuple[int, int, int]:
    """Parse '#rgb' or '#rrggbb' (case-insensitive, '#' optional) into an RGB tuple."""
    s = hex_str.strip().lower()
    if not s.startswith("#"):
        s = f"#{s}"
    if len(s) == 4:
        r, g, b = s[1], s[2], s[3]
        s = f"#{r}{r}{g}{g}{b}{b}"
    if len(s) != 7:
        raise ValueError(f"hex must be '#rrggbb' or '#rgb', got {hex_str!r}")
    try:
        return (int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16))
    except ValueError:
        raise ValueError(f"invalid hex colour {hex_str!r}") from None


def hex_to_rgb_float(hex_str: str) -> RGBFloat:
    """Parse a hex colour into an (r, g, b) float triple in [0,1]."""
    r, g, b = hex_to_rgb(hex_str)
    return (r / 255.0, g / 255.0, b / 255.0)


def rgb_float_to_hex(rgb: Sequence[float]) -> HexStr:
    """Float RGB triple in [0,1] to lowercase '#rrggbb'."""
    vals = [int(round(clamp_value(float(c), 0.0, 1.0) * 255.0)) for c in rgb[:3]]
    return f"#{vals[0]:02x}{vals[1]:02x}{vals[2]:02x}"


def coerce_rgb_float(value: Sequence[float] | str) -> RGBFloat:
    """
    Coerce a hex string or a 3-length sequence/array to a clamped float RGB triple.
    """
    if isinstance(value, str):
        return hex_to_rgb_float(value)
    if isinstance(value, np.ndarray):
        value = value.reshape(-1).tolist()
    if len(value) < 3:
        raise ValueError("sequence too small for RGB")
    return (
        clamp_value(float(value[0]), 0.0, 1.0),
        clamp_value(float(value[1]), 0.0, 1.0),
        clamp_value(float(value[2]), 0.0, 1.0),
    )


def as_source_rgb(image: SourceLike) -> F64Image:
    """
    Validate a source image and return float64 (H,W,3) RGB in [0,1].

    Accepts Pillow images, integer arrays (0..dtype max, e.g. 0..255 for uint8)
    and float arrays (0..1).
    Grayscale (H,W) arrays are broadcast to RGB; alpha is dropped.
    """
    if isinstance(image, Image.Image):
        image = np.array(image.convert("RGB"), dtype=np.uint8)
    arr = np.asarray(image)
    if arr.ndim == 2:
        arr = arr[..., None]
    if arr.ndim != 3 or arr.shape[-1] not in (1, 3, 4):
        raise InvalidInputError(f"expected (H,W,3/4) image, got shape {arr.shape}")
    if arr.shape[0] < 1 or arr.shape[1] < 1:
        raise InvalidInputError(
            f"source image must be at least 1x1, got {arr.shape[1]}x{arr.shape[0]}"
        )
    if arr.shape[-1] == 1:
        arr = np.repeat(arr, 3, axis=-1)
    rgb = arr[..., :3]
    if np.issubdtype(rgb.dtype, np.integer):
        # Full scale of the integer type is white (255 for uint8, 65535 for uint16).
        scaled = rgb.astype(np.float64) / float(np.iinfo(rgb.dtype).max)
        return np.clip(scaled, 0.0, 1.0)
    if not np.issubdtype(rgb.dtype, np.number):
        raise InvalidInputError(f"unsupported image dtype {rgb.dtype}")
    vals = np.nan_to_num(rgb.astype(np.float64), nan=0.0, posinf=1.0, neginf=0.0)
    return np.clip(vals, 0.0, 1.0)


def check_output_size(width: int, height: int) -> Tuple[int, int]:
    """Validate a requested output resolution."""
    w, h = int(width), int(height)
    if w < 1 or h < 1:
        raise InvalidInputError(f"output size must be at least 1x1, got {w}x{h}")
    return w, h


__all__ = [
    # aliases / types
    "RGBFloat",
    "HexStr",
    "U8Image",
    "F64Image",
    "F32Buffer",
    "Coverage",
    "SourceLike",
    # errors
    "InvalidInputError",
    # helpers
    "clamp_value",
    "hex_to_rgb",
    "hex_to_rgb_float",
    "rgb_float_to_hex",
    "coerce_rgb_float",
    "as_source_rgb",
    "check_output_size",
]

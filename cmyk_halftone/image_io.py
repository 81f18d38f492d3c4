# cmyk_halftone/image_io.py
from __future__ import annotations

"""
Image I/O helpers: decode to RGB, pick an output size, write PNG.
"""

from pathlib import Path
from typing import Tuple

import numpy as np
from PIL import Image, ImageOps

from .composite import to_u8_rgba
from .constants import MAX_OUTPUT_SIZE
from .core_types import F32Buffer, U8Image


def load_image_rgb(path: Path) -> U8Image:
    """Decode any Pillow-readable file to uint8 (H,W,3), EXIF orientation applied."""
    with Image.open(path) as im0:
        im = ImageOps.exif_transpose(im0)
        if im.mode in ("RGBA", "LA", "P"):
            # Composite over white so transparent areas print as paper.
            rgba = im.convert("RGBA")
            bg = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
            im = Image.alpha_composite(bg, rgba)
        arr = np.array(im.convert("RGB"), dtype=np.uint8)
    return arr


def fit_within(
    width: int, height: int, max_size: int = MAX_OUTPUT_SIZE
) -> Tuple[int, int]:
    """
    Output size for a width x height source capped at max_size on both sides.
    Aspect ratio is kept; sizes are floored and never drop below 1.
    """
    w, h = int(width), int(height)
    if max_size <= 0 or (w <= max_size and h <= max_size):
        return w, h
    ratio = min(max_size / w, max_size / h)
    return max(1, int(w * ratio)), max(1, int(h * ratio))


def save_png_rgba(path: Path, buffer: F32Buffer) -> Path:
    """Write a float RGBA buffer as PNG; the suffix is forced to .png."""
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(to_u8_rgba(buffer)).save(path)
    return path


__all__ = [
    "load_image_rgb",
    "fit_within",
    "save_png_rgba",
]

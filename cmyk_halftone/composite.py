# cmyk_halftone/composite.py
from __future__ import annotations

"""
Subtractive ink compositing and grain.

Exports:
  composite_inks(coverage, params)           -> float64 [rows,W,3]
  overlay_blend(base, blend)                 photographic overlay
  apply_grain(rgb, px, py, params)           -> float64 [rows,W,3]
  composite_span(coverage, px, py, params)   -> float32 [rows,W,4]
  to_u8_rgba(buffer)                         -> uint8 [H,W,4]
"""

import numpy as np

from .constants import GRAIN_MIX_CAP, GRAIN_OVERLAY_BASE, GRAIN_SIZE_FACTOR
from .core_types import F32Buffer, U8Image
from .noise import grain_noise
from .params import HalftoneParams


def composite_inks(coverage: np.ndarray, params: HalftoneParams) -> np.ndarray:
    """
    Layer inks over the background in C, M, Y, K order.

    Each layer multiplies the colour underneath by its ink tint where it has
    coverage: colour = mix(colour, colour * ink, coverage).
    coverage: [4, rows, W] in [0,1].
    """
    rows, width = coverage.shape[1], coverage.shape[2]
    colour = np.empty((rows, width, 3), dtype=np.float64)
    colour[...] = np.asarray(params.colour_bg, dtype=np.float64)
    for ch, ink in enumerate(params.ink_colours):
        tint = np.asarray(ink, dtype=np.float64)
        amount = coverage[ch][..., None]
        colour = colour + (colour * tint - colour) * amount
    return colour


def overlay_blend(base: np.ndarray | float, blend: np.ndarray) -> np.ndarray:
    """Overlay blend mode: multiply in the darks, screen in the lights."""
    b = np.asarray(blend, dtype=np.float64)
    return np.where(
        b > 0.5,
        1.0 - 2.0 * (1.0 - b) * (1.0 - base),
        2.0 * b * base,
    )


def apply_grain(
    rgb: np.ndarray, px: np.ndarray, py: np.ndarray, params: HalftoneParams
) -> np.ndarray:
    """Overlay and/or mix grain noise. A no-op when both amounts are zero."""
    if not params.grain_enabled:
        return rgb
    cell = max(1.0, params.grain_size * GRAIN_SIZE_FACTOR)
    grain = grain_noise(px, py, cell)[..., None]

    colour = rgb
    if params.grain_overlay > 0.0:
        shade = GRAIN_OVERLAY_BASE + overlay_blend(GRAIN_OVERLAY_BASE, grain)
        colour = colour + (colour * shade - colour) * params.grain_overlay
    if params.grain_mixing > 0.0:
        colour = colour + (grain - colour) * (params.grain_mixing * GRAIN_MIX_CAP)
    return colour


def composite_span(
    coverage: np.ndarray, px: np.ndarray, py: np.ndarray, params: HalftoneParams
) -> F32Buffer:
    """Inks + grain + opaque alpha for a span of rows."""
    rgb = apply_grain(composite_inks(coverage, params), px, py, params)
    out = np.empty(rgb.shape[:2] + (4,), dtype=np.float32)
    out[..., :3] = np.clip(rgb, 0.0, 1.0)
    out[..., 3] = 1.0
    return out


def to_u8_rgba(buffer: F32Buffer) -> U8Image:
    """Float RGBA in [0,1] -> uint8 RGBA (rounded)."""
    arr = np.clip(np.asarray(buffer, dtype=np.float64), 0.0, 1.0)
    return np.floor(arr * 255.0 + 0.5).astype(np.uint8)


__all__ = [
    "composite_inks",
    "overlay_blend",
    "apply_grain",
    "composite_span",
    "to_u8_rgba",
]

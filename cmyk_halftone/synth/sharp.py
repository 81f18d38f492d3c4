# cmyk_halftone/synth/sharp.py
from __future__ import annotations

"""
Sharp: one source sample per pixel, one cell per pixel.

The pixel's own colour decides the dot size, and the dot is evaluated only
against the cell the pixel falls in (coordinates wrapped into the cell).
There is no neighbour blending, so dots are clipped at cell borders and
the maximum radius is half a cell.
"""

import numpy as np

from ..constants import SCREEN_ANGLES, SHARP_RADIUS_FACTOR
from ..core_types import Coverage
from ..noise import hash2
from ..sampling import rotate
from ..screen import ScreenContext, channel_coverage_at, disc_value


def local_cell_coords(ctx: ScreenContext, channel: int):
    """Jittered, wrapped position of each pixel inside its cell, in [0, grid)."""
    grid = ctx.grid_size
    rx, ry = rotate(ctx.px, ctx.py, SCREEN_ANGLES[channel])
    jitter = ctx.jitter
    if jitter > 0.0:
        jx, jy = hash2(
            np.floor(rx / grid).astype(np.int64), np.floor(ry / grid).astype(np.int64)
        )
        rx = rx + jx * jitter
        ry = ry + jy * jitter
    return np.mod(rx, grid), np.mod(ry, grid)


def synth_sharp(ctx: ScreenContext, channel: int) -> Coverage:
    """Coverage in [0,1] for one channel over the span."""
    grid = ctx.grid_size
    u = ctx.px / ctx.width
    v = ctx.py / ctx.height
    coverage = channel_coverage_at(ctx, channel, u, v)

    lx, ly = local_cell_coords(ctx, channel)
    half = grid * 0.5
    dist = np.hypot(lx - half, ly - half)
    return disc_value(dist, coverage * (grid * SHARP_RADIUS_FACTOR), ctx.params.softness)


__all__ = ["local_cell_coords", "synth_sharp"]

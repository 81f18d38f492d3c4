# cmyk_halftone/screen.py
from __future__ import annotations

"""
Rotated screen addressing shared by the dot synthesizers.

Each ink channel owns a square grid of cells rotated by its screen angle.
For an output pixel the sampler rotates the pixel centre into screen space,
finds its cell, and walks the 3x3 block of neighbouring cells. Every
neighbour contributes one candidate dot: its (jittered) centre, the ink
coverage sampled from the source at that centre, and the resulting radius.

Exports:
  ScreenContext            per-span inputs (source, sizes, params, pixel centres)
  Candidate                one neighbour dot (dist to pixel, radius)
  channel_coverage_at(...) source lookup -> contrast -> CMYK -> gain/flood
  iter_candidates(...)     yields the 9 candidates for a channel
  smoothstep(e0, e1, x)
  disc_value(dist, radius, softness)
"""

from dataclasses import dataclass
from typing import Iterator, NamedTuple

import numpy as np

from .colour_convert import cmyk_channel
from .constants import (
    JITTER_FACTOR,
    NEIGHBOUR_RADIUS,
    OVERLAP_RADIUS_FACTOR,
    SCREEN_ANGLES,
)
from .core_types import F64Image
from .correct import correct_channel
from .noise import hash2
from .params import HalftoneParams
from .sampling import rotate, sample_bilinear


@dataclass(frozen=True)
class ScreenContext:
    """Read-only inputs for one span of output rows."""

    source: F64Image  # (H_src, W_src, 3) in [0,1]
    width: int  # output width
    height: int  # output height
    params: HalftoneParams  # already clamped
    px: np.ndarray  # (rows, width) pixel-centre x
    py: np.ndarray  # (rows, width) pixel-centre y

    @property
    def grid_size(self) -> float:
        return self.params.grid_size

    @property
    def jitter(self) -> float:
        """Jitter amplitude in pixels; at most half a cell."""
        return self.params.grid_noise * self.params.grid_size * JITTER_FACTOR


class Candidate(NamedTuple):
    dist: np.ndarray  # distance from pixel to candidate centre (screen space)
    radius: np.ndarray  # candidate dot radius in pixels


def channel_coverage_at(
    ctx: ScreenContext, channel: int, u: np.ndarray, v: np.ndarray
) -> np.ndarray:
    """Corrected coverage of one channel at normalised source coords."""
    rgb = sample_bilinear(ctx.source, u, v)
    value = cmyk_channel(rgb, channel, ctx.params.contrast)
    return correct_channel(value, ctx.params.corrections[channel])


def iter_candidates(
    ctx: ScreenContext,
    channel: int,
    radius_factor: float = OVERLAP_RADIUS_FACTOR,
) -> Iterator[Candidate]:
    """Yield one Candidate per neighbouring cell of every pixel in the span."""
    angle = SCREEN_ANGLES[channel]
    grid = ctx.grid_size
    jitter = ctx.jitter

    rx, ry = rotate(ctx.px, ctx.py, angle)
    cell_x = np.floor(rx / grid)
    cell_y = np.floor(ry / grid)

    span = range(-NEIGHBOUR_RADIUS, NEIGHBOUR_RADIUS + 1)
    for dx in span:
        for dy in span:
            nx = cell_x + dx
            ny = cell_y + dy
            centre_x = (nx + 0.5) * grid
            centre_y = (ny + 0.5) * grid
            if jitter > 0.0:
                jx, jy = hash2(nx.astype(np.int64), ny.astype(np.int64))
                centre_x = centre_x + jx * jitter
                centre_y = centre_y + jy * jitter

            sx, sy = rotate(centre_x, centre_y, -angle)
            u = np.clip(sx / ctx.width, 0.0, 1.0)
            v = np.clip(sy / ctx.height, 0.0, 1.0)
            coverage = channel_coverage_at(ctx, channel, u, v)

            yield Candidate(
                dist=np.hypot(rx - centre_x, ry - centre_y),
                radius=coverage * (grid * radius_factor),
            )


def smoothstep(edge0: np.ndarray, edge1: np.ndarray, x: np.ndarray) -> np.ndarray:
    """
    Hermite step between edge0 and edge1.
    An empty band (edge1 <= edge0) degrades to a hard step at edge1.
    """
    e0 = np.asarray(edge0, dtype=np.float64)
    e1 = np.asarray(edge1, dtype=np.float64)
    x = np.asarray(x, dtype=np.float64)
    width = e1 - e0
    ok = width > 0.0
    t = np.clip((x - e0) / np.where(ok, width, 1.0), 0.0, 1.0)
    t = np.where(ok, t, (x >= e1).astype(np.float64))
    return t * t * (3.0 - 2.0 * t)


def disc_value(dist: np.ndarray, radius: np.ndarray, softness: float) -> np.ndarray:
    """
    Membership of a point in a disc of the given radius.

    softness == 0: 1 inside (dist <= radius), 0 outside; zero-radius discs are empty.
    softness  > 0: smooth fall-off across a band of width softness * radius
                   centred on the rim.
    """
    dist = np.asarray(dist, dtype=np.float64)
    radius = np.asarray(radius, dtype=np.float64)
    if softness <= 0.0:
        return ((radius > 0.0) & (dist <= radius)).astype(np.float64)
    edge = softness * radius * 0.5
    return 1.0 - smoothstep(radius - edge, radius + edge, dist)


__all__ = [
    "ScreenContext",
    "Candidate",
    "channel_coverage_at",
    "iter_candidates",
    "smoothstep",
    "disc_value",
]

# cmyk_halftone/synth/ink.py
from __future__ import annotations

"""
Ink: metaball field over the 3x3 candidates, thresholded at 1.0.

Each candidate adds r^2 / (d^2 + eps). Candidates farther than 2r add
nothing. Neighbouring dots whose fields overlap merge into blobs.
"""

import numpy as np

from ..constants import (
    INK_BASE_EDGE,
    INK_EPSILON,
    INK_REACH,
    INK_SOFTNESS_EDGE,
    INK_THRESHOLD,
)
from ..core_types import Coverage
from ..screen import ScreenContext, iter_candidates, smoothstep


def metaball_field(ctx: ScreenContext, channel: int) -> np.ndarray:
    """Summed metaball field (unbounded, >= 0) for one channel over the span."""
    field = np.zeros(ctx.px.shape, dtype=np.float64)
    for cand in iter_candidates(ctx, channel):
        r = cand.radius
        d = cand.dist
        near = (r > 0.0) & (d < r * INK_REACH)
        field += np.where(near, (r * r) / (d * d + INK_EPSILON), 0.0)
    return field


def synth_ink(ctx: ScreenContext, channel: int) -> Coverage:
    """Coverage in [0,1] for one channel over the span."""
    edge = ctx.params.softness * INK_SOFTNESS_EDGE + INK_BASE_EDGE
    field = metaball_field(ctx, channel)
    return smoothstep(INK_THRESHOLD - edge, INK_THRESHOLD + edge, field)


__all__ = ["metaball_field", "synth_ink"]

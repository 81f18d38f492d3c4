# cmyk_halftone/synth/dots.py
from __future__ import annotations

"""
Dots: overlapping discs, strongest candidate wins.

Taking the max (not the sum) keeps overlap zones from getting darker than a
single dot would make them.
"""

import numpy as np

from ..core_types import Coverage
from ..screen import ScreenContext, disc_value, iter_candidates


def synth_dots(ctx: ScreenContext, channel: int) -> Coverage:
    """Coverage in [0,1] for one channel over the span."""
    softness = ctx.params.softness
    total = np.zeros(ctx.px.shape, dtype=np.float64)
    for cand in iter_candidates(ctx, channel):
        np.maximum(total, disc_value(cand.dist, cand.radius, softness), out=total)
    return total


__all__ = ["synth_dots"]

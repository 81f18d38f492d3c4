# cmyk_halftone/synth/__init__.py
"""
Dot synthesis API.

Provides:
  synthesize(ctx, channel) -> Coverage
    Dispatch on ctx.params.render_mode to one of:

      synth_dots  : max over 3x3 soft/hard discs
      synth_ink   : thresholded metaball field over 3x3 candidates
      synth_sharp : single-sample, single-cell disc

    Args:
      ctx     : ScreenContext for a span of output rows
      channel : 0=C, 1=M, 2=Y, 3=K

    Returns:
      float64 [rows, width] coverage in [0,1].
"""

from typing import Callable, Dict

from ..core_types import Coverage
from ..mode import RenderMode
from ..screen import ScreenContext
from .dots import synth_dots
from .ink import synth_ink
from .sharp import synth_sharp

Synthesizer = Callable[[ScreenContext, int], Coverage]

SYNTHESIZERS: Dict[RenderMode, Synthesizer] = {
    "dots": synth_dots,
    "ink": synth_ink,
    "sharp": synth_sharp,
}


def synthesize(ctx: ScreenContext, channel: int) -> Coverage:
    try:
        fn = SYNTHESIZERS[ctx.params.render_mode]
    except KeyError:
        raise ValueError(f"invalid render mode {ctx.params.render_mode!r}") from None
    return fn(ctx, channel)


__all__ = [
    "Synthesizer",
    "SYNTHESIZERS",
    "synthesize",
    "synth_dots",
    "synth_ink",
    "synth_sharp",
]

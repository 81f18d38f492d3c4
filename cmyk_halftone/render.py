# cmyk_halftone/render.py
from __future__ import annotations

"""
Halftone renderer entry points.

Every output pixel is computed independently from the source image and the
parameter set, so the output is split into row spans that run on a thread
pool (NumPy releases the GIL in the heavy kernels). Spans write disjoint
rows of the result, and the result does not depend on the worker count.

Exports:
  render(source, width, height, params=None, *, workers=1) -> float32 [H,W,4]
  render_coverage(source, width, height, params=None, *, workers=1) -> float32 [4,H,W]
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, Tuple

import numpy as np

from .composite import composite_span
from .constants import MIN_ROWS_FOR_THREADS
from .core_types import (
    F32Buffer,
    F64Image,
    SourceLike,
    as_source_rgb,
    check_output_size,
)
from .params import HalftoneParams
from .presets import preset_params
from .sampling import pixel_centres
from .screen import ScreenContext
from .synth import synthesize
from .utils import split_rows_into_parts


def _prepare(
    source: SourceLike, width: int, height: int, params: Optional[HalftoneParams]
) -> Tuple[F64Image, int, int, HalftoneParams]:
    """Validate inputs up front; no pixel work happens before this passes."""
    width, height = check_output_size(width, height)
    rgb = as_source_rgb(source)
    if params is None:
        params = preset_params("default")
    return rgb, width, height, params.clamped()


def _span_context(
    rgb: F64Image, width: int, height: int, params: HalftoneParams, y0: int, y1: int
) -> ScreenContext:
    px, py = pixel_centres(y0, y1, width)
    return ScreenContext(
        source=rgb, width=width, height=height, params=params, px=px, py=py
    )


def _span_coverage(ctx: ScreenContext) -> np.ndarray:
    """[4, rows, W] float32 coverage for C, M, Y, K."""
    layers = [synthesize(ctx, ch) for ch in range(4)]
    return np.stack(layers, axis=0).astype(np.float32)


def _run_spans(
    height: int, workers: int, run_one: Callable[[int, int], None]
) -> None:
    """Run run_one(y0, y1) over row spans, threaded when worthwhile."""
    if workers <= 1 or height < MIN_ROWS_FOR_THREADS:
        run_one(0, height)
        return
    spans = split_rows_into_parts(height, workers)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(run_one, y0, y1) for y0, y1 in spans]
        for fut in futures:
            fut.result()


def render_coverage(
    source: SourceLike,
    width: int,
    height: int,
    params: Optional[HalftoneParams] = None,
    *,
    workers: int = 1,
) -> np.ndarray:
    """
    Per-channel ink coverage before compositing.

    Returns:
      float32 [4, height, width] in [0,1], channels in C, M, Y, K order.
    """
    rgb, width, height, params = _prepare(source, width, height, params)
    out = np.empty((4, height, width), dtype=np.float32)

    def run_one(y0: int, y1: int) -> None:
        ctx = _span_context(rgb, width, height, params, y0, y1)
        out[:, y0:y1] = _span_coverage(ctx)

    _run_spans(height, workers, run_one)
    return out


def render(
    source: SourceLike,
    width: int,
    height: int,
    params: Optional[HalftoneParams] = None,
    *,
    workers: int = 1,
) -> F32Buffer:
    """
    Render a CMYK halftone of `source` at width x height.

    Args:
      source : (H,W,3/4) uint8 or float image, or a Pillow image
      width, height : output size in pixels (>= 1); may differ from the source
      params : parameter set; clamped before use. None -> "default" preset
      workers: threads for row spans

    Returns:
      float32 [height, width, 4] RGBA in [0,1] with alpha = 1.

    Raises:
      InvalidInputError for an empty/malformed source or a non-positive size.
    """
    rgb, width, height, params = _prepare(source, width, height, params)
    out = np.empty((height, width, 4), dtype=np.float32)

    def run_one(y0: int, y1: int) -> None:
        ctx = _span_context(rgb, width, height, params, y0, y1)
        out[y0:y1] = composite_span(_span_coverage(ctx), ctx.px, ctx.py, params)

    _run_spans(height, workers, run_one)
    return out


__all__ = ["render", "render_coverage"]

from __future__ import annotations

import numpy as np
import pytest

from cmyk_halftone.params import HalftoneParams


@pytest.fixture
def mid_grey() -> np.ndarray:
    return np.full((100, 100, 3), 0.5, dtype=np.float64)


@pytest.fixture
def gradient() -> np.ndarray:
    """Colourful 48x64 float image with every channel varying."""
    h, w = 48, 64
    ys, xs = np.mgrid[0:h, 0:w].astype(np.float64)
    img = np.empty((h, w, 3), dtype=np.float64)
    img[..., 0] = xs / (w - 1)
    img[..., 1] = ys / (h - 1)
    img[..., 2] = 0.5 + 0.4 * np.sin(xs / 7.0) * np.cos(ys / 5.0)
    return img


@pytest.fixture
def print_params() -> HalftoneParams:
    """Pure process inks on white, 10px cells, no jitter or grain."""
    return HalftoneParams(
        dot_size=10.0,
        scale=1.0,
        grid_noise=0.0,
        softness=0.0,
        contrast=1.0,
    )

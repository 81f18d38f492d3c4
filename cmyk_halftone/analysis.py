# cmyk_halftone/analysis.py
from __future__ import annotations

"""
Coverage statistics for reports.
"""

from typing import List, Tuple

import numpy as np

from .constants import CHANNEL_LETTERS


def coverage_report(coverage: np.ndarray) -> List[Tuple[str, float, float]]:
    """
    Summarise a [4,H,W] coverage stack.

    Returns a list of (channel letter, mean coverage, share of pixels with any ink).
    """
    report: List[Tuple[str, float, float]] = []
    for letter, layer in zip(CHANNEL_LETTERS, coverage):
        arr = np.asarray(layer, dtype=np.float64)
        if arr.size == 0:
            report.append((letter, 0.0, 0.0))
            continue
        report.append((letter, float(arr.mean()), float(np.mean(arr > 0.0))))
    return report


__all__ = ["coverage_report"]

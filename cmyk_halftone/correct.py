# cmyk_halftone/correct.py
from __future__ import annotations

"""
Channel correction: gain scales a channel's range around 0, flood shifts it.
"""

import numpy as np

from .params import ChannelCorrection


def apply_gain_flood(value: np.ndarray, gain: float, flood: float) -> np.ndarray:
    """clip(value * (1 + gain) + flood, 0, 1). Returns float64."""
    arr = np.asarray(value, dtype=np.float64)
    return np.clip(arr * (1.0 + float(gain)) + float(flood), 0.0, 1.0)


def correct_channel(value: np.ndarray, correction: ChannelCorrection) -> np.ndarray:
    """apply_gain_flood with a ChannelCorrection."""
    return apply_gain_flood(value, correction.gain, correction.flood)


__all__ = ["apply_gain_flood", "correct_channel"]

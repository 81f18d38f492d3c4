# cmyk_halftone/noise.py
from __future__ import annotations

"""
Deterministic hash noise.

Everything here is a pure function of integer cell coordinates: the same cell
always gets the same value, neighbouring cells are uncorrelated, and no RNG
state is involved. Works on arrays of any shape.

Exports:
  hash_u32(ix, iy, seed)  -> uint32 array
  hash_unit(ix, iy, seed) -> float64 in [0,1)
  hash2(ix, iy)           -> (jx, jy) float64 in [-1,1)
  grain_noise(px, py, cell) -> float64 in [0,1)
"""

from typing import Tuple

import numpy as np

# Independent streams for the two jitter axes and the grain.
SEED_JITTER_X = 0x9E3779B9
SEED_JITTER_Y = 0x85EBCA6B
SEED_GRAIN = 0xC2B2AE35

_M1 = np.uint32(0x7FEB352D)
_M2 = np.uint32(0x846CA68B)
_KY = np.uint32(0x27D4EB2F)


def _to_u32(values: np.ndarray) -> np.ndarray:
    """Wrap signed integer coordinates into uint32 (two's complement)."""
    return (np.asarray(values, dtype=np.int64) & 0xFFFFFFFF).astype(np.uint32)


def _mix32(x: np.ndarray) -> np.ndarray:
    # lowbias32 finaliser; uint32 array arithmetic wraps.
    x = x ^ (x >> np.uint32(16))
    x = x * _M1
    x = x ^ (x >> np.uint32(15))
    x = x * _M2
    x = x ^ (x >> np.uint32(16))
    return x


def hash_u32(ix: np.ndarray, iy: np.ndarray, seed: int) -> np.ndarray:
    """32-bit hash of integer coordinate pairs."""
    ix, iy = np.broadcast_arrays(np.asarray(ix), np.asarray(iy))
    shape = ix.shape
    # Work on 1-D arrays so the arithmetic stays in wrapping array loops.
    x = np.atleast_1d(_to_u32(ix).reshape(-1))
    y = np.atleast_1d(_to_u32(iy).reshape(-1))
    s = np.uint32(seed & 0xFFFFFFFF)
    h = _mix32(x ^ s)
    h = _mix32(h ^ (y * _KY))
    return h.reshape(shape)


def hash_unit(ix: np.ndarray, iy: np.ndarray, seed: int) -> np.ndarray:
    """Hash to a float in [0,1) using the top 24 bits."""
    h = hash_u32(ix, iy, seed)
    return (h >> np.uint32(8)).astype(np.float64) / float(1 << 24)


def hash2(ix: np.ndarray, iy: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Per-cell 2D offset in [-1,1)^2."""
    jx = hash_unit(ix, iy, SEED_JITTER_X) * 2.0 - 1.0
    jy = hash_unit(ix, iy, SEED_JITTER_Y) * 2.0 - 1.0
    return jx, jy


def grain_noise(px: np.ndarray, py: np.ndarray, cell: float) -> np.ndarray:
    """
    Grain value in [0,1) for pixel positions (px, py).
    Positions are divided by `cell` (>= 1) and floored, so one value covers
    a cell x cell clump of pixels.
    """
    cell = max(1.0, float(cell))
    gx = np.floor(np.asarray(px, dtype=np.float64) / cell).astype(np.int64)
    gy = np.floor(np.asarray(py, dtype=np.float64) / cell).astype(np.int64)
    return hash_unit(gx, gy, SEED_GRAIN)


__all__ = ["hash_u32", "hash_unit", "hash2", "grain_noise"]

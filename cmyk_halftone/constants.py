"""
Global tunables used across the project.

- Screen geometry (angles, radius factors, jitter)
- Numeric guards (epsilons, minimums)
- Grain shaping
- Output sizing defaults
"""
from __future__ import annotations

import math
from typing import Tuple

# ==================
# Screen geometry
# ==================

# Ink channel order. Compositing runs in this order too.
CHANNEL_NAMES: Tuple[str, str, str, str] = ("cyan", "magenta", "yellow", "black")
CHANNEL_LETTERS: Tuple[str, str, str, str] = ("C", "M", "Y", "K")

# Base screen angle; each channel is offset from it to keep moiré low.
BASE_ANGLE_DEG: float = 15.0
ANGLE_OFFSETS_DEG: Tuple[float, float, float, float] = (0.0, 30.0, 15.0, 45.0)
SCREEN_ANGLES: Tuple[float, float, float, float] = tuple(  # type: ignore[assignment]
    math.radians(BASE_ANGLE_DEG + off) for off in ANGLE_OFFSETS_DEG
)

# Max dot radius as a fraction of the cell. Above 0.5 dots touch and overlap.
OVERLAP_RADIUS_FACTOR: float = 0.7
# Sharp mode samples one cell only, so no overlap budget.
SHARP_RADIUS_FACTOR: float = 0.5

# Jitter is bounded to half a cell at grid_noise=1.
JITTER_FACTOR: float = 0.5

# Neighbourhood half-width in cells (1 => 3x3).
NEIGHBOUR_RADIUS: int = 1

# ==================
# Metaball (ink)
# ==================
INK_EPSILON: float = 0.001
INK_THRESHOLD: float = 1.0
INK_BASE_EDGE: float = 0.1
INK_SOFTNESS_EDGE: float = 0.5
# Candidates farther than this many radii contribute nothing.
INK_REACH: float = 2.0

# ==================
# Grain
# ==================
GRAIN_SIZE_FACTOR: float = 5.0
GRAIN_MIX_CAP: float = 0.3
GRAIN_OVERLAY_BASE: float = 0.5

# ==================
# Parameter ranges
# ==================
MIN_POSITIVE: float = 1e-3
UNIT_RANGE: Tuple[float, float] = (0.0, 1.0)
SIGNED_UNIT_RANGE: Tuple[float, float] = (-1.0, 1.0)
# Finite ceilings for the open-ended fields.
MAX_DOT_SIZE: float = 1200.0
MAX_SCALE: float = 100.0
MAX_CONTRAST: float = 100.0
MAX_GRAIN_SIZE: float = 1200.0
CONTRAST_PIVOT: float = 0.5

# ==================
# Sizing / IO
# ==================
MAX_OUTPUT_SIZE: int = 1200
OUTPUT_SUFFIX: str = "_halftone"
IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".webp", ".bmp", ".tif", ".tiff"}

# Below this many rows the threaded path is not worth it.
MIN_ROWS_FOR_THREADS: int = 64

# cmyk_halftone/__init__.py
"""
cmyk_halftone package.

Purpose:
  Render retro CMYK print halftones from photos. See halftone.py for the CLI.

Public API:
  render          : full render to a float32 RGBA buffer.
  render_coverage : per-channel ink coverage before compositing.
  HalftoneParams  : immutable parameter set (clamped before use).
  ChannelCorrection: per-channel gain/flood.
  preset_params   : named presets ("default", "drops", "newspaper", "vintage").
  InvalidInputError: raised for empty sources or non-positive output sizes.
  colour_convert  : RGB <-> CMYK helpers.
  image_io        : load / fit / save helpers.
  utils           : shared helpers (formatting, logging).

Quick start:
  from cmyk_halftone import render, preset_params
  from cmyk_halftone.image_io import load_image_rgb, fit_within, save_png_rgba
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import colour_convert
from . import core_types
from . import image_io
from . import presets
from . import synth
from . import utils

from .core_types import InvalidInputError
from .mode import RenderMode, resolve_mode
from .params import ChannelCorrection, HalftoneParams
from .presets import PRESETS, STARTUP_PARAMS, preset_names, preset_params
from .render import render, render_coverage

__all__ = [
    "__version__",
    "colour_convert",
    "core_types",
    "image_io",
    "presets",
    "synth",
    "utils",
    "InvalidInputError",
    "RenderMode",
    "resolve_mode",
    "ChannelCorrection",
    "HalftoneParams",
    "PRESETS",
    "STARTUP_PARAMS",
    "preset_names",
    "preset_params",
    "render",
    "render_coverage",
]

# cmyk_halftone/presets.py
from __future__ import annotations

"""
Preset definitions and builders.

Presets are stored in control-panel units: percentages for the normalised
sliders, the raw dot size, a numeric type code and hex colours. preset_params()
converts one into a clamped HalftoneParams.

Exports:
  PRESETS: dict[str, dict]       # name -> raw preset
  STARTUP_PARAMS: HalftoneParams # initial state of the interactive tool
  preset_names() -> list[str]
  preset_params(name) -> HalftoneParams
  params_from_preset(raw) -> HalftoneParams
"""

from typing import Any, Dict, List, Mapping

from .constants import CHANNEL_LETTERS
from .core_types import hex_to_rgb_float
from .mode import MODE_CODES
from .params import ChannelCorrection, HalftoneParams


PRESETS: Dict[str, Dict[str, Any]] = {
    "default": {
        "type": 0,
        "size": 10,
        "gridNoise": 0,
        "softness": 0,
        "contrast": 100,
        "scale": 100,
        "colorC": "#00FFFF",
        "colorM": "#FF00FF",
        "colorY": "#FFFF00",
        "colorK": "#000000",
        "colorBg": "#FFFFFF",
        "gainC": 0,
        "gainM": 0,
        "gainY": 0,
        "gainK": 0,
        "floodC": 0,
        "floodM": 0,
        "floodY": 0,
        "floodK": 0,
        "grainMixing": 0,
        "grainOverlay": 0,
        "grainSize": 0,
    },
    "drops": {
        "type": 1,
        "size": 88,
        "gridNoise": 50,
        "softness": 0,
        "contrast": 115,
        "scale": 100,
        "colorC": "#00B2FF",
        "colorM": "#FC4F4F",
        "colorY": "#FFD900",
        "colorK": "#231F20",
        "colorBg": "#EEEFD7",
        "gainC": 100,
        "gainM": 44,
        "gainY": -100,
        "gainK": 0,
        "floodC": 15,
        "floodM": 0,
        "floodY": 0,
        "floodK": 0,
        "grainMixing": 5,
        "grainOverlay": 25,
        "grainSize": 1,
    },
    "newspaper": {
        "type": 0,
        "size": 1,
        "gridNoise": 60,
        "softness": 20,
        "contrast": 200,
        "scale": 100,
        "colorC": "#7A7A75",
        "colorM": "#7A7A75",
        "colorY": "#7A7A75",
        "colorK": "#231F20",
        "colorBg": "#F2F1E8",
        "gainC": -17,
        "gainM": -45,
        "gainY": -45,
        "gainK": 0,
        "floodC": 0,
        "floodM": 0,
        "floodY": 0,
        "floodK": 10,
        "grainMixing": 0,
        "grainOverlay": 20,
        "grainSize": 0,
    },
    "vintage": {
        "type": 2,
        "size": 20,
        "gridNoise": 45,
        "softness": 40,
        "contrast": 125,
        "scale": 100,
        "colorC": "#59AFC5",
        "colorM": "#D8697C",
        "colorY": "#FAD85C",
        "colorK": "#2D2824",
        "colorBg": "#FFFAF0",
        "gainC": 30,
        "gainM": 0,
        "gainY": 20,
        "gainK": 0,
        "floodC": 15,
        "floodM": 0,
        "floodY": 0,
        "floodK": 0,
        "grainMixing": 15,
        "grainOverlay": 10,
        "grainSize": 50,
    },
}


def params_from_preset(raw: Mapping[str, Any]) -> HalftoneParams:
    """
    Convert a raw preset (control-panel units) into a clamped HalftoneParams.

    size is taken as-is; every other slider value is a percentage.
    """

    def pct(key: str) -> float:
        return float(raw[key]) / 100.0

    corrections = [
        ChannelCorrection(gain=pct(f"gain{c}"), flood=pct(f"flood{c}"))
        for c in CHANNEL_LETTERS
    ]
    params = HalftoneParams(
        dot_size=float(raw["size"]),
        grid_noise=pct("gridNoise"),
        render_mode=MODE_CODES[int(raw["type"])],
        softness=pct("softness"),
        contrast=pct("contrast"),
        scale=pct("scale"),
        cyan=corrections[0],
        magenta=corrections[1],
        yellow=corrections[2],
        black=corrections[3],
        grain_mixing=pct("grainMixing"),
        grain_overlay=pct("grainOverlay"),
        grain_size=pct("grainSize"),
        colour_c=hex_to_rgb_float(raw["colorC"]),
        colour_m=hex_to_rgb_float(raw["colorM"]),
        colour_y=hex_to_rgb_float(raw["colorY"]),
        colour_k=hex_to_rgb_float(raw["colorK"]),
        colour_bg=hex_to_rgb_float(raw["colorBg"]),
    )
    return params.clamped()


def preset_names() -> List[str]:
    return list(PRESETS)


def preset_params(name: str) -> HalftoneParams:
    """Look up a preset by name (case-insensitive) and convert it."""
    key = name.strip().lower()
    if key not in PRESETS:
        raise KeyError(
            f"unknown preset {name!r}; expected one of {', '.join(PRESETS)}"
        )
    return params_from_preset(PRESETS[key])


# Initial state of the interactive tool before any preset is applied.
STARTUP_PARAMS = HalftoneParams(
    dot_size=88.0,
    grid_noise=0.50,
    render_mode="ink",
    softness=0.0,
    contrast=1.15,
    scale=1.0,
    cyan=ChannelCorrection(gain=1.0, flood=0.15),
    magenta=ChannelCorrection(gain=0.44, flood=0.0),
    yellow=ChannelCorrection(gain=-1.0, flood=0.0),
    black=ChannelCorrection(gain=0.0, flood=0.0),
    grain_mixing=0.05,
    grain_overlay=0.25,
    grain_size=0.01,
    colour_c=(0.0, 0.698, 1.0),
    colour_m=(0.988, 0.31, 0.31),
    colour_y=(1.0, 0.85, 0.0),
    colour_k=(0.137, 0.122, 0.125),
    colour_bg=(0.933, 0.937, 0.843),
)


__all__ = [
    "PRESETS",
    "STARTUP_PARAMS",
    "preset_names",
    "preset_params",
    "params_from_preset",
]

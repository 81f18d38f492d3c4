# cmyk_halftone/params.py
from __future__ import annotations

"""
Parameter Set value objects.

Exports:
  ChannelCorrection(gain, flood)
  HalftoneParams(...)             immutable per-render parameter set
  HalftoneParams.clamped()        every field forced into its documented range
  HalftoneParams.from_mapping(d)  build from a flat dict (JSON files, CLI)
  HalftoneParams.with_overrides() copy with selected fields replaced

Ranges (out-of-range values are clamped, never rejected):
  dot_size               [MIN_POSITIVE, MAX_DOT_SIZE]
  scale                  [MIN_POSITIVE, MAX_SCALE]
  grid_noise, softness   [0,1]
  contrast               [0, MAX_CONTRAST]
  gain, flood            [-1,1] per channel
  grain_mixing/overlay   [0,1]
  grain_size             [0, MAX_GRAIN_SIZE]
  colours                [0,1]^3
NaN falls back to the field default (0 for gain, flood, grain and colours).
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Sequence, Tuple, Union

from .constants import (
    CHANNEL_LETTERS,
    CHANNEL_NAMES,
    MAX_CONTRAST,
    MAX_DOT_SIZE,
    MAX_GRAIN_SIZE,
    MAX_SCALE,
    MIN_POSITIVE,
    SIGNED_UNIT_RANGE,
    UNIT_RANGE,
)
from .core_types import RGBFloat, clamp_value, coerce_rgb_float, rgb_float_to_hex
from .mode import RenderMode, resolve_mode


@dataclass(frozen=True)
class ChannelCorrection:
    """Per-channel gain (range scaling around 0) and flood (constant offset)."""

    gain: float = 0.0
    flood: float = 0.0

    def clamped(self) -> "ChannelCorrection":
        lo, hi = SIGNED_UNIT_RANGE
        return ChannelCorrection(
            gain=clamp_value(float(self.gain), lo, hi, 0.0),
            flood=clamp_value(float(self.flood), lo, hi, 0.0),
        )


@dataclass(frozen=True)
class HalftoneParams:
    """Everything a single render needs besides the source image and size."""

    dot_size: float = 10.0
    grid_noise: float = 0.0
    render_mode: RenderMode = "dots"
    softness: float = 0.0
    contrast: float = 1.0
    scale: float = 1.0

    cyan: ChannelCorrection = field(default_factory=ChannelCorrection)
    magenta: ChannelCorrection = field(default_factory=ChannelCorrection)
    yellow: ChannelCorrection = field(default_factory=ChannelCorrection)
    black: ChannelCorrection = field(default_factory=ChannelCorrection)

    grain_mixing: float = 0.0
    grain_overlay: float = 0.0
    grain_size: float = 0.0

    colour_c: RGBFloat = (0.0, 1.0, 1.0)
    colour_m: RGBFloat = (1.0, 0.0, 1.0)
    colour_y: RGBFloat = (1.0, 1.0, 0.0)
    colour_k: RGBFloat = (0.0, 0.0, 0.0)
    colour_bg: RGBFloat = (1.0, 1.0, 1.0)

    # Derived views

    @property
    def grid_size(self) -> float:
        """Halftone cell size in output pixels."""
        return self.dot_size * self.scale

    @property
    def corrections(self) -> Tuple[ChannelCorrection, ...]:
        """Gain/flood pairs in channel order C, M, Y, K."""
        return (self.cyan, self.magenta, self.yellow, self.black)

    @property
    def ink_colours(self) -> Tuple[RGBFloat, ...]:
        """Ink colours in channel order C, M, Y, K."""
        return (self.colour_c, self.colour_m, self.colour_y, self.colour_k)

    @property
    def grain_enabled(self) -> bool:
        return self.grain_overlay > 0.0 or self.grain_mixing > 0.0

    # Normalisation

    def clamped(self) -> "HalftoneParams":
        """Return a copy with every field clamped to its documented range."""
        u_lo, u_hi = UNIT_RANGE
        d = _DEFAULTS
        return HalftoneParams(
            dot_size=clamp_value(
                float(self.dot_size), MIN_POSITIVE, MAX_DOT_SIZE, d.dot_size
            ),
            grid_noise=clamp_value(float(self.grid_noise), u_lo, u_hi, d.grid_noise),
            render_mode=resolve_mode(self.render_mode),
            softness=clamp_value(float(self.softness), u_lo, u_hi, d.softness),
            contrast=clamp_value(float(self.contrast), 0.0, MAX_CONTRAST, d.contrast),
            scale=clamp_value(float(self.scale), MIN_POSITIVE, MAX_SCALE, d.scale),
            cyan=self.cyan.clamped(),
            magenta=self.magenta.clamped(),
            yellow=self.yellow.clamped(),
            black=self.black.clamped(),
            grain_mixing=clamp_value(float(self.grain_mixing), u_lo, u_hi),
            grain_overlay=clamp_value(float(self.grain_overlay), u_lo, u_hi),
            grain_size=clamp_value(float(self.grain_size), 0.0, MAX_GRAIN_SIZE),
            colour_c=coerce_rgb_float(self.colour_c),
            colour_m=coerce_rgb_float(self.colour_m),
            colour_y=coerce_rgb_float(self.colour_y),
            colour_k=coerce_rgb_float(self.colour_k),
            colour_bg=coerce_rgb_float(self.colour_bg),
        )

    # Marshaling

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "HalftoneParams":
        """
        Build from a flat mapping.

        Accepts the field names above plus:
          gain_c / flood_c ... gain_k / flood_k   per-channel corrections
          gain / flood                            4-length sequences (C, M, Y, K)
          mode                                    alias for render_mode
        Colours may be hex strings or float triples. Unknown keys raise KeyError.
        """
        return cls().with_overrides(**dict(data))

    def with_overrides(self, **overrides: Any) -> "HalftoneParams":
        """Copy with selected fields replaced; see from_mapping for accepted keys."""
        known = {f.name for f in fields(self)}
        plain: Dict[str, Any] = {}
        corr: Dict[str, Dict[str, float]] = {}

        for key, value in overrides.items():
            if value is None:
                continue
            if key == "mode":
                key = "render_mode"
            if key in ("gain", "flood"):
                values = _four_floats(key, value)
                for name, v in zip(CHANNEL_NAMES, values):
                    corr.setdefault(name, {})[key] = v
                continue
            if key.startswith(("gain_", "flood_")):
                kind, _, letter = key.partition("_")
                name = _channel_name(letter)
                corr.setdefault(name, {})[kind] = float(value)
                continue
            if key not in known or key in CHANNEL_NAMES:
                raise KeyError(f"unknown parameter {key!r}")
            if key == "render_mode":
                plain[key] = resolve_mode(value)
            elif key.startswith("colour_"):
                plain[key] = coerce_rgb_float(value)
            else:
                plain[key] = float(value)

        for name, parts in corr.items():
            base: ChannelCorrection = getattr(self, name)
            plain[name] = replace(base, **parts)
        return replace(self, **plain)

    def to_mapping(self) -> Dict[str, Any]:
        """Flat JSON-friendly view (colours as hex); inverse of from_mapping."""
        out: Dict[str, Any] = {
            "dot_size": self.dot_size,
            "grid_noise": self.grid_noise,
            "render_mode": self.render_mode,
            "softness": self.softness,
            "contrast": self.contrast,
            "scale": self.scale,
        }
        for letter, corr in zip(CHANNEL_LETTERS, self.corrections):
            out[f"gain_{letter.lower()}"] = corr.gain
            out[f"flood_{letter.lower()}"] = corr.flood
        out["grain_mixing"] = self.grain_mixing
        out["grain_overlay"] = self.grain_overlay
        out["grain_size"] = self.grain_size
        for key in ("colour_c", "colour_m", "colour_y", "colour_k", "colour_bg"):
            out[key] = rgb_float_to_hex(getattr(self, key))
        return out


_DEFAULTS = HalftoneParams()


def _channel_name(letter: str) -> str:
    s = letter.strip().upper()
    if s not in CHANNEL_LETTERS:
        raise KeyError(f"unknown channel {letter!r}")
    return CHANNEL_NAMES[CHANNEL_LETTERS.index(s)]


def _four_floats(key: str, value: Union[Sequence[float], float]) -> Tuple[float, ...]:
    if isinstance(value, (int, float)):
        return (float(value),) * 4
    values = tuple(float(v) for v in value)
    if len(values) != 4:
        raise ValueError(f"{key} expects 4 values (C M Y K), got {len(values)}")
    return values


__all__ = ["ChannelCorrection", "HalftoneParams"]

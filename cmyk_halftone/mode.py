# cmyk_halftone/mode.py
from __future__ import annotations
from typing import Dict, Literal, Union, cast

"""
Render mode selection helpers.

Exports:
- RenderMode = Literal["dots", "ink", "sharp"]
- MODE_CODES: numeric codes used by presets (0 dots, 1 ink, 2 sharp)
- resolve_mode(value) -> RenderMode

Notes:
- Names are case-insensitive. Numeric codes may be ints or digit strings.
"""


RenderMode = Literal["dots", "ink", "sharp"]

RENDER_MODES: tuple[RenderMode, ...] = ("dots", "ink", "sharp")

MODE_CODES: Dict[int, RenderMode] = {0: "dots", 1: "ink", 2: "sharp"}


def resolve_mode(value: Union[str, int]) -> RenderMode:
    """
    Resolve a user-supplied mode into a concrete one.
    - "dots" / "ink" / "sharp" stay as is
    - 0 / 1 / 2 (or "0" / "1" / "2") map through MODE_CODES
    """
    if isinstance(value, bool):
        raise ValueError(f"invalid render mode {value!r}")
    if isinstance(value, int):
        if value not in MODE_CODES:
            raise ValueError(f"invalid render mode code {value}")
        return MODE_CODES[value]
    s = str(value).strip().lower()
    if s.isdigit():
        return resolve_mode(int(s))
    if s not in RENDER_MODES:
        raise ValueError(
            f"invalid render mode {value!r}; expected one of {', '.join(RENDER_MODES)}"
        )
    return cast(RenderMode, s)


def mode_code(mode: RenderMode) -> int:
    """Inverse of MODE_CODES."""
    for code, name in MODE_CODES.items():
        if name == mode:
            return code
    raise ValueError(f"invalid render mode {mode!r}")


__all__ = ["RenderMode", "RENDER_MODES", "MODE_CODES", "resolve_mode", "mode_code"]

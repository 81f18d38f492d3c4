# cmyk_halftone/utils.py
from __future__ import annotations

"""
Shared utilities for cmyk_halftone.

Includes duration formatting, row partitioning for the threaded renderer,
worker-count defaults, and tidy console logging used by the CLI.
"""

import os
import sys
from typing import Any, Iterable, List, Optional, TextIO, Tuple


#  Time formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


def format_total_duration_compact(seconds: float) -> str:
    """Compact total duration: 'Mm Ss', 'Ss.s', or 'ms'."""
    if seconds >= 60.0:
        minutes = int(seconds // 60)
        return f"{minutes}m {int(round(seconds - 60 * minutes))}s"
    if seconds >= 1.0:
        return f"{seconds:.1f}s"
    return f"{seconds * 1000.0:.1f}ms"


# Work splitting


def default_workers() -> int:
    """Leave a few cores free for the system; returns a sensible worker count."""
    n = os.cpu_count() or 4
    reserve = 1 if n <= 6 else 2 if n <= 12 else 3
    return max(1, n - reserve)


def split_rows_into_parts(height: int, parts: int) -> List[Tuple[int, int]]:
    """Partition range [0, height) into ~parts contiguous [start, end) row spans."""
    parts = max(1, int(parts))
    step = max(1, (height + parts - 1) // parts)
    return [(start, min(start + step, height)) for start in range(0, height, step)]


#  CLI / progress logging


def enable_line_buffered_stdout() -> None:
    """Line-buffer stdout when the stream supports reconfigure()."""
    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (OSError, ValueError):
            pass


# Pretty logging


def format_bool_on_off(value: Any) -> str:
    """Pretty boolean: 'on'/'off' for bools; str(value) otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """1,234 for ints; trimmed 3-decimal floats; passthrough otherwise."""
    if isinstance(value, bool):
        return format_bool_on_off(value)
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        return f"{value:.3f}".rstrip("0").rstrip(".")
    return str(value)


def format_percentage(x: float, decimals: int = 1) -> str:
    """Format a 0..1 fraction as a percentage."""
    return f"{x * 100.0:.{decimals}f}%"


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """Format (name, value) pairs as 'Name: value' blocks separated by sep."""
    return sep.join(f"{name}{eq}{format_number_compact(value)}" for name, value in pairs)


def print_config_line(
    section: str,
    pairs: Iterable[Tuple[str, Any]],
    debug: bool,
    out: Optional[TextIO] = None,
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [render] Mode: ink  Grid: 88  Workers: 8
    Routes to debug_log() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line, out)


# Every helper below writes to `out` when given. Concurrent file jobs pass
# their own buffer so lines never cross between jobs; sys.stdout is never
# swapped.


def _stream(out: Optional[TextIO], fallback: TextIO) -> TextIO:
    return fallback if out is None else out


def print_banner(title: str, out: Optional[TextIO] = None) -> None:
    """Section banner."""
    print(f"\n=== {title} ===", file=_stream(out, sys.stdout), flush=True)


def log(message: str, out: Optional[TextIO] = None) -> None:
    """Plain log line."""
    print(message, file=_stream(out, sys.stdout), flush=True)


def debug_log(message: str, out: Optional[TextIO] = None) -> None:
    """Debug log line."""
    print(f"[debug] {message}", file=_stream(out, sys.stdout), flush=True)


def warn(message: str, out: Optional[TextIO] = None) -> None:
    """Warning log line."""
    print(f"[warn] {message}", file=_stream(out, sys.stdout), flush=True)


def error(message: str, out: Optional[TextIO] = None) -> None:
    """Error log line; stderr unless a stream is given."""
    print(f"[error] {message}", file=_stream(out, sys.stderr), flush=True)


__all__ = [
    "format_seconds_compact",
    "format_total_duration_compact",
    "default_workers",
    "split_rows_into_parts",
    "enable_line_buffered_stdout",
    "format_bool_on_off",
    "format_number_compact",
    "format_percentage",
    "key_value_pairs_to_string",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
]

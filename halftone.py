#!/usr/bin/env python3
"""
halftone.py
Render retro CMYK print halftones from photos.

Usage:
  python halftone.py INPUT [--outdir DIR] --preset [default|drops|newspaper|vintage]
                     --mode [dots|ink|sharp] --max-size N --debug

Modes:
  dots  : overlapping round dots, strongest dot wins.
  ink   : gooey metaball blobs that merge where inks pile up.
  sharp : one sample per pixel, dots clipped to their cell.

Input:
  Any Pillow-readable image, or a folder of them. Transparent areas print as paper.

Output:
  PNG. Writes <stem>_halftone.png next to INPUT (or into --outdir).

Notes:
  Parameters start from --preset, then --params FILE.json, then individual flags.
  CPU bound. Rows are rendered on a thread pool (--workers); folders can
  process several files at once (--jobs).
"""

from __future__ import annotations

import argparse
import io
import json
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO, Tuple

from cmyk_halftone.analysis import coverage_report
from cmyk_halftone.composite import composite_span
from cmyk_halftone.constants import IMAGE_EXTS, MAX_OUTPUT_SIZE, OUTPUT_SUFFIX
from cmyk_halftone.image_io import fit_within, load_image_rgb, save_png_rgba
from cmyk_halftone.mode import RENDER_MODES
from cmyk_halftone.params import HalftoneParams
from cmyk_halftone.presets import preset_names, preset_params
from cmyk_halftone.render import render, render_coverage
from cmyk_halftone.sampling import pixel_centres
from cmyk_halftone.utils import (
    debug_log,
    default_workers,
    enable_line_buffered_stdout,
    error,
    format_percentage,
    format_seconds_compact,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    warn,
)

# CLI args


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments for halftone rendering.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        outdir: optional Path for outputs
        preset: base preset name
        params: optional JSON parameter file
        mode / dot_size / ... : optional per-parameter overrides (None = keep)
        max_size: output size cap (longest side)
        jobs: parallel file workers
        workers: row threads per render
        debug: bool for verbose details
    """
    parser = argparse.ArgumentParser(
        prog="halftone",
        description="Render CMYK print halftones from photos.",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument(
        "--outdir", type=Path, default=None, help="Output directory (optional)"
    )
    parser.add_argument(
        "--preset", choices=preset_names(), default="default", help="Base preset."
    )
    parser.add_argument(
        "--params", type=Path, default=None, help="JSON file of parameter overrides"
    )
    parser.add_argument("--mode", choices=list(RENDER_MODES), default=None)
    parser.add_argument("--dot-size", type=float, default=None, help="Cell size in px")
    parser.add_argument("--grid-noise", type=float, default=None, help="0..1 jitter")
    parser.add_argument("--softness", type=float, default=None, help="0..1 edge feather")
    parser.add_argument("--contrast", type=float, default=None, help="1 = unchanged")
    parser.add_argument("--scale", type=float, default=None, help="Cell size multiplier")
    parser.add_argument(
        "--gain", type=float, nargs=4, metavar=("C", "M", "Y", "K"), default=None
    )
    parser.add_argument(
        "--flood", type=float, nargs=4, metavar=("C", "M", "Y", "K"), default=None
    )
    parser.add_argument("--grain-mixing", type=float, default=None)
    parser.add_argument("--grain-overlay", type=float, default=None)
    parser.add_argument("--grain-size", type=float, default=None)
    for letter, label in (
        ("c", "cyan"),
        ("m", "magenta"),
        ("y", "yellow"),
        ("k", "black"),
        ("bg", "background"),
    ):
        parser.add_argument(
            f"--colour-{letter}", default=None, metavar="HEX", help=f"{label} colour"
        )
    parser.add_argument(
        "--max-size",
        type=int,
        default=MAX_OUTPUT_SIZE,
        help="Scale down so both sides are <= N. 0 disables.",
    )
    parser.add_argument(
        "--jobs", type=int, default=1, help="Files processed in parallel"
    )
    parser.add_argument(
        "--workers", type=int, default=default_workers(), help="Row threads per render"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose render details")
    return parser.parse_args(argv)


def build_params(args: argparse.Namespace) -> HalftoneParams:
    """Preset -> JSON file -> individual flags, then clamp."""
    params = preset_params(args.preset)
    if args.params is not None:
        with open(args.params, "r", encoding="utf-8") as fh:
            data: Dict[str, Any] = json.load(fh)
        params = params.with_overrides(**data)
    params = params.with_overrides(
        render_mode=args.mode,
        dot_size=args.dot_size,
        grid_noise=args.grid_noise,
        softness=args.softness,
        contrast=args.contrast,
        scale=args.scale,
        gain=args.gain,
        flood=args.flood,
        grain_mixing=args.grain_mixing,
        grain_overlay=args.grain_overlay,
        grain_size=args.grain_size,
        colour_c=args.colour_c,
        colour_m=args.colour_m,
        colour_y=args.colour_y,
        colour_k=args.colour_k,
        colour_bg=args.colour_bg,
    )
    return params.clamped()


def output_path_for(src_path: Path, outdir: Optional[Path]) -> Path:
    name = f"{src_path.stem}{OUTPUT_SUFFIX}.png"
    return (outdir / name) if outdir else src_path.with_name(name)


def list_inputs(src: Path) -> Tuple[List[Path], int]:
    """Image files in a folder (sorted, own outputs skipped) and the entry count."""
    entries = list(src.iterdir())
    files = [
        p
        for p in entries
        if p.is_file()
        and p.suffix.lower() in IMAGE_EXTS
        and not p.stem.endswith(OUTPUT_SUFFIX)
    ]
    files.sort(key=lambda p: p.name.lower())
    return files, len(entries)


# Per-file processing


def _process_single_image(
    src_path: Path,
    out_path: Path,
    params: HalftoneParams,
    max_size: int,
    workers: int,
    debug: bool,
    out: Optional[TextIO] = None,
) -> None:
    """
    Process a single image path end-to-end:
      load -> pick output size -> render -> save -> report.
    All report lines go to `out` (stdout when None).
    """
    t_start = time.perf_counter()
    print_banner(src_path.name, out)

    rgb = load_image_rgb(src_path)
    src_h, src_w = rgb.shape[0], rgb.shape[1]
    out_w, out_h = fit_within(src_w, src_h, max_size)
    t_loaded = time.perf_counter()

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [("Loaded", f"{src_w}x{src_h}"), ("Output", f"{out_w}x{out_h}")]
            ),
            out,
        )

    if debug:
        # Two passes so the per-channel coverage can be reported.
        coverage = render_coverage(rgb, out_w, out_h, params, workers=workers)
        px, py = pixel_centres(0, out_h, out_w)
        buffer = composite_span(coverage, px, py, params)
        for letter, mean, share in coverage_report(coverage):
            debug_log(
                f"  {letter}: mean={format_percentage(mean)}  inked={format_percentage(share)}",
                out,
            )
    else:
        buffer = render(rgb, out_w, out_h, params, workers=workers)
    t_rendered = time.perf_counter()

    written = save_png_rgba(out_path, buffer)
    t_saved = time.perf_counter()

    log(
        f"Wrote {written.name} | size={out_w}x{out_h} | mode={params.render_mode}",
        out,
    )
    if debug:
        render_secs = t_rendered - t_loaded
        if render_secs > 0:
            mpx = (out_w * out_h) / 1e6
            debug_log(
                f"throughput {mpx / render_secs:.2f} MPx/s  ({mpx:.2f} MPx in {format_seconds_compact(render_secs)})",
                out,
            )
        debug_log(
            f"Total {format_total_duration_compact(t_saved - t_start)}  "
            f"(load={format_seconds_compact(t_loaded - t_start)}, "
            f"render={format_seconds_compact(t_rendered - t_loaded)}, "
            f"save={format_seconds_compact(t_saved - t_rendered)})",
            out,
        )
    else:
        log(f"Total time {format_total_duration_compact(t_saved - t_start)}", out)


def _process_one_live(
    path: Path,
    params: HalftoneParams,
    max_size: int,
    workers: int,
    debug: bool,
    outdir: Optional[Path],
    out: Optional[TextIO] = None,
) -> bool:
    """
    Process a single file and stream logs to `out` (stdout/stderr when None).
    Returns success.
    """
    try:
        _process_single_image(
            path, output_path_for(path, outdir), params, max_size, workers, debug, out
        )
    except (OSError, ValueError) as e:
        error(f"{path.name}: {e}", out)
        return False
    return True


def _process_one_captured(
    path: Path,
    params: HalftoneParams,
    max_size: int,
    workers: int,
    debug: bool,
    outdir: Optional[Path],
) -> Tuple[str, bool]:
    """
    Process a single file into a private buffer, errors included.

    Used for concurrent execution so each file's block prints in order.
    """
    buf = io.StringIO()
    ok = _process_one_live(path, params, max_size, workers, debug, outdir, buf)
    return buf.getvalue(), ok


# Entry point


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Handles single file or folder. In folder mode supports --jobs parallelism
    while preserving readable output ordering. Returns the process exit code.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    src = args.src
    if not src.exists():
        error(f"not found: {src}")
        return 2

    try:
        params = build_params(args)
    except (OSError, ValueError, KeyError) as e:
        error(f"bad parameters: {e}")
        return 2

    print_config_line(
        "run",
        [
            ("Preset", args.preset),
            ("Workers", args.workers),
            ("Jobs", args.jobs),
            ("Debug", args.debug),
        ],
        debug=False,
    )
    if args.debug:
        debug_log(key_value_pairs_to_string(sorted(params.to_mapping().items())))
    if args.outdir is not None:
        args.outdir.mkdir(parents=True, exist_ok=True)

    if not src.is_dir():
        ok = _process_one_live(
            src, params, args.max_size, args.workers, args.debug, args.outdir
        )
        return 0 if ok else 1

    files, n_entries = list_inputs(src)
    if not files:
        warn(f"no images in {src}")
    if args.debug:
        debug_log(
            key_value_pairs_to_string(
                [("Folder entries", n_entries), ("Images", len(files))]
            )
        )

    results: List[bool] = []
    if args.jobs <= 1:
        for p in files:
            results.append(
                _process_one_live(
                    p, params, args.max_size, args.workers, args.debug, args.outdir
                )
            )
    else:
        with ThreadPoolExecutor(max_workers=args.jobs) as ex:
            futures = [
                ex.submit(
                    _process_one_captured,
                    p,
                    params,
                    args.max_size,
                    args.workers,
                    args.debug,
                    args.outdir,
                )
                for p in files
            ]
            blocks = [f.result() for f in futures]
        print("".join(text for text, _ in blocks), end="", flush=True)
        results = [ok for _, ok in blocks]

    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())

import json
import sys

import numpy as np
import pytest
from PIL import Image

import halftone


@pytest.fixture
def photo(tmp_path):
    ys, xs = np.mgrid[0:30, 0:40]
    arr = np.stack(
        [xs * 6, ys * 8, np.full_like(xs, 128)], axis=-1
    ).astype(np.uint8)
    path = tmp_path / "photo.png"
    Image.fromarray(arr).save(path)
    return path


def test_single_file_writes_rgba_png(photo, capsys):
    assert halftone.main([str(photo), "--workers", "1"]) == 0
    out = photo.with_name("photo_halftone.png")
    with Image.open(out) as im:
        assert im.mode == "RGBA"
        assert im.size == (40, 30)
    assert "Wrote photo_halftone.png" in capsys.readouterr().out


def test_max_size_scales_output(photo, tmp_path):
    outdir = tmp_path / "out"
    code = halftone.main(
        [str(photo), "--outdir", str(outdir), "--max-size", "20", "--workers", "1"]
    )
    assert code == 0
    with Image.open(outdir / "photo_halftone.png") as im:
        assert im.size == (20, 15)


def test_folder_skips_previous_outputs(photo, tmp_path):
    Image.new("RGB", (12, 9), (10, 200, 30)).save(tmp_path / "second.jpg")
    Image.new("RGB", (5, 5)).save(tmp_path / "old_halftone.png")
    (tmp_path / "notes.txt").write_text("hello")
    outdir = tmp_path / "out"

    code = halftone.main(
        [str(tmp_path), "--outdir", str(outdir), "--jobs", "2", "--workers", "1"]
    )
    assert code == 0
    names = sorted(p.name for p in outdir.iterdir())
    assert names == ["photo_halftone.png", "second_halftone.png"]


def test_unreadable_file_fails_the_run(photo, tmp_path):
    (tmp_path / "broken.png").write_bytes(b"garbage")
    code = halftone.main([str(tmp_path), "--workers", "1"])
    assert code == 1
    assert (tmp_path / "photo_halftone.png").exists()


def test_missing_source(tmp_path, capsys):
    assert halftone.main([str(tmp_path / "nothing.png")]) == 2
    assert "not found" in capsys.readouterr().err


def test_json_params_and_debug_report(photo, tmp_path, capsys):
    params = tmp_path / "p.json"
    params.write_text(json.dumps({"render_mode": "sharp", "dot_size": 4, "colour_bg": "#EEEFD7"}))
    code = halftone.main(
        [str(photo), "--params", str(params), "--debug", "--workers", "1"]
    )
    assert code == 0
    out = capsys.readouterr().out
    assert "mode=sharp" in out
    assert "[debug]" in out
    for letter in "CMYK":
        assert f"  {letter}: mean=" in out


def test_bad_params_file(photo, tmp_path, capsys):
    params = tmp_path / "p.json"
    params.write_text(json.dumps({"dot_sise": 4}))
    assert halftone.main([str(photo), "--params", str(params)]) == 2
    assert "bad parameters" in capsys.readouterr().err
    assert not photo.with_name("photo_halftone.png").exists()


def test_bad_colour_flag(photo):
    assert halftone.main([str(photo), "--colour-bg", "#12"]) == 2


def test_flags_override_preset_and_json(tmp_path):
    params = tmp_path / "p.json"
    params.write_text(json.dumps({"dot_size": 20, "gain_k": 0.5}))
    args = halftone.parse_cli_args(
        [
            "in.png",
            "--preset", "vintage",
            "--params", str(params),
            "--mode", "ink",
            "--dot-size", "12",
            "--flood", "0", "0", "0", "2",
        ]
    )
    p = halftone.build_params(args)
    assert p.render_mode == "ink"
    assert p.dot_size == 12.0
    assert p.black.gain == 0.5
    assert p.black.flood == 1.0  # clamped
    assert p.softness == pytest.approx(0.4)  # from the preset


def test_output_naming(tmp_path):
    src = tmp_path / "dir" / "cat.jpeg"
    assert halftone.output_path_for(src, None) == tmp_path / "dir" / "cat_halftone.png"
    assert halftone.output_path_for(src, tmp_path) == tmp_path / "cat_halftone.png"


def test_parallel_jobs_keep_every_block_and_restore_stdout(tmp_path, capsys):
    src = tmp_path / "in"
    src.mkdir()
    rng = np.random.default_rng(7)
    for i in range(12):
        arr = rng.integers(0, 256, size=(24, 32, 3), dtype=np.uint8)
        Image.fromarray(arr).save(src / f"img{i:02d}.png")
    (src / "img99.png").write_bytes(b"garbage")
    stdout_before = sys.stdout

    code = halftone.main(
        [str(src), "--outdir", str(tmp_path / "out"), "--jobs", "6", "--workers", "1"]
    )

    assert sys.stdout is stdout_before
    assert code == 1
    out = capsys.readouterr().out
    wrote = [line.split()[1] for line in out.splitlines() if line.startswith("Wrote ")]
    assert wrote == [f"img{i:02d}_halftone.png" for i in range(12)]
    # Each file's lines stay inside its own block, errors included.
    blocks = out.split("\n=== ")[1:]
    assert [b.split(" ===", 1)[0] for b in blocks] == [
        f"img{i:02d}.png" for i in range(12)
    ] + ["img99.png"]
    for i, block in enumerate(blocks[:12]):
        assert f"Wrote img{i:02d}_halftone.png" in block
    assert "[error] img99.png" in blocks[12]


def test_run_line_reports_debug_flag(photo, capsys):
    assert halftone.main([str(photo), "--workers", "1"]) == 0
    assert "Debug: off" in capsys.readouterr().out

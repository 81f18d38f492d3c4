import numpy as np
import pytest
from PIL import Image

from cmyk_halftone import InvalidInputError, render, render_coverage
from cmyk_halftone.composite import composite_span
from cmyk_halftone.params import ChannelCorrection, HalftoneParams
from cmyk_halftone.presets import preset_params
from cmyk_halftone.sampling import pixel_centres
from cmyk_halftone.screen import ScreenContext
from cmyk_halftone.synth.sharp import local_cell_coords


@pytest.mark.parametrize(
    "source, width, height",
    [
        (np.zeros((0, 5, 3)), 5, 5),
        (np.zeros((5, 0, 3)), 5, 5),
        (np.zeros((5, 5, 2)), 5, 5),
        (np.zeros((5,)), 5, 5),
        (np.zeros((5, 5, 3)), 0, 5),
        (np.zeros((5, 5, 3)), 5, -1),
    ],
)
def test_bad_input_is_rejected(source, width, height):
    with pytest.raises(InvalidInputError):
        render(source, width, height)


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        render_coverage(np.zeros((0, 0, 3)), 4, 4)


def test_output_buffer_layout(gradient, print_params):
    out = render(gradient, 64, 48, print_params)
    assert out.shape == (48, 64, 4)
    assert out.dtype == np.float32
    assert np.all(out[..., 3] == 1.0)
    assert out.min() >= 0.0 and out.max() <= 1.0


def test_output_size_may_differ_from_source(gradient, print_params):
    out = render(gradient, 30, 20, print_params)
    assert out.shape == (20, 30, 4)
    big = render(gradient, 100, 90, print_params)
    assert big.shape == (90, 100, 4)


def test_one_pixel_output():
    out = render(np.full((3, 3, 3), 0.3), 1, 1, HalftoneParams(dot_size=4.0))
    assert out.shape == (1, 1, 4)


@pytest.mark.parametrize("mode", ["dots", "ink", "sharp"])
def test_same_inputs_same_pixels(gradient, mode):
    p = HalftoneParams(
        render_mode=mode, dot_size=6.0, grid_noise=0.7, softness=0.3,
        grain_mixing=0.4, grain_overlay=0.5, grain_size=0.6,
    )
    a = render(gradient, 64, 48, p)
    b = render(gradient.copy(), 64, 48, p)
    assert a.tobytes() == b.tobytes()


@pytest.mark.parametrize("mode", ["dots", "ink", "sharp"])
def test_worker_count_does_not_change_output(gradient, mode):
    p = HalftoneParams(render_mode=mode, dot_size=7.0, grid_noise=0.5, softness=0.2)
    single = render(gradient, 72, 90, p, workers=1)
    pooled = render(gradient, 72, 90, p, workers=4)
    assert single.tobytes() == pooled.tobytes()
    cov1 = render_coverage(gradient, 72, 90, p, workers=1)
    cov4 = render_coverage(gradient, 72, 90, p, workers=3)
    assert cov1.tobytes() == cov4.tobytes()


def test_coverage_composites_to_render(gradient):
    p = preset_params("drops").with_overrides(dot_size=9.0)
    cov = render_coverage(gradient, 50, 40, p)
    assert cov.shape == (4, 40, 50)
    assert cov.dtype == np.float32
    px, py = pixel_centres(0, 40, 50)
    rebuilt = composite_span(cov, px, py, p.clamped())
    np.testing.assert_array_equal(rebuilt, render(gradient, 50, 40, p))


def test_grain_size_is_ignored_without_grain(gradient, print_params):
    a = render(gradient, 40, 30, print_params.with_overrides(grain_size=0.0))
    b = render(gradient, 40, 30, print_params.with_overrides(grain_size=5.0))
    assert a.tobytes() == b.tobytes()


def test_grain_changes_output(gradient, print_params):
    plain = render(gradient, 40, 30, print_params)
    grainy = render(gradient, 40, 30, print_params.with_overrides(grain_mixing=0.8))
    assert not np.array_equal(plain, grainy)


@pytest.mark.parametrize("mode", ["dots", "ink", "sharp"])
def test_white_source_prints_paper_colour(mode):
    p = HalftoneParams(
        render_mode=mode, dot_size=5.0, grid_noise=0.3, colour_bg=(0.93, 0.94, 0.84)
    )
    out = render(np.ones((20, 20, 3)), 20, 20, p)
    np.testing.assert_allclose(
        out[..., :3], np.broadcast_to([0.93, 0.94, 0.84], (20, 20, 3)), atol=1e-6
    )


def test_mid_grey_sharp_prints_black_dots(mid_grey, print_params):
    p = print_params.with_overrides(render_mode="sharp").clamped()
    cov = render_coverage(mid_grey, 100, 100, p)

    # Neutral grey carries no chromatic ink.
    assert np.all(cov[:3] == 0.0)

    px, py = pixel_centres(0, 100, 100)
    ctx = ScreenContext(source=mid_grey, width=100, height=100, params=p, px=px, py=py)
    lx, ly = local_cell_coords(ctx, 3)
    dot = np.hypot(lx - 5.0, ly - 5.0) <= 2.5
    np.testing.assert_array_equal(cov[3], dot.astype(np.float32))

    # pi * 2.5^2 / 10^2
    assert cov[3].mean() == pytest.approx(0.196, abs=0.03)

    out = render(mid_grey, 100, 100, p)
    assert set(np.unique(out[..., :3]).tolist()) <= {0.0, 1.0}


def test_black_source_dots_mostly_black(print_params):
    out = render(np.zeros((40, 40, 3)), 40, 40, print_params)
    assert out[..., :3].mean() < 0.05


def test_pillow_and_uint8_sources(print_params):
    arr = np.zeros((12, 16, 3), dtype=np.uint8)
    arr[:, :8] = (200, 40, 90)
    arr[:, 8:] = (20, 180, 240)
    from_u8 = render(arr, 16, 12, print_params)
    from_float = render(arr.astype(np.float64) / 255.0, 16, 12, print_params)
    from_pil = render(Image.fromarray(arr), 16, 12, print_params)
    assert from_u8.tobytes() == from_float.tobytes()
    assert from_u8.tobytes() == from_pil.tobytes()


def test_alpha_and_grey_sources_accepted(print_params):
    rgba = np.ones((10, 10, 4))
    grey = np.ones((10, 10))
    for src in (rgba, grey):
        out = render(src, 10, 10, print_params)
        np.testing.assert_allclose(out[..., :3], 1.0)


def test_default_params_when_none():
    out = render(np.ones((8, 8, 3)), 8, 8)
    np.testing.assert_allclose(out[..., :3], 1.0)


def test_out_of_range_params_are_clamped(gradient):
    wild = HalftoneParams(
        dot_size=6.0,
        grid_noise=7.0,
        softness=-2.0,
        contrast=-1.0,
        cyan=ChannelCorrection(gain=9.0, flood=-3.0),
        grain_mixing=4.0,
        colour_bg=(2.0, -1.0, 0.5),
    )
    out = render(gradient, 20, 16, wild)
    assert np.isfinite(out).all()
    assert out.min() >= 0.0 and out.max() <= 1.0
    assert out.tobytes() == render(gradient, 20, 16, wild.clamped()).tobytes()


def test_degenerate_cell_size_still_renders(gradient):
    tiny = render(gradient, 12, 10, HalftoneParams(dot_size=-4.0, scale=0.0))
    assert tiny.shape == (10, 12, 4)
    assert np.isfinite(tiny).all()


@pytest.mark.parametrize(
    "field, value",
    [
        ("dot_size", float("inf")),
        ("scale", float("inf")),
        ("contrast", float("inf")),
        ("grain_size", float("inf")),
        ("dot_size", float("nan")),
        ("softness", float("nan")),
        ("contrast", float("nan")),
    ],
)
def test_non_finite_params_render_like_their_clamped_value(gradient, field, value):
    p = HalftoneParams(grain_mixing=0.5).with_overrides(**{field: value})
    out = render(gradient, 32, 24, p)
    assert np.isfinite(out).all()
    assert out.tobytes() == render(gradient, 32, 24, p.clamped()).tobytes()


def test_nan_softness_keeps_dots_hard(gradient, print_params):
    hard = render(gradient, 32, 24, print_params)
    nan_soft = render(gradient, 32, 24, print_params.with_overrides(softness=float("nan")))
    assert hard.tobytes() == nan_soft.tobytes()


def test_uint16_source_matches_float(print_params):
    arr = np.zeros((12, 16, 3), dtype=np.uint16)
    arr[:, :8] = (51400, 10280, 23130)
    arr[:, 8:] = (65535, 0, 32768)
    from_u16 = render(arr, 16, 12, print_params)
    from_float = render(arr.astype(np.float64) / 65535.0, 16, 12, print_params)
    assert from_u16.tobytes() == from_float.tobytes()
    # Bright pixels must not be treated as out-of-range floats.
    assert from_u16[..., :3].mean() < 0.99


def test_non_finite_pixels_are_sanitised(print_params):
    img = np.full((8, 8, 3), 0.5)
    img[0, 0] = (np.nan, np.inf, -np.inf)
    out = render(img, 8, 8, print_params)
    assert np.isfinite(out).all()

import numpy as np
import pytest

from cmyk_halftone.constants import OVERLAP_RADIUS_FACTOR
from cmyk_halftone.params import HalftoneParams
from cmyk_halftone.sampling import pixel_centres
from cmyk_halftone.screen import (
    ScreenContext,
    disc_value,
    iter_candidates,
    smoothstep,
)


def make_ctx(image, params, rows=None):
    h, w = image.shape[:2]
    y1 = h if rows is None else rows
    px, py = pixel_centres(0, y1, w)
    return ScreenContext(
        source=image, width=w, height=h, params=params.clamped(), px=px, py=py
    )


def test_hard_disc_is_binary():
    dist = np.linspace(0.0, 10.0, 101)
    out = disc_value(dist, np.full_like(dist, 4.0), 0.0)
    assert set(np.unique(out).tolist()) == {0.0, 1.0}
    assert np.all(out[dist <= 4.0] == 1.0)
    assert np.all(out[dist > 4.0] == 0.0)


def test_zero_radius_disc_is_empty():
    dist = np.array([0.0, 0.5])
    radius = np.zeros(2)
    assert disc_value(dist, radius, 0.0).tolist() == [0.0, 0.0]
    assert disc_value(dist, radius, 0.5).tolist() == [0.0, 0.0]


def test_soft_disc_is_half_on_the_rim():
    out = disc_value(np.array([0.0, 4.0, 10.0]), np.full(3, 4.0), 0.5)
    np.testing.assert_allclose(out, [1.0, 0.5, 0.0])


def test_soft_disc_band_width_follows_softness():
    radius = np.full(2, 10.0)
    # softness 0.4 => band [8, 12]
    out = disc_value(np.array([7.99, 12.01]), radius, 0.4)
    assert out.tolist() == [1.0, 0.0]
    inside = disc_value(np.array([9.0, 11.0]), radius, 0.4)
    assert 0.5 < inside[0] < 1.0
    assert 0.0 < inside[1] < 0.5


def test_smoothstep_degenerate_band_is_a_step():
    out = smoothstep(np.full(3, 1.0), np.full(3, 1.0), np.array([0.5, 1.0, 1.5]))
    assert out.tolist() == [0.0, 1.0, 1.0]


def test_smoothstep_shape():
    x = np.array([0.0, 0.25, 0.5, 0.75, 1.0])
    np.testing.assert_allclose(
        smoothstep(0.0, 1.0, x), [0.0, 0.15625, 0.5, 0.84375, 1.0]
    )


def test_nine_candidates_with_uniform_radius():
    image = np.full((20, 30, 3), 0.25)  # K = 0.75
    params = HalftoneParams(dot_size=6.0, scale=1.0)
    ctx = make_ctx(image, params)
    cands = list(iter_candidates(ctx, 3))
    assert len(cands) == 9
    for cand in cands:
        assert cand.dist.shape == (20, 30)
        np.testing.assert_allclose(cand.radius, 0.75 * 6.0 * OVERLAP_RADIUS_FACTOR)


def test_own_cell_candidate_is_within_half_diagonal():
    image = np.full((16, 16, 3), 0.5)
    ctx = make_ctx(image, HalftoneParams(dot_size=8.0, grid_noise=0.0))
    cands = list(iter_candidates(ctx, 0))
    own = cands[4]  # dx = 0, dy = 0
    assert own.dist.max() <= 8.0 * np.sqrt(0.5) + 1e-9


@pytest.mark.parametrize("noise", [0.3, 1.0])
def test_jitter_moves_centres_by_at_most_half_a_cell(noise):
    image = np.full((16, 16, 3), 0.5)
    grid = 8.0
    still = list(iter_candidates(make_ctx(image, HalftoneParams(dot_size=grid)), 1))
    moved = list(
        iter_candidates(
            make_ctx(image, HalftoneParams(dot_size=grid, grid_noise=noise)), 1
        )
    )
    limit = noise * grid * 0.5 * np.sqrt(2.0) + 1e-9
    for a, b in zip(still, moved):
        assert np.abs(a.dist - b.dist).max() <= limit
    assert any(np.abs(a.dist - b.dist).max() > 0 for a, b in zip(still, moved))


def test_jitter_amplitude_property():
    p = HalftoneParams(dot_size=10.0, scale=2.0, grid_noise=0.5)
    ctx = make_ctx(np.zeros((2, 2, 3)), p)
    assert ctx.grid_size == 20.0
    assert ctx.jitter == pytest.approx(5.0)

"""Tests for the banded illumination model."""

from __future__ import annotations

from math import radians

import numpy as np
import pytest

from discsky.config import LightingConfig
from discsky.contracts import Band, CelestialBody, PlanarPoint
from discsky.sky.lighting import (
    apply_eclipse,
    band_weights,
    illuminate,
    illuminate_grid,
    season_cosine,
)
from discsky.sky.smoothing import smoothstep

_RADIUS = 10_000.0
_CFG = LightingConfig()


def _sun(x: float = 0.0, z: float = 0.0) -> CelestialBody:
    return CelestialBody(x, z, 3000.0)


def _moon(x: float = 0.0, z: float = -9000.0) -> CelestialBody:
    return CelestialBody(x, z, 2500.0)


def test_smoothstep_edges_and_validation() -> None:
    """smoothstep clamps outside its edges and rejects inverted edges."""
    assert smoothstep(0.0, 1.0, -1.0) == 0.0
    assert smoothstep(0.0, 1.0, 0.5) == 0.5
    assert smoothstep(0.0, 1.0, 2.0) == 1.0
    with pytest.raises(ValueError):
        smoothstep(1.0, 1.0, 0.5)


def test_subsolar_point_is_full_day() -> None:
    """Directly under a zero-declination sun at the center is full day."""
    sample = illuminate(PlanarPoint.from_xz(0.0, 0.0), _sun(), _moon(), 0.5, 0.0, _CFG, _RADIUS)

    assert sample.weights.day == pytest.approx(1.0)
    assert sample.weights.night == pytest.approx(0.0)
    assert sample.dominant_band is Band.DAY
    assert sample.alpha == pytest.approx(_CFG.day_alpha)


def test_rim_under_central_sun_is_dark() -> None:
    """The rim is dominated by night and twilight bands."""
    sample = illuminate(PlanarPoint.from_xz(0.0, _RADIUS), _sun(), _moon(), 0.5, 0.0, _CFG, _RADIUS)
    w = sample.weights

    assert w.day < 1e-9
    assert w.night + w.astronomical + w.nautical > 0.9
    assert sample.alpha > 0.5


def test_partition_of_unity_over_random_inputs() -> None:
    """The five weights sum to one and stay in [0, 1] everywhere."""
    rng = np.random.default_rng(42)
    xs = rng.uniform(-12_000.0, 12_000.0, size=400)
    zs = rng.uniform(-12_000.0, 12_000.0, size=400)
    for declination in (-0.41, 0.0, 0.41, 1.2):
        for attenuation in (0.0, 0.3, 1.0):
            field = illuminate_grid(
                xs,
                zs,
                _sun(*rng.uniform(-8000.0, 8000.0, size=2)),
                _moon(*rng.uniform(-8000.0, 8000.0, size=2)),
                float(rng.uniform()),
                declination,
                _CFG,
                _RADIUS,
                attenuation,
            )
            assert np.allclose(field.weights.sum(axis=-1), 1.0, atol=1e-12)
            assert field.weights.min() >= -1e-12
            assert field.weights.max() <= 1.0 + 1e-12
            assert np.all((field.alpha >= 0.0) & (field.alpha <= 1.0))
            assert np.all((field.color >= 0.0) & (field.color <= 1.0))


def test_color_and_alpha_are_continuous_across_bands() -> None:
    """Walking from the subsolar point to the rim never produces a jump."""
    zs = np.linspace(0.0, _RADIUS, 20_001)
    field = illuminate_grid(np.zeros_like(zs), zs, _sun(), _moon(0.0, 6000.0), 1.0, 0.0, _CFG, _RADIUS)

    assert np.max(np.abs(np.diff(field.color, axis=0))) < 0.01
    assert np.max(np.abs(np.diff(field.alpha))) < 0.01
    # The walk crosses every band.
    assert field.weights[0, 0] == pytest.approx(1.0)
    assert field.weights[-1, 4] == pytest.approx(1.0)
    assert np.max(field.weights[:, 1]) > 0.5


def test_scalar_and_grid_paths_agree() -> None:
    """illuminate matches illuminate_grid point for point."""
    xs = np.array([0.0, 2500.0, -4000.0, 7000.0])
    zs = np.array([0.0, 3000.0, 1000.0, -6500.0])
    field = illuminate_grid(xs, zs, _sun(1000.0, 500.0), _moon(), 0.7, 0.2, _CFG, _RADIUS)

    for i, (x, z) in enumerate(zip(xs, zs)):
        sample = illuminate(PlanarPoint.from_xz(x, z), _sun(1000.0, 500.0), _moon(), 0.7, 0.2, _CFG, _RADIUS)
        assert sample.weights.day == pytest.approx(field.weights[i, 0])
        assert sample.weights.night == pytest.approx(field.weights[i, 4])
        assert sample.alpha == pytest.approx(field.alpha[i])
        assert sample.color == pytest.approx(tuple(field.color[i]))


def test_moon_glow_hidden_in_daylight() -> None:
    """A full moon overhead does not tint a fully lit point."""
    sample = illuminate(PlanarPoint.from_xz(0.0, 0.0), _sun(), _moon(0.0, 0.0), 1.0, 0.0, _CFG, _RADIUS)

    assert sample.moon_light == pytest.approx(_CFG.moon_brightness)
    assert sample.color == pytest.approx(_CFG.day_color)


def test_moon_glow_scales_with_phase_at_night() -> None:
    """A full moon brightens and tints the night; a new moon does not."""
    point = PlanarPoint.from_xz(0.0, -9000.0)
    sun = _sun(0.0, 9000.0)
    full = illuminate(point, sun, _moon(), 1.0, 0.0, _CFG, _RADIUS)
    new = illuminate(point, sun, _moon(), 0.0, 0.0, _CFG, _RADIUS)

    assert full.weights.night == pytest.approx(1.0)
    assert new.moon_light == 0.0
    assert new.color == pytest.approx(_CFG.night_color)
    assert new.alpha == pytest.approx(_CFG.night_alpha)
    assert full.moon_light == pytest.approx(_CFG.moon_brightness)
    assert full.alpha == pytest.approx(_CFG.night_alpha - _CFG.moon_alpha_relief * _CFG.moon_brightness)
    assert full.color[2] > new.color[2]


def test_declination_lights_the_rim() -> None:
    """Positive declination brightens points toward the rim."""
    point = PlanarPoint.from_xz(0.0, _RADIUS)
    sun = _sun(0.0, _RADIUS)
    equinox = illuminate(point, sun, _moon(), 0.5, 0.0, _CFG, _RADIUS)
    solstice = illuminate(point, sun, _moon(), 0.5, radians(23.44), _CFG, _RADIUS)

    assert equinox.weights.night == pytest.approx(1.0)
    assert solstice.weights.day + solstice.weights.civil > 0.5


def test_season_cosine_is_floored() -> None:
    """Extreme declinations cannot push the seasonal factor below the floor."""
    assert season_cosine(_RADIUS, _RADIUS, -np.pi / 2, _CFG.season_floor) == pytest.approx(-0.3)
    assert season_cosine(0.0, _RADIUS, 0.0, _CFG.season_floor) == pytest.approx(1.0)


def test_band_weights_at_thresholds() -> None:
    """Each threshold hands the weight over between adjacent bands."""
    assert band_weights(_CFG.cos_day, _CFG)[0] == pytest.approx(1.0)
    assert band_weights(_CFG.cos_civil, _CFG)[1] == pytest.approx(1.0)
    assert band_weights(_CFG.cos_nautical, _CFG)[2] == pytest.approx(1.0)
    assert band_weights(_CFG.cos_astronomical, _CFG)[3] == pytest.approx(1.0)
    assert band_weights(_CFG.cos_night, _CFG)[4] == pytest.approx(1.0)


def test_eclipse_moves_daylight_into_night() -> None:
    """Attenuation removes day weight and preserves the partition."""
    weights = apply_eclipse(band_weights(1.0, _CFG), 0.25)

    assert weights[0] == pytest.approx(0.25)
    assert weights[4] == pytest.approx(0.75)
    assert weights.sum() == pytest.approx(1.0)

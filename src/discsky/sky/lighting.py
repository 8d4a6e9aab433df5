"""Banded day/twilight/night illumination of the disc.

Each point is classified by the seasonally corrected zenith cosine of the sun
into five smoothly blended bands whose weights always sum to 1:

    day          = S(civil, day)
    civil        = S(nautical, civil)     - S(civil, day)
    nautical     = S(astronomical, naut.) - S(nautical, civil)
    astronomical = S(night, astronomical) - S(astronomical, nautical)
    night        = 1                      - S(night, astronomical)

where `S(a, b)` is the smoothstep of the sun cosine between thresholds `a` and
`b`. Moon glow is layered on top, scaled by phase and suppressed by daylight.

The same array code path serves scalar sampling (`illuminate`) and bulk
evaluation over numpy grids (`illuminate_grid`).
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from discsky.astro.celestial import zenith_cosine_grid
from discsky.config import LightingConfig
from discsky.contracts import BandWeights, CelestialBody, IlluminationSample, PlanarPoint
from discsky.geo.projection import pseudo_latitude_rad
from discsky.sky.smoothing import smoothstep


@dataclass(frozen=True, slots=True)
class IlluminationField:
    """Illumination evaluated over an array of points.

    `weights` has shape `(..., 5)` in `Band` order, `color` has shape `(..., 3)`.
    """

    weights: np.ndarray
    moon_light: np.ndarray
    color: np.ndarray
    alpha: np.ndarray


def season_cosine(distance, radius: float, declination_rad: float, floor: float):
    """Seasonal factor `cos(lat - declination)` clamped below at `floor`."""
    lat = pseudo_latitude_rad(np.asarray(distance, dtype=float), radius)
    return np.maximum(np.cos(lat - declination_rad), floor)


def band_weights(cos_sun, config: LightingConfig) -> np.ndarray:
    """Return partition-of-unity weights with a trailing axis of five bands."""
    cos_arr = np.asarray(cos_sun, dtype=float)
    s_day = np.asarray(smoothstep(config.cos_civil, config.cos_day, cos_arr))
    s_civil = np.asarray(smoothstep(config.cos_nautical, config.cos_civil, cos_arr))
    s_nautical = np.asarray(smoothstep(config.cos_astronomical, config.cos_nautical, cos_arr))
    s_astro = np.asarray(smoothstep(config.cos_night, config.cos_astronomical, cos_arr))
    return np.stack(
        [
            s_day,
            s_civil - s_day,
            s_nautical - s_civil,
            s_astro - s_nautical,
            1.0 - s_astro,
        ],
        axis=-1,
    )


def apply_eclipse(weights: np.ndarray, attenuation: float) -> np.ndarray:
    """Move the eclipsed share of daylight into the night band."""
    if attenuation >= 1.0:
        return weights
    out = np.array(weights, dtype=float, copy=True)
    lost = out[..., 0] * (1.0 - attenuation)
    out[..., 0] -= lost
    out[..., 4] += lost
    return out


def moon_light_weight(cos_moon, phase: float, config: LightingConfig):
    """Moon glow strength from its zenith cosine, brightness and phase."""
    glow = np.asarray(smoothstep(config.moon_cos_low, config.moon_cos_high, cos_moon))
    return glow * config.moon_brightness * phase


def _band_colors(config: LightingConfig) -> np.ndarray:
    """Stack band colors in `Band` order."""
    return np.array(
        [
            config.day_color,
            config.civil_color,
            config.nautical_color,
            config.astronomical_color,
            config.night_color,
        ],
        dtype=float,
    )


def shade(weights: np.ndarray, moon_light, config: LightingConfig) -> tuple[np.ndarray, np.ndarray]:
    """Blend band colors and opacity from weights and moon glow."""
    day = weights[..., 0]
    moon_visible = np.asarray(np.asarray(moon_light) * (1.0 - day))

    color = weights @ _band_colors(config)
    tint = np.asarray(config.moon_tint, dtype=float)
    color = color + (tint - color) * moon_visible[..., None]

    darkness_fractions = np.array(
        [
            0.0,
            config.civil_darkness,
            config.nautical_darkness,
            config.astronomical_darkness,
            1.0,
        ]
    )
    darkness = weights @ darkness_fractions
    alpha = config.day_alpha + (config.night_alpha - config.day_alpha) * darkness
    alpha = alpha - config.moon_alpha_relief * moon_visible
    return np.clip(color, 0.0, 1.0), np.clip(alpha, 0.0, 1.0)


def illuminate_grid(
    xs,
    zs,
    sun: CelestialBody,
    moon: CelestialBody,
    phase: float,
    declination_rad: float,
    config: LightingConfig,
    radius: float,
    eclipse_attenuation: float = 1.0,
) -> IlluminationField:
    """Evaluate illumination over broadcastable coordinate arrays."""
    xs_arr, zs_arr = np.broadcast_arrays(np.asarray(xs, dtype=float), np.asarray(zs, dtype=float))
    distance = np.hypot(xs_arr, zs_arr)

    cos_sun = zenith_cosine_grid(xs_arr, zs_arr, sun) * season_cosine(
        distance, radius, declination_rad, config.season_floor
    )
    weights = apply_eclipse(band_weights(cos_sun, config), eclipse_attenuation)

    cos_moon = zenith_cosine_grid(xs_arr, zs_arr, moon)
    moon_light = moon_light_weight(cos_moon, phase, config)

    color, alpha = shade(weights, moon_light, config)
    return IlluminationField(weights=weights, moon_light=moon_light, color=color, alpha=alpha)


def illuminate(
    point: PlanarPoint,
    sun: CelestialBody,
    moon: CelestialBody,
    phase: float,
    declination_rad: float,
    config: LightingConfig,
    radius: float,
    eclipse_attenuation: float = 1.0,
) -> IlluminationSample:
    """Evaluate illumination at one disc point."""
    field = illuminate_grid(
        point.x,
        point.z,
        sun,
        moon,
        phase,
        declination_rad,
        config,
        radius,
        eclipse_attenuation,
    )
    w = field.weights
    return IlluminationSample(
        weights=BandWeights(
            day=float(w[0]),
            civil=float(w[1]),
            nautical=float(w[2]),
            astronomical=float(w[3]),
            night=float(w[4]),
        ),
        moon_light=float(field.moon_light),
        color=(float(field.color[0]), float(field.color[1]), float(field.color[2])),
        alpha=float(field.alpha),
    )

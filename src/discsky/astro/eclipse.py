"""Solar-eclipse detection from planar sun-moon proximity."""

from __future__ import annotations

from discsky.astro.celestial import planar_separation
from discsky.config import DiscConfig, EclipseConfig
from discsky.contracts import EclipseState, GeoCoordinate, PlanarPoint
from discsky.geo.projection import geo_to_plane
from discsky.sky.smoothing import smoothstep


def eclipse_attenuation(
    sun: PlanarPoint,
    moon: PlanarPoint,
    near_threshold: float,
    far_threshold: float,
) -> float:
    """Return the sunlight factor left by the moon, in [0, 1].

    1.0 means full sunlight (separation >= `far_threshold`); 0.0 means a total
    eclipse (separation <= `near_threshold`, including coincident positions).
    """
    if near_threshold < 0.0 or not near_threshold < far_threshold:
        raise ValueError("thresholds must satisfy 0 <= near_threshold < far_threshold.")
    separation = planar_separation(sun, moon)
    if separation >= far_threshold:
        return 1.0
    return smoothstep(near_threshold, far_threshold, separation)


def marker_position(coord: GeoCoordinate, config: DiscConfig) -> PlanarPoint:
    """Place an eclipse indicator for a reported geographic location."""
    return geo_to_plane(coord, config)


def detect_eclipse(
    sun: PlanarPoint,
    moon: PlanarPoint,
    config: EclipseConfig,
    report: GeoCoordinate | None = None,
    disc: DiscConfig | None = None,
) -> EclipseState:
    """Build the eclipse state for the current sun and moon positions.

    The marker sits on the projected `report` location when one is given,
    otherwise beneath the moon.
    """
    attenuation = eclipse_attenuation(sun, moon, config.near_threshold, config.far_threshold)
    if report is not None:
        marker = marker_position(report, disc or DiscConfig())
    else:
        marker = PlanarPoint.from_xz(moon.x, moon.z)
    return EclipseState(
        is_occurring=attenuation < 1.0,
        attenuation=attenuation,
        marker_point=marker,
    )

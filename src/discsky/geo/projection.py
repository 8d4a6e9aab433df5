"""Azimuthal-equidistant projection between geographic and disc coordinates.

The north pole sits at the disc center and the equator on the rim. Longitude
maps to the disc angle measured from the +z axis toward +x.
"""

from __future__ import annotations

from math import atan2, cos, degrees, pi, radians, sin

from discsky.config import DiscConfig, SouthernPolicy
from discsky.contracts import GeoCoordinate, OutOfDiscError, PlanarPoint

_HALF_PI = pi / 2.0
_RIM_TOLERANCE = 1e-9


def radial_distance_for_latitude(latitude_deg: float, radius: float) -> float:
    """Return the disc radial distance of a parallel.

    Equivalent to `radius * phi / (pi / 2)` with `phi = radians(90 - lat)`,
    kept in degrees so the equator lands on the rim exactly.
    """
    return radius * (90.0 - latitude_deg) / 90.0


def latitude_for_radial_distance(distance: float, radius: float) -> float:
    """Return the latitude of the parallel at `distance` from the center."""
    return 90.0 - 90.0 * distance / radius


def pseudo_latitude_rad(distance, radius: float):
    """Angular distance from the pole in radians (0 at center, pi/2 on the rim).

    Accepts scalars or numpy arrays.
    """
    return (distance / radius) * _HALF_PI


def geo_to_plane(coord: GeoCoordinate, config: DiscConfig) -> PlanarPoint:
    """Project a geographic coordinate onto the disc plane.

    Raises:
        OutOfDiscError: latitude is below the equator and the disc policy is
            `SouthernPolicy.REJECT`.
    """
    if coord.latitude_deg < 0.0 and config.southern_policy == SouthernPolicy.REJECT:
        raise OutOfDiscError(
            f"latitude {coord.latitude_deg} is south of the equator and outside the disc."
        )

    distance = radial_distance_for_latitude(coord.latitude_deg, config.radius)
    theta = radians(coord.longitude_deg)
    return PlanarPoint(
        x=distance * sin(theta),
        z=distance * cos(theta),
        radial_distance=distance,
    )


def plane_to_geo(point: PlanarPoint, config: DiscConfig) -> GeoCoordinate:
    """Invert the projection for a point on the disc.

    Longitude is undefined at the center; 0.0 is returned there.

    Raises:
        OutOfDiscError: the point lies beyond the rim.
    """
    distance = point.radial_distance
    if distance > config.radius * (1.0 + _RIM_TOLERANCE):
        raise OutOfDiscError(
            f"radial distance {distance} exceeds disc radius {config.radius}."
        )
    distance = min(distance, config.radius)

    latitude = latitude_for_radial_distance(distance, config.radius)
    longitude = degrees(atan2(point.x, point.z)) if distance > 0.0 else 0.0
    return GeoCoordinate(latitude_deg=latitude, longitude_deg=longitude)

"""Coordinate-grid and named-location geometry for the disc renderer.

Only planar geometry is produced here; line materials, labels textures and
their caches belong to the rendering layer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from math import cos, pi, sin

from discsky.config import DiscConfig
from discsky.contracts import GeoCoordinate, OutOfDiscError, PlanarPoint
from discsky.geo.projection import geo_to_plane

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class City:
    """Named geographic location."""

    name: str
    coordinate: GeoCoordinate


DEFAULT_CITIES: tuple[City, ...] = (
    City("Moscow", GeoCoordinate(55.75, 37.62)),
    City("London", GeoCoordinate(51.51, -0.13)),
    City("New York", GeoCoordinate(40.71, -74.01)),
    City("Los Angeles", GeoCoordinate(34.05, -118.24)),
    City("Sydney", GeoCoordinate(-33.87, 151.21)),
    City("Cape Town", GeoCoordinate(-33.93, 18.42)),
    City("Reykjavik", GeoCoordinate(64.15, -21.95)),
    City("Barentsburg", GeoCoordinate(74.50, 19.00)),
)


@dataclass(frozen=True, slots=True)
class GridLine:
    """Polyline of a parallel or meridian."""

    kind: str
    value_deg: float
    points: list[PlanarPoint]


@dataclass(frozen=True, slots=True)
class GridLabel:
    """Text anchored at a disc position."""

    text: str
    position: PlanarPoint


@dataclass(frozen=True, slots=True)
class CityMarker:
    """City placement; `position` is None when the city lies outside the disc."""

    name: str
    coordinate: GeoCoordinate
    position: PlanarPoint | None
    label: str

    @property
    def in_model(self) -> bool:
        """Whether the city could be placed on the disc."""
        return self.position is not None


@dataclass(slots=True)
class CoordinateGrid:
    """Parallels, meridians and latitude labels of the disc."""

    parallels: list[GridLine] = field(default_factory=list)
    meridians: list[GridLine] = field(default_factory=list)
    labels: list[GridLabel] = field(default_factory=list)


def _frange_inclusive(start: float, stop: float, step: float) -> list[float]:
    """Build an inclusive floating-point range with deterministic rounding."""
    if step <= 0.0:
        raise ValueError("step must be positive.")
    values: list[float] = []
    current = start
    while current <= stop + 1e-9:
        values.append(round(current, 6))
        current += step
    return values


def _wrap_longitude(lon_deg: float) -> float:
    """Wrap longitude into [-180, 180)."""
    return ((lon_deg + 180.0) % 360.0) - 180.0


def _point(lat: float, lon: float, config: DiscConfig) -> PlanarPoint:
    """Project one grid vertex, wrapping its longitude."""
    return geo_to_plane(GeoCoordinate(lat, _wrap_longitude(lon)), config)


def build_coordinate_grid(
    config: DiscConfig,
    lat_step: float = 10.0,
    lon_step: float = 30.0,
    parallel_sample_deg: float = 5.0,
    meridian_sample_deg: float = 2.0,
    label_offset: float = 1000.0,
) -> CoordinateGrid:
    """Build parallels from the equator to the pole and meridians around the disc.

    Latitude labels are placed for parallels strictly between 0 and 90 at
    longitude 0, shifted by `label_offset` along +x.
    """
    grid = CoordinateGrid()

    for lat in _frange_inclusive(0.0, 90.0, lat_step):
        points = [_point(lat, lon, config) for lon in _frange_inclusive(0.0, 360.0, parallel_sample_deg)]
        grid.parallels.append(GridLine(kind="parallel", value_deg=lat, points=points))
        if 0.0 < lat < 90.0:
            anchor = _point(lat, 0.0, config)
            grid.labels.append(
                GridLabel(
                    text=f"{lat:g}°",
                    position=PlanarPoint.from_xz(anchor.x + label_offset, anchor.z),
                )
            )

    for lon in _frange_inclusive(0.0, 360.0 - lon_step, lon_step):
        points = [_point(lat, lon, config) for lat in _frange_inclusive(0.0, 90.0, meridian_sample_deg)]
        grid.meridians.append(GridLine(kind="meridian", value_deg=lon, points=points))

    return grid


def coarse_grid(radius: float, meridians: int = 24, parallels: int = 6, segments: int = 128) -> CoordinateGrid:
    """Radial-spoke grid: straight meridians center to rim and evenly spaced circles."""
    if radius <= 0.0 or meridians <= 0 or parallels <= 0 or segments <= 0:
        raise ValueError("radius, meridians, parallels and segments must be positive.")
    grid = CoordinateGrid()

    for i in range(meridians):
        angle = (i / meridians) * 2.0 * pi
        rim = PlanarPoint.from_xz(sin(angle) * radius, cos(angle) * radius)
        grid.meridians.append(
            GridLine(kind="meridian", value_deg=i * 360.0 / meridians, points=[PlanarPoint.from_xz(0.0, 0.0), rim])
        )

    for i in range(1, parallels + 1):
        lat = 90.0 - i * (90.0 / parallels)
        ring_radius = radius * (1.0 - lat / 90.0)
        points = []
        for j in range(segments + 1):
            a = (j / segments) * 2.0 * pi
            points.append(PlanarPoint.from_xz(sin(a) * ring_radius, cos(a) * ring_radius))
        grid.parallels.append(GridLine(kind="parallel", value_deg=lat, points=points))

    return grid


def place_cities(config: DiscConfig, cities: tuple[City, ...] | list[City] = DEFAULT_CITIES) -> list[CityMarker]:
    """Project named cities; cities outside the disc are kept with no position."""
    markers: list[CityMarker] = []
    for city in cities:
        coord = city.coordinate
        label = f"{coord.latitude_deg:.1f}°,{coord.longitude_deg:.1f}°"
        try:
            position = geo_to_plane(coord, config)
        except OutOfDiscError:
            logger.warning("city %s at %s is outside the disc model; skipping marker", city.name, label)
            position = None
        markers.append(CityMarker(name=city.name, coordinate=coord, position=position, label=label))
    return markers

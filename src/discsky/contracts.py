"""Core data contracts for the flat-disc sky model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from math import hypot, isclose
from typing import Any

RGB = tuple[float, float, float]


class OutOfDiscError(ValueError):
    """Raised when a coordinate falls outside the modeled disc."""


class Band(StrEnum):
    """Illumination bands ordered from brightest to darkest."""

    DAY = "day"
    CIVIL = "civil_twilight"
    NAUTICAL = "nautical_twilight"
    ASTRONOMICAL = "astronomical_twilight"
    NIGHT = "night"


@dataclass(frozen=True, slots=True)
class GeoCoordinate:
    """Geographic coordinate in degrees."""

    latitude_deg: float
    longitude_deg: float

    def __post_init__(self) -> None:
        """Validate latitude/longitude ranges."""
        if not -90.0 <= self.latitude_deg <= 90.0:
            raise ValueError("latitude_deg must be within [-90, 90].")
        if not -180.0 <= self.longitude_deg <= 180.0:
            raise ValueError("longitude_deg must be within [-180, 180].")


@dataclass(frozen=True, slots=True)
class PlanarPoint:
    """Point on the disc plane with its cached radial distance."""

    x: float
    z: float
    radial_distance: float

    def __post_init__(self) -> None:
        """Validate that radial_distance equals hypot(x, z)."""
        expected = hypot(self.x, self.z)
        if not isclose(self.radial_distance, expected, rel_tol=1e-9, abs_tol=1e-9):
            raise ValueError("radial_distance must equal hypot(x, z).")

    @classmethod
    def from_xz(cls, x: float, z: float) -> PlanarPoint:
        """Build a point from plane coordinates."""
        return cls(x=float(x), z=float(z), radial_distance=hypot(x, z))

    def to_dict(self) -> dict[str, float]:
        """Serialize to a JSON-compatible dictionary."""
        return {"x": self.x, "z": self.z, "radial_distance": self.radial_distance}


@dataclass(frozen=True, slots=True)
class CelestialBody:
    """Light source hovering at a fixed height above a planar position."""

    x: float
    z: float
    height: float

    def __post_init__(self) -> None:
        """Reject non-positive heights."""
        if not self.height > 0.0:
            raise ValueError("height must be positive.")


@dataclass(frozen=True, slots=True)
class BandWeights:
    """Partition-of-unity weights of the five illumination bands."""

    day: float
    civil: float
    nautical: float
    astronomical: float
    night: float

    def total(self) -> float:
        """Return the sum of all band weights."""
        return self.day + self.civil + self.nautical + self.astronomical + self.night

    def as_dict(self) -> dict[Band, float]:
        """Map each band to its weight."""
        return {
            Band.DAY: self.day,
            Band.CIVIL: self.civil,
            Band.NAUTICAL: self.nautical,
            Band.ASTRONOMICAL: self.astronomical,
            Band.NIGHT: self.night,
        }


@dataclass(frozen=True, slots=True)
class IlluminationSample:
    """Illumination result for one disc point."""

    weights: BandWeights
    moon_light: float
    color: RGB
    alpha: float

    @property
    def dominant_band(self) -> Band:
        """Return the band carrying the largest weight."""
        items = self.weights.as_dict()
        return max(items, key=lambda band: items[band])

    def to_dict(self) -> dict[str, Any]:
        """Serialize the sample to a JSON-compatible dictionary."""
        return {
            "weights": {band.value: weight for band, weight in self.weights.as_dict().items()},
            "moon_light": self.moon_light,
            "color": list(self.color),
            "alpha": self.alpha,
        }


@dataclass(frozen=True, slots=True)
class EclipseState:
    """Eclipse report.

    `attenuation` is 1.0 for full sunlight and 0.0 for a total eclipse.
    """

    is_occurring: bool
    attenuation: float
    marker_point: PlanarPoint

    def to_dict(self) -> dict[str, Any]:
        """Serialize the eclipse state to a JSON-compatible dictionary."""
        return {
            "is_occurring": self.is_occurring,
            "attenuation": self.attenuation,
            "marker_point": self.marker_point.to_dict(),
        }

"""Per-tick facade consumed by renderers and UI layers.

`DiscSky` remembers only the most recent sun/moon positions, declination and
optional eclipse report. Every sample is a pure function of that snapshot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from math import radians

import numpy as np

from discsky.astro.eclipse import detect_eclipse
from discsky.astro.moon import DEFAULT_PHASE, angular_separation, compute_phase
from discsky.config import DiscSkyConfig
from discsky.contracts import CelestialBody, EclipseState, GeoCoordinate, IlluminationSample, PlanarPoint
from discsky.geo.projection import geo_to_plane, plane_to_geo
from discsky.sky.lighting import IlluminationField, illuminate, illuminate_grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SkySnapshot:
    """Inputs and derived values of the latest update tick."""

    sun: CelestialBody
    moon: CelestialBody
    declination_deg: float
    phase: float
    eclipse: EclipseState


def _as_point(position: PlanarPoint | tuple[float, float]) -> PlanarPoint:
    """Accept a PlanarPoint or an `(x, z)` pair."""
    if isinstance(position, PlanarPoint):
        return position
    x, z = position
    return PlanarPoint.from_xz(x, z)


class DiscSky:
    """Illumination, phase and eclipse sampling for the latest sky state."""

    def __init__(self, config: DiscSkyConfig | None = None) -> None:
        """Start with the sun and moon on opposite sides of the pole and no declination.

        The phase starts at `DEFAULT_PHASE`; the placeholder positions never
        stand in for a phase the caller has not supplied.
        """
        self.config = config or DiscSkyConfig()
        half = self.config.disc.radius / 2.0
        placeholder = self._build_snapshot(
            PlanarPoint.from_xz(0.0, half), PlanarPoint.from_xz(0.0, -half), 0.0, None, DEFAULT_PHASE
        )
        self._snapshot = replace(placeholder, phase=DEFAULT_PHASE)

    @property
    def snapshot(self) -> SkySnapshot:
        """Return the latest snapshot."""
        return self._snapshot

    def _build_snapshot(
        self,
        sun_pos: PlanarPoint,
        moon_pos: PlanarPoint,
        declination_deg: float,
        eclipse_report: GeoCoordinate | None,
        previous_phase: float,
    ) -> SkySnapshot:
        """Derive phase and eclipse state for new body positions."""
        heights = self.config.heights
        if angular_separation(sun_pos, moon_pos) is None:
            logger.debug("sun or moon at disc center; keeping phase %.3f", previous_phase)
        phase = compute_phase(sun_pos, moon_pos, default=previous_phase)
        eclipse = detect_eclipse(sun_pos, moon_pos, self.config.eclipse, eclipse_report, self.config.disc)
        return SkySnapshot(
            sun=CelestialBody(sun_pos.x, sun_pos.z, heights.sun_height),
            moon=CelestialBody(moon_pos.x, moon_pos.z, heights.moon_height),
            declination_deg=declination_deg,
            phase=phase,
            eclipse=eclipse,
        )

    def update(
        self,
        sun_position: PlanarPoint | tuple[float, float],
        moon_position: PlanarPoint | tuple[float, float],
        declination_deg: float = 0.0,
        eclipse_report: GeoCoordinate | None = None,
    ) -> SkySnapshot:
        """Accept freshly computed celestial positions for this tick."""
        self._snapshot = self._build_snapshot(
            _as_point(sun_position),
            _as_point(moon_position),
            float(declination_deg),
            eclipse_report,
            self._snapshot.phase,
        )
        logger.debug(
            "sky update sun=(%.1f, %.1f) moon=(%.1f, %.1f) decl=%.2f phase=%.3f eclipse=%s",
            self._snapshot.sun.x,
            self._snapshot.sun.z,
            self._snapshot.moon.x,
            self._snapshot.moon.z,
            self._snapshot.declination_deg,
            self._snapshot.phase,
            self._snapshot.eclipse.is_occurring,
        )
        return self._snapshot

    def sample_illumination(self, point: PlanarPoint | tuple[float, float]) -> IlluminationSample:
        """Return the illumination sample at one disc point."""
        snap = self._snapshot
        return illuminate(
            _as_point(point),
            snap.sun,
            snap.moon,
            snap.phase,
            radians(snap.declination_deg),
            self.config.lighting,
            self.config.disc.radius,
            snap.eclipse.attenuation,
        )

    def sample_illumination_grid(self, xs: np.ndarray, zs: np.ndarray) -> IlluminationField:
        """Return illumination over broadcastable coordinate arrays."""
        snap = self._snapshot
        return illuminate_grid(
            xs,
            zs,
            snap.sun,
            snap.moon,
            snap.phase,
            radians(snap.declination_deg),
            self.config.lighting,
            self.config.disc.radius,
            snap.eclipse.attenuation,
        )

    def sample_moon_phase(self) -> float:
        """Return the current normalized moon phase (0 new, 1 full)."""
        return self._snapshot.phase

    def sample_eclipse(self) -> EclipseState:
        """Return the current eclipse state."""
        return self._snapshot.eclipse

    def project_geo_to_plane(self, coord: GeoCoordinate) -> PlanarPoint:
        """Place a geographic coordinate on the disc."""
        return geo_to_plane(coord, self.config.disc)

    def project_plane_to_geo(self, point: PlanarPoint | tuple[float, float]) -> GeoCoordinate:
        """Report the geographic coordinate under a disc point."""
        return plane_to_geo(_as_point(point), self.config.disc)

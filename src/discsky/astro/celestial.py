"""Zenith geometry of light sources hovering above the disc."""

from __future__ import annotations

import numpy as np

from discsky.contracts import CelestialBody, PlanarPoint


def zenith_cosine(point: PlanarPoint, body: CelestialBody) -> float:
    """Return the cosine of the zenith angle of `body` seen from `point`.

    The value is 1.0 directly beneath the body and decays toward 0 with planar
    distance. It is never negative: the source always sits above the plane.
    """
    dx = point.x - body.x
    dz = point.z - body.z
    return float(body.height / np.sqrt(dx * dx + dz * dz + body.height * body.height))


def zenith_cosine_grid(xs: np.ndarray, zs: np.ndarray, body: CelestialBody) -> np.ndarray:
    """Vectorized `zenith_cosine` over broadcastable coordinate arrays."""
    dx = np.asarray(xs, dtype=float) - body.x
    dz = np.asarray(zs, dtype=float) - body.z
    return body.height / np.sqrt(dx * dx + dz * dz + body.height * body.height)


def planar_separation(a: PlanarPoint, b: PlanarPoint) -> float:
    """Euclidean distance between two disc points."""
    return float(np.hypot(a.x - b.x, a.z - b.z))

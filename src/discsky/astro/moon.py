"""Lunar phase derived from the planar sun-moon angular separation.

Convention: `compute_phase` returns 0.0 for a new moon (sun and moon in the
same direction from the disc center) and 1.0 for a full moon (opposite
directions). `signed_phase` carries the same information in [-1, 1].
"""

from __future__ import annotations

from math import acos, cos, hypot, pi

import numpy as np

from discsky.contracts import PlanarPoint

DEFAULT_PHASE = 0.5
DEFAULT_SPOT_OPACITY = 0.21


def angular_separation(sun: PlanarPoint, moon: PlanarPoint) -> float | None:
    """Return the angle between the two position vectors normalized to [0, 1].

    Returns None when either vector has zero length.
    """
    sun_len = hypot(sun.x, sun.z)
    moon_len = hypot(moon.x, moon.z)
    if sun_len == 0.0 or moon_len == 0.0:
        return None
    dot = (sun.x * moon.x + sun.z * moon.z) / (sun_len * moon_len)
    return acos(max(-1.0, min(1.0, dot))) / pi


def signed_phase(sun: PlanarPoint, moon: PlanarPoint, default: float = 0.0) -> float:
    """Return the phase in [-1, 1]: -1 new moon, +1 full moon."""
    separation = angular_separation(sun, moon)
    if separation is None:
        return default
    return -cos(separation * pi)


def compute_phase(sun: PlanarPoint, moon: PlanarPoint, default: float = DEFAULT_PHASE) -> float:
    """Return the normalized phase in [0, 1].

    A zero-length sun or moon vector leaves the phase undefined and `default`
    is returned instead.
    """
    separation = angular_separation(sun, moon)
    if separation is None:
        return default
    return (1.0 - cos(separation * pi)) / 2.0


def phase_spot_alpha(u, v, phase: float, opacity: float = DEFAULT_SPOT_OPACITY):
    """Opacity of the moon-phase spot at local disc coordinates `(u, v)`.

    `(u, v)` span the unit disc of the spot; `phase` is the signed phase. A
    cosine mask against the phase-shifted polar angle hides the dark limb, and
    opacity fades linearly toward the spot edge. Accepts scalars or arrays.
    """
    u_arr = np.asarray(u, dtype=float)
    v_arr = np.asarray(v, dtype=float)
    r = np.hypot(u_arr, v_arr)
    angle = np.arctan2(v_arr, u_arr)
    mask = (np.cos(angle - phase * pi) + 1.0) / 2.0
    threshold = 0.5 + 0.5 * phase
    visible = (mask <= threshold).astype(float)
    alpha = np.where(r > 1.0, 0.0, opacity * visible * (1.0 - r))
    if alpha.ndim == 0:
        return float(alpha)
    return alpha

"""Hermite smooth thresholds shared by the lighting and eclipse models."""

from __future__ import annotations

import numpy as np


def smoothstep(edge0: float, edge1: float, value):
    """Return the cubic Hermite step of `value` between `edge0 < edge1`.

    0.0 at or below `edge0`, 1.0 at or above `edge1`, C1-continuous in between.
    Returns a float for scalar input and an ndarray for array input.
    """
    if not edge0 < edge1:
        raise ValueError("smoothstep requires edge0 < edge1.")
    t = np.clip((np.asarray(value, dtype=float) - edge0) / (edge1 - edge0), 0.0, 1.0)
    out = t * t * (3.0 - 2.0 * t)
    if out.ndim == 0:
        return float(out)
    return out

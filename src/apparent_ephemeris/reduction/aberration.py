"""Annual aberration from the Earth's heliocentric velocity."""

from __future__ import annotations

import math

from apparent_ephemeris.constants import CLIGHT_AU_PER_DAY
from apparent_ephemeris.vec_math import Vec3, vdot, vnorm, vscl


def annual(p: Vec3, velocity: Vec3) -> Vec3:
    """Relativistic annual aberration.

    Parameters:
        p: Geocentric object vector (AU).
        velocity: Earth velocity (AU/day).

    Returns:
        Aberrated vector with the same length as p.
    """
    eo = vnorm(p)
    if eo == 0.0:
        return list(p)
    v = vscl(1.0 / CLIGHT_AU_PER_DAY, velocity)
    u = vscl(1.0 / eo, p)
    beta_inv = math.sqrt(1.0 - vdot(v, v))
    pv = vdot(u, v)
    factor = 1.0 + pv / (1.0 + beta_inv)
    denom = 1.0 + pv
    return [eo * (beta_inv * u[i] + factor * v[i]) / denom for i in range(3)]

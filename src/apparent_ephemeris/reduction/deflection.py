"""Gravitational deflection of light by the Sun."""

from __future__ import annotations

from apparent_ephemeris.constants import GRAVITATIONAL_DEFLECTION
from apparent_ephemeris.models import Geometry
from apparent_ephemeris.vec_math import Vec3, vadd, vhat, vscl, vsub


def relativity(p: Vec3, q: Vec3, e: Vec3, geometry: Geometry) -> Vec3:
    """Apply general-relativistic light bending to a geocentric vector.

    dp = EO (2 mu / c^2 SE) (pq e_hat - ep q_hat) / (1 + qe)

    Parameters:
        p: Geocentric object vector (AU).
        q: Heliocentric object vector (AU).
        e: Heliocentric Earth vector (AU).
        geometry: Triangle from geometry.angles(p, q, e).

    Returns:
        Deflected geocentric vector.
    """
    g = geometry
    if g.sun_object == 0.0:
        return list(p)
    scale = g.earth_object * GRAVITATIONAL_DEFLECTION / (g.sun_earth * (1.0 + g.qe))
    shift = vsub(vscl(g.pq, vhat(e)), vscl(g.ep, vhat(q)))
    return vadd(p, vscl(scale, shift))

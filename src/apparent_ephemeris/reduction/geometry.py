"""Sun-Earth-object triangle, visual magnitude and illuminated fraction."""

from __future__ import annotations

import math

from apparent_ephemeris.constants import PHASE_FUDGE_OFFSET, PHASE_FUDGE_SCALE
from apparent_ephemeris.models import Geometry
from apparent_ephemeris.vec_math import Vec3, vdot, vnorm


def angles(p: Vec3, q: Vec3, e: Vec3) -> Geometry:
    """Distances and direction cosines of the Sun-Earth-object triangle.

    Parameters:
        p: Geocentric object vector (AU).
        q: Heliocentric object vector (AU); zero for the Sun itself.
        e: Heliocentric Earth vector (AU).

    Returns:
        Geometry with EO, SO, SE and the cosines pq, ep, qe.
    """
    eo = vnorm(p)
    so = vnorm(q)
    se = vnorm(e)
    ep = vdot(e, p) / (se * eo)
    if so == 0.0:
        # Object is the Sun: fully lit, no Sun-object direction.
        return Geometry(earth_object=eo, sun_object=0.0, sun_earth=se, pq=1.0, ep=ep, qe=0.0)
    return Geometry(
        earth_object=eo,
        sun_object=so,
        sun_earth=se,
        pq=vdot(p, q) / (eo * so),
        ep=ep,
        qe=vdot(q, e) / (so * se),
    )


def magnitude(base: float, geometry: Geometry) -> float:
    """Approximate visual magnitude from V(1,0), distances and phase.

    The (1.01 + 0.99 pq) term keeps the log finite at full phase angle;
    results for Mercury and Venus are rough.
    """
    g = geometry
    return (
        base
        + 2.1715 * math.log(g.earth_object * g.sun_object)
        - 1.085 * math.log(0.5 * (PHASE_FUDGE_OFFSET + PHASE_FUDGE_SCALE * g.pq))
    )


def illuminated_fraction(geometry: Geometry) -> float:
    """Fraction of the disc that is lit, 0.5 (1 + cos phase angle)."""
    return 0.5 * (1.0 + geometry.pq)


def equatorial_diameter(semi_diameter: float, distance: float) -> float:
    """Apparent diameter in arcseconds from the semidiameter at 1 AU."""
    return 2.0 * semi_diameter / distance

"""Light-time correction for solar system bodies."""

from __future__ import annotations

import logging

from apparent_ephemeris import kepler
from apparent_ephemeris.catalog.base import OrbitalElements
from apparent_ephemeris.constants import CLIGHT_AU_PER_DAY, LIGHT_TIME_ITERATIONS
from apparent_ephemeris.models import HeliocentricPosition
from apparent_ephemeris.vec_math import Vec3, vnorm, vsub

logger = logging.getLogger(__name__)


def correct(
    jd: float,
    elements: OrbitalElements,
    earth_rect: Vec3,
    geometric: HeliocentricPosition | None = None,
) -> tuple[HeliocentricPosition, float]:
    """Position of a body at the time its light left it.

    Starts from the geometric position at jd, then re-solves the orbit at
    jd - tau and recomputes tau, for a fixed number of iterations.

    Parameters:
        jd: Julian date (TDT) of observation.
        elements: Orbital elements of the body.
        earth_rect: Heliocentric Earth position at jd (AU).
        geometric: Position at jd if already solved.

    Returns:
        (retarded heliocentric position, light time in days).
    """
    q = geometric if geometric is not None else kepler.solve(jd, elements)
    tau = vnorm(vsub(q.rect, earth_rect)) / CLIGHT_AU_PER_DAY
    for iteration in range(LIGHT_TIME_ITERATIONS):
        q = kepler.solve(jd - tau, elements)
        tau = vnorm(vsub(q.rect, earth_rect)) / CLIGHT_AU_PER_DAY
        logger.debug('Light time iteration %d: tau=%.9f d', iteration + 1, tau)
    return (q, tau)

"""Two-body orbit solver: elements at a date to heliocentric rectangular position."""

from __future__ import annotations

import logging
import math

from apparent_ephemeris.angle_utils import normalize_degrees, normalize_radians
from apparent_ephemeris.catalog.base import OrbitalElements
from apparent_ephemeris.constants import (
    KEPLER_HIGH_ECCENTRICITY,
    KEPLER_MAX_ITERATIONS,
    KEPLER_MAX_ITERATIONS_HIGH_ECC,
    KEPLER_TOLERANCE,
    OBLIQUITY_J2000,
)
from apparent_ephemeris.errors import NonConvergenceError
from apparent_ephemeris.models import HeliocentricPosition
from apparent_ephemeris.vec_math import mtxv, rotation

logger = logging.getLogger(__name__)

# Ecliptic J2000 -> equatorial J2000 is the inverse of rotating by +obliquity about x.
_ECLIPTIC_TO_EQUATOR = rotation(1, OBLIQUITY_J2000)


def eccentric_anomaly(mean_anomaly: float, eccentricity: float) -> float:
    """Solve Kepler's equation M = E - e sin E by Newton iteration.

    Parameters:
        mean_anomaly: M in radians.
        eccentricity: e in [0, 1).

    Returns:
        Eccentric anomaly E in radians.

    Raises:
        NonConvergenceError: If e >= 1 or the iteration cap is reached.
    """
    e = eccentricity
    if e >= 1.0:
        raise NonConvergenceError(f'Kepler equation needs an elliptic orbit; eccentricity {e!r}')
    max_iter = KEPLER_MAX_ITERATIONS_HIGH_ECC if e > KEPLER_HIGH_ECCENTRICITY else KEPLER_MAX_ITERATIONS
    # High eccentricity converges more reliably starting from pi.
    ecc_anom = math.pi if e > KEPLER_HIGH_ECCENTRICITY else mean_anomaly
    for iteration in range(1, max_iter + 1):
        delta = (ecc_anom - e * math.sin(ecc_anom) - mean_anomaly) / (1.0 - e * math.cos(ecc_anom))
        ecc_anom -= delta
        if abs(delta) < KEPLER_TOLERANCE:
            logger.debug('Kepler converged in %d iterations (e=%.6f)', iteration, e)
            return ecc_anom
    raise NonConvergenceError(
        f'Kepler equation did not converge in {max_iter} iterations (M={mean_anomaly!r}, e={e!r})'
    )


def solve(jd: float, elements: OrbitalElements) -> HeliocentricPosition:
    """Heliocentric position of a body on its Keplerian orbit.

    Parameters:
        jd: Julian date (TDT).
        elements: Orbital elements referred to the J2000 ecliptic.

    Returns:
        HeliocentricPosition with equatorial J2000 rectangular coordinates (AU),
        ecliptic J2000 longitude/latitude (degrees) and the orbit anomalies.
    """
    e = elements.eccentricity
    mean_anom = normalize_radians(
        math.radians(elements.mean_anomaly + elements.daily_motion * (jd - elements.epoch))
    )
    ecc_anom = eccentric_anomaly(mean_anom, e)
    true_anom = 2.0 * math.atan(math.sqrt((1.0 + e) / (1.0 - e)) * math.tan(0.5 * ecc_anom))
    r = elements.a * (1.0 - e * math.cos(ecc_anom))

    # Argument of latitude, then orbit plane -> J2000 ecliptic.
    u = true_anom + math.radians(elements.perihelion)
    node = math.radians(elements.node)
    incl = math.radians(elements.inclination)
    cos_u, sin_u = math.cos(u), math.sin(u)
    cos_node, sin_node = math.cos(node), math.sin(node)
    cos_i = math.cos(incl)
    ecliptic = [
        r * (cos_node * cos_u - sin_node * sin_u * cos_i),
        r * (sin_node * cos_u + cos_node * sin_u * cos_i),
        r * sin_u * math.sin(incl),
    ]
    longitude = normalize_degrees(math.degrees(math.atan2(ecliptic[1], ecliptic[0])))
    latitude = math.degrees(math.asin(max(-1.0, min(1.0, ecliptic[2] / r))))

    return HeliocentricPosition(
        rect=mtxv(_ECLIPTIC_TO_EQUATOR, ecliptic),
        distance=r,
        longitude=longitude,
        latitude=latitude,
        eccentric_anomaly=ecc_anom,
        true_anomaly=normalize_radians(true_anom),
        jd=jd,
    )

"""Obliquity of the ecliptic and ecliptic <-> equatorial conversion."""

from __future__ import annotations

import math

from apparent_ephemeris.angle_utils import normalize_degrees
from apparent_ephemeris.constants import J2000, JULIAN_CENTURY_DAYS, OBLIQUITY_J2000, STR
from apparent_ephemeris.models import EclipticPosition
from apparent_ephemeris.reduction.precession import FROM_J2000, precess
from apparent_ephemeris.vec_math import Vec3, mtxv, mxv, rotation, vnorm


def mean_obliquity(jd: float) -> float:
    """Mean obliquity of the ecliptic of date (Lieske 1977), radians."""
    t = (jd - J2000) / JULIAN_CENTURY_DAYS
    return OBLIQUITY_J2000 + (-46.8150 + (-0.00059 + 0.001813 * t) * t) * t * STR


def equatorial_to_ecliptic(v: Vec3, obliquity: float) -> EclipticPosition:
    """Ecliptic longitude/latitude (degrees) of an equatorial vector."""
    x, y, z = mxv(rotation(1, obliquity), v)
    r = vnorm(v)
    if r == 0.0:
        return EclipticPosition(longitude=0.0, latitude=0.0)
    return EclipticPosition(
        longitude=normalize_degrees(math.degrees(math.atan2(y, x))),
        latitude=math.degrees(math.asin(max(-1.0, min(1.0, z / r)))),
    )


def ecliptic_to_equatorial(longitude: float, latitude: float, r: float, obliquity: float) -> Vec3:
    """Equatorial rectangular vector from ecliptic lon/lat (degrees) and range."""
    lon = math.radians(longitude)
    lat = math.radians(latitude)
    ecl = [
        r * math.cos(lat) * math.cos(lon),
        r * math.cos(lat) * math.sin(lon),
        r * math.sin(lat),
    ]
    return mtxv(rotation(1, obliquity), ecl)


def lonlat(q: Vec3, jd: float, of_date: bool = True) -> EclipticPosition:
    """Geometric ecliptic coordinates of a J2000 equatorial vector.

    Parameters:
        q: Equatorial J2000 vector.
        jd: Julian date (TDT).
        of_date: Refer to the mean equinox of date; otherwise to J2000.
    """
    if of_date:
        return equatorial_to_ecliptic(precess(q, jd, FROM_J2000), mean_obliquity(jd))
    return equatorial_to_ecliptic(q, OBLIQUITY_J2000)

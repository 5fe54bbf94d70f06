"""Geocentric Moon from the truncated ELP-2000/82 series (Meeus, ch. 47).

Coordinates are geometric, referred to the mean ecliptic and equinox of date.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from apparent_ephemeris.angle_utils import normalize_degrees
from apparent_ephemeris.constants import (
    J2000,
    JULIAN_CENTURY_DAYS,
    LUNAR_ELONGATION_RATE,
    LUNAR_QUARTER_NAMES,
)
from apparent_ephemeris.models import LunarPhase


@dataclass(frozen=True)
class LunarCoordinates:
    """Mean-of-date ecliptic longitude/latitude (degrees) and distance (km)."""

    longitude: float
    latitude: float
    distance_km: float


# (D, M, M', F, longitude coefficient in 1e-6 deg, distance coefficient in m)
LUNAR_LON_DIST_TERMS = (
    (0, 0, 1, 0, 6288774, -20905355),
    (2, 0, -1, 0, 1274027, -3699111),
    (2, 0, 0, 0, 658314, -2955968),
    (0, 0, 2, 0, 213618, -569925),
    (0, 1, 0, 0, -185116, 48888),
    (0, 0, 0, 2, -114332, -3149),
    (2, 0, -2, 0, 58793, 246158),
    (2, -1, -1, 0, 57066, -152138),
    (2, 0, 1, 0, 53322, -170733),
    (2, -1, 0, 0, 45758, -204586),
    (0, 1, -1, 0, -40923, -129620),
    (1, 0, 0, 0, -34720, 108743),
    (0, 1, 1, 0, -30383, 104755),
    (2, 0, 0, -2, 15327, 10321),
    (0, 0, 1, 2, -12528, 0),
    (0, 0, 1, -2, 10980, 79661),
    (4, 0, -1, 0, 10675, -34782),
    (0, 0, 3, 0, 10034, -23210),
    (4, 0, -2, 0, 8548, -21636),
    (2, 1, -1, 0, -7888, 24208),
    (2, 1, 0, 0, -6766, 30824),
    (1, 0, -1, 0, -5163, -8379),
    (1, 1, 0, 0, 4987, -16675),
    (2, -1, 1, 0, 4036, -12831),
    (2, 0, 2, 0, 3994, -10445),
    (4, 0, 0, 0, 3861, -11650),
    (2, 0, -3, 0, 3665, 14403),
    (0, 1, -2, 0, -2689, -7003),
    (2, 0, -1, 2, -2602, 0),
    (2, -1, -2, 0, 2390, 10056),
    (1, 0, 1, 0, -2348, 6322),
    (2, -2, 0, 0, 2236, -9884),
    (0, 1, 2, 0, -2120, 5751),
    (0, 2, 0, 0, -2069, 0),
    (2, -2, -1, 0, 2048, -4950),
    (2, 0, 1, -2, -1773, 4130),
    (2, 0, 0, 2, -1595, 0),
    (4, -1, -1, 0, 1215, -3958),
    (0, 0, 2, 2, -1110, 0),
    (3, 0, -1, 0, -892, 3258),
    (2, 1, 1, 0, -810, 2616),
    (4, -1, -2, 0, 759, -1897),
    (0, 2, -1, 0, -713, -2117),
    (2, 2, -1, 0, -700, 2354),
    (2, 1, -2, 0, 691, 0),
    (2, -1, 0, -2, 596, 0),
    (4, 0, 1, 0, 549, -1423),
    (0, 0, 4, 0, 537, -1117),
    (4, -1, 0, 0, 520, -1571),
    (1, 0, -2, 0, -487, -1739),
    (2, 1, 0, -2, -399, 0),
    (0, 0, 2, -2, -381, -4421),
    (1, 1, 1, 0, 351, 0),
    (3, 0, -2, 0, -340, 0),
    (4, 0, -3, 0, 330, 0),
    (2, -1, 2, 0, 327, 0),
    (0, 2, 1, 0, -323, 1165),
    (1, 1, -1, 0, 299, 0),
    (2, 0, 3, 0, 294, 0),
    (2, 0, -1, -2, 0, 8752),
)

# (D, M, M', F, latitude coefficient in 1e-6 deg)
LUNAR_LAT_TERMS = (
    (0, 0, 0, 1, 5128122),
    (0, 0, 1, 1, 280602),
    (0, 0, 1, -1, 277693),
    (2, 0, 0, -1, 173237),
    (2, 0, -1, 1, 55413),
    (2, 0, -1, -1, 46271),
    (2, 0, 0, 1, 32573),
    (0, 0, 2, 1, 17198),
    (2, 0, 1, -1, 9266),
    (0, 0, 2, -1, 8822),
    (2, -1, 0, -1, 8216),
    (2, 0, -2, -1, 4324),
    (2, 0, 1, 1, 4200),
    (2, 1, 0, -1, -3359),
    (2, -1, -1, 1, 2463),
    (2, -1, 0, 1, 2211),
    (2, -1, -1, -1, 2065),
    (0, 1, -1, -1, -1870),
    (4, 0, -1, -1, 1828),
    (0, 1, 0, 1, -1794),
    (0, 0, 0, 3, -1749),
    (0, 1, -1, 1, -1565),
    (1, 0, 0, 1, -1491),
    (0, 1, 1, 1, -1475),
    (0, 1, 1, -1, -1410),
    (0, 1, 0, -1, -1344),
    (1, 0, 0, -1, -1335),
    (0, 0, 3, 1, 1107),
    (4, 0, 0, -1, 1021),
    (4, 0, -1, 1, 833),
    (0, 0, 1, -3, 777),
    (4, 0, -2, 1, 671),
    (2, 0, 0, -3, 607),
    (2, 0, 2, -1, 596),
    (2, -1, 1, -1, 491),
    (2, 0, -2, 1, -451),
    (0, 0, 3, -1, 439),
    (2, 0, 2, 1, 422),
    (2, 0, -3, -1, 421),
    (2, 1, -1, 1, -366),
    (2, 1, 0, 1, -351),
    (4, 0, 0, 1, 331),
    (2, -1, 1, 1, 315),
    (2, -2, 0, -1, 302),
    (0, 0, 1, 3, -283),
    (2, 1, 1, -1, -229),
    (1, 1, 0, -1, 223),
    (1, 1, 0, 1, 223),
    (0, 1, -2, -1, -220),
    (2, 1, -1, -1, -220),
    (1, 0, 1, 1, -185),
    (2, -1, -2, -1, 181),
    (0, 1, 2, 1, -177),
    (4, 0, -2, -1, 176),
    (4, -1, -1, -1, 166),
    (1, 0, 1, -1, -164),
    (4, 0, 1, -1, 132),
    (1, 0, -1, -1, -119),
    (4, -1, 0, -1, 115),
    (2, -2, 0, 1, 107),
)

_MEAN_DISTANCE_KM = 385000.56


def _eccentricity_factor(m: int, e: float) -> float:
    """Terms in the Sun's anomaly M are damped by E (or E^2 for 2M)."""
    if abs(m) == 1:
        return e
    if abs(m) == 2:
        return e * e
    return 1.0


def position(jd: float) -> LunarCoordinates:
    """Geometric lunar coordinates referred to the mean equinox of date.

    Parameters:
        jd: Julian date (TDT).

    Returns:
        LunarCoordinates with longitude in [0, 360), latitude and distance.
    """
    t = (jd - J2000) / JULIAN_CENTURY_DAYS
    t2 = t * t
    t3 = t2 * t
    t4 = t3 * t
    lp = 218.3164477 + 481267.88123421 * t - 0.0015786 * t2 + t3 / 538841.0 - t4 / 65194000.0
    d = 297.8501921 + 445267.1114034 * t - 0.0018819 * t2 + t3 / 545868.0 - t4 / 113065000.0
    m = 357.5291092 + 35999.0502909 * t - 0.0001536 * t2 + t3 / 24490000.0
    mp = 134.9633964 + 477198.8675055 * t + 0.0087414 * t2 + t3 / 69699.0 - t4 / 14712000.0
    f = 93.2720950 + 483202.0175233 * t - 0.0036539 * t2 - t3 / 3526000.0 + t4 / 863310000.0
    a1 = math.radians(119.75 + 131.849 * t)
    a2 = math.radians(53.09 + 479264.290 * t)
    a3 = math.radians(313.45 + 481266.484 * t)
    ecc = 1.0 - 0.002516 * t - 0.0000074 * t2

    lp_r, d_r, m_r, mp_r, f_r = (math.radians(x % 360.0) for x in (lp, d, m, mp, f))

    sum_l = 0.0
    sum_r = 0.0
    for cd, cm, cmp, cf, coef_l, coef_r in LUNAR_LON_DIST_TERMS:
        arg = cd * d_r + cm * m_r + cmp * mp_r + cf * f_r
        factor = _eccentricity_factor(cm, ecc)
        sum_l += coef_l * factor * math.sin(arg)
        sum_r += coef_r * factor * math.cos(arg)

    sum_b = 0.0
    for cd, cm, cmp, cf, coef_b in LUNAR_LAT_TERMS:
        arg = cd * d_r + cm * m_r + cmp * mp_r + cf * f_r
        sum_b += coef_b * _eccentricity_factor(cm, ecc) * math.sin(arg)

    # Venus, Jupiter and flattening terms.
    sum_l += 3958.0 * math.sin(a1) + 1962.0 * math.sin(lp_r - f_r) + 318.0 * math.sin(a2)
    sum_b += (
        -2235.0 * math.sin(lp_r)
        + 382.0 * math.sin(a3)
        + 175.0 * math.sin(a1 - f_r)
        + 175.0 * math.sin(a1 + f_r)
        + 127.0 * math.sin(lp_r - mp_r)
        - 115.0 * math.sin(lp_r + mp_r)
    )

    return LunarCoordinates(
        longitude=normalize_degrees(lp + sum_l * 1.0e-6),
        latitude=sum_b * 1.0e-6,
        distance_km=_MEAN_DISTANCE_KM + sum_r / 1000.0,
    )


def magnitude(phase_angle: float) -> float:
    """Approximate visual magnitude of the Moon for a phase angle in degrees."""
    i = abs(phase_angle)
    return -12.73 + 0.026 * i + 4.0e-9 * i**4


def phase(moon_longitude: float, sun_longitude: float, phase_angle: float) -> LunarPhase:
    """Phase description from apparent ecliptic longitudes of Moon and Sun.

    The days to and since the nearest quarter use the mean elongation rate,
    so they are approximate to a few hours.

    Parameters:
        moon_longitude: Apparent lunar longitude, degrees.
        sun_longitude: Apparent solar longitude, degrees.
        phase_angle: Sun-Moon-Earth angle, degrees.
    """
    elongation = normalize_degrees(moon_longitude - sun_longitude)
    quarter = int(elongation // 90.0) % 4
    into_quarter = elongation - 90.0 * quarter
    return LunarPhase(
        illuminated_fraction=0.5 * (1.0 + math.cos(math.radians(phase_angle))),
        phase_angle=phase_angle,
        quarter=quarter,
        quarter_name=LUNAR_QUARTER_NAMES[quarter],
        days_since_quarter=into_quarter / LUNAR_ELONGATION_RATE,
        days_to_next_quarter=(90.0 - into_quarter) / LUNAR_ELONGATION_RATE,
    )

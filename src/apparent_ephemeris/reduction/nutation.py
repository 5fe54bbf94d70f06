"""IAU 1980 nutation in longitude and obliquity."""

from __future__ import annotations

import math

import numpy as np

from apparent_ephemeris.constants import J2000, JULIAN_CENTURY_DAYS, STR
from apparent_ephemeris.reduction.ecliptic import mean_obliquity
from apparent_ephemeris.vec_math import Vec3, mxv, rotation

# Multipliers of (D, M, M', F, Omega), then dpsi = (a + b T) sin(arg) and
# deps = (c + d T) cos(arg), in units of 0.0001".
_NUTATION_TERMS = (
    (0, 0, 0, 0, 1, -171996, -174.2, 92025, 8.9),
    (-2, 0, 0, 2, 2, -13187, -1.6, 5736, -3.1),
    (0, 0, 0, 2, 2, -2274, -0.2, 977, -0.5),
    (0, 0, 0, 0, 2, 2062, 0.2, -895, 0.5),
    (0, 1, 0, 0, 0, 1426, -3.4, 54, -0.1),
    (0, 0, 1, 0, 0, 712, 0.1, -7, 0.0),
    (-2, 1, 0, 2, 2, -517, 1.2, 224, -0.6),
    (0, 0, 0, 2, 1, -386, -0.4, 200, 0.0),
    (0, 0, 1, 2, 2, -301, 0.0, 129, -0.1),
    (-2, -1, 0, 2, 2, 217, -0.5, -95, 0.3),
    (-2, 0, 1, 0, 0, -158, 0.0, 0, 0.0),
    (-2, 0, 0, 2, 1, 129, 0.1, -70, 0.0),
    (0, 0, -1, 2, 2, 123, 0.0, -53, 0.0),
    (2, 0, 0, 0, 0, 63, 0.0, 0, 0.0),
    (0, 0, 1, 0, 1, 63, 0.1, -33, 0.0),
    (2, 0, -1, 2, 2, -59, 0.0, 26, 0.0),
    (0, 0, -1, 0, 1, -58, -0.1, 32, 0.0),
    (0, 0, 1, 2, 1, -51, 0.0, 27, 0.0),
    (-2, 0, 2, 0, 0, 48, 0.0, 0, 0.0),
    (0, 0, -2, 2, 1, 46, 0.0, -24, 0.0),
    (2, 0, 0, 2, 2, -38, 0.0, 16, 0.0),
    (0, 0, 2, 2, 2, -31, 0.0, 13, 0.0),
    (0, 0, 2, 0, 0, 29, 0.0, 0, 0.0),
    (-2, 0, 1, 2, 2, 29, 0.0, -12, 0.0),
    (0, 0, 0, 2, 0, 26, 0.0, 0, 0.0),
    (-2, 0, 0, 2, 0, -22, 0.0, 0, 0.0),
    (0, 0, -1, 2, 1, 21, 0.0, -10, 0.0),
    (0, 2, 0, 0, 0, 17, -0.1, 0, 0.0),
    (2, 0, -1, 0, 1, 16, 0.0, -8, 0.0),
    (-2, 2, 0, 2, 2, -16, 0.1, 7, 0.0),
    (0, 1, 0, 0, 1, -15, 0.0, 9, 0.0),
    (-2, 0, 1, 0, 1, -13, 0.0, 7, 0.0),
    (0, -1, 0, 0, 1, -12, 0.0, 6, 0.0),
    (0, 0, 2, -2, 0, 11, 0.0, 0, 0.0),
    (2, 0, -1, 2, 1, -10, 0.0, 5, 0.0),
    (2, 0, 1, 2, 2, -8, 0.0, 3, 0.0),
    (0, 1, 0, 2, 2, 7, 0.0, -3, 0.0),
    (-2, 1, 1, 0, 0, -7, 0.0, 0, 0.0),
    (0, -1, 0, 2, 2, -7, 0.0, 3, 0.0),
    (2, 0, 0, 2, 1, -7, 0.0, 3, 0.0),
    (2, 0, 1, 0, 0, 6, 0.0, 0, 0.0),
    (-2, 0, 2, 2, 2, 6, 0.0, -3, 0.0),
    (-2, 0, 1, 2, 1, 6, 0.0, -3, 0.0),
    (2, 0, -2, 0, 1, -6, 0.0, 3, 0.0),
    (2, 0, 0, 0, 1, -6, 0.0, 3, 0.0),
    (0, -1, 1, 0, 0, 5, 0.0, 0, 0.0),
    (-2, -1, 0, 2, 1, -5, 0.0, 3, 0.0),
    (-2, 0, 0, 0, 1, -5, 0.0, 3, 0.0),
    (0, 0, 2, 2, 1, -5, 0.0, 3, 0.0),
    (-2, 0, 2, 0, 1, 4, 0.0, 0, 0.0),
    (-2, 1, 0, 2, 1, 4, 0.0, 0, 0.0),
    (0, 0, 1, -2, 0, 4, 0.0, 0, 0.0),
    (-1, 0, 1, 0, 0, -4, 0.0, 0, 0.0),
    (-2, 1, 0, 0, 0, -4, 0.0, 0, 0.0),
    (1, 0, 0, 0, 0, -4, 0.0, 0, 0.0),
    (0, 0, 1, 2, 0, 3, 0.0, 0, 0.0),
    (0, 0, -2, 2, 2, -3, 0.0, 0, 0.0),
    (-1, -1, 1, 0, 0, -3, 0.0, 0, 0.0),
    (0, 1, 1, 0, 0, -3, 0.0, 0, 0.0),
    (0, -1, 1, 2, 2, -3, 0.0, 0, 0.0),
    (2, -1, -1, 2, 2, -3, 0.0, 0, 0.0),
    (0, 0, 3, 2, 2, -3, 0.0, 0, 0.0),
    (2, -1, 0, 2, 2, -3, 0.0, 0, 0.0),
)

_TERM_UNIT = 1.0e-4 * STR


def fundamental_arguments(t: float) -> tuple[float, float, float, float, float]:
    """Delaunay arguments (D, M, M', F, Omega) in radians at t Julian centuries."""
    t2 = t * t
    t3 = t2 * t
    d = 297.85036 + 445267.111480 * t - 0.0019142 * t2 + t3 / 189474.0
    m = 357.52772 + 35999.050340 * t - 0.0001603 * t2 - t3 / 300000.0
    mp = 134.96298 + 477198.867398 * t + 0.0086972 * t2 + t3 / 56250.0
    f = 93.27191 + 483202.017538 * t - 0.0036825 * t2 + t3 / 327270.0
    om = 125.04452 - 1934.136261 * t + 0.0020708 * t2 + t3 / 450000.0
    return (
        math.radians(d % 360.0),
        math.radians(m % 360.0),
        math.radians(mp % 360.0),
        math.radians(f % 360.0),
        math.radians(om % 360.0),
    )


def nutation_angles(jd: float) -> tuple[float, float]:
    """Nutation in longitude and in obliquity at jd (TDT).

    Returns:
        (dpsi, deps) in radians.
    """
    t = (jd - J2000) / JULIAN_CENTURY_DAYS
    args = fundamental_arguments(t)
    dpsi = 0.0
    deps = 0.0
    for term in _NUTATION_TERMS:
        arg = sum(k * a for k, a in zip(term[:5], args))
        dpsi += (term[5] + term[6] * t) * math.sin(arg)
        deps += (term[7] + term[8] * t) * math.cos(arg)
    return (dpsi * _TERM_UNIT, deps * _TERM_UNIT)


def true_obliquity(jd: float) -> float:
    """Mean obliquity of date plus nutation in obliquity, radians."""
    return mean_obliquity(jd) + nutation_angles(jd)[1]


def equation_of_equinoxes(jd: float) -> float:
    """dpsi * cos(true obliquity), radians."""
    dpsi, deps = nutation_angles(jd)
    return dpsi * math.cos(mean_obliquity(jd) + deps)


def nutation_matrix(jd: float) -> np.ndarray:
    """Rotation from the mean equator of date to the true equator of date."""
    dpsi, deps = nutation_angles(jd)
    eps0 = mean_obliquity(jd)
    return rotation(1, -(eps0 + deps)) @ rotation(3, -dpsi) @ rotation(1, eps0)


def nutate(v: Vec3, jd: float) -> Vec3:
    """Rotate a mean-of-date vector to the true equator and equinox of date."""
    return mxv(nutation_matrix(jd), v)

"""IAU 1976 precession (Lieske) between J2000 and an arbitrary epoch."""

from __future__ import annotations

import numpy as np

from apparent_ephemeris.constants import J2000, JULIAN_CENTURY_DAYS, STR
from apparent_ephemeris.vec_math import Vec3, mtxv, mxv, rotation

FROM_J2000 = 1
TO_J2000 = -1


def precession_matrix(jd: float) -> np.ndarray:
    """Rotation from the mean equator and equinox of J2000 to those of jd.

    Parameters:
        jd: Julian date (TDT) of the target equinox.

    Returns:
        3x3 matrix P such that v_date = P @ v_J2000.
    """
    t = (jd - J2000) / JULIAN_CENTURY_DAYS
    zeta = (2306.2181 + (0.30188 + 0.017998 * t) * t) * t * STR
    z = (2306.2181 + (1.09468 + 0.018203 * t) * t) * t * STR
    theta = (2004.3109 + (-0.42665 - 0.041833 * t) * t) * t * STR
    return rotation(3, -z) @ rotation(2, theta) @ rotation(3, -zeta)


def precess(v: Vec3, jd: float, direction: int) -> Vec3:
    """Precess a vector between J2000 and the equinox of jd.

    Parameters:
        v: Equatorial rectangular vector.
        jd: Julian date of the other equinox.
        direction: FROM_J2000 (J2000 -> jd) or TO_J2000 (jd -> J2000).

    Returns:
        New precessed vector; v is unchanged.
    """
    if direction == FROM_J2000:
        return mxv(precession_matrix(jd), v)
    if direction == TO_J2000:
        return mtxv(precession_matrix(jd), v)
    raise ValueError(f'Invalid precession direction {direction!r}')

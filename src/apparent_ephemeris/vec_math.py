"""Vector and matrix utilities (3-vectors as lists, rotation matrices as numpy arrays)."""

from __future__ import annotations

import math

import numpy as np

from apparent_ephemeris.constants import TWOPI

Vec3 = list[float]


def vdot(a: Vec3, b: Vec3) -> float:
    """Dot product of two 3-vectors."""
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def vnorm(v: Vec3) -> float:
    """Euclidean norm of a 3-vector."""
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def vsub(a: Vec3, b: Vec3) -> Vec3:
    """Vector difference a - b."""
    return [a[0] - b[0], a[1] - b[1], a[2] - b[2]]


def vadd(a: Vec3, b: Vec3) -> Vec3:
    """Vector sum a + b."""
    return [a[0] + b[0], a[1] + b[1], a[2] + b[2]]


def vscl(s: float, v: Vec3) -> Vec3:
    """Scale vector: s * v."""
    return [s * v[0], s * v[1], s * v[2]]


def vhat(v: Vec3) -> Vec3:
    """Unit vector in direction of v; zero vector if v is zero."""
    n = vnorm(v)
    if n == 0.0:
        return [0.0, 0.0, 0.0]
    return [v[0] / n, v[1] / n, v[2] / n]


def vminus(v: Vec3) -> Vec3:
    """Negated vector."""
    return [-v[0], -v[1], -v[2]]


def rotation(axis: int, angle: float) -> np.ndarray:
    """Frame rotation matrix about a coordinate axis.

    Rotating the frame by +angle about ``axis`` (1=x, 2=y, 3=z) maps vector
    components from the old frame into the new one.

    Parameters:
        axis: Axis number 1, 2, or 3.
        angle: Rotation angle in radians.

    Returns:
        3x3 rotation matrix.
    """
    c = math.cos(angle)
    s = math.sin(angle)
    if axis == 1:
        return np.array([[1.0, 0.0, 0.0], [0.0, c, s], [0.0, -s, c]])
    if axis == 2:
        return np.array([[c, 0.0, -s], [0.0, 1.0, 0.0], [s, 0.0, c]])
    if axis == 3:
        return np.array([[c, s, 0.0], [-s, c, 0.0], [0.0, 0.0, 1.0]])
    raise ValueError(f'Invalid rotation axis {axis!r}; expected 1, 2, or 3')


def mxv(matrix: np.ndarray, v: Vec3) -> Vec3:
    """Matrix times vector."""
    return (matrix @ np.asarray(v, dtype=np.float64)).tolist()


def mtxv(matrix: np.ndarray, v: Vec3) -> Vec3:
    """Transpose of matrix times vector (inverse rotation)."""
    return (matrix.T @ np.asarray(v, dtype=np.float64)).tolist()


def recrad(v: Vec3) -> tuple[float, float, float]:
    """Rectangular to (range, right ascension, declination).

    Returns:
        Range, RA in [0, 2pi), and Dec in [-pi/2, pi/2] (radians).
    """
    r = vnorm(v)
    if r == 0.0:
        return (0.0, 0.0, 0.0)
    ra = math.atan2(v[1], v[0])
    if ra < 0.0:
        ra += TWOPI
    dec = math.asin(max(-1.0, min(1.0, v[2] / r)))
    return (r, ra, dec)


def radrec(r: float, ra: float, dec: float) -> Vec3:
    """Range, right ascension and declination (radians) to rectangular."""
    cosdec = math.cos(dec)
    return [r * cosdec * math.cos(ra), r * cosdec * math.sin(ra), r * math.sin(dec)]

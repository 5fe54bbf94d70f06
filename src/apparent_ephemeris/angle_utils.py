"""Angle normalization, modulo differences, and sexagesimal parsing/formatting."""

from __future__ import annotations

import math
import re

from apparent_ephemeris.constants import (
    ARCMIN_PER_DEGREE,
    ARCSEC_PER_DEGREE,
    DEGREES_PER_CIRCLE,
    DEGREES_PER_SIGN,
    TWOPI,
)


def normalize_radians(angle: float) -> float:
    """Reduce an angle to [0, 2pi)."""
    result = math.fmod(angle, TWOPI)
    if result < 0.0:
        result += TWOPI
    return result


def normalize_degrees(angle: float) -> float:
    """Reduce an angle to [0, 360)."""
    result = math.fmod(angle, DEGREES_PER_CIRCLE)
    if result < 0.0:
        result += DEGREES_PER_CIRCLE
    # fmod of a tiny negative value can round back up to exactly 360.
    if result >= DEGREES_PER_CIRCLE:
        result = 0.0
    return result


def modulo_difference(start: float, end: float, modulus: float = DEGREES_PER_CIRCLE) -> float:
    """Signed shortest-path difference from start to end on a circle.

    The result d satisfies ``start + d == end (mod modulus)`` and
    ``|d| <= modulus / 2``, so a crossing of 0°/360° is measured as a small
    step rather than a jump of nearly a full turn.

    Parameters:
        start: First angle.
        end: Second angle.
        modulus: Circle size (360 for degrees).

    Returns:
        Signed difference in [-modulus/2, modulus/2).
    """
    half = modulus / 2.0
    diff = math.fmod(end - start + half, modulus)
    if diff < 0.0:
        diff += modulus
    return diff - half


def mod30(degrees: int | float) -> int | float:
    """Position within the 30° zodiac sign (e.g. 237 -> 27); whole degrees stay int."""
    return degrees % int(DEGREES_PER_SIGN)


def dms_parts(degrees: float) -> tuple[int, int, float]:
    """Split a non-negative angle in degrees into (degrees, minutes, seconds).

    Parameters:
        degrees: Angle in degrees (sign is ignored).

    Returns:
        Whole degrees, whole minutes, and fractional seconds.
    """
    value = abs(degrees)
    whole = int(math.floor(value))
    remainder = (value - whole) * ARCMIN_PER_DEGREE
    minutes = int(math.floor(remainder))
    seconds = (remainder - minutes) * ARCMIN_PER_DEGREE
    # Guard against 59.99999... rounding up into an extra minute.
    if seconds >= ARCMIN_PER_DEGREE:
        seconds -= ARCMIN_PER_DEGREE
        minutes += 1
    if minutes >= ARCMIN_PER_DEGREE:
        minutes -= int(ARCMIN_PER_DEGREE)
        whole += 1
    return whole, minutes, seconds


def longitude_string(degrees: float) -> str:
    """Format an ecliptic longitude as D°M'S" with whole seconds."""
    deg, minutes, seconds = dms_parts(degrees)
    return f'{deg}°{minutes}\'{math.floor(seconds)}"'


def longitude30_string(degrees: float) -> str:
    """Format an ecliptic longitude relative to its zodiac sign, e.g. 27°38'16"."""
    deg, minutes, seconds = dms_parts(degrees)
    return f'{mod30(deg)}°{minutes}\'{math.floor(seconds)}"'


def parse_angle(string: str) -> float | None:
    """Parse an angle given as one to three whitespace-separated numbers.

    ``"12 30 45"`` is 12° 30' 45" (or 12h 30m 45s). A leading minus applies to
    the whole angle; minutes and seconds must be non-negative.

    Parameters:
        string: Text to parse.

    Returns:
        Angle in the units of the first field, or None on parse failure.
    """
    text = string.strip()
    if not text:
        return None
    parts = re.split(r'\s+', text)[:3]
    try:
        values = [float(p) for p in parts]
    except ValueError:
        return None
    if any(v < 0.0 for v in values[1:]):
        return None
    angle = 0.0
    for scale, value in zip((1.0, ARCMIN_PER_DEGREE, ARCSEC_PER_DEGREE), values):
        angle += abs(value) / scale
    return -angle if text.startswith('-') else angle


def dms_string(value: float, separator: str = 'dms', ndecimal: int = 2) -> str:
    """Format an angle in degrees (or hours) as sexagesimal text.

    Parameters:
        value: Angle in degrees, or hours for right ascension.
        separator: Three unit labels appended to the fields ('dms' or 'hms').
        ndecimal: Decimal places on the seconds field.

    Returns:
        Text such as ``"-16d 42m 58.02s"``.
    """
    if len(separator) < 3:
        sep1 = sep2 = sep3 = ' '
    else:
        sep1, sep2, sep3 = separator[0], separator[1], separator[2]
    sign = '-' if value < 0 else ''
    scale = 10**ndecimal
    total = round(abs(value) * ARCSEC_PER_DEGREE * scale)
    whole_secs, frac = divmod(total, scale)
    minutes_total, secs = divmod(whole_secs, int(ARCMIN_PER_DEGREE))
    deg, minutes = divmod(minutes_total, int(ARCMIN_PER_DEGREE))
    if ndecimal > 0:
        sec_text = f'{secs:02d}.{frac:0{ndecimal}d}'
    else:
        sec_text = f'{secs:02d}'
    return f'{sign}{deg}{sep1} {minutes:02d}{sep2} {sec_text}{sep3}'


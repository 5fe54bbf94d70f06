"""Time scale conversions around rms-julian (UTC -> Julian date and dynamical time)."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import julian

from apparent_ephemeris.config import get_leapsecs_path
from apparent_ephemeris.constants import (
    B1950,
    J1900,
    J2000,
    JULIAN_YEAR_DAYS,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    TROPICAL_YEAR_DAYS,
)

logger = logging.getLogger(__name__)

# Leap seconds loaded once at first use.
_leapsecs_loaded = False

# Day 0 in rms-julian is 2000-01-01, which starts at JD 2451544.5.
_JD_OF_DAY_ZERO = J2000 - 0.5


def _ensure_leapsecs() -> None:
    """Load the leap seconds kernel if not already loaded.

    Uses the LSK named by JULIAN_LEAPSECS when set; a missing or malformed
    file falls back to rms-julian's bundled LSK.
    """
    global _leapsecs_loaded
    if _leapsecs_loaded:
        return
    julian.set_ut_model('SPICE')
    path = get_leapsecs_path()
    if path is not None:
        try:
            julian.load_lsk(path)
            _leapsecs_loaded = True
            return
        except (OSError, KeyError, ValueError) as e:
            logger.info('Leap seconds from %s not used (%s); using rms-julian bundled LSK.', path, e)
    try:
        julian.load_lsk()
    except Exception as fallback_err:
        logger.error('Loading rms-julian bundled LSK failed: %s', fallback_err, exc_info=True)
        raise
    _leapsecs_loaded = True


def to_utc(value: datetime) -> datetime:
    """Return value as an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def day_sec_from_datetime(utc: datetime) -> tuple[int, float]:
    """Split a UTC datetime into rms-julian (day, sec).

    Parameters:
        utc: Datetime (naive values are taken as UTC).

    Returns:
        (day, sec) where day counts days since 2000-01-01 and sec is seconds
        into that day.
    """
    utc = to_utc(utc)
    day = int(julian.day_from_ymd(utc.year, utc.month, utc.day))
    sec = (
        utc.hour * SECONDS_PER_HOUR
        + utc.minute * SECONDS_PER_MINUTE
        + utc.second
        + utc.microsecond / 1.0e6
    )
    return (day, sec)


def julian_dates(utc: datetime) -> tuple[float, float]:
    """Julian dates of a UTC instant in UTC and in dynamical time.

    Parameters:
        utc: Datetime (naive values are taken as UTC).

    Returns:
        (jd_utc, jd_tdt). jd_utc also serves as UT1 for sidereal time.
    """
    _ensure_leapsecs()
    day, sec = day_sec_from_datetime(utc)
    jd_utc = _JD_OF_DAY_ZERO + day + sec / SECONDS_PER_DAY
    tai = float(julian.tai_from_day_sec(day, sec))
    tdb = float(julian.tdb_from_tai(tai))
    jd_tdt = J2000 + tdb / SECONDS_PER_DAY
    return (jd_utc, jd_tdt)


def calc_j2000(jd: float) -> float:
    """Julian epoch year of a Julian date (e.g. 2019.83)."""
    return 2000.0 + (jd - J2000) / JULIAN_YEAR_DAYS


def calc_b1950(jd: float) -> float:
    """Besselian epoch year of a Julian date."""
    return 1950.0 + (jd - B1950) / TROPICAL_YEAR_DAYS


def calc_j1900(jd: float) -> float:
    """Julian epoch year of a Julian date, counted from J1900."""
    return 1900.0 + (jd - J1900) / JULIAN_YEAR_DAYS


def parse_datetime(string: str) -> datetime | None:
    """Parse a date/time string as a UTC datetime.

    Accepts any format rms-julian accepts (e.g. "2019-10-31 15:43",
    "2019-10-31T15:43:00Z").

    Parameters:
        string: Date/time text.

    Returns:
        Aware UTC datetime, or None on parse failure.
    """
    _ensure_leapsecs()
    stripped = string.strip()
    candidate_strings = [stripped]
    if stripped.endswith(('Z', 'z')):
        # rms-julian does not parse the ISO "Z" suffix; the value is UTC anyway.
        candidate_strings.append(stripped[:-1])
    for candidate in candidate_strings:
        try:
            day, sec = julian.day_sec_from_string(candidate)[:2]
        except (ValueError, TypeError, LookupError, OSError):
            continue
        year, month, mday = (int(x) for x in julian.ymd_from_day(int(day)))
        # A leap second is folded into the last second of the day.
        sec = min(float(sec), SECONDS_PER_DAY - 1.0)
        hours, rem = divmod(sec, SECONDS_PER_HOUR)
        minutes, seconds = divmod(rem, SECONDS_PER_MINUTE)
        whole = int(seconds)
        return datetime(
            year,
            month,
            mday,
            int(hours),
            int(minutes),
            whole,
            int((seconds - whole) * 1.0e6),
            tzinfo=timezone.utc,
        )
    return None

"""Sidereal time, topocentric place, altitude/azimuth and refraction."""

from __future__ import annotations

import math

from apparent_ephemeris.angle_utils import normalize_degrees
from apparent_ephemeris.config import Settings
from apparent_ephemeris.constants import (
    DEGREES_PER_HOUR_RA,
    DIURNAL_ABERRATION,
    EARTH_FLATTENING,
    EARTH_RADIUS_AU,
    EARTH_RADIUS_KM,
    J2000,
    JULIAN_CENTURY_DAYS,
    REFRACTION_MIN_ALTITUDE,
    STR,
)
from apparent_ephemeris.models import ObserverState, Topocentric
from apparent_ephemeris.reduction.nutation import equation_of_equinoxes
from apparent_ephemeris.vec_math import Vec3, recrad, vadd, vdot, vnorm, vscl, vsub


def greenwich_mean_sidereal_time(jd_ut: float) -> float:
    """GMST in degrees [0, 360) for a UT1 Julian date."""
    t = (jd_ut - J2000) / JULIAN_CENTURY_DAYS
    theta = (
        280.46061837
        + 360.98564736629 * (jd_ut - J2000)
        + 0.000387933 * t * t
        - t * t * t / 38710000.0
    )
    return normalize_degrees(theta)


def local_apparent_sidereal_time(jd_ut: float, jd_tdt: float, longitude: float) -> float:
    """Local apparent sidereal time in degrees [0, 360).

    Parameters:
        jd_ut: UT1 Julian date (UTC is used).
        jd_tdt: Dynamical-time Julian date for the equation of the equinoxes.
        longitude: Observer longitude, degrees east.
    """
    return normalize_degrees(
        greenwich_mean_sidereal_time(jd_ut) + math.degrees(equation_of_equinoxes(jd_tdt)) + longitude
    )


def geocentric_observer(latitude: float, height: float) -> tuple[float, float]:
    """(rho cos phi', rho sin phi') in Earth radii for a geodetic latitude and height (m)."""
    phi = math.radians(latitude)
    u = math.atan((1.0 - EARTH_FLATTENING) * math.tan(phi))
    h = height / (EARTH_RADIUS_KM * 1000.0)
    return (
        math.cos(u) + h * math.cos(phi),
        (1.0 - EARTH_FLATTENING) * math.sin(u) + h * math.sin(phi),
    )


def refraction(altitude: float, pressure_mb: float, temperature_c: float) -> float:
    """Atmospheric refraction in degrees for a true altitude (Saemundsson).

    Zero at or below the minimum altitude.
    """
    if altitude <= REFRACTION_MIN_ALTITUDE:
        return 0.0
    arcmin = 1.02 / math.tan(math.radians(altitude + 10.3 / (altitude + 5.11)))
    arcmin *= (pressure_mb / 1010.0) * (283.0 / (273.0 + temperature_c))
    return max(arcmin, 0.0) / 60.0


def horizontal(ra: float, dec: float, lst: float, latitude: float) -> tuple[float, float]:
    """Altitude and azimuth (north through east) in degrees.

    Parameters:
        ra: Right ascension, radians.
        dec: Declination, radians.
        lst: Local sidereal time, degrees.
        latitude: Geodetic latitude, degrees.
    """
    hour_angle = math.radians(lst) - ra
    phi = math.radians(latitude)
    sin_alt = math.sin(phi) * math.sin(dec) + math.cos(phi) * math.cos(dec) * math.cos(hour_angle)
    altitude = math.degrees(math.asin(max(-1.0, min(1.0, sin_alt))))
    azimuth = math.atan2(
        -math.cos(dec) * math.sin(hour_angle),
        math.sin(dec) * math.cos(phi) - math.cos(dec) * math.cos(hour_angle) * math.sin(phi),
    )
    return (altitude, normalize_degrees(math.degrees(azimuth)))


def topocentric(p: Vec3, observer: ObserverState, settings: Settings) -> Topocentric:
    """Place seen by the observer: diurnal parallax, diurnal aberration, refraction.

    Parameters:
        p: Apparent geocentric vector, true equator and equinox of date (AU).
        observer: Observer state.
        settings: Refraction pressure and temperature.

    Returns:
        Topocentric place with refracted altitude and azimuth.
    """
    lst = local_apparent_sidereal_time(observer.julian, observer.tdt, observer.longitude)
    theta = math.radians(lst)
    rho_cos, rho_sin = geocentric_observer(observer.latitude, observer.height)
    site = [
        EARTH_RADIUS_AU * rho_cos * math.cos(theta),
        EARTH_RADIUS_AU * rho_cos * math.sin(theta),
        EARTH_RADIUS_AU * rho_sin,
    ]
    topo = vsub(p, site)
    r = vnorm(topo)
    u = vscl(1.0 / r, topo)
    # Observer velocity over c, from the Earth's rotation.
    k = DIURNAL_ABERRATION * STR * rho_cos
    v = [-k * math.sin(theta), k * math.cos(theta), 0.0]
    u = vsub(vadd(u, v), vscl(vdot(u, v), u))
    _, ra, dec = recrad(u)

    altitude, azimuth = horizontal(ra, dec, lst, observer.latitude)
    bend = refraction(altitude, settings.pressure_mb, settings.temperature_c)
    return Topocentric(
        altitude=altitude + bend,
        azimuth=azimuth,
        refraction=bend,
        local_sidereal_time=lst / DEGREES_PER_HOUR_RA,
        ra=ra,
        dec=dec,
    )

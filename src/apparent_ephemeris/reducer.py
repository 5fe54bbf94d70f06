"""Apparent-position reducer: dispatch by body type, then the shared correction tail."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

from apparent_ephemeris import kepler, lunar
from apparent_ephemeris.catalog.base import Body, BodyType
from apparent_ephemeris.catalog.planets import EARTH, SUN
from apparent_ephemeris.config import Settings
from apparent_ephemeris.constants import (
    AU_KM,
    B1950,
    CLIGHT_AU_PER_DAY,
    EARTH_VELOCITY_STEP,
    JULIAN_YEAR_DAYS,
    MAS_PER_ARCSEC,
    RTS,
    STAR_DEFAULT_DISTANCE_AU,
    STR,
)
from apparent_ephemeris.errors import UnknownBodyError
from apparent_ephemeris.models import (
    ApparentPosition,
    CorrectionShift,
    EarthState,
    EclipticPosition,
    EquatorialPosition,
    Geometry,
    ObserverState,
)
from apparent_ephemeris.reduction import aberration, altaz, constellation, deflection, geometry
from apparent_ephemeris.reduction import light_time
from apparent_ephemeris.reduction.ecliptic import (
    ecliptic_to_equatorial,
    equatorial_to_ecliptic,
    lonlat,
    mean_obliquity,
)
from apparent_ephemeris.reduction.nutation import nutate, true_obliquity
from apparent_ephemeris.reduction.precession import FROM_J2000, TO_J2000, precess
from apparent_ephemeris.vec_math import Vec3, radrec, vadd, vminus, vnorm, vscl, vsub

logger = logging.getLogger(__name__)

_NO_SHIFT = CorrectionShift(d_ra=0.0, d_dec=0.0)


@dataclass(frozen=True)
class _Place:
    """Geocentric J2000 place of one body before precession and nutation.

    astrometric is the light-time corrected direction; p has deflection and
    annual aberration applied where the body type calls for them.
    """

    p: Vec3
    astrometric: Vec3
    equinox_ecliptic: EclipticPosition
    distance: float
    true_distance: float
    light_time: float
    geometry: Geometry
    magnitude: float
    phase: float
    diameter: float
    deflection: CorrectionShift
    aberration: CorrectionShift


def earth_state(jd: float) -> EarthState:
    """Heliocentric Earth position at jd and velocity by central difference.

    Parameters:
        jd: Julian date (TDT).

    Returns:
        EarthState shared by every body reduced at this instant.
    """
    elements = EARTH.elements
    if elements is None:
        raise UnknownBodyError('Earth has no orbital elements')
    here = kepler.solve(jd, elements)
    ahead = kepler.solve(jd + EARTH_VELOCITY_STEP, elements)
    behind = kepler.solve(jd - EARTH_VELOCITY_STEP, elements)
    velocity = vscl(1.0 / (2.0 * EARTH_VELOCITY_STEP), vsub(ahead.rect, behind.rect))
    return EarthState(rect=here.rect, velocity=velocity, jd=jd)


def _sun_place(body: Body, earth: EarthState, jd: float) -> _Place:
    p = vminus(earth.rect)
    geom = geometry.angles(p, [0.0, 0.0, 0.0], earth.rect)
    eo = geom.earth_object
    aberrated = aberration.annual(p, earth.velocity)
    return _Place(
        p=aberrated,
        astrometric=p,
        equinox_ecliptic=lonlat(p, jd),
        distance=eo,
        true_distance=eo,
        light_time=eo / CLIGHT_AU_PER_DAY,
        geometry=geom,
        magnitude=body.magnitude + 5.0 * math.log10(eo),
        phase=1.0,
        diameter=geometry.equatorial_diameter(body.semi_diameter, eo),
        deflection=_NO_SHIFT,
        aberration=CorrectionShift.between(p, aberrated),
    )


def _moon_place(body: Body, earth: EarthState, jd: float) -> _Place:
    coords = lunar.position(jd)
    of_date = ecliptic_to_equatorial(
        coords.longitude, coords.latitude, coords.distance_km / AU_KM, mean_obliquity(jd)
    )
    p = precess(of_date, jd, TO_J2000)
    geom = geometry.angles(p, vadd(earth.rect, p), earth.rect)
    eo = geom.earth_object
    return _Place(
        p=p,
        astrometric=p,
        equinox_ecliptic=EclipticPosition(longitude=coords.longitude, latitude=coords.latitude),
        distance=eo,
        true_distance=eo,
        light_time=eo / CLIGHT_AU_PER_DAY,
        geometry=geom,
        magnitude=lunar.magnitude(geom.phase_angle),
        phase=geometry.illuminated_fraction(geom),
        diameter=geometry.equatorial_diameter(body.semi_diameter, eo),
        deflection=_NO_SHIFT,
        aberration=_NO_SHIFT,
    )


def _heliocentric_place(body: Body, earth: EarthState, jd: float) -> _Place:
    if body.elements is None:
        raise UnknownBodyError(f'Body {body.key!r} has no orbital elements')
    geometric = kepler.solve(jd, body.elements)
    retarded, tau = light_time.correct(jd, body.elements, earth.rect, geometric)
    q = retarded.rect
    p = vsub(q, earth.rect)
    geom = geometry.angles(p, q, earth.rect)
    deflected = deflection.relativity(p, q, earth.rect, geom)
    aberrated = aberration.annual(deflected, earth.velocity)
    return _Place(
        p=aberrated,
        astrometric=p,
        equinox_ecliptic=lonlat(geometric.rect, jd),
        distance=geom.earth_object,
        true_distance=vnorm(vsub(geometric.rect, earth.rect)),
        light_time=tau,
        geometry=geom,
        magnitude=geometry.magnitude(body.magnitude, geom),
        phase=geometry.illuminated_fraction(geom),
        diameter=geometry.equatorial_diameter(body.semi_diameter, geom.earth_object),
        deflection=CorrectionShift.between(p, deflected),
        aberration=CorrectionShift.between(deflected, aberrated),
    )


def _star_place(body: Body, earth: EarthState, jd: float) -> _Place:
    star = body.star
    if star is None:
        raise UnknownBodyError(f'Body {body.key!r} has no star elements')
    years = (jd - star.epoch) / JULIAN_YEAR_DAYS
    mas = STR / MAS_PER_ARCSEC
    dec = star.dec + star.pm_dec * years * mas
    ra = star.ra + star.pm_ra * years * mas / math.cos(star.dec)
    if star.parallax > 0.0:
        dist = RTS * MAS_PER_ARCSEC / star.parallax
    else:
        dist = STAR_DEFAULT_DISTANCE_AU
    q = radrec(dist, ra, dec)
    p = vsub(q, earth.rect)
    geom = geometry.angles(p, q, earth.rect)
    deflected = deflection.relativity(p, q, earth.rect, geom)
    aberrated = aberration.annual(deflected, earth.velocity)
    return _Place(
        p=aberrated,
        astrometric=p,
        equinox_ecliptic=lonlat(p, jd),
        distance=geom.earth_object,
        true_distance=geom.earth_object,
        light_time=0.0,
        geometry=geom,
        magnitude=body.magnitude,
        phase=1.0,
        diameter=0.0,
        deflection=CorrectionShift.between(p, deflected),
        aberration=CorrectionShift.between(deflected, aberrated),
    )


_PLACE_HANDLERS: dict[BodyType, Callable[[Body, EarthState, float], _Place]] = {
    BodyType.SUN: _sun_place,
    BodyType.LUNA: _moon_place,
    BodyType.HELIOCENTRIC: _heliocentric_place,
    BodyType.STAR: _star_place,
}


def _place(body: Body, earth: EarthState, jd: float) -> _Place:
    if body.key == EARTH.key:
        raise UnknownBodyError('Earth is the observer platform and cannot be reduced')
    handler = _PLACE_HANDLERS.get(body.body_type)
    if handler is None:
        raise UnknownBodyError(f'Unknown body type {body.body_type!r} for {body.key!r}')
    return handler(body, earth, jd)


def apparent_longitude(body: Body, earth: EarthState, observer: ObserverState) -> float:
    """Apparent ecliptic longitude of date in degrees [0, 360).

    Runs the correction chain through nutation only; used by the motion
    solver at many neighbouring instants.

    Raises:
        UnknownBodyError: For Earth or an unknown body type.
    """
    jd = observer.tdt
    place = _place(body, earth, jd)
    true = nutate(precess(place.p, jd, FROM_J2000), jd)
    return equatorial_to_ecliptic(true, true_obliquity(jd)).longitude


def reduce_body(
    body: Body,
    earth: EarthState,
    observer: ObserverState,
    settings: Settings | None = None,
) -> ApparentPosition:
    """Reduce one body to its apparent place for the observer.

    Parameters:
        body: Catalog body.
        earth: Earth state at observer.tdt.
        observer: Instant and location.
        settings: Refraction settings (defaults when None).

    Returns:
        ApparentPosition.

    Raises:
        UnknownBodyError: For Earth or an unknown body type.
        NonConvergenceError: If the orbit cannot be solved.
    """
    settings = settings or Settings()
    jd = observer.tdt
    place = _place(body, earth, jd)

    mean = precess(place.p, jd, FROM_J2000)
    true = nutate(mean, jd)
    apparent_ecliptic = equatorial_to_ecliptic(true, true_obliquity(jd))

    lunar_phase = None
    if body.body_type is BodyType.LUNA:
        lunar_phase = lunar.phase(
            apparent_ecliptic.longitude,
            apparent_longitude(SUN, earth, observer),
            place.geometry.phase_angle,
        )

    logger.debug('Reduced %s at JD %.6f: lon=%.6f', body.key, jd, apparent_ecliptic.longitude)
    return ApparentPosition(
        key=body.key,
        name=body.name,
        body_type=body.body_type,
        astrometric_j2000=EquatorialPosition.from_vector(place.astrometric),
        astrometric_b1950=EquatorialPosition.from_vector(
            precess(place.astrometric, B1950, FROM_J2000)
        ),
        apparent=EquatorialPosition.from_vector(true),
        equinox_ecliptic=place.equinox_ecliptic,
        apparent_ecliptic=apparent_ecliptic,
        distance=place.distance,
        true_distance=place.true_distance,
        light_time=place.light_time,
        geometry=place.geometry,
        magnitude=place.magnitude,
        phase=place.phase,
        diameter=place.diameter,
        deflection=place.deflection,
        aberration=place.aberration,
        nutation=CorrectionShift.between(mean, true),
        constellation=constellation.lookup(true, jd),
        topocentric=altaz.topocentric(true, observer, settings),
        lunar_phase=lunar_phase,
    )

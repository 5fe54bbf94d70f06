"""Tests for the full reduction chain, body by body."""

from __future__ import annotations

import dataclasses
import math
from datetime import datetime, timezone

import pytest

from apparent_ephemeris import kepler, reducer
from apparent_ephemeris.catalog import EARTH, default_catalog
from apparent_ephemeris.catalog.base import BodyType
from apparent_ephemeris.catalog.planets import MERCURY, MOON, SUN
from apparent_ephemeris.catalog.stars import BRIGHT_STARS
from apparent_ephemeris.constants import EARTH_RADIUS_AU
from apparent_ephemeris.errors import UnknownBodyError
from apparent_ephemeris.models import ObserverState
from apparent_ephemeris.reduction import altaz
from apparent_ephemeris.time_utils import calc_b1950, calc_j1900, calc_j2000


def _observer(jd: float, latitude: float = 0.0, longitude: float = 0.0) -> ObserverState:
    """Observer at a dynamical-time Julian date, taking UT equal to TT."""
    return ObserverState(
        utc=datetime(2000, 1, 1, tzinfo=timezone.utc),
        julian=jd,
        tdt=jd,
        delta_t=0.0,
        j2000=calc_j2000(jd),
        b1950=calc_b1950(jd),
        j1900=calc_j1900(jd),
        latitude=latitude,
        longitude=longitude,
    )


def _reduce(body, jd: float):
    observer = _observer(jd)
    return reducer.reduce_body(body, reducer.earth_state(jd), observer)


def _star(key: str):
    return next(star for star in BRIGHT_STARS if star.key == key)


def test_earth_velocity_is_about_one_degree_per_day() -> None:
    state = reducer.earth_state(2451545.0)
    speed = sum(v * v for v in state.velocity) ** 0.5
    assert speed == pytest.approx(0.0172, abs=0.0004)
    assert state.jd == 2451545.0


def test_sun_published_example() -> None:
    """1992 October 13, 0h TD: apparent longitude 199.90606, R = 0.99761 AU."""
    sun = _reduce(SUN, 2448908.5)
    assert sun.apparent_longitude == pytest.approx(199.906060, abs=0.05)
    assert sun.distance == pytest.approx(0.99760775, abs=5e-4)
    assert sun.phase == 1.0
    assert sun.lunar_phase is None
    assert sun.deflection.d_ra == 0.0
    # Annual aberration on the Sun is about -20.5" in longitude.
    assert abs(sun.aberration.d_dec) < 21.0


def test_moon_published_example() -> None:
    """1992 April 12, 0h TD: apparent longitude 133.167265."""
    moon = _reduce(MOON, 2448724.5)
    assert moon.apparent_longitude == pytest.approx(133.167265, abs=1e-3)
    assert moon.equinox_ecliptic.longitude == pytest.approx(133.162655, abs=5e-4)
    assert moon.distance * 149597870.7 == pytest.approx(368409.7, abs=0.5)
    assert moon.lunar_phase is not None
    assert 0.0 <= moon.lunar_phase.illuminated_fraction <= 1.0
    assert moon.lunar_phase.illuminated_fraction == pytest.approx(moon.phase, abs=1e-6)
    assert moon.aberration.d_ra == 0.0


def test_mercury_shifts_are_small() -> None:
    mercury = _reduce(MERCURY, 2458787.5)
    assert mercury.body_type is BodyType.HELIOCENTRIC
    assert abs(mercury.aberration.d_dec) < 30.0
    assert abs(mercury.deflection.d_dec) < 1.0
    assert abs(mercury.nutation.d_dec) < 20.0
    assert mercury.light_time == pytest.approx(mercury.distance / 173.1446327, rel=1e-6)
    assert 0.0 <= mercury.phase <= 1.0
    assert mercury.diameter > 0.0


def test_apparent_longitude_matches_full_reduction() -> None:
    jd = 2458787.5
    earth = reducer.earth_state(jd)
    observer = _observer(jd)
    for body in (SUN, MOON, MERCURY, _star('regulus')):
        full = reducer.reduce_body(body, earth, observer)
        assert reducer.apparent_longitude(body, earth, observer) == pytest.approx(
            full.apparent_longitude
        )


@pytest.mark.parametrize(
    ('key', 'abbreviation'),
    [('sirius', 'CMa'), ('polaris', 'UMi'), ('vega', 'Lyr')],
)
def test_star_constellations(key: str, abbreviation: str) -> None:
    result = _reduce(_star(key), 2458787.5)
    assert result.constellation.abbreviation == abbreviation
    assert result.light_time == 0.0


def test_sun_constellation_in_november() -> None:
    assert _reduce(SUN, 2458797.5).constellation.abbreviation == 'Lib'


def test_constellation_full_name() -> None:
    assert _reduce(_star('vega'), 2458787.5).constellation.name == 'Lyra'


def test_star_skips_orbit_solution(monkeypatch: pytest.MonkeyPatch) -> None:
    jd = 2458787.5
    earth = reducer.earth_state(jd)

    def fail(*args, **kwargs):
        raise AssertionError('kepler.solve called for a star')

    monkeypatch.setattr(kepler, 'solve', fail)
    result = reducer.reduce_body(_star('sirius'), earth, _observer(jd))
    assert result.magnitude == -1.46


def test_star_proper_motion_moves_place() -> None:
    sirius = _star('sirius')
    now = _reduce(sirius, 2451545.0)
    later = _reduce(sirius, 2451545.0 + 36525.0)
    # About 1.2"/yr south for a century.
    d_dec = (later.astrometric_j2000.dec - now.astrometric_j2000.dec) * 206264.806
    assert d_dec == pytest.approx(-122.3, abs=1.0)


def test_b1950_place_differs_from_j2000() -> None:
    result = _reduce(_star('regulus'), 2458787.5)
    # Fifty years of precession moves Regulus about 0.7 degrees in RA.
    shift = (result.astrometric_j2000.ra - result.astrometric_b1950.ra) * 57.29577951
    assert shift == pytest.approx(0.67, abs=0.1)


def test_topocentric_moon_parallax() -> None:
    jd = 2448724.5
    earth = reducer.earth_state(jd)
    observer = _observer(jd, latitude=45.0, longitude=10.0)
    moon = reducer.reduce_body(MOON, earth, observer)
    sun = reducer.reduce_body(SUN, earth, observer)
    assert -90.0 <= moon.topocentric.altitude <= 90.0
    assert 0.0 <= moon.topocentric.azimuth < 360.0
    assert 0.0 <= moon.topocentric.local_sidereal_time < 24.0
    assert moon.topocentric.local_sidereal_time == pytest.approx(
        sun.topocentric.local_sidereal_time
    )
    # Topocentric altitude is lowered by rho sin(HP) cos(alt).
    lst = moon.topocentric.local_sidereal_time * 15.0
    geo_alt, _ = altaz.horizontal(moon.apparent.ra, moon.apparent.dec, lst, 45.0)
    topo_alt = moon.topocentric.altitude - moon.topocentric.refraction
    rho = math.hypot(*altaz.geocentric_observer(45.0, 0.0))
    hp = math.asin(EARTH_RADIUS_AU / moon.distance)
    parallax = math.degrees(math.asin(rho * math.sin(hp) * math.cos(math.radians(topo_alt))))
    assert geo_alt - topo_alt > 0.1
    assert geo_alt - topo_alt == pytest.approx(parallax, abs=0.01)


def test_earth_is_rejected() -> None:
    jd = 2458787.5
    with pytest.raises(UnknownBodyError, match='Earth'):
        reducer.reduce_body(EARTH, reducer.earth_state(jd), _observer(jd))


def test_earth_state_needs_orbital_elements(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(reducer, 'EARTH', dataclasses.replace(EARTH, elements=None))
    with pytest.raises(UnknownBodyError, match='Earth'):
        reducer.earth_state(2458787.5)


def test_unknown_body_type_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    jd = 2458787.5
    monkeypatch.delitem(reducer._PLACE_HANDLERS, BodyType.STAR)
    with pytest.raises(UnknownBodyError):
        reducer.reduce_body(_star('vega'), reducer.earth_state(jd), _observer(jd))


def test_every_catalog_body_reduces() -> None:
    jd = 2458787.5
    earth = reducer.earth_state(jd)
    observer = _observer(jd)
    for body in default_catalog():
        result = reducer.reduce_body(body, earth, observer)
        assert 0.0 <= result.apparent_longitude < 360.0
        assert result.distance > 0.0
        assert result.key == body.key

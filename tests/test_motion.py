"""Tests for station and moment searches."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from apparent_ephemeris import motion
from apparent_ephemeris.catalog import default_catalog
from apparent_ephemeris.catalog.base import Body
from apparent_ephemeris.config import Settings
from apparent_ephemeris.errors import InvalidArgumentError, NonConvergenceError, UnknownBodyError
from apparent_ephemeris.models import MomentResult, StationResult
from apparent_ephemeris.motion import MotionSolver, get_directed_date

START = datetime(2020, 3, 1, tzinfo=timezone.utc)
TURN = START + timedelta(days=3, hours=7, minutes=12, seconds=20)


class ParabolaSolver(MotionSolver):
    """Longitude peaks at TURN: direct before, retrograde after."""

    def longitude(self, body: Body, instant: datetime) -> float:
        d = (instant - TURN).total_seconds() / 86400.0
        return (100.0 - 0.1 * d * d) % 360.0


class SteadySolver(MotionSolver):
    """Always direct at one degree per day, crossing 0/360."""

    def longitude(self, body: Body, instant: datetime) -> float:
        d = (instant - START).total_seconds() / 86400.0
        return (359.5 + d) % 360.0


@pytest.fixture
def parabola() -> ParabolaSolver:
    return ParabolaSolver(default_catalog(), Settings(search_days=20))


# get_directed_date


@pytest.mark.parametrize(
    ('direction', 'unit', 'expected'),
    [
        ('next', 'date', datetime(2020, 3, 2, tzinfo=timezone.utc)),
        ('prev', 'date', datetime(2020, 2, 29, tzinfo=timezone.utc)),
        ('next', 'minute', datetime(2020, 3, 1, 0, 1, tzinfo=timezone.utc)),
        ('prev', 'minute', datetime(2020, 2, 29, 23, 59, tzinfo=timezone.utc)),
        ('next', 'second', datetime(2020, 3, 1, 0, 0, 1, tzinfo=timezone.utc)),
        ('prev', 'second', datetime(2020, 2, 29, 23, 59, 59, tzinfo=timezone.utc)),
    ],
)
def test_get_directed_date(direction: str, unit: str, expected: datetime) -> None:
    assert get_directed_date(direction, unit, START) == expected


def test_get_directed_date_next_and_prev_are_inverse() -> None:
    for unit in motion.UNITS:
        forward = get_directed_date('next', unit, START)
        assert get_directed_date('prev', unit, forward) == START


def test_get_directed_date_bad_direction() -> None:
    with pytest.raises(InvalidArgumentError) as exc:
        get_directed_date('sideways', 'date', START)
    assert str(exc.value) == (
        'Please pass in direction from the following: \'next\' or \'prev\'. Not "sideways".'
    )


def test_get_directed_date_bad_unit() -> None:
    with pytest.raises(InvalidArgumentError) as exc:
        get_directed_date('next', 'hour', START)
    assert str(exc.value) == (
        "Please pass in unit from the following: 'date', 'minute', or 'second'. Not \"hour\"."
    )


def test_bad_motion_message(parabola: ParabolaSolver) -> None:
    with pytest.raises(InvalidArgumentError) as exc:
        parabola.next_station('mars', START, 'sideways')
    assert str(exc.value) == (
        'Please pass in motion from the following: \'retrograde\' or \'direct\'. Not "sideways".'
    )


def test_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        get_directed_date('next', 'fortnight', START)


# Synthetic longitude


def test_sample(parabola: ParabolaSolver) -> None:
    before = parabola.sample('mars', TURN - timedelta(hours=1))
    after = parabola.sample('mars', TURN + timedelta(hours=1))
    assert before.next_movement_amount > 0.0
    assert after.next_movement_amount < 0.0
    assert after.is_retrograde


def test_retrograde_station_minute(parabola: ParabolaSolver) -> None:
    result = parabola.next_station('mars', START, 'retrograde')
    assert isinstance(result, StationResult)
    assert result.date == START + timedelta(days=3, hours=7, minutes=12)
    assert result.next_movement_amount < 0.0
    assert result.apparent_longitude == pytest.approx(100.0)


def test_retrograde_station_prev(parabola: ParabolaSolver) -> None:
    result = parabola.next_station('mars', START + timedelta(days=10), 'retrograde', 'prev')
    assert result.date == START + timedelta(days=3, hours=7, minutes=12)


def test_retrograde_station_by_date(parabola: ParabolaSolver) -> None:
    result = parabola.next_station('mars', START, 'retrograde', unit='date')
    assert result.date == START + timedelta(days=3)


def test_no_direct_station_in_horizon(parabola: ParabolaSolver) -> None:
    with pytest.raises(NonConvergenceError):
        parabola.next_station('mars', START, 'direct')


def test_retrograde_moment_second(parabola: ParabolaSolver) -> None:
    result = parabola.next_moment('mars', START, 'retrograde')
    assert isinstance(result, MomentResult)
    assert result.date == TURN
    assert result.next_movement_amount < 0.0


def test_moment_already_in_motion_returns_instant(parabola: ParabolaSolver) -> None:
    assert parabola.next_moment('mars', START, 'direct').date == START
    later = START + timedelta(days=10)
    assert parabola.next_moment('mars', later, 'retrograde', 'prev').date == later


def test_prev_direct_moment_is_last_direct_second(parabola: ParabolaSolver) -> None:
    result = parabola.next_moment('mars', START + timedelta(days=10), 'direct', 'prev')
    assert result.date == TURN - timedelta(seconds=1)
    assert result.next_movement_amount > 0.0


def test_steady_motion_has_no_station() -> None:
    solver = SteadySolver(default_catalog(), Settings(search_days=20))
    with pytest.raises(NonConvergenceError):
        solver.next_station('mars', START, 'retrograde')
    with pytest.raises(NonConvergenceError):
        solver.next_moment('mars', START, 'retrograde')


def test_daily_motion_across_zero() -> None:
    solver = SteadySolver(default_catalog(), Settings(search_days=20))
    result = solver.daily_motion('mars', START)
    assert result.yesterday == pytest.approx(358.5)
    assert result.tomorrow == pytest.approx(0.5)
    assert result.yesterday_difference == pytest.approx(1.0)
    assert result.tomorrow_difference == pytest.approx(1.0)
    assert result.difference_percent == pytest.approx(1.0)
    assert not result.is_retrograde


def test_unknown_body(parabola: ParabolaSolver) -> None:
    with pytest.raises(UnknownBodyError):
        parabola.next_station('vulcan', START, 'retrograde')


# Dispatch


class RecordingSolver:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def next_station(self, *args):
        self.calls.append(('station', *args))
        return 'station'

    def next_moment(self, *args):
        self.calls.append(('moment', *args))
        return 'moment'


def test_calculate_motion_dispatch() -> None:
    solver = RecordingSolver()
    assert motion.calculate_motion('mercury', START, solver=solver) == 'station'
    assert motion.calculate_motion('mercury', START, 'direct', 'prev', 'second', solver) == 'moment'
    assert solver.calls == [
        ('station', 'mercury', START, 'retrograde', 'next', 'minute'),
        ('moment', 'mercury', START, 'direct', 'prev', 'second'),
    ]
    with pytest.raises(InvalidArgumentError):
        motion.calculate_motion('mercury', START, unit='hour', solver=solver)


def test_named_wrappers() -> None:
    solver = RecordingSolver()
    motion.calculate_next_retrograde_station('mercury', START, solver=solver)
    motion.calculate_next_direct_station('mercury', START, 'prev', solver=solver)
    motion.calculate_next_retrograde_moment('mercury', START, solver=solver)
    motion.calculate_next_direct_moment('mercury', START, solver=solver)
    assert solver.calls == [
        ('station', 'mercury', START, 'retrograde', 'next'),
        ('station', 'mercury', START, 'direct', 'prev'),
        ('moment', 'mercury', START, 'retrograde', 'next'),
        ('moment', 'mercury', START, 'direct', 'next'),
    ]


# Mercury, autumn 2019


@pytest.fixture(scope='module')
def solver() -> MotionSolver:
    return MotionSolver(default_catalog(), Settings(search_days=200))


def _utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_mercury_retrograde_station(solver: MotionSolver) -> None:
    result = solver.next_station('mercury', _utc(2019, 10, 31), 'retrograde')
    assert abs(result.date - _utc(2019, 10, 31, 15, 43)) < timedelta(minutes=15)
    assert result.date.second == 0
    assert result.apparent_longitude == pytest.approx(237.6379, abs=0.01)
    assert result.next_movement_amount < 0.0


def test_mercury_next_retrograde_station_after_turning(solver: MotionSolver) -> None:
    # Already retrograde at 20:00, so the search runs on to February.
    result = solver.next_station('mercury', _utc(2019, 10, 31, 20), 'retrograde')
    assert abs(result.date - _utc(2020, 2, 17, 0, 55)) < timedelta(minutes=15)
    assert result.apparent_longitude == pytest.approx(342.8897, abs=0.02)
    assert result.next_movement_amount < 0.0


@pytest.mark.parametrize('hour', [0, 20])
def test_mercury_direct_station(solver: MotionSolver, hour: int) -> None:
    result = solver.next_station('mercury', _utc(2019, 10, 31, hour), 'direct')
    assert abs(result.date - _utc(2019, 11, 20, 19, 13)) < timedelta(minutes=15)
    assert result.apparent_longitude == pytest.approx(221.5865, abs=0.01)
    assert result.next_movement_amount > 0.0


def test_mercury_already_retrograde(solver: MotionSolver) -> None:
    instant = _utc(2019, 11, 5)
    assert solver.next_moment('mercury', instant, 'retrograde').date == instant
    evening = _utc(2019, 10, 31, 20)
    assert solver.next_moment('mercury', evening, 'retrograde').date == evening


def test_mercury_already_direct(solver: MotionSolver) -> None:
    instant = _utc(2019, 10, 31)
    result = solver.next_moment('mercury', instant, 'direct')
    assert result.date == instant
    assert result.next_movement_amount > 0.0


def test_mercury_next_retrograde_moment(solver: MotionSolver) -> None:
    result = solver.next_moment('mercury', _utc(2019, 10, 31), 'retrograde')
    assert abs(result.date - _utc(2019, 10, 31, 15, 42, 26)) < timedelta(minutes=15)
    assert result.apparent_longitude == pytest.approx(237.6379, abs=0.01)
    assert result.next_movement_amount < 0.0


def test_mercury_prev_retrograde_moment(solver: MotionSolver) -> None:
    result = solver.next_moment('mercury', _utc(2019, 10, 31), 'retrograde', 'prev')
    assert abs(result.date - _utc(2019, 8, 1, 3, 59, 22)) < timedelta(minutes=15)
    assert result.next_movement_amount < 0.0


def test_mercury_next_direct_moment(solver: MotionSolver) -> None:
    result = solver.next_moment('mercury', _utc(2019, 10, 31, 20), 'direct')
    assert abs(result.date - _utc(2019, 11, 20, 19, 12, 37)) < timedelta(minutes=15)
    assert result.apparent_longitude == pytest.approx(221.5865, abs=0.01)


def test_mercury_prev_direct_moment(solver: MotionSolver) -> None:
    result = solver.next_moment('mercury', _utc(2019, 10, 31, 20), 'direct', 'prev')
    assert abs(result.date - _utc(2019, 10, 31, 15, 42, 54)) < timedelta(minutes=15)
    assert result.apparent_longitude == pytest.approx(237.6379, abs=0.01)


def test_mercury_daily_motion_is_retrograde(solver: MotionSolver) -> None:
    result = solver.daily_motion('mercury', _utc(2019, 11, 10))
    assert result.is_retrograde
    assert result.tomorrow_difference == pytest.approx(-1.0, abs=0.7)


def test_star_has_no_station() -> None:
    solver = MotionSolver(default_catalog(), Settings(search_days=30))
    with pytest.raises(NonConvergenceError):
        solver.next_station('sirius', _utc(2019, 10, 31), 'retrograde')


def test_get_directed_date_day_after_halloween() -> None:
    assert get_directed_date('next', 'date', _utc(2019, 10, 31)) == _utc(2019, 11, 1)
    for unit in motion.UNITS:
        back = get_directed_date('prev', unit, _utc(2019, 10, 31))
        assert get_directed_date('next', unit, back) == _utc(2019, 10, 31)


def test_station_search_is_repeatable(parabola: ParabolaSolver) -> None:
    first = parabola.next_station('mars', START, 'retrograde')
    second = parabola.next_station('mars', START, 'retrograde')
    assert first == second

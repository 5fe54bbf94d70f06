"""Retrograde and direct motion: stations, moments, and daily motion.

A body is retrograde while its apparent ecliptic longitude decreases. A
station is the instant the direction of motion reverses; it is reported as the
first whole unit (minute by default) at which the body moves in the new
direction.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from apparent_ephemeris.angle_utils import modulo_difference
from apparent_ephemeris.catalog import Catalog, default_catalog
from apparent_ephemeris.catalog.base import Body
from apparent_ephemeris.config import Settings, load_settings
from apparent_ephemeris.constants import MAX_BISECTION_STEPS, SECONDS_PER_DAY
from apparent_ephemeris.errors import InvalidArgumentError, NonConvergenceError
from apparent_ephemeris.models import (
    DailyMotion,
    MomentResult,
    MotionSample,
    ObserverState,
    StationResult,
)
from apparent_ephemeris.reducer import apparent_longitude, earth_state
from apparent_ephemeris.time_utils import to_utc

logger = logging.getLogger(__name__)

DIRECTIONS = ('next', 'prev')
UNITS: dict[str, timedelta] = {
    'date': timedelta(days=1),
    'minute': timedelta(minutes=1),
    'second': timedelta(seconds=1),
}
MOTIONS = ('retrograde', 'direct')

_DAY = timedelta(days=1)


def _check_direction(direction: str) -> None:
    if direction not in DIRECTIONS:
        raise InvalidArgumentError(
            f'Please pass in direction from the following: \'next\' or \'prev\'. Not "{direction}".'
        )


def _check_unit(unit: str) -> None:
    if unit not in UNITS:
        raise InvalidArgumentError(
            "Please pass in unit from the following: 'date', 'minute', or 'second'. "
            f'Not "{unit}".'
        )


def _check_motion(motion: str) -> None:
    if motion not in MOTIONS:
        raise InvalidArgumentError(
            f'Please pass in motion from the following: \'retrograde\' or \'direct\'. Not "{motion}".'
        )


def _opposite(motion: str) -> str:
    return 'direct' if motion == 'retrograde' else 'retrograde'


def _in_motion(sample: MotionSample, motion: str) -> bool:
    """True if the sample moves in the given direction (zero counts as neither)."""
    if motion == 'retrograde':
        return sample.next_movement_amount < 0.0
    return sample.next_movement_amount > 0.0


def get_directed_date(direction: str, unit: str, utc_date: datetime) -> datetime:
    """Move a date one whole unit forward ('next') or back ('prev').

    Parameters:
        direction: 'next' or 'prev'.
        unit: 'date' (one day), 'minute', or 'second'.
        utc_date: Starting instant.

    Returns:
        New datetime; next and prev are exact inverses.

    Raises:
        InvalidArgumentError: If direction or unit is not recognized.
    """
    _check_direction(direction)
    _check_unit(unit)
    step = UNITS[unit]
    return utc_date + step if direction == 'next' else utc_date - step


class MotionSolver:
    """Finds stations and motion moments for catalog bodies.

    Parameters:
        catalog: Body catalog (default catalog when None).
        settings: Search horizon and indeterminate-rate threshold.
    """

    def __init__(self, catalog: Catalog | None = None, settings: Settings | None = None) -> None:
        self.catalog = catalog if catalog is not None else default_catalog()
        self.settings = settings if settings is not None else load_settings()

    def longitude(self, body: Body, instant: datetime) -> float:
        """Apparent ecliptic longitude of a body at an instant, degrees."""
        observer = ObserverState.from_datetime(instant)
        return apparent_longitude(body, earth_state(observer.tdt), observer)

    def _sample(self, body: Body, instant: datetime, unit: str) -> MotionSample:
        here = self.longitude(body, instant)
        there = self.longitude(body, instant + UNITS[unit])
        return MotionSample(
            date=instant,
            apparent_longitude=here,
            next_movement_amount=modulo_difference(here, there),
        )

    def sample(self, body_key: str, instant: datetime, unit: str = 'minute') -> MotionSample:
        """Longitude at instant and its signed change over the next unit.

        Raises:
            UnknownBodyError: If body_key is not in the catalog.
            InvalidArgumentError: If unit is not recognized.
        """
        _check_unit(unit)
        return self._sample(self.catalog.get_body(body_key), to_utc(instant), unit)

    def _state(self, sample: MotionSample, unit: str) -> str | None:
        """Coarse motion state, or None when the rate is too slow to call."""
        span_days = UNITS[unit].total_seconds() / SECONDS_PER_DAY
        if abs(sample.next_movement_amount) / span_days < self.settings.min_daily_motion:
            return None
        return 'retrograde' if sample.next_movement_amount < 0.0 else 'direct'

    def _bracket(
        self, body: Body, instant: datetime, motion: str, direction: str, unit: str
    ) -> tuple[datetime, datetime]:
        """Daily scan for a transition into motion; returns (old-state day, new-state day)."""
        step = _DAY if direction == 'next' else -_DAY
        neighbour: tuple[datetime, str] | None = None
        for k in range(self.settings.search_days + 1):
            t = instant + k * step
            state = self._state(self._sample(body, t, unit), unit)
            if state is None:
                continue
            if neighbour is not None:
                other_t, other_state = neighbour
                if direction == 'next' and other_state != motion and state == motion:
                    return (other_t, t)
                if direction == 'prev' and state != motion and other_state == motion:
                    return (t, other_t)
            neighbour = (t, state)
        raise NonConvergenceError(
            f'No transition to {motion} motion for {body.key!r} within '
            f'{self.settings.search_days} days ({direction}) of {instant.isoformat()}'
        )

    def _refine(
        self, body: Body, old: datetime, new: datetime, motion: str, unit: str
    ) -> tuple[MotionSample, MotionSample]:
        """Bisect on whole units to the last old-state and first new-state samples."""
        step = UNITS[unit]
        lo = old
        hi = new
        hi_sample = self._sample(body, hi, unit)
        lo_sample = self._sample(body, lo, unit)
        for _ in range(MAX_BISECTION_STEPS):
            units = int((hi - lo) / step)
            if units <= 1:
                logger.debug('Refined %s %s transition to %s', body.key, motion, hi.isoformat())
                return (lo_sample, hi_sample)
            mid = lo + (units // 2) * step
            mid_sample = self._sample(body, mid, unit)
            if _in_motion(mid_sample, motion):
                hi, hi_sample = mid, mid_sample
            else:
                lo, lo_sample = mid, mid_sample
        raise NonConvergenceError(
            f'Station refinement for {body.key!r} did not converge in {MAX_BISECTION_STEPS} steps'
        )

    def _transition(
        self, body: Body, instant: datetime, motion: str, direction: str, unit: str
    ) -> tuple[MotionSample, MotionSample]:
        old, new = self._bracket(body, instant, motion, direction, unit)
        return self._refine(body, old, new, motion, unit)

    def next_station(
        self,
        body_key: str,
        instant: datetime,
        motion: str,
        direction: str = 'next',
        unit: str = 'minute',
    ) -> StationResult:
        """Nearest station into the given motion after or before instant.

        Parameters:
            body_key: Catalog key.
            instant: Start of the search.
            motion: 'retrograde' or 'direct' (the state entered at the station).
            direction: 'next' or 'prev'.
            unit: Resolution of the result ('minute', 'second' or 'date').

        Returns:
            StationResult for the first unit in the new state.

        Raises:
            InvalidArgumentError: For a bad motion, direction or unit.
            UnknownBodyError: If body_key is not in the catalog.
            NonConvergenceError: If no station lies within the search horizon.
        """
        _check_motion(motion)
        _check_direction(direction)
        _check_unit(unit)
        body = self.catalog.get_body(body_key)
        _, first = self._transition(body, to_utc(instant), motion, direction, unit)
        logger.info('%s %s station (%s): %s', body.key, motion, direction, first.date.isoformat())
        return StationResult(
            date=first.date,
            apparent_longitude=first.apparent_longitude,
            next_movement_amount=first.next_movement_amount,
        )

    def next_moment(
        self,
        body_key: str,
        instant: datetime,
        motion: str,
        direction: str = 'next',
        unit: str = 'second',
    ) -> MomentResult:
        """Nearest instant at which the body is in the given motion.

        If the body is already in that motion at instant, instant itself is
        returned. Otherwise 'next' gives the first unit in motion after the next
        transition into it, and 'prev' gives the last unit in motion before the
        previous transition out of it.

        Raises:
            InvalidArgumentError: For a bad motion, direction or unit.
            UnknownBodyError: If body_key is not in the catalog.
            NonConvergenceError: If no such moment lies within the search horizon.
        """
        _check_motion(motion)
        _check_direction(direction)
        _check_unit(unit)
        body = self.catalog.get_body(body_key)
        instant = to_utc(instant)
        current = self._sample(body, instant, unit)
        if _in_motion(current, motion):
            found = current
        elif direction == 'next':
            _, found = self._transition(body, instant, motion, 'next', unit)
        else:
            found, _ = self._transition(body, instant, _opposite(motion), 'prev', unit)
        logger.info('%s %s moment (%s): %s', body.key, motion, direction, found.date.isoformat())
        return MomentResult(
            date=found.date,
            apparent_longitude=found.apparent_longitude,
            next_movement_amount=found.next_movement_amount,
        )

    def daily_motion(self, body_key: str, instant: datetime, longitude: float | None = None) -> DailyMotion:
        """Apparent longitude one day either side of instant.

        Parameters:
            body_key: Catalog key.
            instant: Central instant.
            longitude: Longitude at instant if already known.
        """
        body = self.catalog.get_body(body_key)
        instant = to_utc(instant)
        today = longitude if longitude is not None else self.longitude(body, instant)
        yesterday = self.longitude(body, instant - _DAY)
        tomorrow = self.longitude(body, instant + _DAY)
        yesterday_diff = modulo_difference(yesterday, today)
        tomorrow_diff = modulo_difference(today, tomorrow)
        return DailyMotion(
            yesterday=yesterday,
            tomorrow=tomorrow,
            yesterday_difference=yesterday_diff,
            tomorrow_difference=tomorrow_diff,
            difference_percent=tomorrow_diff / yesterday_diff if yesterday_diff else float('nan'),
        )


def calculate_next_retrograde_station(
    body_key: str, utc_date: datetime, direction: str = 'next', solver: MotionSolver | None = None
) -> StationResult:
    """Station at which the body turns retrograde."""
    return (solver or MotionSolver()).next_station(body_key, utc_date, 'retrograde', direction)


def calculate_next_direct_station(
    body_key: str, utc_date: datetime, direction: str = 'next', solver: MotionSolver | None = None
) -> StationResult:
    """Station at which the body turns direct."""
    return (solver or MotionSolver()).next_station(body_key, utc_date, 'direct', direction)


def calculate_next_retrograde_moment(
    body_key: str, utc_date: datetime, direction: str = 'next', solver: MotionSolver | None = None
) -> MomentResult:
    """Nearest second at which the body is retrograde."""
    return (solver or MotionSolver()).next_moment(body_key, utc_date, 'retrograde', direction)


def calculate_next_direct_moment(
    body_key: str, utc_date: datetime, direction: str = 'next', solver: MotionSolver | None = None
) -> MomentResult:
    """Nearest second at which the body is direct."""
    return (solver or MotionSolver()).next_moment(body_key, utc_date, 'direct', direction)


def calculate_motion(
    body_key: str,
    utc_date: datetime,
    motion: str = 'retrograde',
    direction: str = 'next',
    unit: str = 'minute',
    solver: MotionSolver | None = None,
) -> StationResult | MomentResult:
    """Station search at 'minute' or 'date' resolution, moment search at 'second'.

    Raises:
        InvalidArgumentError: For a bad motion, direction or unit.
    """
    _check_unit(unit)
    solver = solver or MotionSolver()
    if unit == 'second':
        return solver.next_moment(body_key, utc_date, motion, direction, unit)
    return solver.next_station(body_key, utc_date, motion, direction, unit)

"""Ephemeris result set for one instant and observer, and its text table."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterator
from datetime import datetime
from typing import TextIO

from apparent_ephemeris.catalog import Catalog, default_catalog
from apparent_ephemeris.catalog.base import Body
from apparent_ephemeris.config import Settings, load_settings
from apparent_ephemeris.errors import InvalidArgumentError, UnknownBodyError
from apparent_ephemeris.models import ApparentPosition, EarthState, ObserverState
from apparent_ephemeris.motion import MotionSolver
from apparent_ephemeris.record import Record
from apparent_ephemeris.reducer import earth_state, reduce_body
from apparent_ephemeris.time_utils import to_utc

logger = logging.getLogger(__name__)

_COLUMNS = (
    ('Body', 10, False),
    ('Longitude', 11, True),
    ('RA', 16, True),
    ('Dec', 15, True),
    ('Dist (AU)', 14, True),
    ('Mag', 7, True),
    ('Alt', 7, True),
    ('Az', 7, True),
    ('Con', 3, False),
)


def _check_range(name: str, value: float, low: float, high: float) -> None:
    if not low <= value <= high:
        raise InvalidArgumentError(f'{name} must be in [{low:g}, {high:g}], got {value!r}')


def _check_integer(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f'{name} must be an integer, got {value!r}')


class Ephemeris:
    """Apparent positions of every catalog body (or one) at a UTC instant.

    Parameters:
        year: Year (> 0).
        month: Month, 0-11 (0 = January).
        day: Day of month, 1-31.
        hours: Hour, 0-23.
        minutes: Minute, 0-59.
        seconds: Second, 0-59.
        latitude: Degrees north, -90 to 90.
        longitude: Degrees east, -180 to 180.
        height: Metres above the ellipsoid.
        key: Reduce only this body when given.
        calculate_motion: Attach DailyMotion to each result.
        catalog: Body catalog (default catalog when None).
        settings: Reduction settings (from environment when None).

    Raises:
        InvalidArgumentError: If any input is out of range.
        UnknownBodyError: If key is not in the catalog.
    """

    def __init__(
        self,
        year: int,
        month: int,
        day: int,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        latitude: float = 0.0,
        longitude: float = 0.0,
        height: float = 0.0,
        key: str | None = None,
        calculate_motion: bool = False,
        catalog: Catalog | None = None,
        settings: Settings | None = None,
    ) -> None:
        for name, value in (
            ('year', year),
            ('month', month),
            ('day', day),
            ('hours', hours),
            ('minutes', minutes),
            ('seconds', seconds),
        ):
            _check_integer(name, value)
        if year <= 0:
            raise InvalidArgumentError(f'year must be positive, got {year!r}')
        _check_range('month', month, 0, 11)
        _check_range('day', day, 1, 31)
        _check_range('hours', hours, 0, 23)
        _check_range('minutes', minutes, 0, 59)
        _check_range('seconds', seconds, 0, 59)
        try:
            height = float(height)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f'height must be a number, got {height!r}') from e

        self.catalog = catalog if catalog is not None else default_catalog()
        self.settings = settings if settings is not None else load_settings()
        self.observer = ObserverState.from_calendar(
            year, month + 1, day, hours, minutes, seconds, latitude, longitude, height
        )
        self.earth: EarthState = earth_state(self.observer.tdt)
        bodies = [self.catalog.get_body(key)] if key else list(self.catalog)
        self._motion = MotionSolver(self.catalog, self.settings) if calculate_motion else None
        self.results: list[ApparentPosition] = [self._calculate_body(body) for body in bodies]
        logger.info('Computed %d bodies at %s', len(self.results), self.observer.utc.isoformat())

    @classmethod
    def from_datetime(
        cls,
        utc: datetime,
        latitude: float = 0.0,
        longitude: float = 0.0,
        height: float = 0.0,
        key: str | None = None,
        calculate_motion: bool = False,
        catalog: Catalog | None = None,
        settings: Settings | None = None,
    ) -> Ephemeris:
        """Build from a datetime (whole seconds; naive values are taken as UTC)."""
        utc = to_utc(utc)
        return cls(
            utc.year,
            utc.month - 1,
            utc.day,
            utc.hour,
            utc.minute,
            utc.second,
            latitude,
            longitude,
            height,
            key=key,
            calculate_motion=calculate_motion,
            catalog=catalog,
            settings=settings,
        )

    @property
    def date(self) -> datetime:
        """UTC instant of the ephemeris."""
        return self.observer.utc

    def _calculate_body(self, body: Body) -> ApparentPosition:
        position = reduce_body(body, self.earth, self.observer, self.settings)
        if self._motion is not None:
            motion = self._motion.daily_motion(
                body.key, self.observer.utc, position.apparent_longitude
            )
            position = dataclasses.replace(position, daily_motion=motion)
        return position

    def __getitem__(self, key: str) -> ApparentPosition:
        for result in self.results:
            if result.key == key.lower():
                return result
        raise UnknownBodyError(f'Body {key!r} is not in this ephemeris')

    def __iter__(self) -> Iterator[ApparentPosition]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)


def write_table(ephemeris: Ephemeris, stream: TextIO) -> None:
    """Write a fixed-width table of apparent positions.

    Parameters:
        ephemeris: Computed ephemeris.
        stream: Output text stream.
    """
    obs = ephemeris.observer
    stream.write(
        f'Apparent positions at {obs.utc.strftime("%Y-%m-%d %H:%M:%S")} UTC '
        f'(JD {obs.julian:.5f}, TDT {obs.tdt:.5f}); '
        f'lat {obs.latitude:.4f}, lon {obs.longitude:.4f}, height {obs.height:.0f} m\n'
    )
    rec = Record()
    for title, width, right in _COLUMNS:
        rec.append(title, width, right)
    if any(r.daily_motion is not None for r in ephemeris):
        rec.append('Motion', 10, True)
    rec.write(stream)
    for result in ephemeris:
        rec.append(result.name, 10)
        rec.append(result.apparent_longitude_string, 11, True)
        rec.append(result.apparent.ra_string, 16, True)
        rec.append(result.apparent.dec_string, 15, True)
        rec.append(f'{result.distance:.8g}', 14, True)
        rec.append(f'{result.magnitude:.2f}', 7, True)
        rec.append(f'{result.topocentric.altitude:.2f}', 7, True)
        rec.append(f'{result.topocentric.azimuth:.2f}', 7, True)
        rec.append(result.constellation.abbreviation, 3)
        if result.daily_motion is not None:
            motion = result.daily_motion
            label = 'R' if motion.is_retrograde else 'D'
            rec.append(f'{motion.tomorrow_difference:+.4f}{label}', 10, True)
        rec.write(stream)

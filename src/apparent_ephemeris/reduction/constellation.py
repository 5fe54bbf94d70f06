"""IAU constellation containing a direction, using skyfield's boundary table."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable

from skyfield.api import load_constellation_map, load_constellation_names, position_of_radec

from apparent_ephemeris.models import Constellation, EquatorialPosition
from apparent_ephemeris.reduction.precession import TO_J2000, precess
from apparent_ephemeris.vec_math import Vec3

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=1)
def _constellation_map() -> Callable:
    logger.debug('Loading constellation boundary table')
    return load_constellation_map()


@functools.lru_cache(maxsize=1)
def _constellation_names() -> dict[str, str]:
    return dict(load_constellation_names())


def lookup(p: Vec3, jd: float) -> Constellation:
    """Constellation containing the direction of a vector of date.

    Parameters:
        p: Equatorial vector referred to the equator and equinox of jd.
        jd: Julian date (TDT).

    Returns:
        Constellation with the IAU abbreviation and full name.
    """
    radec = EquatorialPosition.from_vector(precess(p, jd, TO_J2000))
    position = position_of_radec(radec.ra_hours, radec.dec_degrees)
    abbreviation = str(_constellation_map()(position))
    return Constellation(
        abbreviation=abbreviation,
        name=_constellation_names().get(abbreviation, abbreviation),
    )

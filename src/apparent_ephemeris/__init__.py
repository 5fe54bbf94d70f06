"""Apparent positions of solar system bodies and stars, and retrograde motion.

Classical geocentric reduction (Kepler orbits, light time, deflection,
aberration, precession, nutation, topocentric place) with a station and
moment solver built on the apparent ecliptic longitude. Time scales use
rms-julian; constellation boundaries come from skyfield.
"""

from apparent_ephemeris.ephemeris import Ephemeris
from apparent_ephemeris.models import ApparentPosition, ObserverState
from apparent_ephemeris.motion import (
    MotionSolver,
    calculate_motion,
    calculate_next_direct_moment,
    calculate_next_direct_station,
    calculate_next_retrograde_moment,
    calculate_next_retrograde_station,
    get_directed_date,
)
from apparent_ephemeris.reducer import apparent_longitude, earth_state, reduce_body

__all__ = [
    'ApparentPosition',
    'Ephemeris',
    'MotionSolver',
    'ObserverState',
    'apparent_longitude',
    'calculate_motion',
    'calculate_next_direct_moment',
    'calculate_next_direct_station',
    'calculate_next_retrograde_moment',
    'calculate_next_retrograde_station',
    'earth_state',
    'get_directed_date',
    'reduce_body',
]

"""Immutable value objects passed between the pipeline stages."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from apparent_ephemeris.angle_utils import (
    dms_string,
    longitude30_string,
    longitude_string,
)
from apparent_ephemeris.catalog.base import BodyType
from apparent_ephemeris.constants import (
    ARCSEC_PER_DEGREE,
    DEGREES_PER_HOUR_RA,
    RTD,
    SECONDS_PER_DAY,
)
from apparent_ephemeris.errors import InvalidArgumentError
from apparent_ephemeris.time_utils import (
    calc_b1950,
    calc_j1900,
    calc_j2000,
    julian_dates,
    to_utc,
)
from apparent_ephemeris.vec_math import Vec3, recrad


@dataclass(frozen=True)
class ObserverState:
    """Instant and geodetic location shared by every body in one invocation.

    Attributes:
        utc: Aware UTC datetime.
        julian: Julian date in UTC (used as UT1).
        tdt: Julian date in dynamical time.
        delta_t: tdt - julian in seconds.
        j2000: Julian epoch year.
        b1950: Besselian epoch year.
        j1900: Julian epoch year counted from J1900.
        latitude: Geodetic latitude, degrees north.
        longitude: Longitude, degrees east.
        height: Height above the ellipsoid, metres.
    """

    utc: datetime
    julian: float
    tdt: float
    delta_t: float
    j2000: float
    b1950: float
    j1900: float
    latitude: float = 0.0
    longitude: float = 0.0
    height: float = 0.0

    @classmethod
    def from_datetime(
        cls,
        utc: datetime,
        latitude: float = 0.0,
        longitude: float = 0.0,
        height: float = 0.0,
    ) -> ObserverState:
        """Build observer state for a UTC instant and location.

        Parameters:
            utc: Instant (naive values are taken as UTC).
            latitude: Degrees north, in [-90, 90].
            longitude: Degrees east, in [-180, 180].
            height: Metres above the ellipsoid.

        Raises:
            InvalidArgumentError: If latitude or longitude is out of range.
        """
        if not -90.0 <= latitude <= 90.0:
            raise InvalidArgumentError(f'Latitude must be in [-90, 90], got {latitude!r}')
        if not -180.0 <= longitude <= 180.0:
            raise InvalidArgumentError(f'Longitude must be in [-180, 180], got {longitude!r}')
        utc = to_utc(utc)
        jd_utc, jd_tdt = julian_dates(utc)
        return cls(
            utc=utc,
            julian=jd_utc,
            tdt=jd_tdt,
            delta_t=(jd_tdt - jd_utc) * SECONDS_PER_DAY,
            j2000=calc_j2000(jd_tdt),
            b1950=calc_b1950(jd_tdt),
            j1900=calc_j1900(jd_tdt),
            latitude=latitude,
            longitude=longitude,
            height=height,
        )

    @classmethod
    def from_calendar(
        cls,
        year: int,
        month: int,
        day: int,
        hours: int = 0,
        minutes: int = 0,
        seconds: float = 0.0,
        latitude: float = 0.0,
        longitude: float = 0.0,
        height: float = 0.0,
    ) -> ObserverState:
        """Build observer state from calendar fields (month 1-12, UTC)."""
        whole = int(seconds)
        micro = int(round((seconds - whole) * 1.0e6))
        try:
            utc = datetime(year, month, day, hours, minutes, whole, micro)
        except ValueError as e:
            raise InvalidArgumentError(f'Invalid date/time: {e}') from e
        return cls.from_datetime(utc, latitude, longitude, height)


@dataclass(frozen=True)
class HeliocentricPosition:
    """Solved orbit position: equatorial J2000 rectangular AU plus orbit angles."""

    rect: Vec3
    distance: float
    longitude: float  # ecliptic J2000, degrees
    latitude: float
    eccentric_anomaly: float  # radians
    true_anomaly: float  # radians
    jd: float


@dataclass(frozen=True)
class EarthState:
    """Heliocentric Earth position and velocity (AU, AU/day), equatorial J2000."""

    rect: Vec3
    velocity: Vec3
    jd: float


@dataclass(frozen=True)
class EquatorialPosition:
    """Right ascension and declination in radians."""

    ra: float
    dec: float

    @classmethod
    def from_vector(cls, v: Vec3) -> EquatorialPosition:
        _, ra, dec = recrad(v)
        return cls(ra=ra, dec=dec)

    @property
    def ra_hours(self) -> float:
        return self.ra * RTD / DEGREES_PER_HOUR_RA

    @property
    def dec_degrees(self) -> float:
        return self.dec * RTD

    @property
    def ra_string(self) -> str:
        return dms_string(self.ra_hours, 'hms', 2)

    @property
    def dec_string(self) -> str:
        return dms_string(self.dec_degrees, 'dms', 1)


@dataclass(frozen=True)
class EclipticPosition:
    """Ecliptic longitude in [0, 360) and latitude, both degrees."""

    longitude: float
    latitude: float

    @property
    def longitude_string(self) -> str:
        return longitude_string(self.longitude)

    @property
    def longitude30_string(self) -> str:
        return longitude30_string(self.longitude)


@dataclass(frozen=True)
class Geometry:
    """Sun-Earth-object triangle.

    Distances in AU: earth_object (EO), sun_object (SO), sun_earth (SE).
    pq, ep, qe are the cosines used by deflection and magnitude; angles are
    degrees.
    """

    earth_object: float
    sun_object: float
    sun_earth: float
    pq: float
    ep: float
    qe: float

    @property
    def phase_angle(self) -> float:
        """Sun-object-Earth angle in degrees."""
        return math.degrees(math.acos(max(-1.0, min(1.0, self.pq))))

    @property
    def elongation(self) -> float:
        """Sun-Earth-object angle in degrees."""
        return math.degrees(math.acos(max(-1.0, min(1.0, -self.ep))))


@dataclass(frozen=True)
class CorrectionShift:
    """Change in apparent place from one correction step.

    d_ra is in seconds of time, d_dec in arcseconds.
    """

    d_ra: float
    d_dec: float

    @classmethod
    def between(cls, before: Vec3, after: Vec3) -> CorrectionShift:
        """Shift from the direction ``before`` to the direction ``after``."""
        _, ra0, dec0 = recrad(before)
        _, ra1, dec1 = recrad(after)
        d_ra = math.remainder(ra1 - ra0, 2.0 * math.pi)
        return cls(
            d_ra=d_ra * RTD * ARCSEC_PER_DEGREE / DEGREES_PER_HOUR_RA,
            d_dec=(dec1 - dec0) * RTD * ARCSEC_PER_DEGREE,
        )


@dataclass(frozen=True)
class Constellation:
    """IAU constellation abbreviation and full name."""

    abbreviation: str
    name: str


@dataclass(frozen=True)
class Topocentric:
    """Observer-centred place: altitude (refracted) and azimuth, degrees.

    Azimuth is measured from north through east. ra/dec are topocentric
    apparent coordinates before refraction.
    """

    altitude: float
    azimuth: float
    refraction: float
    local_sidereal_time: float  # hours
    ra: float
    dec: float


@dataclass(frozen=True)
class LunarPhase:
    """Moon phase from Sun-Moon elongation."""

    illuminated_fraction: float
    phase_angle: float  # degrees
    quarter: int  # 0 new, 1 first quarter, 2 full, 3 last quarter
    quarter_name: str
    days_since_quarter: float
    days_to_next_quarter: float


@dataclass(frozen=True)
class DailyMotion:
    """Apparent longitude one day before and after, with signed differences."""

    yesterday: float
    tomorrow: float
    yesterday_difference: float
    tomorrow_difference: float
    difference_percent: float

    @property
    def is_retrograde(self) -> bool:
        return self.tomorrow_difference < 0.0


@dataclass(frozen=True)
class ApparentPosition:
    """Fully reduced place of one body at one instant."""

    key: str
    name: str
    body_type: BodyType
    astrometric_j2000: EquatorialPosition
    astrometric_b1950: EquatorialPosition
    apparent: EquatorialPosition
    equinox_ecliptic: EclipticPosition
    apparent_ecliptic: EclipticPosition
    distance: float  # AU, light-time corrected
    true_distance: float  # AU, geometric
    light_time: float  # days
    geometry: Geometry
    magnitude: float
    phase: float  # illuminated fraction
    diameter: float  # arcsec
    deflection: CorrectionShift
    aberration: CorrectionShift
    nutation: CorrectionShift
    constellation: Constellation
    topocentric: Topocentric
    lunar_phase: LunarPhase | None = None
    daily_motion: DailyMotion | None = None

    @property
    def apparent_longitude(self) -> float:
        return self.apparent_ecliptic.longitude

    @property
    def apparent_longitude_string(self) -> str:
        return self.apparent_ecliptic.longitude_string

    @property
    def apparent_longitude30_string(self) -> str:
        return self.apparent_ecliptic.longitude30_string


@dataclass(frozen=True)
class MotionSample:
    """Apparent longitude at a date and its signed change over the next unit."""

    date: datetime
    apparent_longitude: float
    next_movement_amount: float

    @property
    def is_retrograde(self) -> bool:
        return self.next_movement_amount < 0.0


@dataclass(frozen=True)
class StationResult:
    """First unit after a station at which the body moves in the new state."""

    date: datetime
    apparent_longitude: float
    next_movement_amount: float


@dataclass(frozen=True)
class MomentResult:
    """First (or last) unit at which the body is in the requested motion state."""

    date: datetime
    apparent_longitude: float
    next_movement_amount: float

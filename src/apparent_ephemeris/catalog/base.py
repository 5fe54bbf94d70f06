"""Body definitions: orbital elements, star elements, and the body record."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from apparent_ephemeris.constants import J2000
from apparent_ephemeris.errors import InvalidArgumentError


class BodyType(str, enum.Enum):
    """Closed set of reduction strategies; the reducer dispatches on this tag."""

    SUN = 'sun'
    LUNA = 'luna'
    HELIOCENTRIC = 'heliocentric'
    STAR = 'star'


@dataclass(frozen=True)
class OrbitalElements:
    """Osculating heliocentric elements referred to the J2000 ecliptic.

    Angles are in degrees, daily_motion in degrees/day, epoch a JD (TDT).
    Either semi_axis or perihelion_distance must be given; the other is
    derived.
    """

    eccentricity: float
    inclination: float
    node: float
    perihelion: float
    mean_anomaly: float
    daily_motion: float
    epoch: float = J2000
    semi_axis: float | None = None
    perihelion_distance: float | None = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.eccentricity < 1.0:
            raise InvalidArgumentError(
                f'Eccentricity must be in [0, 1), got {self.eccentricity!r}'
            )
        if self.semi_axis is None and self.perihelion_distance is None:
            raise InvalidArgumentError('Orbital elements need semi_axis or perihelion_distance')

    @property
    def a(self) -> float:
        """Semi-major axis in AU (derived from perihelion distance if needed)."""
        if self.semi_axis is not None:
            return self.semi_axis
        if self.perihelion_distance is None:
            raise InvalidArgumentError('Orbital elements need semi_axis or perihelion_distance')
        return self.perihelion_distance / (1.0 - self.eccentricity)


@dataclass(frozen=True)
class StarElements:
    """Catalog place of a star at epoch (J2000 by default).

    ra/dec are radians; pm_ra (mu-alpha-star) and pm_dec are mas/yr; parallax
    is mas; radial_velocity is km/s and only carried for reference.
    """

    ra: float
    dec: float
    pm_ra: float = 0.0
    pm_dec: float = 0.0
    parallax: float = 0.0
    radial_velocity: float = 0.0
    epoch: float = J2000


@dataclass(frozen=True)
class Body:
    """A catalog entry the reducer can process."""

    key: str
    name: str
    body_type: BodyType
    magnitude: float
    semi_diameter: float = 0.0  # arcsec at 1 AU
    elements: OrbitalElements | None = None
    star: StarElements | None = None

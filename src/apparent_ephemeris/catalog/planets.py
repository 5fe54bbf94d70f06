"""Sun, Moon, planets, Pluto and Chiron with mean J2000 orbital elements.

Planet elements are the JPL approximate Keplerian elements at J2000 (Standish),
converted from (L, longitude of perihelion) to (mean anomaly, argument of
perihelion). Secular element rates are not applied.
"""

from __future__ import annotations

from apparent_ephemeris.angle_utils import normalize_degrees
from apparent_ephemeris.catalog.base import Body, BodyType, OrbitalElements
from apparent_ephemeris.constants import JULIAN_CENTURY_DAYS


def _from_mean_longitude(
    a: float,
    e: float,
    inclination: float,
    mean_longitude: float,
    perihelion_longitude: float,
    node: float,
    mean_longitude_rate: float,
) -> OrbitalElements:
    """Elements from the JPL table form (L, varpi, Omega, L-dot in deg/century)."""
    return OrbitalElements(
        semi_axis=a,
        eccentricity=e,
        inclination=inclination,
        node=node,
        perihelion=normalize_degrees(perihelion_longitude - node),
        mean_anomaly=normalize_degrees(mean_longitude - perihelion_longitude),
        daily_motion=mean_longitude_rate / JULIAN_CENTURY_DAYS,
    )


SUN = Body(
    key='sun',
    name='Sun',
    body_type=BodyType.SUN,
    magnitude=-26.74,
    semi_diameter=959.63,
)

MOON = Body(
    key='moon',
    name='Moon',
    body_type=BodyType.LUNA,
    magnitude=-12.73,
    semi_diameter=2.3955,
)

# Earth-Moon barycenter; solved once per instant, never reduced as a target.
EARTH = Body(
    key='earth',
    name='Earth',
    body_type=BodyType.HELIOCENTRIC,
    magnitude=0.0,
    elements=_from_mean_longitude(
        1.00000261, 0.01671123, -0.00001531, 100.46457166, 102.93768193, 0.0, 35999.37244981
    ),
)

MERCURY = Body(
    key='mercury',
    name='Mercury',
    body_type=BodyType.HELIOCENTRIC,
    magnitude=-0.42,
    semi_diameter=3.36,
    elements=_from_mean_longitude(
        0.38709927, 0.20563593, 7.00497902, 252.25032350, 77.45779628, 48.33076593, 149472.67411175
    ),
)

VENUS = Body(
    key='venus',
    name='Venus',
    body_type=BodyType.HELIOCENTRIC,
    magnitude=-4.40,
    semi_diameter=8.34,
    elements=_from_mean_longitude(
        0.72333566, 0.00677672, 3.39467605, 181.97909950, 131.60246718, 76.67984255, 58517.81538729
    ),
)

MARS = Body(
    key='mars',
    name='Mars',
    body_type=BodyType.HELIOCENTRIC,
    magnitude=-1.52,
    semi_diameter=4.68,
    elements=_from_mean_longitude(
        1.52371034, 0.09339410, 1.84969142, -4.55343205, -23.94362959, 49.55953891, 19140.30268499
    ),
)

JUPITER = Body(
    key='jupiter',
    name='Jupiter',
    body_type=BodyType.HELIOCENTRIC,
    magnitude=-9.40,
    semi_diameter=98.44,
    elements=_from_mean_longitude(
        5.20288700, 0.04838624, 1.30439695, 34.39644051, 14.72847983, 100.47390909, 3034.74612775
    ),
)

SATURN = Body(
    key='saturn',
    name='Saturn',
    body_type=BodyType.HELIOCENTRIC,
    magnitude=-8.88,
    semi_diameter=82.73,
    elements=_from_mean_longitude(
        9.53667594, 0.05386179, 2.48599187, 49.95424423, 92.59887831, 113.66242448, 1222.49362201
    ),
)

URANUS = Body(
    key='uranus',
    name='Uranus',
    body_type=BodyType.HELIOCENTRIC,
    magnitude=-7.19,
    semi_diameter=35.02,
    elements=_from_mean_longitude(
        19.18916464, 0.04725744, 0.77263783, 313.23810451, 170.95427630, 74.01692503, 428.48202785
    ),
)

NEPTUNE = Body(
    key='neptune',
    name='Neptune',
    body_type=BodyType.HELIOCENTRIC,
    magnitude=-6.87,
    semi_diameter=33.50,
    elements=_from_mean_longitude(
        30.06992276, 0.00859048, 1.77004347, -55.12002969, 44.96476227, 131.78422574, 218.45945325
    ),
)

PLUTO = Body(
    key='pluto',
    name='Pluto',
    body_type=BodyType.HELIOCENTRIC,
    magnitude=-1.0,
    semi_diameter=2.07,
    elements=_from_mean_longitude(
        39.48211675, 0.24882730, 17.14001206, 238.92903833, 224.06891629, 110.30393684, 145.20780515
    ),
)

# Given by perihelion distance; the semi-major axis is derived.
CHIRON = Body(
    key='chiron',
    name='Chiron',
    body_type=BodyType.HELIOCENTRIC,
    magnitude=6.5,
    semi_diameter=0.138,
    elements=OrbitalElements(
        perihelion_distance=8.45,
        eccentricity=0.3831,
        inclination=6.935,
        node=209.38,
        perihelion=339.53,
        mean_anomaly=27.6,
        daily_motion=0.01944,
    ),
)

SOLAR_SYSTEM_BODIES: tuple[Body, ...] = (
    SUN,
    MOON,
    MERCURY,
    VENUS,
    MARS,
    JUPITER,
    SATURN,
    URANUS,
    NEPTUNE,
    PLUTO,
    CHIRON,
)

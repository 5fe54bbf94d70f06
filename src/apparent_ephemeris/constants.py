"""Fixed constants: epochs, physical constants, unit conversions.

Values follow the IAU 1976 system used throughout the reduction chain.
"""

import math

# Epochs (Julian dates)
J2000 = 2451545.0
B1950 = 2433282.42345905
J1900 = 2415020.0
JULIAN_YEAR_DAYS = 365.25
TROPICAL_YEAR_DAYS = 365.24219879
JULIAN_CENTURY_DAYS = 36525.0

# Time: seconds per unit
SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0

# Angle conversions
TWOPI = 2.0 * math.pi
RTD = 180.0 / math.pi
RTS = RTD * 3600.0  # radians to arcseconds
STR = 1.0 / RTS  # arcseconds to radians
DEGREES_PER_CIRCLE = 360.0
DEGREES_PER_SIGN = 30.0  # zodiac sign width
ARCMIN_PER_DEGREE = 60.0
ARCSEC_PER_DEGREE = 3600.0
DEGREES_PER_HOUR_RA = 15.0  # right ascension: 360° / 24 h

# Physical constants
AU_KM = 149597870.7
CLIGHT_AU_PER_DAY = 173.1446327  # speed of light, AU/day
EARTH_RADIUS_KM = 6378.137
EARTH_FLATTENING = 1.0 / 298.257
EARTH_RADIUS_AU = EARTH_RADIUS_KM / AU_KM
GRAVITATIONAL_DEFLECTION = 1.974e-8  # 2 GM_sun / c^2 in AU
OBLIQUITY_J2000 = 84381.448 * STR  # radians

# Earth velocity by central difference: half-step in days
EARTH_VELOCITY_STEP = 0.005

# Light time iterations for solar system bodies
LIGHT_TIME_ITERATIONS = 2

# Kepler iteration
KEPLER_TOLERANCE = 1.0e-12
KEPLER_MAX_ITERATIONS = 50
KEPLER_MAX_ITERATIONS_HIGH_ECC = 500
KEPLER_HIGH_ECCENTRICITY = 0.9

# Magnitude phase fudge (light leakage); inaccurate for Mercury and Venus.
PHASE_FUDGE_OFFSET = 1.01
PHASE_FUDGE_SCALE = 0.99

# Moon: mean elongation rate used to estimate days to the nearest quarter
LUNAR_ELONGATION_RATE = 12.190749  # deg/day
LUNAR_QUARTER_NAMES = ('New Moon', 'First Quarter', 'Full Moon', 'Last Quarter')

# Refraction defaults (millibars, Celsius)
DEFAULT_PRESSURE_MB = 1010.0
DEFAULT_TEMPERATURE_C = 12.0
REFRACTION_MIN_ALTITUDE = -2.0  # degrees; no refraction below

# Motion search
DEFAULT_SEARCH_DAYS = 1000
MIN_DAILY_MOTION = 1.0e-3  # deg/day; slower samples are indeterminate
MAX_BISECTION_STEPS = 64

# Stars with no measured parallax are placed at this distance (AU)
STAR_DEFAULT_DISTANCE_AU = 206264806.2  # one kiloparsec
MAS_PER_ARCSEC = 1000.0

# Diurnal aberration constant for an observer on the equator (arcsec)
DIURNAL_ABERRATION = 0.3195

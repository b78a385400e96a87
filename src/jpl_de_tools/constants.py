"""Fixed constants: element ids, dataset file conventions, time and light-time values.

From the JPL DE ASCII distribution (header.NNN / ascpYYYY.NNN / testpo.NNN).
"""

# Element numbers (1-based index into the GROUP 1050 layout table)
EARTH_MOON_BARYCENTER_ELEMENT = 3
MOON_ELEMENT = 10  # geocentric Moon
NUTATION_ELEMENT = 12
LIBRATION_ELEMENT = 13
LUNAR_MANTLE_ELEMENT = 14
TT_TDB_ELEMENT = 15

# Highest element stored in km (positions/velocities divided by AU on output)
MAX_AU_ELEMENT = 11

# Minimum layout length of a usable dataset (Mercury .. Sun)
MIN_LAYOUT_ELEMENTS = 11

# Components interpolated per element
BODY_COMPONENTS = 3
NUTATION_COMPONENTS = 2
LIBRATION_COMPONENTS = 3
LUNAR_MANTLE_COMPONENTS = 3
TT_TDB_COMPONENTS = 1

# Time
SECONDS_PER_DAY = 86400.0
J2000_JD = 2451545.0  # JD of 2000-01-01 12:00 TDB
YEAR_ORIGIN_JD = 2451544.5  # JD of 2000-01-01 00:00, origin of the segment-year rule
DAYS_PER_YEAR = 365.25

# Light-time: days of light travel per AU
LIGHT_TIME_DAYS_PER_AU = 0.0057755183
MAX_LIGHT_TIME_ITERATIONS = 100

# Header file names are header.NNN with an optional record-length suffix;
# the first existing candidate in this order wins.
HEADER_PREFIX = 'header'
HEADER_SUFFIXES = ('_572', '', '_229')

# Coefficient segment files are ascpYYYY.NNN
SEGMENT_PATTERN = r'^ascp(\d{1,5})\.(\w+)$'

TESTPO_PREFIX = 'testpo'

# Fortran double precision exponent marker
FORTRAN_EXPONENT_MARKERS = ('D', 'd')

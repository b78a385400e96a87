"""Reader and interpolator for JPL Development Ephemeris (DE) ASCII datasets.

This package reads the ASCII distribution of the JPL planetary ephemerides:
- Header parser: coefficient layout table and named constants (header.NNN)
- Chunk store: locates and caches Chebyshev records in the ascpYYYY.NNN files
- Interpolation: Chebyshev evaluation of position and velocity
- Ephemeris session: barycentric/relative body states, light-time correction,
  nutations, librations, and TT-TDB

Epochs are Julian Ephemeris Dates in TDB; rms-julian is used for the UTC
conversions in time_utils.
"""

from jpl_de_tools.bodies import Body
from jpl_de_tools.de.header import Header, LayoutEntry, load_header
from jpl_de_tools.ephemeris import Ephemeris
from jpl_de_tools.errors import (
    ChunkParseError,
    ElementNotFound,
    EphemerisError,
    EpochOutOfRange,
    FileNotFound,
    HeaderFormatError,
    SegmentNotFound,
)
from jpl_de_tools.vector import Vector6

__all__: list[str] = [
    'Body',
    'ChunkParseError',
    'ElementNotFound',
    'Ephemeris',
    'EphemerisError',
    'EpochOutOfRange',
    'FileNotFound',
    'Header',
    'HeaderFormatError',
    'LayoutEntry',
    'SegmentNotFound',
    'Vector6',
    'load_header',
]

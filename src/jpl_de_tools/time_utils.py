"""Time conversion wrappers around rms-julian: UTC strings and TAI to/from JDE (TDB)."""

from __future__ import annotations

import logging
import re

import julian

from jpl_de_tools.config import get_leapsecs_path
from jpl_de_tools.constants import J2000_JD, SECONDS_PER_DAY

logger = logging.getLogger(__name__)

# Leap seconds loaded once at first use.
_leapsecs_loaded = False


def _ensure_leapsecs() -> None:
    """Load leap seconds if not already loaded.

    Uses the configured LSK when there is one; if it is missing or not in
    NAIF LSK format, falls back to rms-julian's bundled LSK.
    """
    global _leapsecs_loaded
    if _leapsecs_loaded:
        return
    julian.set_ut_model('SPICE')
    path = get_leapsecs_path()
    if path is not None:
        try:
            julian.load_lsk(path)
            _leapsecs_loaded = True
            return
        except (OSError, KeyError, ValueError) as e:
            logger.info('Leap seconds from %s not used (%s); using rms-julian bundled LSK.', path, e)
    julian.load_lsk()
    _leapsecs_loaded = True


def parse_datetime(string: str) -> tuple[int, float] | None:
    """Parse a date/time string to UTC (day, sec).

    Parameters:
        string: Date/time string (format accepted by rms-julian); a trailing
            ISO 'Z' and the 'YYYY HH:MM:SS' form are also accepted.

    Returns:
        (day, sec) where day is days since J2000 and sec is seconds within
        that day; None on parse failure.
    """
    _ensure_leapsecs()
    candidate_strings = [string]
    stripped = string.strip()
    if stripped.endswith(('Z', 'z')):
        candidate_strings.append(stripped[:-1])
    year_hms_match = re.fullmatch(r'(\d{4})\s+(\d{1,2}:\d{2}:\d{2})', stripped)
    if year_hms_match is not None:
        year, hms = year_hms_match.groups()
        candidate_strings.append(f'{year}-01-01 {hms}')
    for candidate in candidate_strings:
        try:
            result = julian.day_sec_from_string(candidate)
            day, sec = result[0], result[1]
            return (int(day), float(sec))
        except (ValueError, TypeError, LookupError, OSError):
            continue
    return None


def jde_from_tdb(tdb: float) -> float:
    """Convert TDB seconds past J2000 to Julian Ephemeris Date.

    Parameters:
        tdb: TDB (ephemeris time) in seconds.

    Returns:
        JDE (TDB).
    """
    return J2000_JD + tdb / SECONDS_PER_DAY


def tdb_from_jde(jde: float) -> float:
    """Convert Julian Ephemeris Date to TDB seconds past J2000."""
    return (jde - J2000_JD) * SECONDS_PER_DAY


def jde_from_day_sec(day: int, sec: float) -> float:
    """Convert UTC (day, sec) to JDE (TDB).

    Parameters:
        day: Days since J2000.
        sec: Seconds within that day.

    Returns:
        JDE (TDB).
    """
    _ensure_leapsecs()
    tai = float(julian.tai_from_day_sec(day, sec))
    return jde_from_tdb(float(julian.tdb_from_tai(tai)))


def jde_from_string(string: str) -> float:
    """Convert a UTC date/time string to JDE (TDB).

    Raises:
        ValueError: String is not a recognized date/time.
    """
    parsed = parse_datetime(string)
    if parsed is None:
        raise ValueError(f'Unrecognized date/time {string!r}')
    return jde_from_day_sec(*parsed)


def format_jde(jde: float, fmt: str | None = None) -> str:
    """Format a JDE (TDB) as a UTC string.

    Parameters:
        jde: Julian Ephemeris Date.
        fmt: Optional format string for rms-julian; None = default.

    Returns:
        Formatted UTC string.
    """
    _ensure_leapsecs()
    tai = float(julian.tai_from_tdb(tdb_from_jde(jde)))
    if fmt is not None:
        return julian.format_tai(tai, fmt)
    return julian.format_tai(tai)


def days_to_seconds(days: float) -> float:
    """Convert a duration in days (e.g. a light time) to seconds."""
    return days * SECONDS_PER_DAY

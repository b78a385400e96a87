"""JPL testpo.NNN self-check files: reading cases and comparing against the reader.

Each data line (after the EOT marker) is::

    denum  yyyy.mm.dd  jde  target  center  coordinate  value

Target/center codes are the testpo numbering, which differs from the layout
element numbers: 3 is the Earth, 13 the Earth-Moon barycenter, 12 the Solar
System barycenter; 14-17 are nutations, librations, lunar mantle angular
velocity, and TT-TDB, compared raw (position followed by rate).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from jpl_de_tools.bodies import Body
from jpl_de_tools.constants import (
    LIBRATION_COMPONENTS,
    LIBRATION_ELEMENT,
    LUNAR_MANTLE_COMPONENTS,
    LUNAR_MANTLE_ELEMENT,
    NUTATION_COMPONENTS,
    NUTATION_ELEMENT,
    TESTPO_PREFIX,
    TT_TDB_COMPONENTS,
    TT_TDB_ELEMENT,
)
from jpl_de_tools.de.header import fortran_float
from jpl_de_tools.errors import FileNotFound

if TYPE_CHECKING:
    from jpl_de_tools.ephemeris import Ephemeris

logger = logging.getLogger(__name__)

END_OF_HEADER = 'EOT'
DEFAULT_TOLERANCE = 1e-13

# testpo code -> body
TESTPO_BODIES: dict[int, Body] = {
    1: Body.MERCURY,
    2: Body.VENUS,
    3: Body.EARTH,
    4: Body.MARS,
    5: Body.JUPITER,
    6: Body.SATURN,
    7: Body.URANUS,
    8: Body.NEPTUNE,
    9: Body.PLUTO,
    10: Body.MOON,
    11: Body.SUN,
    12: Body.SOLAR_SYSTEM_BARYCENTER,
    13: Body.EARTH_MOON_BARYCENTER,
}

# testpo code -> (layout element, components) for non-body quantities
TESTPO_ELEMENTS: dict[int, tuple[int, int]] = {
    14: (NUTATION_ELEMENT, NUTATION_COMPONENTS),
    15: (LIBRATION_ELEMENT, LIBRATION_COMPONENTS),
    16: (LUNAR_MANTLE_ELEMENT, LUNAR_MANTLE_COMPONENTS),
    17: (TT_TDB_ELEMENT, TT_TDB_COMPONENTS),
}


@dataclass(frozen=True)
class TestpoCase:
    """One reference value: coordinate (1-based) of target relative to center at jde."""

    denum: str
    date: str
    jde: float
    target: int
    center: int
    coordinate: int
    expected: float
    line: int = 0


@dataclass
class TestpoReport:
    """Outcome of check_testpo: counts plus (case, computed) pairs that failed."""

    checked: int = 0
    skipped: int = 0
    failures: list[tuple[TestpoCase, float]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def find_testpo_file(directory: Path | str, version: str) -> Path:
    """Path of testpo.NNN in a dataset directory."""
    return Path(directory) / f'{TESTPO_PREFIX}.{version}'


def read_testpo(path: Path | str) -> list[TestpoCase]:
    """Read every reference case of a testpo file.

    Lines before the EOT marker are skipped (all lines if there is no
    marker). Data lines that do not split into 7 fields or do not parse are
    logged and skipped.

    Raises:
        FileNotFound: File does not exist.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFound(f'testpo file not found: {path}', path)
    with path.open(encoding='ascii', errors='replace') as f:
        lines = f.read().splitlines()
    start = 0
    for i, line in enumerate(lines):
        if line.strip() == END_OF_HEADER:
            start = i + 1
            break
    cases: list[TestpoCase] = []
    for i in range(start, len(lines)):
        fields = lines[i].split()
        if len(fields) != 7:
            if fields:
                logger.warning('%s line %d: expected 7 fields, got %d', path, i + 1, len(fields))
            continue
        try:
            cases.append(
                TestpoCase(
                    denum=fields[0],
                    date=fields[1],
                    jde=float(fields[2]),
                    target=int(fields[3]),
                    center=int(fields[4]),
                    coordinate=int(fields[5]),
                    expected=fortran_float(fields[6]),
                    line=i + 1,
                )
            )
        except ValueError as e:
            logger.warning('%s line %d: bad value %r - %s', path, i + 1, lines[i], e)
    return cases


def evaluate_case(ephemeris: Ephemeris, case: TestpoCase) -> float:
    """Compute the value a testpo case refers to.

    Raises:
        ValueError: Unknown target/center code or coordinate.
        EphemerisError subclasses: as raised by the reader.
    """
    if case.target in TESTPO_ELEMENTS:
        element, components = TESTPO_ELEMENTS[case.target]
        values = ephemeris.interpolate(element, case.jde, components, velocity=True)
    else:
        try:
            target = TESTPO_BODIES[case.target]
            center = TESTPO_BODIES[case.center]
        except KeyError as err:
            raise ValueError(f'Unknown testpo body code in {case}') from err
        values = ephemeris.relative(center, target, case.jde).as_array()
    if not 1 <= case.coordinate <= len(values):
        raise ValueError(f'Coordinate {case.coordinate} out of range 1..{len(values)} in {case}')
    return float(values[case.coordinate - 1])


def check_testpo(
    ephemeris: Ephemeris,
    path: Path | str | None = None,
    tolerance: float = DEFAULT_TOLERANCE,
) -> TestpoReport:
    """Compare the reader against every case of a testpo file.

    A case fails when |computed - expected| > tolerance * max(1, |expected|).
    Cases whose epoch lies outside the dataset are skipped.

    Parameters:
        ephemeris: Open reader.
        path: testpo file; defaults to testpo.NNN in the dataset directory.
        tolerance: Relative tolerance (absolute below magnitude 1).

    Returns:
        TestpoReport.
    """
    if path is None:
        if ephemeris.version is None:
            raise FileNotFound('testpo path not given and dataset version unknown', ephemeris.path)
        path = find_testpo_file(ephemeris.path, ephemeris.version)
    report = TestpoReport()
    for case in read_testpo(path):
        if not ephemeris.header.covers(case.jde):
            report.skipped += 1
            continue
        computed = evaluate_case(ephemeris, case)
        report.checked += 1
        if abs(computed - case.expected) > tolerance * max(1.0, abs(case.expected)):
            logger.warning(
                'testpo line %d: %d/%d coord %d at JDE %s: expected %r, got %r',
                case.line,
                case.target,
                case.center,
                case.coordinate,
                case.jde,
                case.expected,
                computed,
            )
            report.failures.append((case, computed))
    logger.info(
        'testpo %s: %d checked, %d skipped, %d failed',
        path,
        report.checked,
        report.skipped,
        len(report.failures),
    )
    return report

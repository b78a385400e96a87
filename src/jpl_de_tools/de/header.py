"""DE header file parsing (header.NNN: GROUP 1010, 1030, 1040/1041, 1050).

The header is positional, not self-describing: every section is found at a
fixed line offset, and the offset of GROUP 1041 and GROUP 1050 depends on the
number of constants declared in GROUP 1040.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from jpl_de_tools.constants import (
    FORTRAN_EXPONENT_MARKERS,
    HEADER_PREFIX,
    HEADER_SUFFIXES,
    MIN_LAYOUT_ELEMENTS,
)
from jpl_de_tools.errors import ElementNotFound, EpochOutOfRange, FileNotFound, HeaderFormatError

logger = logging.getLogger(__name__)

# Line offsets (0-based) of the fixed part of the header
KSIZE_LINE = 0
DESCRIPTION_LINE = 4
EPOCHS_LINE = 10
CONSTANT_COUNT_LINE = 14
# GROUP 1041 values start after this line plus one line per 10 names
CONSTANT_VALUES_BASE = 18
# GROUP 1050 rows start here plus the name and value line counts
LAYOUT_BASE = 22

NAMES_PER_LINE = 10
VALUES_PER_LINE = 3

_HEADER_NAME_RE = re.compile(rf'^{HEADER_PREFIX}\.(\w+?)(_572|_229)?$')


def fortran_float(token: str) -> float:
    """Convert a Fortran double such as '0.143951838384999992D-05' to float.

    Plain decimal and 'E' notation pass through unchanged.

    Raises:
        ValueError: Token is not numeric.
    """
    for marker in FORTRAN_EXPONENT_MARKERS:
        token = token.replace(marker, 'e')
    return float(token)


@dataclass(frozen=True)
class LayoutEntry:
    """GROUP 1050 triplet for one element: where its coefficients live in a record."""

    coeff_start: int  # 1-based index into the record
    coeff_count: int  # coefficients per component per subinterval
    subintervals: int  # subintervals per record


@dataclass(frozen=True)
class Header:
    """Parsed DE header. Immutable; safe to share between threads."""

    description: str
    start_epoch: float
    final_epoch: float
    block_size: float
    k_size: int
    n_coeff: int
    constants: Mapping[str, float]
    layout: tuple[LayoutEntry, ...]
    path: Path | None = field(default=None, compare=False)

    @property
    def au(self) -> float:
        """Kilometers per astronomical unit."""
        return self.constants['AU']

    @property
    def emrat(self) -> float:
        """Earth/Moon mass ratio."""
        return self.constants['EMRAT']

    @property
    def lines_per_record(self) -> int:
        """Physical lines occupied by one coefficient record in a segment file."""
        return 2 + self.n_coeff // 3

    def layout_entry(self, element: int) -> LayoutEntry:
        """Return the layout of a 1-based element.

        Raises:
            ElementNotFound: element is not in this dataset's layout table.
        """
        if element < 1 or element > len(self.layout):
            raise ElementNotFound(element, len(self.layout))
        return self.layout[element - 1]

    def covers(self, epoch: float) -> bool:
        return self.start_epoch <= epoch <= self.final_epoch

    def check_epoch(self, epoch: float) -> None:
        """Raise EpochOutOfRange unless start_epoch <= epoch <= final_epoch."""
        if not self.covers(epoch):
            raise EpochOutOfRange(epoch, self.start_epoch, self.final_epoch, self.description)


def _line(lines: list[str], index: int, path: Path) -> str:
    if index >= len(lines):
        raise HeaderFormatError(
            f'Header ends after {len(lines)} lines; expected line {index + 1}', path
        )
    return lines[index]


def _number(token: str, kind: type, path: Path, index: int) -> float | int:
    try:
        if kind is int:
            return int(token)
        return fortran_float(token)
    except ValueError as err:
        raise HeaderFormatError(f'Non-numeric field {token!r}', path, index) from err


def _collect_tokens(lines: list[str], first: int, count: int, path: Path) -> list[str]:
    """Read whitespace-separated tokens from consecutive lines until count are found."""
    tokens: list[str] = []
    index = first
    while len(tokens) < count:
        line = _line(lines, index, path)
        fields = line.split()
        if not fields:
            raise HeaderFormatError(
                f'Blank line after {len(tokens)} of {count} constants', path, index
            )
        tokens.extend(fields)
        index += 1
    if len(tokens) != count:
        raise HeaderFormatError(f'Found {len(tokens)} constants, expected {count}', path, index - 1)
    return tokens


def _parse_meta(lines: list[str], path: Path) -> tuple[int, int]:
    """KSIZE= nnnn    NCOEFF= nnnn"""
    fields = _line(lines, KSIZE_LINE, path).split()
    if len(fields) < 4:
        raise HeaderFormatError('Expected KSIZE and NCOEFF on first line', path, KSIZE_LINE)
    k_size = int(_number(fields[1], int, path, KSIZE_LINE))
    n_coeff = int(_number(fields[3], int, path, KSIZE_LINE))
    return k_size, n_coeff


def _parse_epochs(lines: list[str], path: Path) -> tuple[float, float, float]:
    """GROUP 1030: start epoch, final epoch, block size (days)."""
    fields = _line(lines, EPOCHS_LINE, path).split()
    if len(fields) < 3:
        raise HeaderFormatError('Expected start, final epoch and block size', path, EPOCHS_LINE)
    start, final, block = (float(_number(f, float, path, EPOCHS_LINE)) for f in fields[:3])
    if block <= 0.0:
        raise HeaderFormatError(f'Block size must be positive, got {block!r}', path, EPOCHS_LINE)
    return start, final, block


def _parse_constants(lines: list[str], path: Path) -> tuple[dict[str, float], int, int]:
    """GROUP 1040 names and GROUP 1041 values.

    Returns:
        (constants, name_lines, value_lines) where the line counts are
        ceil(count / 10) and ceil(count / 3).
    """
    count_fields = _line(lines, CONSTANT_COUNT_LINE, path).split()
    if not count_fields:
        raise HeaderFormatError('Missing constant count (GROUP 1040)', path, CONSTANT_COUNT_LINE)
    count = int(_number(count_fields[0], int, path, CONSTANT_COUNT_LINE))
    name_lines = math.ceil(count / NAMES_PER_LINE)
    value_lines = math.ceil(count / VALUES_PER_LINE)

    names = _collect_tokens(lines, CONSTANT_COUNT_LINE + 1, count, path)
    first_value = CONSTANT_VALUES_BASE + name_lines + 1
    raw_values = _collect_tokens(lines, first_value, count, path)

    constants: dict[str, float] = {}
    for i, (name, raw) in enumerate(zip(names, raw_values)):
        if name in constants:
            raise HeaderFormatError(f'Duplicate constant name {name!r}', path)
        constants[name] = float(_number(raw, float, path, first_value + i // VALUES_PER_LINE))
    for required in ('AU', 'EMRAT'):
        if required not in constants:
            raise HeaderFormatError(f'Required constant {required} is missing', path)
    return constants, name_lines, value_lines


def _parse_layout(lines: list[str], first: int, path: Path) -> tuple[LayoutEntry, ...]:
    """GROUP 1050: rows of start pointers, coefficient counts, subinterval counts."""
    rows: list[list[int]] = []
    for index in range(first, first + 3):
        fields = _line(lines, index, path).split()
        rows.append([int(_number(f, int, path, index)) for f in fields])
    starts, counts, subintervals = rows
    if not (len(starts) == len(counts) == len(subintervals)):
        raise HeaderFormatError(
            f'GROUP 1050 rows differ in length ({len(starts)}, {len(counts)}, {len(subintervals)})',
            path,
            first,
        )
    if len(starts) < MIN_LAYOUT_ELEMENTS:
        raise HeaderFormatError(
            f'GROUP 1050 has {len(starts)} elements; at least {MIN_LAYOUT_ELEMENTS} required',
            path,
            first,
        )
    return tuple(
        LayoutEntry(coeff_start=s, coeff_count=c, subintervals=n)
        for s, c, n in zip(starts, counts, subintervals)
    )


def parse_header(path: Path | str) -> Header:
    """Parse a DE header file.

    Parameters:
        path: header.NNN (or header.NNN_572 / header.NNN_229).

    Returns:
        Header.

    Raises:
        FileNotFound: File does not exist.
        HeaderFormatError: Layout or numeric field is invalid.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFound(f'Header file not found: {path}', path)
    with path.open(encoding='ascii', errors='replace') as f:
        lines = f.read().splitlines()

    k_size, n_coeff = _parse_meta(lines, path)
    description = _line(lines, DESCRIPTION_LINE, path).strip()
    start, final, block = _parse_epochs(lines, path)
    constants, name_lines, value_lines = _parse_constants(lines, path)
    layout = _parse_layout(lines, LAYOUT_BASE + name_lines + value_lines, path)

    header = Header(
        description=description,
        start_epoch=start,
        final_epoch=final,
        block_size=block,
        k_size=k_size,
        n_coeff=n_coeff,
        constants=MappingProxyType(constants),
        layout=layout,
        path=path,
    )
    logger.info(
        'Loaded %s from %s: JDE %s to %s, %d constants, %d elements',
        description,
        path,
        start,
        final,
        len(constants),
        len(layout),
    )
    return header


def find_header_file(directory: Path | str, version: str | None = None) -> Path:
    """Return the header file of a dataset directory.

    Candidates header.NNN_572, header.NNN, header.NNN_229 are tried in that
    order. When version is None, it is taken from the header files present.

    Raises:
        FileNotFound: Directory or header file missing.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFound(f'DE dataset directory does not exist: {directory}', directory)
    if version is None:
        versions = sorted(
            {m.group(1) for p in directory.iterdir() if (m := _HEADER_NAME_RE.match(p.name))}
        )
        if len(versions) > 1:
            logger.warning('Several header versions in %s (%s); using %s', directory, versions, versions[0])
    else:
        versions = [version]
    for ver in versions:
        for suffix in HEADER_SUFFIXES:
            candidate = directory / f'{HEADER_PREFIX}.{ver}{suffix}'
            if candidate.is_file():
                return candidate
    raise FileNotFound(
        f'No header file found in {directory}; the DE download may be incomplete', directory
    )


def load_header(path: Path | str, version: str | None = None) -> Header:
    """Parse the header of a dataset, given the header file or its directory."""
    path = Path(path)
    if path.is_dir():
        path = find_header_file(path, version)
    return parse_header(path)

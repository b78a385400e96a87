"""Coefficient segment files (ascpYYYY.NNN): enumeration, year selection, record index."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from pathlib import Path

from jpl_de_tools.constants import DAYS_PER_YEAR, SEGMENT_PATTERN, YEAR_ORIGIN_JD
from jpl_de_tools.de.header import Header, fortran_float
from jpl_de_tools.errors import ChunkParseError, FileNotFound, SegmentNotFound

logger = logging.getLogger(__name__)

_SEGMENT_RE = re.compile(SEGMENT_PATTERN)


@dataclass(frozen=True)
class SegmentFile:
    """One ascp file covering years [year, end_year); end_year None means unbounded."""

    path: Path
    year: int
    end_year: int | None

    def covers_year(self, year: int) -> bool:
        return year >= self.year and (self.end_year is None or year < self.end_year)


@dataclass(frozen=True)
class SegmentIndex:
    """Byte layout of a segment file.

    record_offsets holds the byte offset of the first line of every complete
    record, followed by the offset just past the last one.
    """

    segment: SegmentFile
    jde0: float
    record_offsets: tuple[int, ...]

    @property
    def record_count(self) -> int:
        return len(self.record_offsets) - 1


def year_from_jde(jde: float) -> int:
    """Calendar year used to pick a segment file: floor(2000 + floor((jde - 2451544.5) / 365.25))."""
    return int(math.floor(2000 + math.floor((jde - YEAR_ORIGIN_JD) / DAYS_PER_YEAR)))


def list_segments(directory: Path | str, version: str | None = None) -> list[SegmentFile]:
    """Return the dataset's segment files in ascending year order.

    Parameters:
        directory: Dataset directory.
        version: Only files with this extension (e.g. '421'); None accepts any.

    Raises:
        FileNotFound: Directory missing or holds no segment files.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFound(f'DE dataset directory does not exist: {directory}', directory)
    found: list[tuple[int, Path]] = []
    for p in directory.iterdir():
        m = _SEGMENT_RE.match(p.name)
        if m is None or not p.is_file():
            continue
        if version is not None and m.group(2) != version:
            continue
        found.append((int(m.group(1)), p))
    if not found:
        raise FileNotFound(f'No ascp coefficient files found in {directory}', directory)
    found.sort()
    segments: list[SegmentFile] = []
    for i, (year, p) in enumerate(found):
        end_year = found[i + 1][0] if i + 1 < len(found) else None
        segments.append(SegmentFile(path=p, year=year, end_year=end_year))
    return segments


def select_segment(segments: list[SegmentFile], header: Header, epoch: float) -> SegmentFile:
    """Return the segment file whose year range holds the epoch's year.

    Raises:
        EpochOutOfRange: epoch outside the header's [start_epoch, final_epoch].
        SegmentNotFound: No file's year range contains the epoch's year.
    """
    header.check_epoch(epoch)
    year = year_from_jde(epoch)
    for segment in segments:
        if segment.covers_year(year):
            logger.debug('JDE %s (year %d) -> %s', epoch, year, segment.path.name)
            return segment
    raise SegmentNotFound(epoch, year)


def index_segment(segment: SegmentFile, header: Header) -> SegmentIndex:
    """Scan a segment file once for record byte offsets and its starting JDE.

    The starting JDE is the first number of the file's first coefficient line,
    independent of the header's epoch bounds.

    Raises:
        FileNotFound: File vanished.
        ChunkParseError: File holds no complete record or its first line is malformed.
    """
    per_record = header.lines_per_record
    offsets: list[int] = []
    first_coeff_line = b''
    try:
        with segment.path.open('rb') as f:
            line_no = 0
            while True:
                pos = f.tell()
                line = f.readline()
                # EOF, or blank padding where the next record would start
                if not line or (line_no % per_record == 0 and not line.strip()):
                    end = pos
                    break
                if line_no % per_record == 0:
                    offsets.append(pos)
                elif line_no == 1:
                    first_coeff_line = line
                line_no += 1
    except FileNotFoundError as err:
        raise FileNotFound(f'Segment file not found: {segment.path}', segment.path) from err

    complete = line_no // per_record
    if complete == 0:
        raise ChunkParseError(
            f'No complete record of {per_record} lines ({line_no} lines found)', segment.path
        )
    if complete < len(offsets):
        logger.warning(
            '%s ends with a partial record (%d lines); ignored',
            segment.path,
            line_no - complete * per_record,
        )
        end = offsets[complete]
        del offsets[complete:]
    offsets.append(end)

    fields = first_coeff_line.split()
    if not fields:
        raise ChunkParseError('Missing first coefficient line', segment.path, 1)
    try:
        jde0 = fortran_float(fields[0].decode('ascii'))
    except (UnicodeDecodeError, ValueError) as err:
        raise ChunkParseError(f'Bad starting JDE {fields[0]!r}', segment.path, 1) from err
    logger.debug('Indexed %s: %d records from JDE %s', segment.path.name, complete, jde0)
    return SegmentIndex(segment=segment, jde0=jde0, record_offsets=tuple(offsets))

"""Chebyshev coefficient records: byte-range loading and the per-session cache."""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from jpl_de_tools.de.header import Header, fortran_float
from jpl_de_tools.de.segments import (
    SegmentFile,
    SegmentIndex,
    index_segment,
    list_segments,
    select_segment,
    year_from_jde,
)
from jpl_de_tools.errors import ChunkParseError, FileNotFound, SegmentNotFound

logger = logging.getLogger(__name__)

VALUES_PER_LINE = 3


@dataclass(frozen=True, eq=False)
class Chunk:
    """One record of coefficients covering [jd0, jd1).

    coefficients is read-only; index 0 and 1 hold jd0 and jd1 themselves, so
    1-based layout pointers index it directly after subtracting one.
    """

    jd0: float
    jd1: float
    coefficients: np.ndarray
    segment: Path
    number: int

    def covers(self, epoch: float) -> bool:
        return self.jd0 <= epoch < self.jd1


def chunk_number(index: SegmentIndex, header: Header, epoch: float) -> int:
    """Record number within the segment: floor((epoch - jde0) / block_size).

    The dataset's final epoch lands one past the last record; it is folded
    back onto the last record, whose closed end it is.

    Raises:
        SegmentNotFound: epoch precedes the segment's first record.
    """
    number = math.floor((epoch - index.jde0) / header.block_size)
    if number < 0:
        raise SegmentNotFound(
            epoch, year_from_jde(epoch), f'{index.segment.path.name} starts at JDE {index.jde0}'
        )
    return min(number, index.record_count - 1)


def _parse_record(lines: list[str], header: Header, path: Path, first_line: int) -> list[float]:
    """Parse the coefficient lines of one record (line 0 is 'record_no n_coeff')."""
    head = lines[0].split()
    if len(head) < 2:
        raise ChunkParseError('Malformed record header line', path, first_line)
    try:
        declared = int(head[1])
    except ValueError as err:
        raise ChunkParseError(f'Non-numeric record header {lines[0]!r}', path, first_line) from err
    if declared != header.n_coeff:
        raise ChunkParseError(
            f'Record declares {declared} coefficients, header says {header.n_coeff}',
            path,
            first_line,
        )
    values: list[float] = []
    last = len(lines) - 1
    for i, line in enumerate(lines[1:], start=1):
        fields = line.split()
        if len(fields) != VALUES_PER_LINE and (i != last or not fields):
            raise ChunkParseError(f'Short coefficient line ({len(fields)} values)', path, first_line + i)
        for token in fields:
            try:
                values.append(fortran_float(token))
            except ValueError as err:
                raise ChunkParseError(f'Non-numeric coefficient {token!r}', path, first_line + i) from err
    if len(values) < header.n_coeff:
        raise ChunkParseError(
            f'Record holds {len(values)} coefficients, expected {header.n_coeff}', path, first_line
        )
    return values[: header.n_coeff]


def load_chunk(index: SegmentIndex, header: Header, epoch: float) -> Chunk:
    """Read the record of a segment file that covers epoch.

    Only the record's byte range is read; the file is opened and closed here.

    Raises:
        SegmentNotFound: The segment has no record covering epoch.
        ChunkParseError: The record is short or malformed.
    """
    number = chunk_number(index, header, epoch)
    path = index.segment.path
    start = index.record_offsets[number]
    stop = index.record_offsets[number + 1]
    try:
        with path.open('rb') as f:
            f.seek(start)
            data = f.read(stop - start)
    except FileNotFoundError as err:
        raise FileNotFound(f'Segment file not found: {path}', path) from err

    first_line = number * header.lines_per_record
    try:
        lines = data.decode('ascii').splitlines()
    except UnicodeDecodeError as err:
        raise ChunkParseError('Non-ASCII data in record', path, first_line) from err
    if len(lines) != header.lines_per_record:
        raise ChunkParseError(
            f'Record has {len(lines)} lines, expected {header.lines_per_record}', path, first_line
        )
    values = _parse_record(lines, header, path, first_line)

    coefficients = np.array(values, dtype=np.float64)
    coefficients.setflags(write=False)
    jd0, jd1 = values[0], values[1]
    if not jd0 <= epoch <= jd1:
        raise SegmentNotFound(
            epoch, year_from_jde(epoch), f'record {number} of {path.name} covers JDE {jd0} to {jd1}'
        )
    logger.debug('Loaded record %d of %s: JDE %s to %s', number, path.name, jd0, jd1)
    return Chunk(jd0=jd0, jd1=jd1, coefficients=coefficients, segment=path, number=number)


class ChunkStore:
    """Segment selection and record loading with caches owned by one reader session.

    Caches are keyed by year (segment selection), by segment path (record
    index), and by (segment path, record start JDE) (records). They grow
    without eviction for the lifetime of the store. A lock guards every cache;
    loads happen outside it, so two threads may load the same record, but
    only complete records are ever published.
    """

    def __init__(self, directory: Path | str, header: Header, version: str | None = None) -> None:
        self._directory = Path(directory)
        self._header = header
        self._version = version
        self._lock = threading.Lock()
        self._segments: list[SegmentFile] | None = None
        self._by_year: dict[int, SegmentFile] = {}
        self._indexes: dict[Path, SegmentIndex] = {}
        self._chunks: dict[tuple[Path, float], Chunk] = {}

    @property
    def header(self) -> Header:
        return self._header

    @property
    def cached_chunks(self) -> int:
        with self._lock:
            return len(self._chunks)

    def segments(self) -> list[SegmentFile]:
        """Segment files of the dataset, ascending by year (listed once)."""
        with self._lock:
            segments = self._segments
        if segments is None:
            segments = list_segments(self._directory, self._version)
            with self._lock:
                if self._segments is None:
                    self._segments = segments
                segments = self._segments
        return segments

    def segment_for(self, epoch: float) -> SegmentFile:
        """Segment file covering epoch (cached by year)."""
        self._header.check_epoch(epoch)
        year = year_from_jde(epoch)
        with self._lock:
            segment = self._by_year.get(year)
        if segment is None:
            segment = select_segment(self.segments(), self._header, epoch)
            with self._lock:
                segment = self._by_year.setdefault(year, segment)
        return segment

    def index_for(self, segment: SegmentFile) -> SegmentIndex:
        """Record byte index of a segment file (cached by path)."""
        with self._lock:
            index = self._indexes.get(segment.path)
        if index is None:
            logger.debug('Indexing %s', segment.path)
            index = index_segment(segment, self._header)
            with self._lock:
                index = self._indexes.setdefault(segment.path, index)
        return index

    def chunk_for(self, epoch: float) -> Chunk:
        """Coefficient record covering epoch (cached by segment and record start)."""
        segment = self.segment_for(epoch)
        index = self.index_for(segment)
        number = chunk_number(index, self._header, epoch)
        key = (segment.path, index.jde0 + number * self._header.block_size)
        with self._lock:
            chunk = self._chunks.get(key)
        if chunk is None:
            logger.debug('Chunk cache miss for JDE %s (%s record %d)', epoch, segment.path.name, number)
            chunk = load_chunk(index, self._header, epoch)
            with self._lock:
                chunk = self._chunks.setdefault(key, chunk)
        return chunk

    def clear(self) -> None:
        """Drop every cached segment, index, and record."""
        with self._lock:
            self._segments = None
            self._by_year.clear()
            self._indexes.clear()
            self._chunks.clear()

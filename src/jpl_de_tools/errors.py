"""Exception taxonomy for DE dataset reading and interpolation.

Every failure surfaces as one of these types; nothing is downgraded to a
default or zero value.
"""

from __future__ import annotations

from pathlib import Path


def _location(path: Path | str | None, line: int | None) -> str:
    """Format a " (file, line N)" suffix; line is 0-based."""
    if path is None:
        return ''
    if line is None:
        return f' ({path})'
    return f' ({path}, line {line + 1})'


class EphemerisError(Exception):
    """Base class for all DE reader failures."""


class FileNotFound(EphemerisError, FileNotFoundError):
    """A required header, segment, or testpo file (or dataset directory) is missing."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.path = path
        super().__init__(message)


class HeaderFormatError(EphemerisError, ValueError):
    """The header file violates the fixed positional layout."""

    def __init__(self, message: str, path: Path | str | None = None, line: int | None = None) -> None:
        self.path = path
        self.line = line
        super().__init__(message + _location(path, line))


class ChunkParseError(EphemerisError, ValueError):
    """A coefficient record is missing, short, or holds a non-numeric field."""

    def __init__(self, message: str, path: Path | str | None = None, line: int | None = None) -> None:
        self.path = path
        self.line = line
        super().__init__(message + _location(path, line))


class EpochOutOfRange(EphemerisError, ValueError):
    """Requested epoch lies outside the dataset's [start_epoch, final_epoch]."""

    def __init__(self, epoch: float, start: float, final: float, description: str = '') -> None:
        self.epoch = epoch
        self.start = start
        self.final = final
        label = description or 'the ephemeris'
        super().__init__(
            f'JDE {epoch!r} is out of range for {label}, which covers '
            f'JDE {start!r} to JDE {final!r}'
        )


class SegmentNotFound(EphemerisError, LookupError):
    """Epoch is inside the dataset bounds but no segment file on disk covers it."""

    def __init__(self, epoch: float, year: int | None = None, reason: str = '') -> None:
        self.epoch = epoch
        self.year = year
        msg = f'No coefficient segment file covers JDE {epoch!r}'
        if year is not None:
            msg += f' (year {year})'
        if reason:
            msg += f': {reason}'
        super().__init__(msg)


class ElementNotFound(EphemerisError, LookupError):
    """Requested element exceeds the dataset's layout table."""

    def __init__(self, element: int, available: int | None = None) -> None:
        self.element = element
        self.available = available
        msg = f'Element {element} was not found within the ephemeris data'
        if available is not None:
            msg += f' (layout has {available} elements)'
        super().__init__(msg)

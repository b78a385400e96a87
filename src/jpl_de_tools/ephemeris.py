"""Ephemeris reader session: body positions, light-time, nutations, librations, TT-TDB."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from jpl_de_tools.bodies import Body
from jpl_de_tools.config import dataset_path, get_de_version
from jpl_de_tools.constants import (
    BODY_COMPONENTS,
    EARTH_MOON_BARYCENTER_ELEMENT,
    LIBRATION_COMPONENTS,
    LIBRATION_ELEMENT,
    LIGHT_TIME_DAYS_PER_AU,
    LUNAR_MANTLE_COMPONENTS,
    LUNAR_MANTLE_ELEMENT,
    MOON_ELEMENT,
    NUTATION_COMPONENTS,
    NUTATION_ELEMENT,
    TT_TDB_COMPONENTS,
    TT_TDB_ELEMENT,
)
from jpl_de_tools.de.chebyshev import interpolate
from jpl_de_tools.de.chunks import ChunkStore
from jpl_de_tools.de.header import Header, load_header
from jpl_de_tools.light_time import LightTimeSolution, solve_light_time
from jpl_de_tools.vector import Vector6
from jpl_de_tools.versions import parse_version

logger = logging.getLogger(__name__)

UNITS = ('au', 'km')


class Ephemeris:
    """One DE dataset opened for reading.

    The header is parsed on construction; coefficient records are loaded on
    demand and cached for the life of the instance. Instances may be shared
    between threads.

    Parameters:
        version: DE version ('421', 'DE430t', ...). Defaults to DE_VERSION.
            Ignored for lookup when path is given, except to select among
            several header versions in one directory.
        path: Dataset directory. Defaults to <DE_PATH>/de<version>.
        unit: 'au' (AU and AU/day, default) or 'km' (km and km/day) for
            elements 1-11.
    """

    def __init__(
        self,
        version: str | int | None = None,
        path: Path | str | None = None,
        unit: str = 'au',
    ) -> None:
        if unit not in UNITS:
            raise ValueError(f'Invalid unit {unit!r}; expected one of {", ".join(UNITS)}')
        if path is None:
            token = parse_version(version if version is not None else get_de_version())
            path = dataset_path(token)
        else:
            token = str(version).lower().removeprefix('de') if version is not None else None
        self._path = Path(path)
        self._unit = unit
        self._header = load_header(self._path, token)
        self._version = token or self._version_from_header(self._header)
        self._store = ChunkStore(self._path, self._header, self._version)
        logger.debug('Opened DE%s at %s (unit %s)', self._version, self._path, unit)

    @staticmethod
    def _version_from_header(header: Header) -> str | None:
        if header.path is None:
            return None
        return header.path.name.split('.', 1)[1].split('_', 1)[0]

    def __repr__(self) -> str:
        return f'Ephemeris(version={self._version!r}, path={str(self._path)!r}, unit={self._unit!r})'

    @property
    def header(self) -> Header:
        return self._header

    @property
    def version(self) -> str | None:
        return self._version

    @property
    def path(self) -> Path:
        return self._path

    @property
    def unit(self) -> str:
        return self._unit

    @property
    def store(self) -> ChunkStore:
        return self._store

    def interpolate(
        self, element: int, epoch: float, components: int = 3, velocity: bool = False
    ) -> np.ndarray:
        """Interpolate a raw element (1-based layout slot) at epoch.

        Raises:
            EpochOutOfRange: epoch outside the dataset.
            ElementNotFound: element not in this dataset.
            SegmentNotFound, ChunkParseError, FileNotFound: dataset problems.
        """
        self._header.check_epoch(epoch)
        self._header.layout_entry(element)
        chunk = self._store.chunk_for(epoch)
        return interpolate(
            chunk,
            self._header,
            element,
            epoch,
            components,
            velocity,
            to_au=self._unit == 'au',
        )

    def _state(self, element: int, epoch: float) -> Vector6:
        return Vector6.from_sequence(self.interpolate(element, epoch, BODY_COMPONENTS, velocity=True))

    def _earth(self, epoch: float, moon: Vector6) -> Vector6:
        """Earth = EMB - Moon / (1 + EMRAT), Moon geocentric."""
        emb = self._state(EARTH_MOON_BARYCENTER_ELEMENT, epoch)
        return emb - moon.scaled(1.0 / (1.0 + self._header.emrat))

    def geocentric_moon(self, epoch: float) -> Vector6:
        """Moon relative to Earth (element 10)."""
        return self._state(MOON_ELEMENT, epoch)

    def barycentric(self, body: Body, epoch: float) -> Vector6:
        """State of body relative to the Solar System barycenter."""
        if body is Body.SOLAR_SYSTEM_BARYCENTER:
            self._header.check_epoch(epoch)
            return Vector6.zero()
        if body is Body.EARTH:
            return self._earth(epoch, self.geocentric_moon(epoch))
        if body is Body.MOON:
            moon = self.geocentric_moon(epoch)
            return moon + self._earth(epoch, moon)
        return self._state(body.element, epoch)

    def relative(self, center: Body, target: Body, epoch: float) -> Vector6:
        """State of target relative to center: barycentric(target) - barycentric(center)."""
        return self.barycentric(target, epoch) - self.barycentric(center, epoch)

    def position(self, body: Body, epoch: float) -> Vector6:
        """Barycentric position and velocity of body."""
        return self.barycentric(body, epoch)

    def position_relative(self, center: Body, target: Body, epoch: float) -> Vector6:
        """Position and velocity of target as seen from center (geometric)."""
        return self.relative(center, target, epoch)

    def solve_light_time(self, center: Body, target: Body, epoch: float) -> LightTimeSolution:
        """Light-time iteration for target seen from center, with iteration details.

        Light time is in days for either session unit.
        """
        days_per_unit = LIGHT_TIME_DAYS_PER_AU
        if self._unit == 'km':
            days_per_unit = LIGHT_TIME_DAYS_PER_AU / self._header.au
        return solve_light_time(
            lambda jde: self.relative(center, target, jde), epoch, days_per_au=days_per_unit
        )

    def apparent_position(self, center: Body, target: Body, epoch: float) -> tuple[Vector6, float]:
        """Target as seen from center corrected for light travel time.

        The state carries velocity as well as position; callers wanting the
        position alone use its position attribute.

        Returns:
            (state of target relative to center at epoch - light_time,
            light_time in days).
        """
        solution = self.solve_light_time(center, target, epoch)
        return solution.state, solution.light_time

    def nutation(self, epoch: float) -> tuple[float, float]:
        """Nutation in longitude and obliquity (radians), element 12."""
        values = self.interpolate(NUTATION_ELEMENT, epoch, NUTATION_COMPONENTS)
        return float(values[0]), float(values[1])

    def libration(self, epoch: float) -> tuple[float, float, float]:
        """Lunar mantle Euler angles phi, theta, psi (radians), element 13."""
        values = self.interpolate(LIBRATION_ELEMENT, epoch, LIBRATION_COMPONENTS)
        return float(values[0]), float(values[1]), float(values[2])

    def lunar_mantle_velocity(self, epoch: float) -> tuple[float, float, float]:
        """Lunar mantle angular velocity (radians/day), element 14."""
        values = self.interpolate(LUNAR_MANTLE_ELEMENT, epoch, LUNAR_MANTLE_COMPONENTS)
        return float(values[0]), float(values[1]), float(values[2])

    def tt_minus_tdb(self, epoch: float) -> float:
        """TT - TDB at the geocenter (seconds), element 15."""
        values = self.interpolate(TT_TDB_ELEMENT, epoch, TT_TDB_COMPONENTS)
        return float(values[0])

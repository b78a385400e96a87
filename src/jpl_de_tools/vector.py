"""Position/velocity state vector."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Vector6:
    """Cartesian state: position (AU) and velocity (AU/day), ICRF/J2000 axes.

    Units follow the reader session; a km session yields km and km/day.
    """

    x: float
    y: float
    z: float
    vx: float = 0.0
    vy: float = 0.0
    vz: float = 0.0

    @classmethod
    def zero(cls) -> Vector6:
        return cls(0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_sequence(cls, values: Sequence[float] | np.ndarray) -> Vector6:
        """Build from 3 (position only) or 6 (position and velocity) numbers."""
        if len(values) not in (3, 6):
            raise ValueError(f'Expected 3 or 6 components, got {len(values)}')
        return cls(*(float(v) for v in values))

    def __add__(self, other: Vector6) -> Vector6:
        return Vector6(
            self.x + other.x,
            self.y + other.y,
            self.z + other.z,
            self.vx + other.vx,
            self.vy + other.vy,
            self.vz + other.vz,
        )

    def __sub__(self, other: Vector6) -> Vector6:
        return Vector6(
            self.x - other.x,
            self.y - other.y,
            self.z - other.z,
            self.vx - other.vx,
            self.vy - other.vy,
            self.vz - other.vz,
        )

    def __neg__(self) -> Vector6:
        return Vector6(-self.x, -self.y, -self.z, -self.vx, -self.vy, -self.vz)

    def scaled(self, factor: float) -> Vector6:
        """Multiply every component by factor."""
        return Vector6(
            self.x * factor,
            self.y * factor,
            self.z * factor,
            self.vx * factor,
            self.vy * factor,
            self.vz * factor,
        )

    @property
    def position(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @property
    def velocity(self) -> tuple[float, float, float]:
        return (self.vx, self.vy, self.vz)

    @property
    def distance(self) -> float:
        """Length of the position part."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def as_array(self) -> np.ndarray:
        """Length-6 float64 array (x, y, z, vx, vy, vz)."""
        return np.array(
            [self.x, self.y, self.z, self.vx, self.vy, self.vz], dtype=np.float64
        )

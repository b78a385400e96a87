"""Shared fixtures: synthetic DE datasets written to tmp_path."""

from __future__ import annotations

from pathlib import Path

import pytest

from jpl_de_tools.ephemeris import Ephemeris
from tests import synthetic_de


@pytest.fixture
def de_dir(tmp_path: Path) -> Path:
    """Dataset with nutations, librations, lunar mantle and TT-TDB (15 elements)."""
    return synthetic_de.write_dataset(tmp_path / 'de999')


@pytest.fixture
def short_de_dir(tmp_path: Path) -> Path:
    """Dataset with bodies only (11 elements)."""
    return synthetic_de.write_dataset(tmp_path / 'de998', elements=11, version='998')


@pytest.fixture
def eph(de_dir: Path) -> Ephemeris:
    return Ephemeris(path=de_dir)

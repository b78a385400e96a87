"""Tests for the Body enumeration."""

from __future__ import annotations

import pytest

from jpl_de_tools.bodies import Body


def test_elements() -> None:
    """Element numbers follow the layout table; Earth and the SSB are special."""
    assert Body.MERCURY.element == 1
    assert Body.MOON.element == 10
    assert Body.SUN.element == 11
    assert Body.EARTH.element == 301
    assert Body.SOLAR_SYSTEM_BARYCENTER.element == 0
    assert Body.from_element(4) is Body.MARS
    with pytest.raises(ValueError):
        Body.from_element(12)


def test_from_name() -> None:
    """Labels, abbreviations and member names match case-insensitively."""
    assert Body.from_name('mars') is Body.MARS
    assert Body.from_name('EMB') is Body.EARTH_MOON_BARYCENTER
    assert Body.from_name('Earth-Moon barycenter') is Body.EARTH_MOON_BARYCENTER
    assert Body.from_name('solar_system_barycenter') is Body.SOLAR_SYSTEM_BARYCENTER
    assert Body.from_name(' Lu ') is Body.MOON
    with pytest.raises(ValueError):
        Body.from_name('Ceres')


def test_str() -> None:
    assert str(Body.JUPITER) == 'Jupiter'

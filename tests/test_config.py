"""Tests for environment-driven configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from jpl_de_tools import config


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without overrides the dataset root is /var/www/DE/ and the version 421."""
    monkeypatch.delenv('DE_PATH', raising=False)
    monkeypatch.delenv('DE_VERSION', raising=False)
    assert config.get_de_path() == '/var/www/DE/'
    assert config.get_de_version() == '421'
    assert config.dataset_path('421') == Path('/var/www/DE/de421')


def test_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """DE_PATH and DE_VERSION replace the defaults; a blank version does not."""
    monkeypatch.setenv('DE_PATH', str(tmp_path))
    monkeypatch.setenv('DE_VERSION', '430t')
    assert config.get_de_version() == '430t'
    assert config.dataset_path('430t') == tmp_path / 'de430t'
    monkeypatch.setenv('DE_VERSION', '  ')
    assert config.get_de_version() == '421'


def test_leapsecs_path(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """JULIAN_LEAPSECS wins, then a .tls file in the DE root, else None."""
    monkeypatch.setenv('DE_PATH', str(tmp_path))
    monkeypatch.delenv('JULIAN_LEAPSECS', raising=False)
    assert config.get_leapsecs_path() is None
    (tmp_path / 'naif0012.tls').write_text('')
    assert config.get_leapsecs_path() == str(tmp_path / 'naif0012.tls')
    monkeypatch.setenv('JULIAN_LEAPSECS', '/data/leap.tls')
    assert config.get_leapsecs_path() == '/data/leap.tls'

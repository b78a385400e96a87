"""Configuration: DE dataset root, default DE version, and leap seconds file from environment."""

import os
from pathlib import Path

# Env var overrides with sensible defaults.
DEFAULT_DE_PATH = '/var/www/DE/'
DEFAULT_DE_VERSION = '421'


def get_de_path() -> str:
    """Return DE dataset root directory (DE_PATH env var or default).

    Each DE version lives in a ``de<version>`` subdirectory of this root.

    Returns:
        Path string.
    """
    return os.environ.get('DE_PATH', DEFAULT_DE_PATH)


def get_de_version() -> str:
    """Return the DE version used when none is requested (DE_VERSION env var or default).

    Returns:
        Version token such as '421' or '430t' (not yet validated).
    """
    return os.environ.get('DE_VERSION', DEFAULT_DE_VERSION).strip() or DEFAULT_DE_VERSION


def dataset_path(version: str) -> Path:
    """Return the directory holding the files of one DE version.

    Parameters:
        version: Catalog version token (e.g. '421').

    Returns:
        ``<DE_PATH>/de<version>``.
    """
    return Path(get_de_path()) / f'de{version}'


def get_leapsecs_path() -> str | None:
    """Return path to a NAIF LSK leap seconds file for rms-julian.

    Prefers JULIAN_LEAPSECS, then a .tls file in the DE root. None means
    rms-julian's bundled LSK is used.

    Returns:
        Path string to an LSK, or None.
    """
    path = os.environ.get('JULIAN_LEAPSECS', '').strip()
    if path:
        return path
    base = Path(get_de_path())
    for name in ('naif0012.tls', 'naif0011.tls', 'leapseconds.tls'):
        p = base / name
        if p.exists():
            return str(p)
    return None

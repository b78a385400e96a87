"""Catalog of published JPL DE versions."""

from __future__ import annotations

import re

# Version token -> short description (creation date, contents, span).
DE_VERSIONS: dict[str, str] = {
    '102': 'Sep 1981; nutations, no librations; JED 1206160.5 (-1410 APR 16) to 2817872.5 (3002 DEC 22)',
    '200': 'Sep 1981; nutations, no librations; JED 2305424.5 (1599 DEC 09) to 2513360.5 (2169 MAR 31)',
    '202': 'Oct 1987; nutations and librations; JED 2414992.5 (1899 DEC 04) to 2469808.5 (2050 JAN 02)',
    '403': 'May 1993; nutations and librations; JED 2305200.5 (1599 APR 29) to 2524400.5 (2199 JUN 22)',
    '405': 'May 1997; nutations and librations; JED 2305424.5 (1599 DEC 09) to 2525008.5 (2201 FEB 20)',
    '406': 'May 1997; no nutations or librations; JED 625360.5 (-3000 FEB 23) to 2816912.5 (+3000 MAY 06)',
    '410': 'Apr 2003; nutations and librations; JED 2415056.5 (1900 FEB 06) to 2458832.5 (2019 DEC 15)',
    '413': 'Nov 2004; nutations and librations; JED 2414992.5 (1899 DEC 04) to 2469872.5 (2050 MAR 07)',
    '414': 'May 2005; nutations and librations; JED 2414992.5 (1899 DEC 04) to 2469872.5 (2050 MAR 07)',
    '418': 'Aug 2007; nutations and librations; JED 2414864.5 (1899 JUL 29) to 2470192.5 (2051 JAN 21)',
    '421': 'Feb 2008; nutations and librations; JED 2414864.5 (1899 JUL 29) to 2471184.5 (2053 OCT 09)',
    '422': 'Sep 2009; nutations and librations; JED 625648.5 (-3000 DEC 07) to 2816816.5 (3000 JAN 30)',
    '423': 'Feb 2010; nutations and librations; JED 2378480.5 (1799 DEC 16) to 2524624.5 (2200 FEB 02)',
    '424': 'Nutations and librations',
    '430': 'Apr 2013; librations and 1980 nutation; JED 2287184.5 (1549 DEC 21) to 2688976.5 (2650 JAN 25)',
    '430t': 'Apr 2013; DE430 plus TT-TDB at the geocenter; JED 2287184.5 to 2688976.5',
    '431': 'Apr 2013; librations and 1980 nutation; JED -3100015.5 (-13200 AUG 15) to 8000016.5 (17191 MAR 15)',
    '432': 'Apr 2014; librations, no nutations; JED 2287184.5 (1549 DEC 21) to 2688976.5 (2650 JAN 25)',
    '432t': 'Apr 2014; DE432 plus TT-TDB at the geocenter; JED 2287184.5 to 2688976.5',
}

_VERSION_RE = re.compile(r'^(?:de)?\s*(\d+t?)$')


def parse_version(version: str | int) -> str:
    """Normalize a DE version to its catalog token.

    Parameters:
        version: e.g. 421, '421', 'DE421', 'de430t'.

    Returns:
        Catalog token such as '421' or '430t'.

    Raises:
        ValueError: Version is not in the catalog.
    """
    token = str(version).strip().lower()
    match = _VERSION_RE.match(token)
    if match is None or match.group(1) not in DE_VERSIONS:
        raise ValueError(f'DE{token.removeprefix("de")} was not found; known versions: {", ".join(DE_VERSIONS)}')
    return match.group(1)


def describe_version(version: str | int) -> str:
    """Return 'DEnnn: description' for a catalog version."""
    token = parse_version(version)
    return f'DE{token}: {DE_VERSIONS[token]}'

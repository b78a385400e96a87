"""Synthetic DE dataset writer and closed-form expected values.

Every element stores 3 Chebyshev coefficients per component. Within a
(sub)interval, component j of element e is c0 + c1 * tc, where tc is the
scaled Chebyshev time; the third coefficient only enters the rate:
(c1 + 4 * c2 * tc) * 2 * subintervals / block_size.

Layout: 15 elements (11 bodies, nutations, librations, lunar mantle,
TT-TDB) or 11 for a dataset without the auxiliary quantities. The
Earth-Moon barycenter (element 3) has 2 subintervals per record.

Records are split over two files, ascp2000 and ascp2001; as in JPL's own
files, the last record of the first file is repeated as the first record of
the second.
"""

from __future__ import annotations

import math
from pathlib import Path

VERSION = '999'
START = 2451544.5
BLOCK = 32.0
RECORDS = 20
FINAL = START + RECORDS * BLOCK
SPLIT_RECORD = 11
AU = 149597870.7
EMRAT = 81.30056
COEFF_COUNT = 3

COMPONENTS: dict[int, int] = {e: 3 for e in range(1, 12)}
COMPONENTS.update({12: 2, 13: 3, 14: 3, 15: 1})
SUBINTERVALS: dict[int, int] = {3: 2}

CONSTANTS: list[tuple[str, float]] = [
    ('DENUM', 999.0),
    ('LENUM', 999.0),
    ('TDATEF', 0.0),
    ('TDATEB', 0.2013040120000000e14),
    ('CLIGHT', 299792.458),
    ('AU', AU),
    ('EMRAT', EMRAT),
    ('GMS', 0.2959122082855911e-03),
    ('GMB', 0.8997011346712499e-09),
    ('RE', 6378.137),
    ('ASUN', 696000.0),
    ('J2SUN', 0.2e-06),
]


def coefficient(record: int, element: int, sub: int, component: int, k: int) -> float:
    """Value of coefficient k of one component in one record/subinterval."""
    if k == 0:
        return 1000.0 * element + 100.0 * component + record + 0.5 * sub
    if k == 1:
        return 10.0 * (component + 1)
    return 3.0


def layout(elements: int) -> list[tuple[int, int, int]]:
    """(coeff_start, coeff_count, subintervals) per element."""
    entries = []
    start = 3
    for e in range(1, elements + 1):
        sub = SUBINTERVALS.get(e, 1)
        entries.append((start, COEFF_COUNT, sub))
        start += COEFF_COUNT * COMPONENTS[e] * sub
    return entries


def n_coeff(elements: int) -> int:
    start, count, sub = layout(elements)[-1]
    return start - 1 + count * COMPONENTS[elements] * sub


def record_values(record: int, elements: int) -> list[float]:
    jd0 = START + record * BLOCK
    values = [jd0, jd0 + BLOCK]
    for e in range(1, elements + 1):
        for s in range(SUBINTERVALS.get(e, 1)):
            for j in range(COMPONENTS[e]):
                values.extend(coefficient(record, e, s, j, k) for k in range(COEFF_COUNT))
    return values


def fortran(value: float) -> str:
    return f'{value:.17E}'.replace('E', 'D')


def record_text(number: int, record: int, elements: int) -> str:
    """One record: 'number n_coeff' then 3 coefficients per line, zero padded."""
    n = n_coeff(elements)
    values = record_values(record, elements)
    capacity = 3 * (1 + n // 3)
    values += [0.0] * (capacity - len(values))
    lines = [f'{number:6d}{n:6d}']
    for i in range(0, capacity, 3):
        lines.append('  ' + '  '.join(fortran(v) for v in values[i : i + 3]))
    return '\n'.join(lines) + '\n'


def header_text(elements: int, version: str = VERSION) -> str:
    n = n_coeff(elements)
    names = [name for name, _ in CONSTANTS]
    values = [value for _, value in CONSTANTS]
    rows = layout(elements)
    lines = [
        f'KSIZE= {2 * n:5d}    NCOEFF= {n:5d}',
        '',
        'GROUP   1010',
        '',
        f'JPL Planetary Ephemeris DE{version}/LE{version} (synthetic)',
        f'Start Epoch: JED= {START:11.1f}',
        f'Final Epoch: JED= {FINAL:11.1f}',
        '',
        'GROUP   1030',
        '',
        f'  {START:.2f}  {FINAL:.2f}  {BLOCK:.0f}.',
        '',
        'GROUP   1040',
        '',
        f'{len(names):6d}',
    ]
    for i in range(0, len(names), 10):
        lines.append('  ' + '  '.join(f'{name:<6s}' for name in names[i : i + 10]))
    lines += ['', 'GROUP   1041', '', f'{len(values):6d}']
    for i in range(0, len(values), 3):
        lines.append('  ' + '  '.join(fortran(v) for v in values[i : i + 3]))
    lines += ['', 'GROUP   1050', '']
    for column in range(3):
        lines.append(''.join(f'{row[column]:6d}' for row in rows))
    lines += ['', 'GROUP   1070', '', '']
    return '\n'.join(lines)


def write_dataset(
    directory: Path,
    elements: int = 15,
    version: str = VERSION,
    header_suffix: str = '',
) -> Path:
    """Write header, two segment files, and a testpo file into directory."""
    directory.mkdir(parents=True, exist_ok=True)
    (directory / f'header.{version}{header_suffix}').write_text(
        header_text(elements, version), encoding='ascii'
    )
    first = ''.join(record_text(i + 1, r, elements) for i, r in enumerate(range(0, SPLIT_RECORD + 1)))
    second = ''.join(
        record_text(i + 1, r, elements) for i, r in enumerate(range(SPLIT_RECORD, RECORDS))
    )
    (directory / f'ascp2000.{version}').write_text(first, encoding='ascii')
    (directory / f'ascp2001.{version}').write_text(second, encoding='ascii')
    (directory / f'testpo.{version}').write_text(testpo_text(version), encoding='ascii')
    return directory


def element_state(element: int, epoch: float, scale_au: bool = True) -> list[float]:
    """Closed-form positions then rates of an element at epoch."""
    record = min(int(math.floor((epoch - START) / BLOCK)), RECORDS - 1)
    t = (epoch - (START + record * BLOCK)) / BLOCK
    sub = SUBINTERVALS.get(element, 1)
    if t >= 1.0:
        s, tc = sub - 1, 1.0
    else:
        x = t * sub
        s = int(math.floor(x))
        tc = 2.0 * (x - s) - 1.0
    comps = range(COMPONENTS[element])
    pos = [coefficient(record, element, s, j, 0) + coefficient(record, element, s, j, 1) * tc for j in comps]
    rate = [
        (coefficient(record, element, s, j, 1) + 4.0 * tc * coefficient(record, element, s, j, 2))
        * 2.0
        * sub
        / BLOCK
        for j in comps
    ]
    if scale_au and element <= 11:
        pos = [p / AU for p in pos]
        rate = [v / AU for v in rate]
    return pos + rate


def earth_state(epoch: float) -> list[float]:
    emb = element_state(3, epoch)
    moon = element_state(10, epoch)
    return [b - m / (1.0 + EMRAT) for b, m in zip(emb, moon)]


def testpo_text(version: str = VERSION) -> str:
    """testpo with closed-form values, one out-of-range case and two malformed lines."""
    a = START + 2 * BLOCK + 16.0  # mid record 2, year 2000
    b = START + 15 * BLOCK + 8.0  # record 15, year 2001
    mars_a = element_state(4, a)
    sun_a = element_state(11, a)
    moon_b = element_state(10, b)
    nut_b = element_state(12, b, scale_au=False)
    ttdb_a = element_state(15, a, scale_au=False)
    cases = [
        (a, 4, 12, 1, mars_a[0]),
        (a, 4, 12, 2, mars_a[1]),
        (a, 4, 11, 3, mars_a[2] - sun_a[2]),
        (a, 4, 11, 4, mars_a[3] - sun_a[3]),
        (b, 3, 10, 1, -moon_b[0]),
        (b, 3, 10, 6, -moon_b[5]),
        (b, 14, 0, 2, nut_b[1]),
        (b, 14, 0, 3, nut_b[2]),
        (a, 17, 0, 1, ttdb_a[0]),
        (2400000.5, 4, 12, 1, 1.0),
    ]
    lines = [
        f'DE-0{version}LE-0{version}          {START:.2f}  {FINAL:.2f}',
        'JPL synthetic test points',
        'EOT',
    ]
    for jde, target, center, coord, value in cases:
        lines.append(f'{version}  2000.01.01 {jde:.1f} {target:2d} {center:2d} {coord:2d} {value: .20e}')
    lines.append('not a test point')
    lines.append(f'{version}  2000.01.01 unknown  4 12  1  0.0')
    return '\n'.join(lines) + '\n'

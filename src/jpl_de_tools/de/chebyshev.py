"""Chebyshev evaluation of one element of a coefficient record (JPL INTERP).

Sums run term by term in increasing order so results are reproducible to
the last bit; numpy is used only to carry the components side by side.
"""

from __future__ import annotations

import math

import numpy as np

from jpl_de_tools.constants import MAX_AU_ELEMENT
from jpl_de_tools.de.chunks import Chunk
from jpl_de_tools.de.header import Header
from jpl_de_tools.errors import ChunkParseError


def chebyshev_time(epoch: float, jd0: float, block_size: float, subintervals: int) -> tuple[int, float]:
    """Return (subinterval, scaled time in [-1, 1]) of epoch within a record.

    t = (epoch - jd0) / block_size; tint = (t - floor(t)) * subintervals;
    seg = floor(tint); tc = 2 * (tint - seg) - 1. The closed end of the
    record (t == 1) maps to the last subinterval at tc = 1.
    """
    t = (epoch - jd0) / block_size
    if t >= 1.0:
        return subintervals - 1, 1.0
    tint = (t - math.floor(t)) * subintervals
    seg = math.floor(tint)
    return int(seg), 2.0 * (tint - seg) - 1.0


def position_polynomials(tc: float, count: int) -> list[float]:
    """T_0..T_{count-1}: 1, tc, 2*tc*T[k-1] - T[k-2]."""
    poly = [1.0, tc]
    for k in range(2, count):
        poly.append(2.0 * tc * poly[k - 1] - poly[k - 2])
    return poly[:count]


def velocity_polynomials(tc: float, position: list[float], count: int) -> list[float]:
    """Derivatives of the position polynomials: 0, 1, 4*tc, 2*tc*V[k-1] + 2*T[k-1] - V[k-2]."""
    poly = [0.0, 1.0, 4.0 * tc]
    for k in range(3, count):
        poly.append(2.0 * tc * poly[k - 1] + 2.0 * position[k - 1] - poly[k - 2])
    return poly[:count]


def interpolate(
    chunk: Chunk,
    header: Header,
    element: int,
    epoch: float,
    components: int = 3,
    velocity: bool = False,
    *,
    to_au: bool = True,
) -> np.ndarray:
    """Interpolate one element at epoch.

    Parameters:
        chunk: Record covering epoch.
        header: Dataset header (layout, block size, AU).
        element: 1-based element number.
        epoch: JDE (TDB).
        components: Components stored for the element (3 for bodies,
            2 for nutations, 1 for TT-TDB).
        velocity: Also return the time derivative of each component.
        to_au: Divide elements 1-11 (stored in km) by AU.

    Returns:
        Float64 array: components positions, then components rates if
        velocity is True. Rates are per day.

    Raises:
        ElementNotFound: element is not in the layout table.
        ChunkParseError: The record is too short for the element's layout.
    """
    entry = header.layout_entry(element)
    n = entry.coeff_count
    pointer = entry.coeff_start - 1

    seg, tc = chebyshev_time(epoch, chunk.jd0, header.block_size, entry.subintervals)
    pointer += seg * n * components

    stop = pointer + components * n
    if pointer < 0 or stop > chunk.coefficients.size:
        raise ChunkParseError(
            f'Element {element} needs coefficients {pointer + 1}..{stop}, '
            f'record has {chunk.coefficients.size}',
            chunk.segment,
        )
    coeff = chunk.coefficients[pointer:stop].reshape(components, n)

    pos_poly = position_polynomials(tc, n)
    # The last coefficient of each component is not part of the position sum.
    position = np.zeros(components, dtype=np.float64)
    for k in range(n - 1):
        position = position + coeff[:, k] * pos_poly[k]

    scale_au = to_au and element <= MAX_AU_ELEMENT
    if scale_au:
        position = position / header.au
    if not velocity:
        return position

    vel_poly = velocity_polynomials(tc, pos_poly, n)
    rate = np.zeros(components, dtype=np.float64)
    for k in range(n):
        rate = rate + coeff[:, k] * vel_poly[k]
    rate = rate * (2.0 * entry.subintervals / header.block_size)
    if scale_au:
        rate = rate / header.au
    return np.concatenate([position, rate])

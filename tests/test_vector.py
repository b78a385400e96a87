"""Tests for Vector6 arithmetic."""

from __future__ import annotations

import numpy as np
import pytest

from jpl_de_tools.vector import Vector6


def test_arithmetic() -> None:
    """Addition, subtraction, negation and scaling act on all six components."""
    a = Vector6(1.0, 2.0, 3.0, 0.1, 0.2, 0.3)
    b = Vector6(0.5, 0.5, 0.5, 0.5, 0.5, 0.5)
    assert (a + b).as_array() == pytest.approx([1.5, 2.5, 3.5, 0.6, 0.7, 0.8])
    assert a - a == Vector6.zero()
    assert -a == Vector6(-1.0, -2.0, -3.0, -0.1, -0.2, -0.3)
    assert a.scaled(2.0) == Vector6(2.0, 4.0, 6.0, 0.2, 0.4, 0.6)


def test_distance_and_parts() -> None:
    """Distance uses the position part only."""
    v = Vector6(3.0, 4.0, 12.0, 100.0, 100.0, 100.0)
    assert v.distance == 13.0
    assert v.position == (3.0, 4.0, 12.0)
    assert v.velocity == (100.0, 100.0, 100.0)
    np.testing.assert_array_equal(v.as_array(), [3.0, 4.0, 12.0, 100.0, 100.0, 100.0])


def test_from_sequence() -> None:
    """Three values give zero velocity; other lengths are rejected."""
    assert Vector6.from_sequence([1, 2, 3]) == Vector6(1.0, 2.0, 3.0)
    assert Vector6.from_sequence(np.arange(6.0)).vz == 5.0
    with pytest.raises(ValueError):
        Vector6.from_sequence([1.0, 2.0])

"""Light-time (retarded position) iteration."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from jpl_de_tools.constants import LIGHT_TIME_DAYS_PER_AU, MAX_LIGHT_TIME_ITERATIONS
from jpl_de_tools.vector import Vector6

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LightTimeSolution:
    """Result of the light-time iteration.

    state is the center-to-target vector evaluated at epoch - light_time.
    converged is False when the iteration cap was reached.
    """

    state: Vector6
    light_time: float  # days
    iterations: int
    converged: bool


def solve_light_time(
    state_at: Callable[[float], Vector6],
    epoch: float,
    *,
    days_per_au: float = LIGHT_TIME_DAYS_PER_AU,
    max_iterations: int = MAX_LIGHT_TIME_ITERATIONS,
) -> LightTimeSolution:
    """Iterate tau = k * |r(epoch - tau)| until the distance repeats exactly.

    Starting from tau = 0, each pass evaluates the relative position at
    epoch - tau and sets tau from its length. The loop stops when a distance
    equals the previous one bit for bit, or after max_iterations passes.
    The first comparison is against a distance of 0, so a zero-distance
    target stops after one pass with tau == 0.

    Parameters:
        state_at: Relative state (AU) of target from center at a JDE.
        epoch: Observation JDE (TDB).
        days_per_au: Light travel time per AU in days.
        max_iterations: Iteration cap.

    Returns:
        LightTimeSolution.
    """
    tau = 0.0
    distance = 0.0
    iterations = 0
    converged = False
    for iterations in range(1, max_iterations + 1):
        new_distance = state_at(epoch - tau).distance
        tau = days_per_au * new_distance
        if new_distance == distance:
            converged = True
            break
        distance = new_distance
    if not converged:
        logger.warning(
            'Light time at JDE %s did not repeat within %d iterations (tau=%r d)',
            epoch,
            max_iterations,
            tau,
        )
    return LightTimeSolution(
        state=state_at(epoch - tau),
        light_time=tau,
        iterations=iterations,
        converged=converged,
    )

"""Fixed-step RK4 integration of y' = f(x, y) through a seed point."""

from __future__ import annotations

from typing import Callable

from . import config
from .evaluator import slope_or_zero
from .logging_config import get_logger
from .types import ParsedEquation, Point

logger = get_logger("integrator")

SlopeFunction = Callable[[float, float], float]


def rk4_step(f: SlopeFunction, x: float, y: float, h: float) -> float:
    """Advance y by one classical Runge-Kutta step of size h."""
    k1 = f(x, y)
    k2 = f(x + h / 2, y + k1 * h / 2)
    k3 = f(x + h / 2, y + k2 * h / 2)
    k4 = f(x + h, y + k3 * h)
    return y + (h / 6) * (k1 + 2 * k2 + 2 * k3 + k4)


def _inside(x: float, y: float, bound: float) -> bool:
    # False for NaN as well
    return abs(x) < bound and abs(y) < bound


def integrate(
    equation: ParsedEquation,
    x0: float,
    y0: float,
    step_size: float | None = None,
    max_steps: int | None = None,
    bound: float | None = None,
) -> list[Point]:
    """Integrate the solution curve through (x0, y0) in both x directions.

    Args:
        equation: Parsed right-hand side N/D
        x0, y0: Seed point
        step_size: Step along x (default: config.STEP_SIZE)
        max_steps: Maximum steps per direction (default: config.MAX_STEPS)
        bound: Half-width of the square window |x|, |y| < bound (default: config.TRAJECTORY_BOUND)

    Returns:
        Points ordered by increasing x: backward samples, the seed, forward samples.
        Always contains the seed, at most 2*max_steps + 1 points.
    """
    h = abs(step_size if step_size is not None else config.STEP_SIZE)
    steps = max_steps if max_steps is not None else config.MAX_STEPS
    limit = bound if bound is not None else config.TRAJECTORY_BOUND
    if h == 0:
        return [(x0, y0)]

    def f(x: float, y: float) -> float:
        return slope_or_zero(equation, x, y)

    # Forward: stop at the first step that leaves the window
    forward: list[Point] = [(x0, y0)]
    x, y = x0, y0
    for _ in range(steps):
        y = rk4_step(f, x, y, h)
        x += h
        if not _inside(x, y, limit):
            break
        forward.append((x, y))

    # Backward: step while the current point is inside, keep only inside points
    backward: list[Point] = []
    x, y = x0, y0
    for _ in range(steps):
        if not _inside(x, y, limit):
            break
        y = rk4_step(f, x, y, -h)
        x -= h
        if _inside(x, y, limit):
            backward.append((x, y))

    backward.reverse()
    logger.debug(
        "Trajectory from (%s, %s): %d backward, %d forward points",
        x0,
        y0,
        len(backward),
        len(forward) - 1,
    )
    return backward + forward

"""Closed-form solutions of the built-in example y' = (y^2 + xy)/x^2.

With u = y/x the example separates into du/u^2 = dx/x, giving the family
y = x/(C - ln|x|). These samples are computed directly and never go through
the general evaluator.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from . import config
from .types import Point

EXAMPLE_EQUATION = "(y^2 + xy)/x^2"

# (title, detail) for each step of the u = y/x derivation
WALKTHROUGH = (
    (
        "Original equation: y' = (y^2 + xy)/x^2",
        "Our starting equation is y' = (y^2 + xy)/x^2",
    ),
    (
        "Verify homogeneity: Scale x → λx, y → λy",
        "Replace x→λx, y→λy:\n(λ²y² + λ²xy)/(λ²x²) = (y² + xy)/x²\n"
        "λ cancels, so the equation is homogeneous",
    ),
    (
        "Substitution: Let u = y/x, so y = ux",
        "Let u = y/x, which means y = ux\n"
        "This substitution exploits the scale invariance",
    ),
    (
        "Differentiate: y' = u + x(du/dx)",
        "By the product rule on y = ux:\ny' = d(ux)/dx = u + x(du/dx)",
    ),
    (
        "Substitute into original equation",
        "u + x(du/dx) = (u²x² + ux²)/x² = u² + u",
    ),
    (
        "Rearrange to isolate du/dx",
        "x(du/dx) = u² + u - u = u²\ndu/dx = u²/x",
    ),
    (
        "Separate variables: du/u^2 = dx/x",
        "du/u² = dx/x",
    ),
    (
        "Integrate both sides",
        "∫(du/u²) = ∫(dx/x)\n-1/u = ln|x| - C",
    ),
    (
        "Solve for u, then for y = ux",
        "u = 1/(C - ln|x|)\ny = ux = x/(C - ln|x|)",
    ),
)


def solution_value(constant: float, x: float) -> float | None:
    """y(x) = x/(C - ln|x|), or None where it is undefined (x = 0 or C = ln|x|)."""
    if x == 0:
        return None
    denominator = constant - math.log(abs(x))
    if denominator == 0:
        return None
    return x / denominator


def solution_curve(
    constant: float,
    x_min: float = config.SOLUTION_X_MIN,
    x_max: float = config.SOLUTION_X_MAX,
    step: float = config.SOLUTION_X_STEP,
    y_limit: float = config.SOLUTION_Y_LIMIT,
    mirror: bool = True,
) -> list[Point]:
    """Sample the member of the family with integration constant C.

    Samples x_min + k*step up to x_max, dropping undefined points and points
    with |y| >= y_limit. With ``mirror``, the odd-symmetric branch (-x, -y)
    follows the sampled branch, so both halves can be drawn from one list.
    """
    if step <= 0:
        raise ValueError("step must be positive")
    count = int(math.floor((x_max - x_min) / step + 1e-9)) + 1
    branch: list[Point] = []
    for k in range(count):
        x = x_min + k * step
        y = solution_value(constant, x)
        if y is None or abs(y) >= y_limit:
            continue
        branch.append((x, y))
    if mirror:
        branch += [(-x, -y) for x, y in branch]
    return branch


def solution_family(
    constants: Iterable[float] = config.SOLUTION_FAMILY_CONSTANTS, **kwargs
) -> dict[float, list[Point]]:
    """{C: solution_curve(C)} for several integration constants."""
    return {c: solution_curve(c, **kwargs) for c in constants}


def scale_invariance_points(
    constant: float, factor: float, x: float = 2.0
) -> tuple[Point | None, Point | None]:
    """The point (x, y(x)) on the curve for C and its scaled partner (λx, y(λx)).

    Either point is None where the curve is undefined.
    """
    y = solution_value(constant, x)
    scaled_x = factor * x
    scaled_y = solution_value(constant, scaled_x)
    original = (x, y) if y is not None else None
    scaled = (scaled_x, scaled_y) if scaled_y is not None else None
    return original, scaled

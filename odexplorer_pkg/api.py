"""Public API for the ODE explorer - returns structured objects without side effects.

None of these functions raise for bad input: failures come back as
``ok=False`` results carrying a user-facing error message.
"""

from __future__ import annotations

from .classifier import classify
from .field import direction_field
from .integrator import integrate
from .parser import parse_equation, with_usage_hint
from .types import (
    EquationReport,
    FieldReport,
    ParseError,
    TrajectoryReport,
)


def check_equation(text: str) -> EquationReport:
    """Parse an equation and classify its homogeneity.

    Args:
        text: Right-hand side of y' = N/D (e.g., "(y^2 + xy)/x^2")

    Returns:
        EquationReport with the parsed equation and its verdict

    Example:
        >>> from odexplorer_pkg.api import check_equation
        >>> report = check_equation("(y^2 + xy)/x^2")
        >>> report.verdict.is_homogeneous
        True
        >>> check_equation("x+y^2").verdict.is_homogeneous
        False
    """
    try:
        equation = parse_equation(text)
    except ParseError as e:
        return EquationReport(ok=False, error=with_usage_hint(e), error_code=e.code)
    return EquationReport(ok=True, equation=equation, verdict=classify(equation))


def compute_trajectory(
    text: str, x0: float, y0: float, step_size: float | None = None
) -> TrajectoryReport:
    """Integrate the solution through (x0, y0).

    Example:
        >>> from odexplorer_pkg.api import compute_trajectory
        >>> result = compute_trajectory("(y^2 + xy)/x^2", 1, 1)
        >>> (1.0, 1.0) in result.points
        True
    """
    try:
        equation = parse_equation(text)
    except ParseError as e:
        return TrajectoryReport(ok=False, error=with_usage_hint(e))
    points = integrate(equation, float(x0), float(y0), step_size=step_size)
    return TrajectoryReport(ok=True, points=points)


def sample_direction_field(text: str, compact: bool = False) -> FieldReport:
    """Direction-field arrows for the phase view."""
    try:
        equation = parse_equation(text)
    except ParseError as e:
        return FieldReport(ok=False, error=with_usage_hint(e))
    return FieldReport(ok=True, vectors=direction_field(equation, compact=compact))


def validate_equation(text: str) -> tuple[bool, str | None]:
    """Validate an equation without classifying it.

    Example:
        >>> from odexplorer_pkg.api import validate_equation
        >>> validate_equation("(y^2 + xy)/x^2")
        (True, None)
        >>> validate_equation("foo(x)")[0]
        False
    """
    try:
        parse_equation(text)
        return True, None
    except ParseError as e:
        return False, with_usage_hint(e)

"""Interactive explorer session.

Holds what a front end needs between events: the last valid equation, its
homogeneity verdict, the control values and the accumulated trajectories.
All math is delegated to the pure functions in parser, classifier,
integrator, field and solutions; the session only decides what to keep.
"""

from __future__ import annotations

import math

from . import config
from .classifier import classify
from .field import direction_field
from .integrator import integrate
from .logging_config import get_logger
from .parser import parse_equation, with_usage_hint
from .solutions import EXAMPLE_EQUATION, scale_invariance_points, solution_curve
from .types import (
    FieldVector,
    HomogeneityVerdict,
    ParsedEquation,
    ParseError,
    Point,
    Trajectory,
    ValidationError,
)

logger = get_logger("session")


def _check_slider(name: str, value: float, bounds: tuple[float, float, float]) -> float:
    low, high, step = bounds
    value = float(value)
    if not math.isfinite(value) or value < low or value > high:
        raise ValidationError(
            f"{name} must be between {low:g} and {high:g} (got {value:g})",
            "OUT_OF_RANGE",
        )
    ticks = (value - low) / step
    if abs(ticks - round(ticks)) > 1e-6:
        raise ValidationError(
            f"{name} must be a multiple of {step:g} from {low:g} (got {value:g})",
            "OUT_OF_RANGE",
        )
    return value


class ExplorerSession:
    """State of one explorer window."""

    def __init__(self, equation_text: str = config.DEFAULT_EQUATION) -> None:
        # Start from the built-in example so a bad initial text leaves a usable equation
        self.equation_text = EXAMPLE_EQUATION
        self.equation: ParsedEquation = parse_equation(EXAMPLE_EQUATION)
        self.error_message = ""
        self._verdict: HomogeneityVerdict | None = None
        self.trajectories: list[Trajectory] = []
        self.x0, self.y0 = config.DEFAULT_INITIAL_POINT
        self.constant = config.DEFAULT_CONSTANT
        self.scale_factor = config.DEFAULT_SCALE_FACTOR
        self.view_mode = config.VIEW_MODES[0]
        self.log_scale = False
        self.set_equation_text(equation_text)

    def set_equation_text(self, text: str) -> bool:
        """Re-parse after an edit.

        On success the equation is replaced and its verdict invalidated. On
        failure the previous equation is kept and ``error_message`` explains
        the problem. Returns whether the text parsed.
        """
        try:
            equation = parse_equation(text)
        except ParseError as e:
            self.error_message = with_usage_hint(e)
            logger.info("Keeping previous equation; parse failed: %s", e.message)
            return False
        self.error_message = ""
        self.equation_text = text
        if equation != self.equation:
            self.equation = equation
            self._verdict = None
        return True

    @property
    def verdict(self) -> HomogeneityVerdict:
        return self.classify()

    def classify(self) -> HomogeneityVerdict:
        """Homogeneity verdict of the current equation, computed once per equation."""
        if self._verdict is None:
            self._verdict = classify(self.equation)
        return self._verdict

    def set_initial_point(self, x0: float, y0: float) -> None:
        x0, y0 = float(x0), float(y0)
        if not (math.isfinite(x0) and math.isfinite(y0)):
            raise ValidationError("Initial point must be finite", "OUT_OF_RANGE")
        self.x0, self.y0 = x0, y0

    def set_constant(self, value: float) -> None:
        self.constant = _check_slider("Integration constant C", value, config.CONSTANT_RANGE)

    def set_scale_factor(self, value: float) -> None:
        self.scale_factor = _check_slider("Scale factor λ", value, config.SCALE_FACTOR_RANGE)

    def set_view_mode(self, mode: str) -> None:
        if mode not in config.VIEW_MODES:
            raise ValidationError(
                f"View mode must be one of {', '.join(config.VIEW_MODES)}", "INVALID_MODE"
            )
        self.view_mode = mode

    def set_log_scale(self, enabled: bool) -> None:
        self.log_scale = bool(enabled)

    def integrate(self, x0: float | None = None, y0: float | None = None) -> list[Point]:
        """Trajectory points through (x0, y0), defaulting to the session's initial point."""
        return integrate(
            self.equation,
            self.x0 if x0 is None else x0,
            self.y0 if y0 is None else y0,
        )

    def add_trajectory(
        self, x0: float | None = None, y0: float | None = None
    ) -> Trajectory | None:
        """Integrate from the initial point and keep the result.

        Returns None, adding nothing, when trajectories are restricted to
        homogeneous equations and the current one is not.
        """
        if config.REQUIRE_HOMOGENEOUS_TRAJECTORY and not self.classify().is_homogeneous:
            logger.info("Not adding a trajectory for non-homogeneous %s", self.equation_text)
            return None
        colors = config.TRAJECTORY_COLORS
        trajectory = Trajectory(
            points=tuple(self.integrate(x0, y0)),
            color=colors[len(self.trajectories) % len(colors)],
        )
        self.trajectories.append(trajectory)
        return trajectory

    def clear_trajectories(self) -> None:
        self.trajectories.clear()

    def axis_domains(self) -> tuple[tuple[float, float], tuple[float, float]]:
        """(x_domain, y_domain) of the plot; the log axis only applies to solution curves."""
        if self.log_scale and self.view_mode == "solution":
            return config.LOG_X_DOMAIN, config.Y_DOMAIN
        return config.LINEAR_X_DOMAIN, config.Y_DOMAIN

    def direction_field(self, compact: bool = False) -> list[FieldVector]:
        return direction_field(self.equation, compact=compact)

    def solution_curves(self) -> dict[float, list[Point]]:
        """Reference curves for the chosen C: the family in solution view, C and C±2 in phase view."""
        if self.view_mode == "solution":
            constants = [float(c) for c in config.SOLUTION_FAMILY_CONSTANTS]
            if self.constant not in constants:
                constants.append(self.constant)
        else:
            constants = [self.constant, self.constant - 2, self.constant + 2]
        return {c: solution_curve(c) for c in constants}

    def scale_demo(self) -> tuple[Point | None, Point | None]:
        return scale_invariance_points(self.constant, self.scale_factor)

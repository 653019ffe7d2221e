"""Numerical evaluation of parsed expressions at a point (x, y).

Expressions are compiled once with ``sympy.lambdify`` against NumPy and cached.
Arithmetic follows IEEE semantics: division by zero gives ±inf and domain
errors (log of a negative number, fractional power of a negative base) give
NaN. ``try_evaluate`` and ``slope`` turn those into ``EvaluationFailure``
results; ``slope_or_zero`` is the only place a failure is collapsed to 0.
"""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Callable

import numpy as np
import sympy as sp

from .config import AXIS_TOLERANCE, CACHE_SIZE_EVAL, X, Y
from .logging_config import get_logger
from .types import Evaluation, ParsedEquation

logger = get_logger("evaluator")

_UNDEFINED_ATOMS = (sp.zoo, sp.nan, sp.oo, -sp.oo)


def _always_nan(x: float, y: float) -> float:
    return math.nan


@lru_cache(maxsize=CACHE_SIZE_EVAL)
def compile_expression(expr: sp.Expr) -> Callable[[float, float], object]:
    """Compile an expression tree into a NumPy function of (x, y)."""
    if any(expr.has(atom) for atom in _UNDEFINED_ATOMS):
        # Constant folding already produced an undefined value such as 1/0
        return _always_nan
    return sp.lambdify((X, Y), expr, modules="numpy")


def _to_real(value: object) -> float:
    if isinstance(value, (complex, np.complexfloating)):
        return float(value.real) if value.imag == 0 else math.nan
    try:
        return float(value)
    except OverflowError:
        # Constant-only expressions can come back as Python ints beyond float range
        return math.inf if value > 0 else -math.inf


def evaluate(expr: sp.Expr, x: float, y: float) -> float:
    """Evaluate an expression at (x, y) with IEEE float semantics.

    Never raises for arithmetic reasons: ``1/x`` at x=0 returns inf and
    ``log(x)`` at x=-1 returns nan.

    Example:
        >>> from odexplorer_pkg.parser import parse_expression
        >>> evaluate(parse_expression("x^2+y^2"), 3, 4)
        25.0
    """
    func = compile_expression(expr)
    with np.errstate(all="ignore"):
        try:
            value = func(np.float64(x), np.float64(y))
        except (ZeroDivisionError, OverflowError):
            return math.inf
        except (ValueError, TypeError) as e:
            logger.debug("Evaluation of %s at (%r, %r) failed: %s", expr, x, y, e)
            return math.nan
    return _to_real(value)


def try_evaluate(expr: sp.Expr, x: float, y: float) -> Evaluation:
    """Evaluate an expression, reporting non-finite results as a failure."""
    value = evaluate(expr, x, y)
    if not math.isfinite(value):
        return Evaluation.failure(
            f"{expr} has no finite value at ({x}, {y})", "NON_FINITE"
        )
    return Evaluation.success(value)


def slope(equation: ParsedEquation, x: float, y: float) -> Evaluation:
    """Evaluate N(x,y)/D(x,y) for an equation y' = N/D."""
    numerator = try_evaluate(equation.numerator, x, y)
    if not numerator.ok:
        return numerator
    denominator = try_evaluate(equation.denominator, x, y)
    if not denominator.ok:
        return denominator
    if denominator.value == 0:
        return Evaluation.failure(
            f"Denominator {equation.denominator} vanishes at ({x}, {y})",
            "DIVISION_BY_ZERO",
        )
    value = numerator.value / denominator.value
    if not math.isfinite(value):
        return Evaluation.failure(f"Slope overflows at ({x}, {y})", "NON_FINITE")
    return Evaluation.success(value)


def slope_or_zero(equation: ParsedEquation, x: float, y: float) -> float:
    """Slope used for integration: 0 on the y-axis and wherever the slope is undefined.

    This flattens the field instead of aborting, so NaN never reaches the
    integrator's state.
    """
    if abs(x) < AXIS_TOLERANCE:
        return 0.0
    result = slope(equation, x, y)
    if not result.ok:
        return 0.0
    return result.value

"""Homogeneity classifier for y' = N(x,y)/D(x,y).

An equation is homogeneous when f(λx, λy) = f(x, y) for every λ ≠ 0. The
classifier first tries a symbolic check: substitute x → λx, y → λy in the
expression trees, simplify, and require that λ cancels and the simplified
forms coincide. SymPy's normal forms are not canonical, so a mismatch only
means "inconclusive" and the numerical battery decides instead.
"""

from __future__ import annotations

import sympy as sp

from . import config
from .config import X, Y
from .evaluator import slope
from .logging_config import get_logger
from .types import HomogeneityVerdict, ParsedEquation

logger = get_logger("classifier")

LAMBDA = sp.Symbol("lambda", positive=True)

HOMOGENEOUS_MESSAGE = (
    "✓ This is a homogeneous equation! The u = y/x substitution will work."
)
NOT_HOMOGENEOUS_MESSAGE = (
    "✗ This is not a homogeneous equation. "
    "Try adjusting the terms to ensure scaling invariance."
)


def scale_expression(expr: sp.Expr, factor: sp.Expr = LAMBDA) -> sp.Expr:
    """Replace every x and y in the tree by factor*x and factor*y."""
    return expr.xreplace({X: factor * X, Y: factor * Y})


def check_symbolic(equation: ParsedEquation) -> bool | None:
    """Symbolic scaling check.

    Returns:
        True if homogeneity is confirmed, None if the check is inconclusive.
        It never returns False: a failed match is not a proof of anything.
    """
    ratio = equation.ratio
    if sp.count_ops(ratio) > config.MAX_SYMBOLIC_OPS:
        logger.debug("Ratio too large for symbolic check: %s", ratio)
        return None
    try:
        original = sp.simplify(ratio)
        scaled = sp.simplify(
            scale_expression(equation.numerator) / scale_expression(equation.denominator)
        )
    except Exception as e:
        logger.debug("Symbolic simplification failed for %s: %s", ratio, e)
        return None

    if LAMBDA in scaled.free_symbols:
        logger.debug("Scale factor did not cancel: %s", scaled)
        return None
    if scaled == original:
        return True
    logger.debug("Simplified forms differ: %s vs %s", original, scaled)
    return None


def scaling_discrepancy(
    equation: ParsedEquation, x: float, y: float, factor: float
) -> float | None:
    """|f(x,y) - f(λx,λy)| at one test pair, or None when either slope is undefined."""
    original = slope(equation, x, y)
    if not original.ok:
        return None
    scaled = slope(equation, factor * x, factor * y)
    if not scaled.ok:
        return None
    return abs(original.value - scaled.value)


def check_numerical(
    equation: ParsedEquation,
    points=config.HOMOGENEITY_TEST_POINTS,
    factors=config.HOMOGENEITY_SCALE_FACTORS,
    tolerance: float = config.HOMOGENEITY_TOLERANCE,
) -> HomogeneityVerdict:
    """Numerical scaling check over a fixed battery of points and scale factors.

    Points on the y-axis and pairs whose slope is undefined are skipped. The
    first pair that differs by more than ``tolerance`` decides "not
    homogeneous". If every pair is skipped the equation is reported
    homogeneous, which is a known weak spot for degenerate input.
    """
    checked = 0
    skipped = 0
    for x, y in points:
        if abs(x) < config.AXIS_TOLERANCE:
            skipped += len(factors)
            continue
        for factor in factors:
            diff = scaling_discrepancy(equation, x, y, factor)
            if diff is None:
                skipped += 1
                continue
            checked += 1
            if diff > tolerance:
                logger.info(
                    "Scaling check failed at (%s, %s) with lambda=%s (diff=%.6g)",
                    x,
                    y,
                    factor,
                    diff,
                )
                return HomogeneityVerdict(
                    is_homogeneous=False,
                    method="numerical",
                    message=NOT_HOMOGENEOUS_MESSAGE,
                    counterexample=(x, y, factor),
                    checked_pairs=checked,
                    skipped_pairs=skipped,
                )

    if checked == 0:
        logger.warning(
            "Every scaling test pair was undefined for %s; defaulting to homogeneous",
            equation.original_text,
        )
    return HomogeneityVerdict(
        is_homogeneous=True,
        method="numerical",
        message=HOMOGENEOUS_MESSAGE,
        checked_pairs=checked,
        skipped_pairs=skipped,
    )


def classify(equation: ParsedEquation) -> HomogeneityVerdict:
    """Decide whether y' = N/D is homogeneous.

    The symbolic check is authoritative only when it confirms homogeneity;
    otherwise the numerical verdict is final.

    Example:
        >>> from odexplorer_pkg.parser import parse_equation
        >>> classify(parse_equation("(y^2 + xy)/x^2")).is_homogeneous
        True
    """
    if config.SYMBOLIC_CHECK_ENABLED and check_symbolic(equation):
        return HomogeneityVerdict(
            is_homogeneous=True, method="symbolic", message=HOMOGENEOUS_MESSAGE
        )
    verdict = check_numerical(equation)
    logger.debug(
        "Numerical verdict for %s: %s", equation.original_text, verdict.is_homogeneous
    )
    return verdict

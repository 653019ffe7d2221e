"""Tests for failure modes and invalid input handling."""

import math

import pytest

from odexplorer_pkg.classifier import classify
from odexplorer_pkg.evaluator import evaluate, slope_or_zero
from odexplorer_pkg.integrator import integrate
from odexplorer_pkg.parser import parse_equation, parse_expression, preprocess
from odexplorer_pkg.session import ExplorerSession
from odexplorer_pkg.types import ParseError


class TestInputValidationFailures:
    """Test input validation failure modes."""

    def test_empty_input(self):
        with pytest.raises(ParseError):
            preprocess("")

    def test_whitespace_only(self):
        with pytest.raises(ParseError):
            preprocess(" \t\n ")

    def test_forbidden_python(self):
        """Python builtins are never reachable through the parser."""
        for text in ["__import__('os')", "eval(x)", "exec(x)", "lambda"]:
            with pytest.raises(ParseError):
                parse_equation(text)

    def test_attribute_access(self):
        with pytest.raises(ParseError):
            parse_equation("x.real")

    def test_too_deep_expression(self):
        deep_expr = "x"
        for _ in range(80):
            deep_expr = f"sin({deep_expr})"
        with pytest.raises(ParseError) as exc_info:
            parse_expression(deep_expr)
        assert exc_info.value.code == "TOO_DEEP"

    def test_nested_parentheses_within_limits(self):
        deep_expr = "x"
        for _ in range(50):
            deep_expr = f"({deep_expr})"
        assert parse_expression(deep_expr) == parse_expression("x")


class TestNumericalFailures:
    """Non-finite arithmetic must never escape as an exception."""

    @pytest.mark.parametrize(
        "text,x,y",
        [
            ("1/x", 0.0, 1.0),
            ("log(x)", -1.0, 0.0),
            ("x^0.5", -2.0, 0.0),
            ("exp(x)", 1000.0, 0.0),
            ("tan(x)", math.pi / 2, 0.0),
            ("10^400", 1.0, 1.0),
        ],
    )
    def test_evaluate_never_raises(self, text, x, y):
        value = evaluate(parse_expression(text), x, y)
        assert isinstance(value, float)

    def test_huge_integer_constant_is_infinite(self):
        assert evaluate(parse_expression("10^400"), 1.0, 1.0) == math.inf
        assert evaluate(parse_expression("-10^400"), 1.0, 1.0) == -math.inf
        assert slope_or_zero(parse_equation("10^400/x"), 1.0, 1.0) == 0.0

    def test_slope_or_zero_is_always_finite(self):
        eq = parse_equation("log(x*y)/(x-y)")
        for x, y in [(1.0, 1.0), (-1.0, 2.0), (0.0, 0.0), (3.0, 0.5)]:
            assert math.isfinite(slope_or_zero(eq, x, y))

    def test_overflowing_trajectory_stays_finite(self):
        points = integrate(parse_equation("exp(x*y)"), 1.0, 1.0)
        assert all(math.isfinite(x) and math.isfinite(y) for x, y in points)

    def test_classify_constant_folded_undefined(self):
        # 0^(-1) folds to zoo at parse time, so every pair is skipped
        verdict = classify(parse_equation("x*0^(-1)"))
        assert verdict.is_homogeneous is True
        assert verdict.checked_pairs == 0


class TestSessionRecovery:
    """The session keeps working after bad input."""

    def test_keeps_last_valid_equation(self):
        session = ExplorerSession()
        for text in ["", "(", "x/", "foo(x)", "x;y"]:
            assert session.set_equation_text(text) is False
            assert session.error_message
        assert session.verdict.is_homogeneous is True
        assert session.add_trajectory() is not None

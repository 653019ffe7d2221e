"""Unit tests for the evaluator."""

import math
import unittest

from odexplorer_pkg.evaluator import evaluate, slope, slope_or_zero, try_evaluate
from odexplorer_pkg.parser import parse_equation, parse_expression


class TestEvaluate(unittest.TestCase):
    """Test plain IEEE evaluation."""

    def test_polynomial(self):
        self.assertEqual(evaluate(parse_expression("x^2+y^2"), 3, 4), 25.0)

    def test_constant(self):
        self.assertEqual(evaluate(parse_expression("3"), 10, -10), 3.0)

    def test_functions(self):
        self.assertAlmostEqual(evaluate(parse_expression("exp(x)"), 1, 0), math.e)
        self.assertAlmostEqual(evaluate(parse_expression("sin(x)*cos(y)"), math.pi / 2, 0), 1.0)
        self.assertAlmostEqual(evaluate(parse_expression("log(x*y)"), 2, 3), math.log(6))

    def test_division_by_zero_does_not_raise(self):
        value = evaluate(parse_expression("1/x"), 0, 7)
        self.assertTrue(math.isinf(value))

    def test_log_of_negative_is_nan(self):
        self.assertTrue(math.isnan(evaluate(parse_expression("log(x)"), -1, 0)))

    def test_fractional_power_of_negative_is_nan(self):
        self.assertTrue(math.isnan(evaluate(parse_expression("x^0.5"), -4, 0)))


class TestTryEvaluate(unittest.TestCase):
    """Test guarded evaluation results."""

    def test_success(self):
        result = try_evaluate(parse_expression("x*y"), 2, 5)
        self.assertTrue(result.ok)
        self.assertEqual(result.value, 10.0)
        self.assertIsNone(result.error)

    def test_non_finite_is_failure(self):
        result = try_evaluate(parse_expression("1/x"), 0, 1)
        self.assertFalse(result.ok)
        self.assertIsNone(result.value)
        self.assertEqual(result.error.code, "NON_FINITE")

    def test_complex_constant_is_failure(self):
        # log(-1) folds to I*pi, which has no real value
        result = try_evaluate(parse_expression("log(-1)+x"), 1, 1)
        self.assertFalse(result.ok)


class TestSlope(unittest.TestCase):
    """Test N/D slope evaluation."""

    def test_default_equation(self):
        eq = parse_equation("(y^2 + xy)/x^2")
        result = slope(eq, 1, 1)
        self.assertTrue(result.ok)
        self.assertEqual(result.value, 2.0)

    def test_zero_denominator(self):
        eq = parse_equation("x/(y-1)")
        result = slope(eq, 1, 1)
        self.assertFalse(result.ok)
        self.assertEqual(result.error.code, "DIVISION_BY_ZERO")

    def test_slope_or_zero_on_y_axis(self):
        eq = parse_equation("y/x")
        self.assertEqual(slope_or_zero(eq, 0.0, 3.0), 0.0)
        self.assertEqual(slope_or_zero(eq, 1e-12, 3.0), 0.0)

    def test_slope_or_zero_on_undefined_point(self):
        eq = parse_equation("log(y)/x")
        self.assertEqual(slope_or_zero(eq, 1.0, -2.0), 0.0)
        self.assertAlmostEqual(slope_or_zero(eq, 1.0, math.e), 1.0)


if __name__ == "__main__":
    unittest.main()

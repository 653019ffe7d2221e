"""Unit tests for the closed-form solution family of the example equation."""

import math
import unittest

from odexplorer_pkg.evaluator import slope
from odexplorer_pkg.parser import parse_equation
from odexplorer_pkg.solutions import (
    EXAMPLE_EQUATION,
    WALKTHROUGH,
    scale_invariance_points,
    solution_curve,
    solution_family,
    solution_value,
)


class TestSolutionValue(unittest.TestCase):
    def test_values(self):
        self.assertAlmostEqual(solution_value(1.0, 1.0), 1.0)
        self.assertAlmostEqual(solution_value(2.0, -1.0), -0.5)
        self.assertAlmostEqual(solution_value(2.0, 2.0), 2 / (2 - math.log(2)))

    def test_undefined_points(self):
        self.assertIsNone(solution_value(2.0, 0.0))
        # C = ln|x| makes the denominator vanish
        self.assertIsNone(solution_value(0.0, 1.0))

    def test_solves_example_equation(self):
        eq = parse_equation(EXAMPLE_EQUATION)
        h = 1e-5
        for c, x in [(2.0, 1.5), (3.0, 0.7), (-1.0, 0.2)]:
            y = solution_value(c, x)
            derivative = (solution_value(c, x + h) - solution_value(c, x - h)) / (2 * h)
            self.assertAlmostEqual(derivative, slope(eq, x, y).value, delta=1e-4)


class TestSolutionCurve(unittest.TestCase):
    def test_mirrored_branch(self):
        points = solution_curve(2.0)
        half = len(points) // 2
        self.assertEqual(len(points), 2 * half)
        for (x, y), (mx, my) in zip(points[:half], points[half:]):
            self.assertEqual((mx, my), (-x, -y))

    def test_without_mirror(self):
        points = solution_curve(2.0, mirror=False)
        self.assertTrue(all(x > 0 for x, _ in points))
        self.assertAlmostEqual(points[0][0], 0.1)

    def test_y_limit(self):
        for c in range(-2, 6):
            for _, y in solution_curve(float(c)):
                self.assertLess(abs(y), 10.0)

    def test_rejects_non_positive_step(self):
        with self.assertRaises(ValueError):
            solution_curve(2.0, step=0)

    def test_family_constants(self):
        family = solution_family()
        self.assertEqual(sorted(family), list(range(-2, 6)))


class TestScaleInvariance(unittest.TestCase):
    def test_points(self):
        original, scaled = scale_invariance_points(2.0, 2.0)
        self.assertEqual(original[0], 2.0)
        self.assertAlmostEqual(original[1], 2 / (2 - math.log(2)))
        self.assertEqual(scaled[0], 4.0)
        self.assertAlmostEqual(scaled[1], 4 / (2 - math.log(4)))

    def test_undefined_original(self):
        original, scaled = scale_invariance_points(0.0, 2.0, x=1.0)
        self.assertIsNone(original)
        self.assertAlmostEqual(scaled[1], 2 / -math.log(2))


class TestWalkthrough(unittest.TestCase):
    def test_nine_steps(self):
        self.assertEqual(len(WALKTHROUGH), 9)
        for title, detail in WALKTHROUGH:
            self.assertTrue(title)
            self.assertTrue(detail)

    def test_ends_with_solution(self):
        self.assertIn("x/(C - ln|x|)", WALKTHROUGH[-1][1])


if __name__ == "__main__":
    unittest.main()

"""Test that API functions return typed dataclasses."""

from odexplorer_pkg.api import (
    check_equation,
    compute_trajectory,
    sample_direction_field,
    validate_equation,
)
from odexplorer_pkg.types import (
    EquationReport,
    FieldReport,
    HomogeneityVerdict,
    ParsedEquation,
    TrajectoryReport,
)


class TestAPITypedReturns:
    """Test that all API functions return typed dataclasses."""

    def test_check_equation_returns_equation_report(self):
        """Test that check_equation() returns EquationReport."""
        result = check_equation("(y^2 + xy)/x^2")
        assert isinstance(result, EquationReport)
        assert result.ok is True
        assert isinstance(result.equation, ParsedEquation)
        assert isinstance(result.verdict, HomogeneityVerdict)
        assert result.verdict.is_homogeneous is True

    def test_check_equation_not_homogeneous(self):
        result = check_equation("x+y^2")
        assert result.ok is True
        assert result.verdict.is_homogeneous is False
        assert result.verdict.counterexample is not None

    def test_check_equation_error_returns_equation_report(self):
        """Test that check_equation() errors return EquationReport."""
        result = check_equation("(y^2 + xy")
        assert isinstance(result, EquationReport)
        assert result.ok is False
        assert result.error_code == "UNBALANCED_PARENS"
        assert "Try something like" in result.error

    def test_check_equation_with_huge_constant(self):
        result = check_equation("10^400/x")
        assert result.ok is True
        assert isinstance(result.verdict, HomogeneityVerdict)

    def test_compute_trajectory_with_huge_constant(self):
        result = compute_trajectory("10^400", 1, 1)
        assert result.ok is True
        assert (1.0, 1.0) in result.points

    def test_compute_trajectory_returns_trajectory_report(self):
        """Test that compute_trajectory() returns TrajectoryReport."""
        result = compute_trajectory("(y^2 + xy)/x^2", 1, 1)
        assert isinstance(result, TrajectoryReport)
        assert result.ok is True
        assert (1.0, 1.0) in result.points

    def test_compute_trajectory_ignores_homogeneity(self):
        result = compute_trajectory("x+y^2", 0.5, 0.5)
        assert result.ok is True
        assert len(result.points) > 1

    def test_compute_trajectory_error(self):
        result = compute_trajectory("", 1, 1)
        assert isinstance(result, TrajectoryReport)
        assert result.ok is False
        assert result.points is None

    def test_sample_direction_field_returns_field_report(self):
        """Test that sample_direction_field() returns FieldReport."""
        result = sample_direction_field("y/x")
        assert isinstance(result, FieldReport)
        assert result.ok is True
        assert len(result.vectors) == 110

    def test_sample_direction_field_error(self):
        result = sample_direction_field("x/(y-y)")
        assert result.ok is False
        assert result.vectors is None

    def test_validate_equation_returns_tuple(self):
        """Test that validate_equation() returns tuple."""
        assert validate_equation("(y^2 + xy)/x^2") == (True, None)
        is_valid, error = validate_equation("foo(x)")
        assert is_valid is False
        assert isinstance(error, str)

    def test_result_has_repr(self):
        """Test that all result types have __repr__."""
        repr_str = repr(check_equation("y/x"))
        assert "EquationReport" in repr_str
        assert "is_homogeneous=True" in repr_str
        assert "TrajectoryReport" in repr(compute_trajectory("y/x", 1, 1))
        assert "FieldReport" in repr(sample_direction_field("y/x"))

    def test_result_has_to_dict(self):
        """Test that all result types have to_dict()."""
        result_dict = check_equation("(y^2 + xy)/x^2").to_dict()
        assert result_dict["ok"] is True
        assert result_dict["denominator"] == "x**2"
        assert result_dict["homogeneity"]["is_homogeneous"] is True

        error_dict = check_equation("").to_dict()
        assert error_dict["ok"] is False
        assert error_dict["error_code"] == "EMPTY_INPUT"

        points = compute_trajectory("y/x", 1, 1).to_dict()["points"]
        assert [1.0, 1.0] in points

"""Type definitions, result dataclasses and exceptions for consistent API responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import sympy as sp

Point = tuple[float, float]


class ValidationError(Exception):
    """Raised when a control value or option is out of its allowed range."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ParseError(Exception):
    """Raised when equation or expression text cannot be parsed."""

    def __init__(self, message: str, code: str = "PARSE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class EvaluationFailure(Exception):
    """An expression has no finite real value at the requested point."""

    def __init__(self, message: str, code: str = "NON_FINITE"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ParsedEquation:
    """Right-hand side N(x,y)/D(x,y) of y' = N/D."""

    numerator: sp.Expr
    denominator: sp.Expr
    original_text: str

    @property
    def ratio(self) -> sp.Expr:
        return self.numerator / self.denominator

    def to_dict(self) -> dict[str, Any]:
        return {
            "numerator": str(self.numerator),
            "denominator": str(self.denominator),
            "original_text": self.original_text,
        }


@dataclass(frozen=True)
class Evaluation:
    """Outcome of a guarded evaluation: a finite value or the reason there is none."""

    ok: bool
    value: float | None = None
    error: EvaluationFailure | None = None

    @classmethod
    def success(cls, value: float) -> Evaluation:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, message: str, code: str = "NON_FINITE") -> Evaluation:
        return cls(ok=False, error=EvaluationFailure(message, code))

    def __repr__(self) -> str:
        if not self.ok:
            return f"Evaluation(ok=False, error={self.error.code!r})"
        return f"Evaluation(ok=True, value={self.value!r})"


@dataclass(frozen=True)
class HomogeneityVerdict:
    """Result of checking f(λx, λy) = f(x, y)."""

    is_homogeneous: bool
    method: str  # "symbolic" or "numerical"
    message: str
    counterexample: tuple[float, float, float] | None = None  # (x, y, λ)
    checked_pairs: int = 0
    skipped_pairs: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict = {
            "is_homogeneous": self.is_homogeneous,
            "method": self.method,
            "message": self.message,
        }
        if self.method == "numerical":
            result_dict["checked_pairs"] = self.checked_pairs
            result_dict["skipped_pairs"] = self.skipped_pairs
        if self.counterexample is not None:
            x, y, lam = self.counterexample
            result_dict["counterexample"] = {"x": x, "y": y, "lambda": lam}
        return result_dict


@dataclass(frozen=True)
class Trajectory:
    """A numerically integrated solution curve and the color it is drawn in."""

    points: tuple[Point, ...]
    color: str

    def __len__(self) -> int:
        return len(self.points)

    def to_dict(self) -> dict[str, Any]:
        return {"color": self.color, "points": [list(p) for p in self.points]}


@dataclass(frozen=True)
class FieldVector:
    """One arrow of the direction field anchored at (x, y)."""

    x: float
    y: float
    dx: float
    dy: float
    magnitude: float

    def to_dict(self) -> dict[str, float]:
        return {
            "x": self.x,
            "y": self.y,
            "dx": self.dx,
            "dy": self.dy,
            "magnitude": self.magnitude,
        }


@dataclass
class EquationReport:
    """Result of parsing and classifying an equation."""

    ok: bool
    equation: ParsedEquation | None = None
    verdict: HomogeneityVerdict | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.equation is not None:
            result_dict.update(self.equation.to_dict())
        if self.verdict is not None:
            result_dict["homogeneity"] = self.verdict.to_dict()
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"EquationReport(ok=False, error={self.error!r})"
        parts = [f"ok={self.ok}"]
        if self.equation is not None:
            parts.append(f"equation={self.equation.original_text!r}")
        if self.verdict is not None:
            parts.append(f"is_homogeneous={self.verdict.is_homogeneous!r}")
            parts.append(f"method={self.verdict.method!r}")
        return f"EquationReport({', '.join(parts)})"


@dataclass
class TrajectoryReport:
    """Result of integrating a trajectory from an initial point."""

    ok: bool
    points: list[Point] | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.points is not None:
            result_dict["points"] = [list(p) for p in self.points]
        if self.error is not None:
            result_dict["error"] = self.error
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return f"TrajectoryReport(ok=False, error={self.error!r})"
        return f"TrajectoryReport(ok=True, points=<{len(self.points or [])} points>)"


@dataclass
class FieldReport:
    """Result of sampling a direction field."""

    ok: bool
    vectors: list[FieldVector] | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.vectors is not None:
            result_dict["vectors"] = [v.to_dict() for v in self.vectors]
        if self.error is not None:
            result_dict["error"] = self.error
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return f"FieldReport(ok=False, error={self.error!r})"
        return f"FieldReport(ok=True, vectors=<{len(self.vectors or [])} vectors>)"

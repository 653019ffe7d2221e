"""Command-line interface for the ODE explorer."""

from __future__ import annotations

import argparse
import json
import sys

from . import config
from .classifier import classify
from .config import VERSION
from .field import direction_field
from .integrator import integrate
from .logging_config import get_logger, setup_logging
from .parser import format_equation, format_number, parse_equation, with_usage_hint
from .solutions import solution_curve
from .types import ParseError

logger = get_logger("cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="odexplorer",
        description="Check whether y' = N(x,y)/D(x,y) is homogeneous and trace its solutions.",
    )
    parser.add_argument(
        "equation",
        nargs="?",
        default=config.DEFAULT_EQUATION,
        help=f"Right-hand side of y' (default: {config.DEFAULT_EQUATION!r})",
    )
    parser.add_argument(
        "--trajectory",
        nargs=2,
        type=float,
        metavar=("X0", "Y0"),
        help="Integrate the solution through (X0, Y0)",
    )
    parser.add_argument(
        "--step-size", type=float, help=f"RK4 step size (default: {config.STEP_SIZE})"
    )
    parser.add_argument(
        "--field", action="store_true", help="Sample the direction field"
    )
    parser.add_argument(
        "--curve",
        type=float,
        metavar="C",
        help="Sample y = x/(C - ln|x|), the solution family of the example equation",
    )
    parser.add_argument(
        "--no-symbolic",
        action="store_true",
        help="Skip the symbolic check and classify numerically only",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p", "--precision", type=int, default=6, help="Significant digits in human output"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    return parser


def _format_point(point, precision: int) -> str:
    x, y = point
    return f"({format_number(x, precision)}, {format_number(y, precision)})"


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the ODE explorer CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = _build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    if args.version:
        print(VERSION)
        return 0
    if args.no_symbolic:
        config.SYMBOLIC_CHECK_ENABLED = False
    if args.step_size is not None and args.step_size <= 0:
        print("Error: --step-size must be positive", file=sys.stderr)
        return 1

    try:
        equation = parse_equation(args.equation)
    except ParseError as e:
        logger.info("Parse failed for %r: %s", args.equation, e.code)
        if args.format == "json":
            print(json.dumps({"ok": False, "error": with_usage_hint(e), "error_code": e.code}))
        else:
            print(f"Error: {with_usage_hint(e)}")
        return 1

    verdict = classify(equation)
    output = {"ok": True, **equation.to_dict(), "homogeneity": verdict.to_dict()}
    if args.trajectory:
        x0, y0 = args.trajectory
        output["trajectory"] = integrate(equation, x0, y0, step_size=args.step_size)
    if args.field:
        output["field"] = direction_field(equation)
    if args.curve is not None:
        output["curve"] = solution_curve(args.curve)

    if args.format == "json":
        if "trajectory" in output:
            output["trajectory"] = [list(p) for p in output["trajectory"]]
        if "field" in output:
            output["field"] = [v.to_dict() for v in output["field"]]
        if "curve" in output:
            output["curve"] = [list(p) for p in output["curve"]]
        print(json.dumps(output))
        return 0

    precision = args.precision
    print(format_equation(equation))
    print(f"{verdict.message} ({verdict.method} check)")
    if verdict.counterexample is not None:
        x, y, lam = verdict.counterexample
        print(f"  f(x,y) != f(λx,λy) at (x, y) = ({x:g}, {y:g}), λ = {lam:g}")
    if "trajectory" in output:
        points = output["trajectory"]
        print(f"Trajectory through {_format_point(args.trajectory, precision)}: {len(points)} points")
        for point in points:
            print(f"  {_format_point(point, precision)}")
    if "field" in output:
        print(f"Direction field: {len(output['field'])} arrows")
        for v in output["field"]:
            print(
                f"  at {_format_point((v.x, v.y), precision)} "
                f"-> {_format_point((v.dx, v.dy), precision)}"
            )
    if "curve" in output:
        print(f"y = x/({format_number(args.curve, precision)} - ln|x|): {len(output['curve'])} points")
        for point in output["curve"]:
            print(f"  {_format_point(point, precision)}")
    return 0


if __name__ == "__main__":
    sys.exit(main_entry())

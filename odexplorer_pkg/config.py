"""Centralized configuration for the ODE explorer.

This module defines:
- Input validation limits (length, depth, node count)
- Cache sizes for parsing and compiled evaluation
- Homogeneity classifier settings (test battery, tolerance, symbolic toggle)
- Trajectory integrator settings (step size, step budget, viewing window)
- Direction-field sampling settings
- Ranges of the interactive controls (integration constant, scale factor)
- Allowed SymPy functions and parser transformations

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with ODEXPLORER_)
"""

import os
import re

import sympy as sp
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    standard_transformations,
)

try:
    import importlib.metadata

    VERSION = importlib.metadata.version("odexplorer")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("ODEXPLORER_MAX_INPUT_LENGTH", "500"))  # characters
MAX_EXPRESSION_DEPTH = int(
    os.getenv("ODEXPLORER_MAX_EXPRESSION_DEPTH", "60")
)  # tree depth
MAX_EXPRESSION_NODES = int(
    os.getenv("ODEXPLORER_MAX_EXPRESSION_NODES", "2000")
)  # total nodes

# Cache configuration
CACHE_SIZE_PARSE = int(os.getenv("ODEXPLORER_CACHE_SIZE_PARSE", "256"))
CACHE_SIZE_EVAL = int(os.getenv("ODEXPLORER_CACHE_SIZE_EVAL", "512"))

# Homogeneity classifier
SYMBOLIC_CHECK_ENABLED = (
    os.getenv("ODEXPLORER_SYMBOLIC_CHECK", "true").lower() == "true"
)
MAX_SYMBOLIC_OPS = int(
    os.getenv("ODEXPLORER_MAX_SYMBOLIC_OPS", "200")
)  # larger ratios go straight to the numerical check
HOMOGENEITY_TOLERANCE = float(
    os.getenv("ODEXPLORER_HOMOGENEITY_TOLERANCE", "0.001")
)  # max |f(x,y) - f(λx,λy)| accepted
AXIS_TOLERANCE = float(
    os.getenv("ODEXPLORER_AXIS_TOLERANCE", "1e-10")
)  # |x| below this counts as the y-axis

HOMOGENEITY_TEST_POINTS = (
    (2.0, 3.0),
    (1.0, -1.0),  # negative y
    (-2.0, 2.0),  # negative x
    (-3.0, -4.0),
    (0.1, 0.2),  # near the origin
    (10.0, 20.0),
    (1.0, 0.0),  # on the x-axis
    (0.001, 100.0),  # very different scales
)
HOMOGENEITY_SCALE_FACTORS = (0.1, 0.5, 2.0, 5.0, 10.0)

# Trajectory integrator
STEP_SIZE = float(os.getenv("ODEXPLORER_STEP_SIZE", "0.05"))
MAX_STEPS = int(os.getenv("ODEXPLORER_MAX_STEPS", "200"))  # per direction
TRAJECTORY_BOUND = float(os.getenv("ODEXPLORER_TRAJECTORY_BOUND", "10.0"))
REQUIRE_HOMOGENEOUS_TRAJECTORY = (
    os.getenv("ODEXPLORER_REQUIRE_HOMOGENEOUS_TRAJECTORY", "true").lower() == "true"
)
TRAJECTORY_COLORS = (
    "#3b82f6",
    "#16a34a",
    "#ef4444",
    "#eab308",
    "#8b5cf6",
    "#ec4899",
)

# Direction field
FIELD_EXTENT = float(os.getenv("ODEXPLORER_FIELD_EXTENT", "4.0"))
FIELD_SPACING = float(os.getenv("ODEXPLORER_FIELD_SPACING", "0.8"))
FIELD_SPACING_COMPACT = 1.2  # small screens
FIELD_AXIS_GAP = 0.1
FIELD_ARROW_LENGTH = 0.3
FIELD_MAX_MAGNITUDE = 3.0

# Closed-form solution family of the example equation
SOLUTION_X_MIN = 0.1
SOLUTION_X_MAX = 5.0
SOLUTION_X_STEP = 0.1
SOLUTION_Y_LIMIT = 10.0
SOLUTION_FAMILY_CONSTANTS = tuple(range(-2, 6))

# Interactive controls: (minimum, maximum, step)
CONSTANT_RANGE = (-4.0, 8.0, 0.5)
SCALE_FACTOR_RANGE = (0.5, 4.0, 0.1)
DEFAULT_CONSTANT = 2.0
DEFAULT_SCALE_FACTOR = 2.0
DEFAULT_INITIAL_POINT = (1.0, 1.0)
VIEW_MODES = ("solution", "phase")
LINEAR_X_DOMAIN = (-5.0, 5.0)
LOG_X_DOMAIN = (0.01, 5.0)
Y_DOMAIN = (-5.0, 5.0)

DEFAULT_EQUATION = os.getenv("ODEXPLORER_DEFAULT_EQUATION", "(y^2 + xy)/x^2")
USAGE_HINT = "Try something like '(y^2 + x*y)/x^2' or 'sin(x*y)/x^2'"

X = sp.Symbol("x")
Y = sp.Symbol("y")

ALLOWED_FUNCTIONS = {
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "exp": sp.exp,
    "log": sp.log,
}

TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication_application,
    convert_xor,
)

WHITESPACE_REGEX = re.compile(r"\s+")
DIGIT_VARIABLE_REGEX = re.compile(r"(\d)([xy])")
VARIABLE_DIGIT_REGEX = re.compile(r"([xy])(\d)")
ADJACENT_GROUPS_REGEX = re.compile(r"\)\(")
INVALID_CHAR_REGEX = re.compile(r"[^0-9A-Za-z_+\-*/^().]")
TOKEN_REGEX = re.compile(
    r"(?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)|(?P<name>[A-Za-z_][A-Za-z0-9_]*)"
)
VARIABLE_RUN_REGEX = re.compile(r"^[xy]+$")

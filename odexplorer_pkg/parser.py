"""Input parsing and preprocessing module.

This module handles:
- Input sanitization and validation (length, characters, identifiers)
- Expression preprocessing (whitespace removal, implicit multiplication)
- SymPy expression parsing with tree validation
- Splitting an equation "N/D" into numerator and denominator trees
- Balancing checks for parentheses
- Result formatting for display
"""

from __future__ import annotations

from functools import lru_cache
from tokenize import TokenError
from typing import Any

import sympy as sp
from sympy import parse_expr

from .config import (
    ADJACENT_GROUPS_REGEX,
    ALLOWED_FUNCTIONS,
    CACHE_SIZE_PARSE,
    DIGIT_VARIABLE_REGEX,
    INVALID_CHAR_REGEX,
    MAX_EXPRESSION_DEPTH,
    MAX_EXPRESSION_NODES,
    MAX_INPUT_LENGTH,
    TOKEN_REGEX,
    TRANSFORMATIONS,
    USAGE_HINT,
    VARIABLE_DIGIT_REGEX,
    VARIABLE_RUN_REGEX,
    WHITESPACE_REGEX,
    X,
    Y,
)
from .logging_config import get_logger
from .types import ParsedEquation, ParseError

logger = get_logger("parser")

_LOCAL_NAMES = {"x": X, "y": Y, **ALLOWED_FUNCTIONS}
_ALLOWED_HEADS = frozenset(ALLOWED_FUNCTIONS.values())
_VARIABLES = frozenset({X, Y})


def format_number(val: Any, precision: int = 6) -> str:
    """Format a numeric value with specified precision.

    Args:
        val: Numeric value to format
        precision: Number of significant digits

    Returns:
        Formatted string representation of the number
    """
    try:
        fmt = "{:." + str(int(precision)) + "g}"
        return fmt.format(float(val))
    except (ValueError, TypeError, OverflowError):
        return str(val)


def format_equation(equation: ParsedEquation) -> str:
    """Render an equation as "y' = (N)/(D)", omitting a unit denominator."""
    numerator = str(equation.numerator)
    if equation.denominator == sp.S.One:
        return f"y' = {numerator}"
    return f"y' = ({numerator})/({equation.denominator})"


def with_usage_hint(error: ParseError) -> str:
    """User-facing text for a parse failure."""
    return f"{error.message}. {USAGE_HINT}"


def is_balanced(input_str: str) -> tuple[bool, int | None]:
    """Check if parentheses are balanced. Returns (is_balanced, error_position)."""
    stack: list[int] = []
    for i, char in enumerate(input_str):
        if char == "(":
            stack.append(i)
        elif char == ")":
            if not stack:
                return False, i
            stack.pop()
    if stack:
        return False, stack[0]  # Return position of first unmatched
    return True, None


def preprocess(input_str: str) -> str:
    """Preprocess input string for parsing.

    Applies, in order:
    - Validates input is non-empty and within MAX_INPUT_LENGTH
    - Strips all whitespace
    - Inserts implicit multiplication between digits and variables (2x -> 2*x, x2 -> x*2)
    - Inserts implicit multiplication between parenthesized groups (")(" -> ")*(")

    The result is a fixed point: preprocess(preprocess(s)) == preprocess(s).

    Raises:
        ParseError: If input is empty or too long
    """
    if not input_str or not input_str.strip():
        raise ParseError("Equation cannot be empty", "EMPTY_INPUT")
    if len(input_str) > MAX_INPUT_LENGTH:
        raise ParseError(
            f"Input too long (>{MAX_INPUT_LENGTH} characters)", "TOO_LONG"
        )

    processed = WHITESPACE_REGEX.sub("", input_str)
    processed = DIGIT_VARIABLE_REGEX.sub(r"\1*\2", processed)
    processed = VARIABLE_DIGIT_REGEX.sub(r"\1*\2", processed)
    processed = ADJACENT_GROUPS_REGEX.sub(")*(", processed)
    return processed


def _check_characters(expr_str: str) -> None:
    bad = INVALID_CHAR_REGEX.search(expr_str)
    if bad:
        raise ParseError(
            f"Invalid character '{bad.group(0)}' at position {bad.start()}",
            "INVALID_CHARACTER",
        )
    balanced, error_pos = is_balanced(expr_str)
    if not balanced:
        start = max(0, error_pos - 10)
        context = expr_str[start : error_pos + 10]
        raise ParseError(
            f"Mismatched or unbalanced parentheses at position {error_pos}: ...{context}...",
            "UNBALANCED_PARENS",
        )


def _check_identifiers(expr_str: str) -> None:
    """Only x, y (or runs of them like "xy") and the known functions are names."""
    for match in TOKEN_REGEX.finditer(expr_str):
        name = match.group("name")
        if name is None:
            continue
        if name in ALLOWED_FUNCTIONS:
            if not expr_str.startswith("(", match.end()):
                raise ParseError(
                    f"Function '{name}' must be followed by '('", "SYNTAX_ERROR"
                )
            continue
        if VARIABLE_RUN_REGEX.match(name):
            continue
        raise ParseError(
            f"Unknown identifier '{name}' (use x, y, sin, cos, tan, exp, log)",
            "UNKNOWN_IDENTIFIER",
        )


def _validate_expression_tree(
    expr: Any, depth: int = 0, node_count: list[int] | None = None
) -> None:
    """Reject anything that is not arithmetic over x, y and the allowed functions."""
    if node_count is None:
        node_count = [0]
    node_count[0] += 1
    if node_count[0] > MAX_EXPRESSION_NODES:
        raise ParseError(
            f"Expression too complex (>{MAX_EXPRESSION_NODES} nodes)", "TOO_COMPLEX"
        )
    if depth > MAX_EXPRESSION_DEPTH:
        raise ParseError(
            f"Expression too deeply nested (>{MAX_EXPRESSION_DEPTH} levels)", "TOO_DEEP"
        )

    if isinstance(expr, sp.Symbol):
        if expr not in _VARIABLES:
            raise ParseError(f"Unknown variable '{expr}'", "UNKNOWN_IDENTIFIER")
        return
    # Numbers, including values like E or zoo that SymPy folds constants into
    if expr.is_Atom and expr.is_number:
        return
    if isinstance(expr, (sp.Add, sp.Mul, sp.Pow)):
        for arg in expr.args:
            _validate_expression_tree(arg, depth + 1, node_count)
        return
    if isinstance(expr, sp.Function) and expr.func in _ALLOWED_HEADS:
        for arg in expr.args:
            _validate_expression_tree(arg, depth + 1, node_count)
        return

    logger.warning("Blocked expression node of type %s", type(expr).__name__)
    raise ParseError(
        f"Expression type '{type(expr).__name__}' not allowed", "FORBIDDEN_FUNCTION"
    )


@lru_cache(maxsize=CACHE_SIZE_PARSE)
def parse_preprocessed(expr_str: str) -> sp.Expr:
    """Parse and validate a preprocessed expression string into an expression tree.

    Raises:
        ParseError: On invalid characters, unbalanced parentheses, unknown
            identifiers or anything SymPy cannot parse
    """
    if not expr_str:
        raise ParseError("Expression cannot be empty", "EMPTY_INPUT")
    _check_characters(expr_str)
    _check_identifiers(expr_str)

    try:
        expr = parse_expr(
            expr_str,
            local_dict=dict(_LOCAL_NAMES),
            transformations=TRANSFORMATIONS,
        )
    except (SyntaxError, TokenError) as e:
        raise ParseError(f"Invalid expression '{expr_str}'", "SYNTAX_ERROR") from e
    except (TypeError, ValueError, AttributeError, sp.SympifyError) as e:
        raise ParseError(
            f"Invalid expression '{expr_str}': {e}", "SYNTAX_ERROR"
        ) from e
    except RecursionError as e:
        raise ParseError(
            "Expression too deeply nested", "TOO_DEEP"
        ) from e

    if not isinstance(expr, sp.Expr):
        raise ParseError(
            f"'{expr_str}' is not a real-valued expression", "SYNTAX_ERROR"
        )
    _validate_expression_tree(expr)
    return expr


def parse_expression(input_str: str) -> sp.Expr:
    """Preprocess and parse a single expression (no numerator/denominator split)."""
    return parse_preprocessed(preprocess(input_str))


def parse_equation(input_str: str) -> ParsedEquation:
    """Parse the right-hand side of y' = N/D.

    The preprocessed text is split on its first '/' only: everything after it
    is the denominator, so "a/b/c" means a over (b/c). Without a '/', the
    denominator is the constant 1.

    Args:
        input_str: Raw equation text (e.g., "(y^2 + xy)/x^2")

    Returns:
        ParsedEquation holding both expression trees and the preprocessed text

    Raises:
        ParseError: If either half fails to parse or the denominator is identically zero

    Example:
        >>> eq = parse_equation("(y^2 + xy)/x^2")
        >>> eq.denominator
        x**2
    """
    processed = preprocess(input_str)
    if "/" in processed:
        numerator_str, denominator_str = processed.split("/", 1)
        if not numerator_str:
            raise ParseError("Missing numerator before '/'", "SYNTAX_ERROR")
        if not denominator_str:
            raise ParseError("Missing denominator after '/'", "SYNTAX_ERROR")
        numerator = parse_preprocessed(numerator_str)
        denominator = parse_preprocessed(denominator_str)
    else:
        numerator = parse_preprocessed(processed)
        denominator = sp.S.One

    if denominator == sp.S.Zero:
        raise ParseError("Denominator is identically zero", "ZERO_DENOMINATOR")

    logger.debug("Parsed %r as (%s)/(%s)", processed, numerator, denominator)
    return ParsedEquation(
        numerator=numerator, denominator=denominator, original_text=processed
    )

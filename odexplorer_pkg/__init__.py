"""ODE explorer package: parser, evaluator, homogeneity classifier and RK4 integrator."""

__all__ = [
    "config",
    "parser",
    "evaluator",
    "classifier",
    "integrator",
    "field",
    "solutions",
    "session",
    "types",
    "api",
    "cli",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "check_equation",
    "compute_trajectory",
    "sample_direction_field",
    "validate_equation",
]

"""Direction-field sampling for the phase view."""

from __future__ import annotations

import math

from . import config
from .evaluator import slope
from .types import FieldVector, ParsedEquation


def grid_values(extent: float, spacing: float) -> list[float]:
    """Values -extent, -extent + spacing, ... up to +extent inclusive."""
    if spacing <= 0:
        raise ValueError("spacing must be positive")
    count = int(math.floor(2 * extent / spacing + 1e-9)) + 1
    return [-extent + k * spacing for k in range(count)]


def field_vector(x: float, y: float, dy_dx: float) -> FieldVector:
    """Arrow for slope dy_dx at (x, y), lengthened slightly for steep slopes."""
    magnitude = min(math.sqrt(1 + dy_dx * dy_dx), config.FIELD_MAX_MAGNITUDE)
    angle = math.atan2(dy_dx, 1)
    length = config.FIELD_ARROW_LENGTH * (0.5 + 0.5 * min(magnitude, 5) / 5)
    return FieldVector(
        x=x,
        y=y,
        dx=length * math.cos(angle),
        dy=length * math.sin(angle),
        magnitude=magnitude,
    )


def direction_field(
    equation: ParsedEquation,
    extent: float | None = None,
    spacing: float | None = None,
    compact: bool = False,
) -> list[FieldVector]:
    """Sample slope arrows on a square grid.

    Grid points within FIELD_AXIS_GAP of the y-axis and points where the
    slope is undefined are left out.
    """
    if extent is None:
        extent = config.FIELD_EXTENT
    if spacing is None:
        spacing = config.FIELD_SPACING_COMPACT if compact else config.FIELD_SPACING

    vectors = []
    values = grid_values(extent, spacing)
    for x in values:
        if abs(x) < config.FIELD_AXIS_GAP:
            continue
        for y in values:
            result = slope(equation, x, y)
            if not result.ok:
                continue
            vectors.append(field_vector(x, y, result.value))
    return vectors

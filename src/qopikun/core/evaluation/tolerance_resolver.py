"""
Tolerance limit resolution.

Turns a parameter's tolerance specification (nominal, tolerance type,
tolerance magnitude) into concrete upper and lower tolerance limits
(UTL/LTL). The limits are derived values: they are never authored directly
and are recomputed whenever any of the three inputs changes.

Rules:
- "+/-": UTL = nominal + value, LTL = nominal - value
- "+":   UTL = nominal + value, LTL = nominal
- "-":   UTL = nominal,         LTL = nominal - value
"""

from typing import NamedTuple

from ..exceptions import ToleranceError
from ..inspection_constants import (
    TOLERANCE_BILATERAL,
    TOLERANCE_MINUS,
    TOLERANCE_PLUS,
    TOLERANCE_TYPES,
)


class ToleranceLimits(NamedTuple):
    """Resolved upper/lower tolerance limits."""

    utl: float
    ltl: float


def resolve_tolerance(
    nominal: float,
    tolerance_type: str,
    tolerance_value: float
) -> ToleranceLimits:
    """
    Resolve the tolerance limits for a nominal value.

    Examples:
    - resolve_tolerance(10.0, "+/-", 0.5) → ToleranceLimits(utl=10.5, ltl=9.5)
    - resolve_tolerance(10.0, "+", 0.5) → ToleranceLimits(utl=10.5, ltl=10.0)
    - resolve_tolerance(10.0, "-", 0.5) → ToleranceLimits(utl=10.0, ltl=9.5)

    Args:
        nominal: Target value from the drawing
        tolerance_type: One of "+/-", "+", "-"
        tolerance_value: Non-negative tolerance magnitude

    Returns:
        ToleranceLimits(utl, ltl)

    Raises:
        ToleranceError: If the tolerance type is unknown or the magnitude
                        is negative (a negative band would invert the limits)
    """
    if tolerance_value < 0:
        raise ToleranceError(
            f"tolerance_value must be non-negative, got: {tolerance_value}"
        )

    if tolerance_type == TOLERANCE_BILATERAL:
        return ToleranceLimits(utl=nominal + tolerance_value, ltl=nominal - tolerance_value)
    elif tolerance_type == TOLERANCE_PLUS:
        return ToleranceLimits(utl=nominal + tolerance_value, ltl=nominal)
    elif tolerance_type == TOLERANCE_MINUS:
        return ToleranceLimits(utl=nominal, ltl=nominal - tolerance_value)

    raise ToleranceError(
        f"tolerance_type must be one of {TOLERANCE_TYPES}, got: {tolerance_type}"
    )

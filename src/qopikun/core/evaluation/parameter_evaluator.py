"""
Measurement evaluation against resolved tolerance limits.

Maps an actual measurement plus the parameter's nominal value and resolved
limits to a deviation and a pass/fail status:

- No measurement: deviation is absent and the status is PENDING
- Measurement present: deviation = actual - nominal, and the status is
  PASS when LTL <= actual <= UTL (both bounds inclusive), FAIL otherwise

The limits must already be resolved for the current tolerance
specification, so callers resolve tolerances before evaluating.
"""

from typing import NamedTuple, Optional

from ..inspection_constants import STATUS_FAIL, STATUS_PASS, STATUS_PENDING


class ParameterEvaluation(NamedTuple):
    """Derived measurement result for one parameter."""

    deviation: Optional[float]
    status: str


def is_within_limits(value: float, ltl: float, utl: float) -> bool:
    """Inclusive limit check: a value equal to either limit passes."""
    return ltl <= value <= utl


def evaluate_measurement(
    actual: Optional[float],
    nominal: float,
    utl: float,
    ltl: float
) -> ParameterEvaluation:
    """
    Evaluate a measurement against its tolerance limits.

    Examples:
    - actual=10.4, nominal=10, limits [9.5, 10.5] → deviation≈0.4, PASS
    - actual=10.6, nominal=10, limits [9.5, 10.5] → deviation≈0.6, FAIL
    - actual=None → deviation=None, PENDING

    Args:
        actual: Measured value, or None if not measured (or cleared)
        nominal: Target value
        utl: Upper tolerance limit
        ltl: Lower tolerance limit

    Returns:
        ParameterEvaluation(deviation, status)
    """
    if actual is None:
        return ParameterEvaluation(deviation=None, status=STATUS_PENDING)

    status = STATUS_PASS if is_within_limits(actual, ltl, utl) else STATUS_FAIL
    return ParameterEvaluation(deviation=actual - nominal, status=status)

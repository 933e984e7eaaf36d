"""
Pure evaluation functions for inspection parameters.

- resolve_tolerance: nominal + tolerance specification → UTL/LTL
- evaluate_measurement: actual + limits → deviation/status
"""

from .tolerance_resolver import ToleranceLimits, resolve_tolerance
from .parameter_evaluator import ParameterEvaluation, evaluate_measurement, is_within_limits

__all__ = [
    "ToleranceLimits",
    "resolve_tolerance",
    "ParameterEvaluation",
    "evaluate_measurement",
    "is_within_limits",
]

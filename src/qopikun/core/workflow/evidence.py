"""
Evidence attachment management.

Evidence can be attached to the report as a whole or to an individual
parameter. Evidence sequences keep insertion order; removal is by index and
shifts later items down by one. Evidence changes never touch a parameter's
deviation or status.

Stale references (unknown parameter id, index out of range) are no-ops that
return the report unchanged rather than errors, since they typically come
from UI races such as a double click on a delete button.
"""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError
from ..models.evidence import Evidence
from ..models.inspection_report import InspectionReport
from .parameters import get_parameter, replace_parameter

logger = logging.getLogger(__name__)


def _validate_evidence(item: Any) -> Evidence:
    """
    Coerce an evidence item (Evidence or mapping) into a validated Evidence.

    Raises:
        ValidationError: If the item isn't valid evidence
    """
    try:
        return Evidence.model_validate(item)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid evidence item: {e}") from e


def add_report_evidence(report: InspectionReport, item: Evidence) -> InspectionReport:
    """
    Append an evidence item to the report-level evidence.

    Raises:
        ValidationError: If the item isn't valid evidence
    """
    item = _validate_evidence(item)
    return report.model_copy(update={"evidence": [*report.evidence, item]})


def add_parameter_evidence(
    report: InspectionReport,
    parameter_id: int,
    item: Evidence
) -> InspectionReport:
    """
    Append an evidence item to a parameter's evidence.

    Returns:
        New report, or the same report if the parameter doesn't exist

    Raises:
        ValidationError: If the item isn't valid evidence
    """
    item = _validate_evidence(item)
    parameter = get_parameter(report, parameter_id)
    if parameter is None:
        logger.debug(f"add_parameter_evidence: no parameter {parameter_id} in report {report.id}")
        return report

    updated = parameter.model_copy(update={"evidence": [*parameter.evidence, item]})
    return replace_parameter(report, updated)


def remove_parameter_evidence(
    report: InspectionReport,
    parameter_id: int,
    index: int
) -> InspectionReport:
    """
    Remove the evidence item at `index` from a parameter.

    Negative indices are treated as out of range (they never address items
    from the end of the list).

    Returns:
        New report, or the same report if the parameter doesn't exist or the
        index is out of range
    """
    parameter = get_parameter(report, parameter_id)
    if parameter is None:
        logger.debug(f"remove_parameter_evidence: no parameter {parameter_id} in report {report.id}")
        return report

    if not 0 <= index < len(parameter.evidence):
        logger.debug(
            f"remove_parameter_evidence: index {index} out of range for parameter "
            f"{parameter_id} ({len(parameter.evidence)} items)"
        )
        return report

    evidence = [item for i, item in enumerate(parameter.evidence) if i != index]
    updated = parameter.model_copy(update={"evidence": evidence})
    return replace_parameter(report, updated)

"""
Parameter collection management.

Create, remove and update operations over the ordered list of parameters in
an inspection report. Every operation takes a report and returns a new
report; nothing is mutated in place. Operations addressed at a parameter id
that isn't in the report are no-ops and return the report unchanged (the
same object), so callers can detect that nothing happened with `is`.

Update flow (see update_parameter):
1. Validate the requested changes (editable fields only)
2. Merge them into the parameter
3. Re-derive UTL/LTL if nominal, tolerance_type or tolerance_value changed
4. Re-derive deviation/status from the (possibly new) limits

Id assignment: a new parameter gets max(existing ids) + 1, or 1 for an empty
report. Ids are unique within the current collection only; removing the
highest id and adding again reuses that id.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from ..evaluation.parameter_evaluator import evaluate_measurement
from ..evaluation.tolerance_resolver import resolve_tolerance
from ..exceptions import ValidationError
from ..inspection_constants import GDT_IMAGE_LOADING, STATUS_PENDING
from ..models.inspection_parameter import InspectionParameter
from ..models.inspection_report import InspectionReport

logger = logging.getLogger(__name__)

# Fields whose change requires the tolerance limits to be recomputed
TOLERANCE_FIELDS = frozenset({"nominal", "tolerance_type", "tolerance_value"})

# Fields that may be cleared by passing None
NULLABLE_FIELDS = frozenset({"actual", "gdt_symbol", "gdt_image"})


class ParameterUpdate(BaseModel):
    """
    Editable parameter fields.

    Used to validate and coerce partial updates. Derived fields (utl, ltl,
    deviation, status), the id and the evidence list are not editable here;
    passing any of them is rejected. Numbers must be finite: NaN and
    infinities are rejected.
    """

    description: Optional[str] = None
    nominal: Optional[float] = None
    tolerance_type: Optional[str] = None
    tolerance_value: Optional[float] = None
    actual: Optional[float] = None
    gdt_symbol: Optional[str] = None
    gdt_image: Optional[str] = None

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)


def next_parameter_id(parameters: List[InspectionParameter]) -> int:
    """
    Get the id for the next parameter added to a collection.

    Example:
        next_parameter_id([]) → 1
        next_parameter_id([p1, p2, p5]) → 6
    """
    if not parameters:
        return 1
    return max(p.id for p in parameters) + 1


def get_parameter(report: InspectionReport, parameter_id: int) -> Optional[InspectionParameter]:
    """Return the parameter with the given id, or None."""
    for parameter in report.parameters:
        if parameter.id == parameter_id:
            return parameter
    return None


def replace_parameter(report: InspectionReport, updated: InspectionParameter) -> InspectionReport:
    """Return a new report with the parameter of the same id swapped for `updated`."""
    parameters = [updated if p.id == updated.id else p for p in report.parameters]
    return report.model_copy(update={"parameters": parameters})


def add_parameter(report: InspectionReport) -> InspectionReport:
    """
    Append a new parameter with default values.

    Defaults: nominal 0, "+/-" tolerance of 0 (so UTL = LTL = 0), PENDING,
    no measurement.

    Args:
        report: Current report

    Returns:
        New report with the parameter appended
    """
    new_parameter = InspectionParameter(id=next_parameter_id(report.parameters))
    return report.model_copy(update={"parameters": [*report.parameters, new_parameter]})


def remove_parameter(report: InspectionReport, parameter_id: int) -> InspectionReport:
    """
    Remove the parameter with the given id.

    Returns:
        New report without the parameter, or the same report if no parameter
        has that id
    """
    if get_parameter(report, parameter_id) is None:
        logger.debug(f"remove_parameter: no parameter {parameter_id} in report {report.id}")
        return report

    parameters = [p for p in report.parameters if p.id != parameter_id]
    return report.model_copy(update={"parameters": parameters})


def update_parameter(
    report: InspectionReport,
    parameter_id: int,
    changes: Dict[str, Any]
) -> InspectionReport:
    """
    Merge field changes into a parameter and re-derive dependent fields.

    Tolerance limits are recomputed whenever any of nominal, tolerance_type
    or tolerance_value is among the changes, even if only one of them
    changed. Deviation and status are then recomputed: explicitly clearing
    actual (actual=None) always yields (None, PENDING); otherwise, if a
    measurement is present it is evaluated against the current limits.

    Examples:
        update_parameter(report, 1, {"nominal": 10, "tolerance_value": 0.5})
        update_parameter(report, 1, {"actual": 10.4})
        update_parameter(report, 1, {"actual": None})   # clear measurement

    Args:
        report: Current report
        parameter_id: Id of the parameter to update
        changes: Mapping of editable field name to new value

    Returns:
        New report with the updated parameter, or the same report if no
        parameter has that id

    Raises:
        ValidationError: If changes contain non-editable fields or invalid
                         values (nothing is changed in that case)
        ToleranceError: If the resulting tolerance specification is invalid
    """
    target = get_parameter(report, parameter_id)
    if target is None:
        logger.debug(f"update_parameter: no parameter {parameter_id} in report {report.id}")
        return report

    try:
        touched = ParameterUpdate.model_validate(changes).model_dump(exclude_unset=True)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid update for parameter {parameter_id}: {e}") from e

    cleared = {name for name, value in touched.items() if value is None} - NULLABLE_FIELDS
    if cleared:
        raise ValidationError(
            f"Invalid update for parameter {parameter_id}: {sorted(cleared)} can't be cleared"
        )

    fields = dict(target)
    fields.update(touched)

    if TOLERANCE_FIELDS & touched.keys():
        limits = resolve_tolerance(
            fields["nominal"],
            fields["tolerance_type"],
            fields["tolerance_value"]
        )
        fields["utl"] = limits.utl
        fields["ltl"] = limits.ltl

    if "actual" in touched and touched["actual"] is None:
        # Measurement cleared
        fields["deviation"] = None
        fields["status"] = STATUS_PENDING
    elif fields["actual"] is not None:
        evaluation = evaluate_measurement(
            fields["actual"],
            fields["nominal"],
            fields["utl"],
            fields["ltl"]
        )
        fields["deviation"] = evaluation.deviation
        fields["status"] = evaluation.status

    try:
        updated = InspectionParameter(**fields)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid update for parameter {parameter_id}: {e}") from e

    return replace_parameter(report, updated)


def clear_loading_images(report: InspectionReport) -> InspectionReport:
    """
    Reset every "loading" gdt_image to absent.

    Used when a report is reopened: no generation request survives the
    session that started it, so a stored sentinel would never resolve.

    Returns:
        New report, or the same report if no parameter was loading
    """
    for parameter in report.parameters:
        if parameter.gdt_image == GDT_IMAGE_LOADING:
            report = replace_parameter(report, parameter.model_copy(update={"gdt_image": None}))
    return report

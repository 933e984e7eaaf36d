"""
Inspection parameter model.

This module defines the InspectionParameter model, the core evaluable unit of
an inspection report. Each parameter represents one characteristic on the
drawing (a dimension, a GD&T callout, ...) with:
- A tolerance specification (nominal, tolerance type, tolerance magnitude)
- Derived tolerance limits (UTL/LTL)
- An optional actual measurement
- Derived deviation and pass/fail status
- Optional GD&T symbol and generated symbol image
- Per-parameter photographic evidence

Derived fields (utl, ltl, deviation, status) are never authored directly.
When they are omitted at construction they are computed from their inputs;
when they are supplied they must agree with their inputs, otherwise
construction fails. A parameter with stale derived fields can't exist.
"""

from typing import Any, List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict

from ..evaluation.parameter_evaluator import evaluate_measurement
from ..evaluation.tolerance_resolver import resolve_tolerance
from ..exceptions import ToleranceError, ValidationError
from ..inspection_constants import (
    PARAMETER_STATUSES,
    TOLERANCE_BILATERAL,
    TOLERANCE_TYPES,
    find_gdt_symbol,
)
from .evidence import Evidence


class InspectionParameter(BaseModel):
    """
    Inspection parameter with derived limits and status.

    Key design decisions:
    - Frozen: every edit produces a new parameter (see workflow.parameters)
    - Ids are small integers unique within a report, assigned as
      max(existing) + 1 by the collection manager
    - gdt_image holds either generated image data or the "loading" sentinel
      while a generation request is in flight

    Validation ensures:
    - tolerance_type is one of "+/-", "+", "-"
    - tolerance_value is non-negative
    - utl/ltl match the tolerance specification
    - deviation/status match the actual measurement and limits
    """

    # Position-independent identifier within the report (1-based)
    id: int = Field(ge=1)

    description: str = "New Parameter"

    # Tolerance specification
    nominal: float = 0.0
    tolerance_type: str = TOLERANCE_BILATERAL
    tolerance_value: float = 0.0

    # Derived tolerance limits
    utl: float = 0.0
    ltl: float = 0.0

    # Measurement (None = not yet measured)
    actual: Optional[float] = None

    # Derived from actual - nominal; present iff actual is present
    deviation: Optional[float] = None

    # Derived: PENDING iff actual is absent
    status: str

    # GD&T symbol code (see inspection_constants.GDT_SYMBOLS)
    gdt_symbol: Optional[str] = None

    # None, the "loading" sentinel, or generated image data
    gdt_image: Optional[str] = None

    evidence: List[Evidence] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def fill_derived_fields(cls, data: Any) -> Any:
        """
        Compute derived fields that were not supplied.

        Lets callers construct a parameter from its inputs alone, e.g.
        InspectionParameter(id=1, nominal=10, tolerance_value=0.5).
        Supplied derived values are left untouched and checked later by
        validate_derived_fields.
        """
        if not isinstance(data, dict):
            return data

        data = dict(data)
        nominal = float(data.get("nominal", 0.0))

        if "utl" not in data or "ltl" not in data:
            limits = resolve_tolerance(
                nominal,
                data.get("tolerance_type", TOLERANCE_BILATERAL),
                float(data.get("tolerance_value", 0.0))
            )
            data.setdefault("utl", limits.utl)
            data.setdefault("ltl", limits.ltl)

        if "status" not in data or "deviation" not in data:
            actual = data.get("actual")
            evaluation = evaluate_measurement(
                None if actual is None else float(actual),
                nominal,
                float(data["utl"]),
                float(data["ltl"])
            )
            data.setdefault("deviation", evaluation.deviation)
            data.setdefault("status", evaluation.status)

        return data

    @field_validator("tolerance_type")
    @classmethod
    def validate_tolerance_type(cls, v: str) -> str:
        """
        Validate tolerance type is one of the allowed values.

        Raises:
            ToleranceError: If tolerance_type is not "+/-", "+" or "-"
        """
        if v not in TOLERANCE_TYPES:
            raise ToleranceError(
                f"tolerance_type must be one of {TOLERANCE_TYPES}, got: {v}"
            )
        return v

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        if v not in PARAMETER_STATUSES:
            raise ValidationError(
                f"status must be one of {PARAMETER_STATUSES}, got: {v}"
            )
        return v

    @field_validator("gdt_symbol")
    @classmethod
    def validate_gdt_symbol(cls, v: Optional[str]) -> Optional[str]:
        """Only symbols from the GD&T symbol table can be referenced."""
        if v is not None and find_gdt_symbol(v) is None:
            raise ValidationError(f"Unknown GD&T symbol: {v}")
        return v

    @model_validator(mode="after")
    def validate_derived_fields(self):
        """
        Validate that derived fields agree with their inputs.

        Recomputes limits from (nominal, tolerance_type, tolerance_value) and
        deviation/status from (actual, nominal, utl, ltl), and rejects the
        parameter if any stored value differs. This is what makes drafts
        with stale derived fields unloadable.

        Returns:
            self (required by Pydantic)

        Raises:
            ToleranceError: If tolerance_value is negative
            ValidationError: If a derived field is stale
        """
        limits = resolve_tolerance(self.nominal, self.tolerance_type, self.tolerance_value)
        if (self.utl, self.ltl) != (limits.utl, limits.ltl):
            raise ValidationError(
                f"Parameter {self.id}: limits (utl={self.utl}, ltl={self.ltl}) don't match "
                f"tolerance specification (utl={limits.utl}, ltl={limits.ltl})"
            )

        evaluation = evaluate_measurement(self.actual, self.nominal, self.utl, self.ltl)
        if (self.deviation, self.status) != (evaluation.deviation, evaluation.status):
            raise ValidationError(
                f"Parameter {self.id}: deviation/status ({self.deviation}, {self.status}) "
                f"don't match measurement ({evaluation.deviation}, {evaluation.status})"
            )

        return self

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

"""
Inspection report model (aggregate root).

This module defines the InspectionReport model, the single in-memory value
that an inspection session works on. Every workflow operation takes a report
and returns a new report; the session replaces its current report atomically
and writes the new value through to the draft cache.

A report contains:
- Identity and scheduling (id, title, scheduled_by_id, created_at)
- Product details
- Ordered inspection parameters
- Report-level evidence (distinct from per-parameter evidence)
- Signatures per role
- Completion state (is_complete, final_status)

Once is_complete is set the report is terminal: no workflow operation ever
unsets it or changes final_status.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional
from uuid import UUID, uuid4
from pydantic import BaseModel, Field, model_validator, ConfigDict

from ..exceptions import ValidationError
from ..inspection_constants import INSPECTION_STATUSES, USER_ROLES
from .evidence import Evidence
from .inspection_parameter import InspectionParameter
from .product_details import ProductDetails
from .signature import Signature


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InspectionReport(BaseModel):
    """
    Inspection report aggregate.

    Validation ensures:
    - final_status is present if and only if is_complete is True
    - final_status is one of the known inspection statuses
    - Parameter ids are unique within the report
    - Signature keys are known roles
    """

    # Stable identity: used as the draft cache key and the session address
    id: UUID = Field(default_factory=uuid4)

    title: str

    # Inspector who owns (scheduled) this inspection
    scheduled_by_id: UUID

    # Used to order report listings (newest first)
    created_at: datetime = Field(default_factory=_utc_now)

    product_details: ProductDetails = Field(default_factory=ProductDetails)

    parameters: List[InspectionParameter] = Field(default_factory=list)

    # Report-level evidence; per-parameter evidence lives on each parameter
    evidence: List[Evidence] = Field(default_factory=list)

    # role -> signature; a missing role has not signed
    signatures: Dict[str, Signature] = Field(default_factory=dict)

    is_complete: bool = False

    final_status: Optional[str] = None

    @model_validator(mode="after")
    def validate_report(self):
        """
        Validate report-level invariants.

        Returns:
            self (required by Pydantic)

        Raises:
            ValidationError: If any invariant is violated
        """
        # Completion and final status go together
        if self.is_complete and self.final_status is None:
            raise ValidationError("A complete inspection requires a final_status")
        if not self.is_complete and self.final_status is not None:
            raise ValidationError("final_status can only be set on a complete inspection")

        if self.final_status is not None and self.final_status not in INSPECTION_STATUSES:
            raise ValidationError(
                f"final_status must be one of {INSPECTION_STATUSES}, got: {self.final_status}"
            )

        ids = [p.id for p in self.parameters]
        if len(ids) != len(set(ids)):
            raise ValidationError(f"Parameter ids must be unique within a report, got: {ids}")

        unknown_roles = set(self.signatures) - set(USER_ROLES)
        if unknown_roles:
            raise ValidationError(f"Signatures for unknown roles: {sorted(unknown_roles)}")

        return self

    model_config = ConfigDict(frozen=True)

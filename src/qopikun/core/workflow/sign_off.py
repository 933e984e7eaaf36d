"""
Multi-role sign-off and inspection completion.

Each role moves through a two-state machine:

    UNSIGNED --sign_off(comment)--> SIGNED(comment, timestamp)

Signing again overwrites the previous signature with a new comment and
timestamp. There is no transition back to UNSIGNED.

Completion is a separate, one-way transition of the whole report:

    incomplete --complete_inspection(final_status)--> complete

Completion is not gated on signatures here; callers that want a policy such
as "all attending roles must have signed" can check pending_sign_offs()
first. Once complete, is_complete and final_status never change.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError
from ..inspection_constants import INSPECTION_STATUSES, SIGN_OFF_ROLES, USER_ROLES
from ..models.inspection_report import InspectionReport
from ..models.signature import Signature

logger = logging.getLogger(__name__)

SIGNATURE_UNSIGNED = "UNSIGNED"
SIGNATURE_SIGNED = "SIGNED"


def signature_state(report: InspectionReport, role: str) -> str:
    """Return "SIGNED" or "UNSIGNED" for a role."""
    signature = report.signatures.get(role)
    if signature is not None and signature.signed:
        return SIGNATURE_SIGNED
    return SIGNATURE_UNSIGNED


def sign_off(
    report: InspectionReport,
    role: str,
    comment: str,
    timestamp: Optional[datetime] = None
) -> InspectionReport:
    """
    Record a signature for a role.

    Args:
        report: Current report
        role: Role signing (on its own behalf)
        comment: Free-text comment, may be empty
        timestamp: Signature time, defaults to now (UTC)

    Returns:
        New report with the role's signature recorded (replacing any
        previous signature of that role)

    Raises:
        ValidationError: If role is unknown or the comment/timestamp are invalid
    """
    if role not in USER_ROLES:
        raise ValidationError(f"role must be one of {USER_ROLES}, got: {role}")

    try:
        signature = Signature(
            signed=True,
            comment=comment,
            timestamp=timestamp or datetime.now(timezone.utc)
        )
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid signature for role {role}: {e}") from e

    return report.model_copy(update={"signatures": {**report.signatures, role: signature}})


def pending_sign_offs(
    report: InspectionReport,
    required_roles: Iterable[str] = SIGN_OFF_ROLES
) -> List[str]:
    """Roles from `required_roles` that haven't signed yet, in the given order."""
    return [role for role in required_roles if signature_state(report, role) == SIGNATURE_UNSIGNED]


def complete_inspection(report: InspectionReport, final_status: str) -> InspectionReport:
    """
    Mark the inspection complete with a final status.

    Completing an already complete report is a no-op: the original
    final_status is kept and the same report is returned.

    Raises:
        ValidationError: If final_status is unknown
    """
    if final_status not in INSPECTION_STATUSES:
        raise ValidationError(
            f"final_status must be one of {INSPECTION_STATUSES}, got: {final_status}"
        )

    if report.is_complete:
        logger.warning(
            f"Inspection {report.id} is already complete with status {report.final_status}; "
            f"ignoring completion with {final_status}"
        )
        return report

    logger.info(f"Inspection {report.id} completed with status: {final_status}")
    return report.model_copy(update={"is_complete": True, "final_status": final_status})

"""
Results summary for the inspection dashboard.

Aggregates parameter statuses into counts and a suggested final status.
The suggestion is advisory; the final status is whatever the completing
user chooses.
"""

from typing import NamedTuple, Optional

from ..inspection_constants import (
    INSPECTION_ACCEPTED,
    INSPECTION_REJECTED,
    STATUS_FAIL,
    STATUS_PASS,
    STATUS_PENDING,
)
from ..models.inspection_report import InspectionReport


class ResultSummary(NamedTuple):
    total: int
    passed: int
    failed: int
    pending: int
    suggested_status: Optional[str]


def summarize_results(report: InspectionReport) -> ResultSummary:
    """
    Count parameter statuses and suggest a final status.

    Suggestion rules:
    - Any FAIL → REJECTED
    - All parameters PASS (and there is at least one) → ACCEPTED
    - Otherwise (nothing measured yet, or measurements pending) → None
    """
    statuses = [p.status for p in report.parameters]
    passed = statuses.count(STATUS_PASS)
    failed = statuses.count(STATUS_FAIL)
    pending = statuses.count(STATUS_PENDING)

    if failed:
        suggested = INSPECTION_REJECTED
    elif statuses and passed == len(statuses):
        suggested = INSPECTION_ACCEPTED
    else:
        suggested = None

    return ResultSummary(
        total=len(statuses),
        passed=passed,
        failed=failed,
        pending=pending,
        suggested_status=suggested
    )

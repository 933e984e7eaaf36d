"""
Inspection workflow operations.

Pure transformations over the InspectionReport aggregate. Each function
takes a report and returns a new report (or the same report for no-ops).

Modules:
- parameters: add/remove/update parameters with derived-field recomputation
- product_details: product details updates
- evidence: report-level and per-parameter evidence
- sign_off: per-role signatures and inspection completion
- results: status counts and suggested final status
"""

from .evidence import add_parameter_evidence, add_report_evidence, remove_parameter_evidence
from .parameters import (
    add_parameter,
    clear_loading_images,
    get_parameter,
    next_parameter_id,
    remove_parameter,
    update_parameter,
)
from .product_details import update_product_details
from .results import ResultSummary, summarize_results
from .sign_off import complete_inspection, pending_sign_offs, sign_off, signature_state

__all__ = [
    "add_parameter",
    "add_parameter_evidence",
    "clear_loading_images",
    "add_report_evidence",
    "complete_inspection",
    "get_parameter",
    "next_parameter_id",
    "pending_sign_offs",
    "remove_parameter",
    "remove_parameter_evidence",
    "ResultSummary",
    "sign_off",
    "signature_state",
    "summarize_results",
    "update_parameter",
    "update_product_details",
]

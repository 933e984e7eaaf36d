"""
Inspection session.

An InspectionSession holds the single in-memory InspectionReport that the
people in an inspection room work on. It applies the pure workflow
operations, replaces its report atomically with each result, and writes
every effective change through to the draft cache.

Session states:
- LIVE: operations are accepted (subject to role and completion rules)
- CLOSED: after close(); every operation raises SessionClosedError.
  Closing leaves the draft in the cache.

Rules applied on top of the workflow operations:
- Editing (parameters, product details, evidence) is inspector-only
- Nothing can be edited or signed once the inspection is complete
- Each role signs on its own behalf (the session's role)
- Completion has no role gate; authorization for it is the caller's concern

Operations that resolve to no-ops (unknown parameter id, evidence index out
of range, completing an already complete inspection) leave the report and
the draft cache untouched.

GD&T image results are the one thing merged after close or completion: a
request in flight always resolves the parameter's "loading" sentinel to the
image or to absent.
"""

import logging
from typing import Any, Dict, Optional

from ..exceptions import (
    ImageGenerationError,
    InspectionLockedError,
    PermissionDeniedError,
    SessionClosedError,
)
from ..inspection_constants import GDT_IMAGE_LOADING, ROLE_INSPECTOR, find_gdt_symbol
from ..models.evidence import Evidence
from ..models.inspection_report import InspectionReport
from ..repositories.inspection_repository import InspectionRepository
from ..workflow import evidence as evidence_workflow
from ..workflow import parameters as parameter_workflow
from ..workflow.sign_off import complete_inspection as complete_report
from ..workflow.sign_off import sign_off as sign_off_report
from ..workflow.product_details import update_product_details
from ..workflow.results import ResultSummary, summarize_results
from .draft_service import DraftService, SOURCE_CANONICAL
from .image_generation import GdtImageGenerator

logger = logging.getLogger(__name__)

SESSION_LIVE = "LIVE"
SESSION_CLOSED = "CLOSED"


class InspectionSession:
    """
    Live inspection session for one report and one acting role.

    Uses dependency injection for the draft service, the inspection
    repository (used to persist the report on completion) and the image
    generator.
    """

    def __init__(
        self,
        report: InspectionReport,
        role: str,
        draft_service: DraftService,
        inspection_repository: Optional[InspectionRepository] = None,
        image_generator: Optional[GdtImageGenerator] = None,
        source: str = SOURCE_CANONICAL,
        warning: Optional[str] = None
    ):
        """
        Args:
            report: Report the session starts from
            role: Role acting in this session
            draft_service: Draft cache for write-through
            inspection_repository: Optional - completed reports are saved here
            image_generator: Optional - required for generate_gdt_image
            source: Where the report came from ("canonical" or "draft")
            warning: Message for the user when a cached draft was dropped

        Raises:
            ValueError: If draft_service is None
        """
        if draft_service is None:
            raise ValueError("InspectionSession requires draft_service (cannot be None)")

        self._report = report
        self.role = role
        self.draft_service = draft_service
        self.inspection_repo = inspection_repository
        self.image_generator = image_generator
        self.source = source
        self.warning = warning
        self._state = SESSION_LIVE

    @property
    def report(self) -> InspectionReport:
        """The current report value."""
        return self._report

    @property
    def state(self) -> str:
        return self._state

    @property
    def is_live(self) -> bool:
        return self._state == SESSION_LIVE

    @property
    def can_edit(self) -> bool:
        """Whether the form should offer editing to this session's role."""
        return self.is_live and self.role == ROLE_INSPECTOR and not self._report.is_complete

    def _require_live(self) -> None:
        if not self.is_live:
            raise SessionClosedError(f"Session for inspection {self._report.id} is closed")

    def _require_open_inspection(self) -> None:
        self._require_live()
        if self._report.is_complete:
            raise InspectionLockedError(
                f"Inspection {self._report.id} is complete ({self._report.final_status})"
            )

    def _require_editable(self) -> None:
        self._require_open_inspection()
        if self.role != ROLE_INSPECTOR:
            raise PermissionDeniedError(f"Role {self.role} cannot edit the inspection")

    def _commit(self, updated: InspectionReport) -> InspectionReport:
        """Replace the current report and write it through to the draft cache."""
        if updated is self._report:
            return self._report

        self._report = updated
        self.draft_service.save_draft(updated)
        return updated

    # Parameters

    def add_parameter(self) -> InspectionReport:
        self._require_editable()
        return self._commit(parameter_workflow.add_parameter(self._report))

    def remove_parameter(self, parameter_id: int) -> InspectionReport:
        self._require_editable()
        return self._commit(parameter_workflow.remove_parameter(self._report, parameter_id))

    def update_parameter(self, parameter_id: int, changes: Dict[str, Any]) -> InspectionReport:
        """
        Update a parameter (see workflow.parameters.update_parameter).

        Raises:
            ValidationError: If changes are invalid (report unchanged)
        """
        self._require_editable()
        return self._commit(
            parameter_workflow.update_parameter(self._report, parameter_id, changes)
        )

    def update_product_details(self, changes: Dict[str, Any]) -> InspectionReport:
        self._require_editable()
        return self._commit(update_product_details(self._report, changes))

    # Evidence

    def add_report_evidence(self, item: Evidence) -> InspectionReport:
        self._require_editable()
        return self._commit(evidence_workflow.add_report_evidence(self._report, item))

    def add_parameter_evidence(self, parameter_id: int, item: Evidence) -> InspectionReport:
        self._require_editable()
        return self._commit(
            evidence_workflow.add_parameter_evidence(self._report, parameter_id, item)
        )

    def remove_parameter_evidence(self, parameter_id: int, index: int) -> InspectionReport:
        self._require_editable()
        return self._commit(
            evidence_workflow.remove_parameter_evidence(self._report, parameter_id, index)
        )

    # Sign-off and completion

    def sign_off(self, comment: str) -> InspectionReport:
        """Sign the report on behalf of this session's role."""
        self._require_open_inspection()
        return self._commit(sign_off_report(self._report, self.role, comment))

    def complete_inspection(self, final_status: str) -> InspectionReport:
        """
        Complete the inspection.

        The completed report is also saved to the inspection repository when
        one is configured, so the canonical copy carries the final status.
        """
        self._require_live()
        completed = complete_report(self._report, final_status)
        if completed is self._report:
            return self._report

        self._commit(completed)
        if self.inspection_repo is not None:
            self.inspection_repo.update(completed)
        return completed

    def summarize(self) -> ResultSummary:
        return summarize_results(self._report)

    # GD&T images

    async def generate_gdt_image(self, parameter_id: int) -> None:
        """
        Generate the GD&T illustration for a parameter.

        The parameter shows the "loading" sentinel while the request is in
        flight. The result is merged into the parameter as it is when the
        request completes, so edits made in the meantime are kept; only
        gdt_image is overwritten. Unknown parameters, parameters without a
        symbol, and unknown symbols are logged and ignored.

        Raises:
            ImageGenerationError: If generation failed; gdt_image has been
                                  reset to absent and the call can be retried
            ValueError: If no image generator is configured
        """
        self._require_editable()
        if self.image_generator is None:
            raise ValueError("No image generator configured for this session")

        parameter = parameter_workflow.get_parameter(self._report, parameter_id)
        if parameter is None or parameter.gdt_symbol is None:
            logger.error(f"Parameter {parameter_id} or its GD&T symbol not found")
            return

        symbol = find_gdt_symbol(parameter.gdt_symbol)
        if symbol is None:
            logger.error(f"GD&T symbol {parameter.gdt_symbol!r} not found in symbol table")
            return

        self._apply_gdt_image(parameter_id, GDT_IMAGE_LOADING)

        try:
            image = await self.image_generator.generate(symbol["name"], symbol["symbol"])
        except Exception as e:
            logger.error(f"Failed to generate GD&T image for parameter {parameter_id}: {e}")
            self._apply_gdt_image(parameter_id, None)
            raise ImageGenerationError(
                "The image generator failed. Please try again."
            ) from e

        self._apply_gdt_image(parameter_id, image)

    def _apply_gdt_image(self, parameter_id: int, image: Optional[str]) -> None:
        """
        Merge a gdt_image value into the current report.

        Applied even after close() or completion, so a request in flight
        always resolves the "loading" sentinel in the draft and, for a
        completed report, in the canonical copy.
        """
        before = self._report
        updated = self._commit(
            parameter_workflow.update_parameter(before, parameter_id, {"gdt_image": image})
        )
        if updated is before:
            return

        if not self.is_live:
            logger.info(f"Applied late GD&T image update for parameter {parameter_id} after close")
        if updated.is_complete and self.inspection_repo is not None:
            self.inspection_repo.update(updated)

    def close(self) -> None:
        """Close the session. The draft stays cached."""
        self._state = SESSION_CLOSED
        logger.info(f"Closed session for inspection {self._report.id} (role {self.role})")

"""
Inspection service.

Scheduling and listing of inspections, and opening inspection sessions.

Opening a session by report id is the only way to address an inspection:
1. Load the canonical report from the repository (unknown id → None)
2. Reconcile with any cached draft (see DraftService.resume)
3. Return a LIVE InspectionSession for the requested role
"""

import logging
from typing import List, Optional
from uuid import UUID

from ..models.inspection_report import InspectionReport
from ..repositories.inspection_repository import InspectionRepository
from .draft_service import ConfirmResume, DraftService, ResumeResult
from .image_generation import GdtImageGenerator
from .inspection_session import InspectionSession

logger = logging.getLogger(__name__)


class InspectionService:
    """
    Service for inspection scheduling and session entry.

    Uses dependency injection to receive the inspection repository, the
    draft service and (optionally) the GD&T image generator handed to each
    session.
    """

    def __init__(
        self,
        inspection_repository: InspectionRepository,
        draft_service: DraftService,
        image_generator: Optional[GdtImageGenerator] = None
    ):
        """
        Raises:
            ValueError: If inspection_repository or draft_service is None
        """
        if inspection_repository is None:
            raise ValueError("InspectionService requires inspection_repository (cannot be None)")
        if draft_service is None:
            raise ValueError("InspectionService requires draft_service (cannot be None)")

        self.inspection_repo = inspection_repository
        self.draft_service = draft_service
        self.image_generator = image_generator

    def schedule_inspection(self, title: str, inspector_id: UUID) -> InspectionReport:
        """
        Schedule a new inspection for an inspector.

        The new report has no parameters, no evidence and no signatures.

        Raises:
            DatabaseError: If the database operation fails
        """
        report = InspectionReport(title=title, scheduled_by_id=inspector_id)
        created = self.inspection_repo.create(report)
        logger.info(f"Scheduled inspection {created.id} ({title!r}) for inspector {inspector_id}")
        return created

    def get_inspection(self, report_id: UUID) -> Optional[InspectionReport]:
        return self.inspection_repo.get_by_id(report_id)

    def list_for_inspector(self, inspector_id: UUID) -> List[InspectionReport]:
        """Inspections scheduled by an inspector, newest first."""
        return self.inspection_repo.get_by_inspector(inspector_id)

    def list_all(self) -> List[InspectionReport]:
        """All inspections, newest first."""
        return self.inspection_repo.get_all()

    def resume(self, report_id: UUID, confirm_resume: ConfirmResume) -> Optional[ResumeResult]:
        """
        Reconcile a report with its cached draft without opening a session.

        Returns:
            ResumeResult, or None if no report has that id
        """
        canonical = self.inspection_repo.get_by_id(report_id)
        if canonical is None:
            logger.warning(f"Inspection {report_id} not found")
            return None
        return self.draft_service.resume(canonical, confirm_resume)

    def open_session(
        self,
        report_id: UUID,
        role: str,
        confirm_resume: ConfirmResume
    ) -> Optional[InspectionSession]:
        """
        Open a LIVE session on an inspection.

        Args:
            report_id: Identity of the inspection
            role: Role acting in the session
            confirm_resume: Asked whether to keep a cached draft, if any

        Returns:
            InspectionSession, or None if no report has that id. If a draft
            had to be dropped, session.warning carries the message for the user.
        """
        result = self.resume(report_id, confirm_resume)
        if result is None:
            return None

        session = InspectionSession(
            report=result.report,
            role=role,
            draft_service=self.draft_service,
            inspection_repository=self.inspection_repo,
            image_generator=self.image_generator,
            source=result.source,
            warning=result.warning
        )
        logger.info(f"Opened inspection {report_id} as {role} from {result.source}")
        return session

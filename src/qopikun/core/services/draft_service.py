"""
Draft reconciliation service.

While an inspection session is open, every change to the report is written
through to a local draft cache, so an interrupted session can be resumed.
This service owns that cache and decides, when a report is opened again,
whether to continue from the draft or from the canonical report:

1. No draft cached → use the canonical report
2. Draft cached → ask the caller (keep draft or discard?)
   - keep → parse and use the draft
   - discard → use the canonical report
3. Draft can't be parsed → report MalformedDraftError as a warning and use
   the canonical report; the session still opens

Whichever report is chosen, GD&T images left on the "loading" sentinel are
reset to absent: no generation request outlives the session that made it.

Drafts are not cleared when a session closes normally. They are only
overwritten by the next session's writes or removed with discard_draft().

Draft key: "inspection_draft_<report id>". Value: the full report as JSON.
"""

import logging
from typing import Callable, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from ..exceptions import MalformedDraftError, QopikunError
from ..models.inspection_report import InspectionReport
from ..repositories.key_value_store import IKeyValueStore
from ..workflow.parameters import clear_loading_images

logger = logging.getLogger(__name__)

DRAFT_KEY_PREFIX = "inspection_draft_"

SOURCE_CANONICAL = "canonical"
SOURCE_DRAFT = "draft"

# Called with the canonical report when a draft exists; True keeps the draft
ConfirmResume = Callable[[InspectionReport], bool]


class ResumeResult(BaseModel):
    """
    Outcome of reconciling a draft against the canonical report.

    - report: The report the session starts from
    - source: "draft" or "canonical"
    - warning: Message for the user when a draft had to be dropped
    """

    report: InspectionReport
    source: str
    warning: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class DraftService:
    """
    Service for caching and restoring report drafts.

    Uses dependency injection to receive the key/value store.
    """

    def __init__(self, store: IKeyValueStore):
        """
        Raises:
            ValueError: If store is None
        """
        if store is None:
            raise ValueError("DraftService requires store (cannot be None)")

        self.store = store

    @staticmethod
    def draft_key(report_id: UUID) -> str:
        """Cache key for a report's draft."""
        return f"{DRAFT_KEY_PREFIX}{report_id}"

    def save_draft(self, report: InspectionReport) -> None:
        """Write the full report to its draft key (last write wins)."""
        self.store.set(self.draft_key(report.id), report.model_dump_json())

    def has_draft(self, report_id: UUID) -> bool:
        return self.store.get(self.draft_key(report_id)) is not None

    def discard_draft(self, report_id: UUID) -> None:
        """Remove a report's draft, if any."""
        self.store.delete(self.draft_key(report_id))
        logger.info(f"Discarded draft for inspection {report_id}")

    def load_draft(self, report_id: UUID) -> Optional[InspectionReport]:
        """
        Parse the cached draft for a report.

        Returns:
            The draft report, or None if no draft is cached

        Raises:
            MalformedDraftError: If the draft can't be parsed, fails
                                 validation, or belongs to another report
        """
        raw = self.store.get(self.draft_key(report_id))
        if raw is None:
            return None

        try:
            draft = InspectionReport.model_validate_json(raw)
        except (ValueError, QopikunError) as e:
            # pydantic.ValidationError is a ValueError; model validators
            # raise application errors directly
            raise MalformedDraftError(f"Draft for inspection {report_id} is corrupted: {e}") from e

        if draft.id != report_id:
            raise MalformedDraftError(
                f"Draft stored for inspection {report_id} belongs to inspection {draft.id}"
            )

        return draft

    def resume(self, canonical: InspectionReport, confirm: ConfirmResume) -> ResumeResult:
        """
        Choose the starting report for a session.

        Args:
            canonical: Canonical report from the inspection repository
            confirm: Asked only when a draft exists; returns True to keep the
                     draft, False to start from the canonical report

        Returns:
            ResumeResult with the chosen report and its source
        """
        if not self.has_draft(canonical.id):
            return ResumeResult(report=clear_loading_images(canonical), source=SOURCE_CANONICAL)

        if not confirm(canonical):
            logger.info(f"Draft for inspection {canonical.id} declined; using canonical report")
            return ResumeResult(report=clear_loading_images(canonical), source=SOURCE_CANONICAL)

        try:
            draft = self.load_draft(canonical.id)
        except MalformedDraftError as e:
            logger.error(f"Failed to load draft: {e}")
            return ResumeResult(
                report=clear_loading_images(canonical),
                source=SOURCE_CANONICAL,
                warning=(
                    "The saved draft is corrupted and could not be loaded. "
                    "Starting with the original report."
                )
            )

        # load_draft returns None only if the draft vanished after has_draft
        if draft is None:
            return ResumeResult(report=clear_loading_images(canonical), source=SOURCE_CANONICAL)

        logger.info(f"Resumed inspection {canonical.id} from draft")
        return ResumeResult(report=clear_loading_images(draft), source=SOURCE_DRAFT)

"""
Unit tests for InspectionSession.

Tests role gating, completion locking, closed sessions, draft write-through
and asynchronous GD&T image generation.
"""

import asyncio
from uuid import uuid4

import pytest

from qopikun.core.exceptions import (
    ImageGenerationError,
    InspectionLockedError,
    PermissionDeniedError,
    SessionClosedError,
    ValidationError,
)
from qopikun.core.models.evidence import Evidence
from qopikun.core.services.image_generation import GdtImageGenerator
from qopikun.core.services.inspection_service import InspectionService
from qopikun.core.services.inspection_session import InspectionSession
from qopikun.core.workflow.parameters import get_parameter


class GatedImageGenerator(GdtImageGenerator):
    """Generator that waits for the test to release each request."""

    def __init__(self, image="data:image/png;base64,R0RU", error=None):
        self.image = image
        self.error = error
        self.calls = []
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def generate(self, symbol_name, symbol_code):
        self.calls.append((symbol_name, symbol_code))
        self.started.set()
        await self.release.wait()
        if self.error is not None:
            raise self.error
        return self.image


@pytest.fixture
def stored_report(inspection_repository, sample_report):
    """The sample report saved as the canonical copy."""
    return inspection_repository.create(sample_report)


def make_session(report, role, draft_service, inspection_repository=None, image_generator=None):
    return InspectionSession(
        report=report,
        role=role,
        draft_service=draft_service,
        inspection_repository=inspection_repository,
        image_generator=image_generator
    )


@pytest.fixture
def inspector_session(stored_report, draft_service, inspection_repository):
    return make_session(stored_report, "INSPECTOR", draft_service, inspection_repository)


@pytest.fixture
def supervisor_session(stored_report, draft_service, inspection_repository):
    return make_session(stored_report, "SUPERVISOR", draft_service, inspection_repository)


class TestSessionEditing:
    """Test editing operations and draft write-through."""

    def test_requires_draft_service(self, sample_report):
        with pytest.raises(ValueError, match="draft_service"):
            InspectionSession(sample_report, "INSPECTOR", None)

    def test_new_session_is_live(self, inspector_session):
        assert inspector_session.state == "LIVE"
        assert inspector_session.is_live
        assert inspector_session.can_edit
        assert inspector_session.source == "canonical"
        assert inspector_session.warning is None

    def test_edit_writes_draft(self, inspector_session, draft_service):
        """Test every effective change is written through to the draft."""
        report = inspector_session.update_parameter(2, {"actual": 25.1})

        assert get_parameter(report, 2).status == "PASS"
        assert inspector_session.report is report
        assert draft_service.load_draft(report.id) == report

    def test_add_and_remove_parameter(self, inspector_session):
        inspector_session.add_parameter()
        assert [p.id for p in inspector_session.report.parameters] == [1, 2, 3]

        inspector_session.remove_parameter(1)
        assert [p.id for p in inspector_session.report.parameters] == [2, 3]

    def test_noop_does_not_write_draft(self, inspector_session, draft_service, mocker):
        """Test operations that change nothing leave the draft cache alone."""
        save = mocker.spy(draft_service, "save_draft")
        before = inspector_session.report

        inspector_session.remove_parameter(99)
        inspector_session.update_parameter(99, {"actual": 1.0})
        inspector_session.remove_parameter_evidence(1, 5)

        assert inspector_session.report is before
        save.assert_not_called()

    def test_rejected_update_leaves_report_unchanged(self, inspector_session, draft_service):
        before = inspector_session.report

        with pytest.raises(ValidationError):
            inspector_session.update_parameter(1, {"utl": 3.0})

        assert inspector_session.report is before
        assert draft_service.has_draft(before.id) is False

    def test_product_details_and_evidence(self, inspector_session):
        inspector_session.update_product_details({"serial_number": "SN-7"})
        inspector_session.add_report_evidence(Evidence(image_data="data:,a", caption="overview"))
        inspector_session.add_parameter_evidence(2, Evidence(image_data="data:,b"))

        report = inspector_session.report
        assert report.product_details.serial_number == "SN-7"
        assert [e.caption for e in report.evidence] == ["overview"]
        assert len(get_parameter(report, 2).evidence) == 1

    def test_summarize(self, inspector_session):
        summary = inspector_session.summarize()

        assert (summary.total, summary.passed, summary.pending) == (2, 1, 1)


class TestSessionRoles:
    """Test that only inspectors edit and every role signs for itself."""

    def test_non_inspector_cannot_edit(self, supervisor_session):
        assert supervisor_session.can_edit is False

        with pytest.raises(PermissionDeniedError):
            supervisor_session.update_parameter(1, {"actual": 10.0})
        with pytest.raises(PermissionDeniedError):
            supervisor_session.add_parameter()
        with pytest.raises(PermissionDeniedError):
            supervisor_session.add_report_evidence(Evidence(image_data="data:,x"))

    def test_sign_off_uses_session_role(self, supervisor_session, draft_service):
        report = supervisor_session.sign_off("Witnessed all measurements")

        assert set(report.signatures) == {"SUPERVISOR"}
        assert report.signatures["SUPERVISOR"].comment == "Witnessed all measurements"
        assert draft_service.load_draft(report.id) == report


class TestSessionCompletion:
    """Test completion persistence and locking."""

    def test_complete_persists_canonical_report(self, supervisor_session, inspection_repository):
        """Test completion is saved to the repository as well as the draft."""
        report = supervisor_session.complete_inspection("ACCEPTED")

        stored = inspection_repository.get_by_id(report.id)
        assert stored.is_complete is True
        assert stored.final_status == "ACCEPTED"

    def test_complete_without_repository(self, stored_report, draft_service):
        session = make_session(stored_report, "INSPECTOR", draft_service)

        assert session.complete_inspection("ON_HOLD").final_status == "ON_HOLD"

    def test_completed_inspection_is_locked(self, inspector_session):
        inspector_session.complete_inspection("REJECTED")

        assert inspector_session.can_edit is False
        with pytest.raises(InspectionLockedError):
            inspector_session.update_parameter(1, {"actual": 10.0})
        with pytest.raises(InspectionLockedError):
            inspector_session.sign_off("late")

    def test_second_completion_is_noop(self, inspector_session, mocker):
        first = inspector_session.complete_inspection("REJECTED")
        save = mocker.spy(inspector_session.draft_service, "save_draft")

        again = inspector_session.complete_inspection("ACCEPTED")

        assert again is first
        assert again.final_status == "REJECTED"
        save.assert_not_called()


class TestSessionClose:
    """Test closed sessions."""

    def test_closed_session_rejects_operations(self, inspector_session):
        inspector_session.close()

        assert inspector_session.state == "CLOSED"
        with pytest.raises(SessionClosedError):
            inspector_session.add_parameter()
        with pytest.raises(SessionClosedError):
            inspector_session.sign_off("")
        with pytest.raises(SessionClosedError):
            inspector_session.complete_inspection("ACCEPTED")

    def test_close_keeps_draft(self, inspector_session, draft_service):
        report = inspector_session.add_parameter()

        inspector_session.close()

        assert draft_service.load_draft(report.id) == report


class TestGdtImageGeneration:
    """Test asynchronous image generation and merging."""

    @pytest.fixture
    def generator(self):
        return GatedImageGenerator()

    @pytest.fixture
    def session(self, stored_report, draft_service, inspection_repository, generator):
        return make_session(
            stored_report, "INSPECTOR", draft_service, inspection_repository, generator
        )

    @pytest.mark.asyncio
    async def test_success(self, session, generator, draft_service):
        task = asyncio.create_task(session.generate_gdt_image(2))
        await generator.started.wait()
        assert get_parameter(session.report, 2).gdt_image == "loading"

        generator.release.set()
        await task

        assert generator.calls == [("Flatness", "⏥")]
        assert get_parameter(session.report, 2).gdt_image == "data:image/png;base64,R0RU"
        assert draft_service.load_draft(session.report.id) == session.report

    @pytest.mark.asyncio
    async def test_result_merges_into_current_parameter(self, session, generator):
        """Test edits made while the request is in flight are kept."""
        task = asyncio.create_task(session.generate_gdt_image(2))
        await generator.started.wait()
        session.update_parameter(2, {"actual": 25.1, "description": "Flatness of platform"})

        generator.release.set()
        await task

        param = get_parameter(session.report, 2)
        assert param.gdt_image == "data:image/png;base64,R0RU"
        assert param.actual == 25.1
        assert param.description == "Flatness of platform"
        assert param.status == "PASS"

    @pytest.mark.asyncio
    async def test_failure_resets_image_and_raises(self, session, generator, draft_service):
        generator.error = RuntimeError("quota exceeded")
        generator.release.set()

        with pytest.raises(ImageGenerationError, match="try again"):
            await session.generate_gdt_image(2)

        assert get_parameter(session.report, 2).gdt_image is None
        assert get_parameter(draft_service.load_draft(session.report.id), 2).gdt_image is None

    @pytest.mark.asyncio
    async def test_late_result_after_close_reaches_draft(self, session, generator, draft_service):
        """Test a result arriving after close still replaces the loading sentinel."""
        task = asyncio.create_task(session.generate_gdt_image(2))
        await generator.started.wait()
        session.close()

        generator.release.set()
        await task

        draft = draft_service.load_draft(session.report.id)
        assert get_parameter(draft, 2).gdt_image == "data:image/png;base64,R0RU"

    @pytest.mark.asyncio
    async def test_late_failure_after_close_clears_loading(
        self, session, generator, draft_service, stored_report
    ):
        """Test a failure after close leaves no sentinel for the next session."""
        generator.error = RuntimeError("service unavailable")
        task = asyncio.create_task(session.generate_gdt_image(2))
        await generator.started.wait()
        session.close()

        generator.release.set()
        with pytest.raises(ImageGenerationError):
            await task

        resumed = draft_service.resume(stored_report, lambda canonical: True)
        assert resumed.source == "draft"
        assert get_parameter(resumed.report, 2).gdt_image is None

    @pytest.mark.asyncio
    async def test_result_after_completion_reaches_canonical_report(
        self, session, generator, inspection_repository
    ):
        """Test completing while a request is in flight doesn't freeze the sentinel."""
        task = asyncio.create_task(session.generate_gdt_image(2))
        await generator.started.wait()
        session.complete_inspection("ACCEPTED")

        generator.release.set()
        await task

        stored = inspection_repository.get_by_id(session.report.id)
        assert stored.is_complete is True
        assert stored.final_status == "ACCEPTED"
        assert get_parameter(stored, 2).gdt_image == "data:image/png;base64,R0RU"
        assert stored == session.report

    @pytest.mark.asyncio
    async def test_parameter_without_symbol_is_ignored(self, session, generator, stored_report):
        await session.generate_gdt_image(1)

        assert generator.calls == []
        assert session.report is stored_report

    @pytest.mark.asyncio
    async def test_requires_generator(self, inspector_session):
        with pytest.raises(ValueError, match="image generator"):
            await inspector_session.generate_gdt_image(2)

    @pytest.mark.asyncio
    async def test_non_inspector_cannot_generate(self, supervisor_session):
        with pytest.raises(PermissionDeniedError):
            await supervisor_session.generate_gdt_image(2)


class TestSessionLifecycle:
    """Test a full inspection from opening to the terminal report."""

    def test_sign_off_and_complete_round_trip(
        self, inspection_repository, draft_service, sample_evidence
    ):
        """Test the completed report reloads unchanged from repository and draft."""
        service = InspectionService(inspection_repository, draft_service)
        scheduled = service.schedule_inspection("FAI for Landing Gear Strut", uuid4())

        def keep_draft(canonical):
            return True

        inspector = service.open_session(scheduled.id, "INSPECTOR", keep_draft)
        inspector.add_parameter()
        inspector.update_parameter(1, {"description": "Bore diameter", "nominal": 40.0,
                                       "tolerance_value": 0.05, "actual": 40.03})
        inspector.add_parameter()
        inspector.update_parameter(2, {"nominal": 12.0, "tolerance_type": "-",
                                       "tolerance_value": 0.1, "actual": 12.02})
        inspector.add_parameter_evidence(1, sample_evidence)
        inspector.add_report_evidence(sample_evidence)
        inspector.update_product_details({"part_name": "Landing Gear Strut"})
        inspector.sign_off("Measured per drawing rev B")
        inspector.close()

        supervisor = service.open_session(scheduled.id, "SUPERVISOR", keep_draft)
        assert supervisor.source == "draft"
        supervisor.sign_off("Witnessed")
        customer = service.open_session(scheduled.id, "CUSTOMER", keep_draft)
        customer.sign_off("")
        completed = customer.complete_inspection("REJECTED")

        assert completed.is_complete is True
        assert set(completed.signatures) == {"INSPECTOR", "SUPERVISOR", "CUSTOMER"}
        assert get_parameter(completed, 1).status == "PASS"
        assert get_parameter(completed, 1).deviation == pytest.approx(0.03)
        assert get_parameter(completed, 2).status == "FAIL"
        assert (get_parameter(completed, 2).utl, get_parameter(completed, 2).ltl) == (12.0, 11.9)
        assert get_parameter(completed, 1).evidence == [sample_evidence]

        assert inspection_repository.get_by_id(scheduled.id) == completed
        assert draft_service.load_draft(scheduled.id) == completed

"""
Unit tests for DraftService.

Tests draft write-through storage and the resume decision:
no draft, draft kept, draft declined, and malformed drafts.
"""

import pytest
from unittest.mock import Mock

from qopikun.core.exceptions import MalformedDraftError
from qopikun.core.models.inspection_report import InspectionReport
from qopikun.core.services.draft_service import DraftService, SOURCE_CANONICAL, SOURCE_DRAFT
from qopikun.core.workflow.parameters import add_parameter, get_parameter, update_parameter


class TestDraftService:
    """Test draft storage and loading."""

    def test_requires_store(self):
        with pytest.raises(ValueError, match="store"):
            DraftService(None)

    def test_draft_key(self, sample_report):
        assert DraftService.draft_key(sample_report.id) == f"inspection_draft_{sample_report.id}"

    def test_save_and_load_round_trip(self, draft_service, sample_report):
        """Test a saved draft loads back deep-equal to the original."""
        draft_service.save_draft(sample_report)

        assert draft_service.load_draft(sample_report.id) == sample_report

    def test_load_missing_draft(self, draft_service, sample_report):
        assert draft_service.load_draft(sample_report.id) is None
        assert draft_service.has_draft(sample_report.id) is False

    def test_last_write_wins(self, draft_service, sample_report):
        draft_service.save_draft(sample_report)
        newer = add_parameter(sample_report)

        draft_service.save_draft(newer)

        assert len(draft_service.load_draft(sample_report.id).parameters) == 3

    def test_discard(self, draft_service, sample_report):
        draft_service.save_draft(sample_report)

        draft_service.discard_draft(sample_report.id)

        assert draft_service.has_draft(sample_report.id) is False

    def test_unparseable_draft(self, draft_service, kv_store, sample_report):
        kv_store.set(DraftService.draft_key(sample_report.id), "{truncated")

        with pytest.raises(MalformedDraftError, match="corrupted"):
            draft_service.load_draft(sample_report.id)

    def test_draft_with_stale_derived_fields(self, draft_service, kv_store, sample_report):
        """Test a draft whose status disagrees with its measurement is malformed."""
        stale = sample_report.model_dump_json().replace('"status":"PASS"', '"status":"FAIL"')
        kv_store.set(DraftService.draft_key(sample_report.id), stale)

        with pytest.raises(MalformedDraftError):
            draft_service.load_draft(sample_report.id)

    def test_draft_for_other_report(self, draft_service, kv_store, sample_report, empty_report):
        """Test a draft stored under another report's key is malformed."""
        other = InspectionReport(title="Other", scheduled_by_id=empty_report.scheduled_by_id)
        kv_store.set(DraftService.draft_key(sample_report.id), other.model_dump_json())

        with pytest.raises(MalformedDraftError, match="belongs to"):
            draft_service.load_draft(sample_report.id)


class TestResume:
    """Test reconciling the canonical report with a cached draft."""

    @pytest.fixture
    def edited(self, sample_report):
        """The sample report with parameter 2 measured (a typical draft)."""
        return update_parameter(sample_report, 2, {"actual": 25.1})

    def test_no_draft_uses_canonical_without_asking(self, draft_service, sample_report):
        confirm = Mock(return_value=True)

        result = draft_service.resume(sample_report, confirm)

        assert result.report == sample_report
        assert result.source == SOURCE_CANONICAL
        assert result.warning is None
        confirm.assert_not_called()

    def test_keep_draft(self, draft_service, sample_report, edited):
        draft_service.save_draft(edited)
        confirm = Mock(return_value=True)

        result = draft_service.resume(sample_report, confirm)

        assert result.report == edited
        assert result.source == SOURCE_DRAFT
        confirm.assert_called_once_with(sample_report)

    def test_decline_draft_keeps_it_cached(self, draft_service, sample_report, edited):
        """Test declining uses the canonical report but leaves the draft."""
        draft_service.save_draft(edited)

        result = draft_service.resume(sample_report, lambda canonical: False)

        assert result.report == sample_report
        assert result.source == SOURCE_CANONICAL
        assert draft_service.has_draft(sample_report.id)

    def test_malformed_draft_falls_back_with_warning(self, draft_service, kv_store, sample_report):
        kv_store.set(DraftService.draft_key(sample_report.id), "not json at all")

        result = draft_service.resume(sample_report, lambda canonical: True)

        assert result.report == sample_report
        assert result.source == SOURCE_CANONICAL
        assert "corrupted" in result.warning

    def test_loading_image_reset_on_resume(self, draft_service, sample_report):
        """Test a draft saved mid-generation resumes without the loading sentinel."""
        draft = update_parameter(sample_report, 2, {"gdt_image": "loading", "actual": 25.1})
        draft_service.save_draft(draft)

        result = draft_service.resume(sample_report, lambda canonical: True)

        assert result.source == SOURCE_DRAFT
        assert get_parameter(result.report, 2).gdt_image is None
        assert get_parameter(result.report, 2).actual == 25.1

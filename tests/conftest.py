"""Pytest fixtures and configuration."""

import pytest
from datetime import datetime, timezone
from uuid import uuid4

from qopikun.database.schema import get_in_memory_connection
from qopikun.core.models.evidence import Evidence
from qopikun.core.models.inspection_parameter import InspectionParameter
from qopikun.core.models.inspection_report import InspectionReport
from qopikun.core.models.product_details import ProductDetails
from qopikun.core.models.user import User
from qopikun.core.repositories.inspection_repository import InspectionRepository
from qopikun.core.repositories.key_value_store import SqliteKeyValueStore
from qopikun.core.repositories.user_repository import UserRepository
from qopikun.core.services.draft_service import DraftService


@pytest.fixture
def db_connection():
    """Provide an in-memory database connection for tests."""
    conn = get_in_memory_connection()
    yield conn
    conn.close()


@pytest.fixture
def user_repository(db_connection):
    """Provide a user repository with test database."""
    return UserRepository(db_connection)


@pytest.fixture
def inspection_repository(db_connection):
    """Provide an inspection repository with test database."""
    return InspectionRepository(db_connection)


@pytest.fixture
def kv_store(db_connection):
    """Provide a key/value store with test database."""
    return SqliteKeyValueStore(db_connection)


@pytest.fixture
def draft_service(kv_store):
    """Provide a draft service backed by the test key/value store."""
    return DraftService(kv_store)


@pytest.fixture
def sample_inspector():
    """Provide a sample inspector user."""
    return User(username="inspector1", password="password", role="INSPECTOR")


@pytest.fixture
def empty_report():
    """Provide a freshly scheduled report with no parameters."""
    return InspectionReport(
        title="Sample Inspection for Turbine Blade",
        scheduled_by_id=uuid4(),
        created_at=datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)
    )


@pytest.fixture
def sample_evidence():
    """Provide a sample evidence item."""
    return Evidence(
        captured_at=datetime(2025, 3, 1, 10, 15, tzinfo=timezone.utc),
        image_data="data:image/jpeg;base64,AAAA",
        caption="Datum A surface"
    )


@pytest.fixture
def sample_report(empty_report, sample_evidence):
    """
    Provide a report with two parameters.

    Parameter 1: 10 +/- 0.5, measured 10.4 (PASS), one evidence item
    Parameter 2: 25 + 0.2, not measured (PENDING), flatness callout
    """
    return empty_report.model_copy(update={
        "product_details": ProductDetails(part_name="Turbine Blade", part_number="TB-1001"),
        "parameters": [
            InspectionParameter(
                id=1,
                description="Root width",
                nominal=10.0,
                tolerance_type="+/-",
                tolerance_value=0.5,
                actual=10.4,
                evidence=[sample_evidence]
            ),
            InspectionParameter(
                id=2,
                description="Platform flatness",
                nominal=25.0,
                tolerance_type="+",
                tolerance_value=0.2,
                gdt_symbol="⏥"
            ),
        ]
    })

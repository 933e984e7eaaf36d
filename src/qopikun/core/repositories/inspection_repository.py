"""
Inspection repository implementation.

This module provides the SQLite implementation of IRepository[InspectionReport].
It stores the canonical copy of every scheduled inspection.

Key design decisions:
- The full report aggregate is stored as JSON in report_json, produced by
  pydantic's model_dump_json and read back with model_validate_json, so the
  stored report is validated (derived fields included) on every read
- Listing columns (scheduled_by_id, is_complete, final_status, created_at)
  are kept in sync on every write
- Listings are ordered newest first
"""

import sqlite3
from typing import List, Optional
from uuid import UUID

from ..models.inspection_report import InspectionReport
from ..exceptions import DatabaseError, ReportNotFoundError
from .base import IRepository


class InspectionRepository(IRepository[InspectionReport]):
    """
    SQLite implementation of the inspection repository.

    Beyond CRUD it provides get_by_inspector for the inspector dashboard.
    """

    def __init__(self, connection: sqlite3.Connection):
        """
        Initialize repository with database connection.

        Args:
            connection: SQLite connection (should have row_factory=sqlite3.Row)
        """
        self.conn = connection

    def get_by_id(self, id: UUID) -> Optional[InspectionReport]:
        cursor = self.conn.cursor()
        cursor.execute("SELECT * FROM inspections WHERE id = ?", (str(id),))
        row = cursor.fetchone()

        if row is None:
            return None

        return self._row_to_report(row)

    def get_all(self) -> List[InspectionReport]:
        """
        Get all inspections, newest first.

        Returns:
            List of all InspectionReport objects
        """
        cursor = self.conn.cursor()
        cursor.execute("SELECT * FROM inspections ORDER BY created_at DESC")
        return [self._row_to_report(row) for row in cursor.fetchall()]

    def get_by_inspector(self, inspector_id: UUID) -> List[InspectionReport]:
        """
        Get the inspections scheduled by an inspector, newest first.

        Args:
            inspector_id: UUID of the inspector

        Returns:
            List of InspectionReport objects (empty if none)
        """
        cursor = self.conn.cursor()
        cursor.execute(
            "SELECT * FROM inspections WHERE scheduled_by_id = ? ORDER BY created_at DESC",
            (str(inspector_id),)
        )
        return [self._row_to_report(row) for row in cursor.fetchall()]

    def create(self, report: InspectionReport) -> InspectionReport:
        """
        Store a new inspection report.

        Raises:
            DatabaseError: If insertion fails (e.g., duplicate id)
        """
        try:
            cursor = self.conn.cursor()
            cursor.execute(
                """
                INSERT INTO inspections (
                    id, title, scheduled_by_id, is_complete,
                    final_status, created_at, report_json
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    str(report.id),
                    report.title,
                    str(report.scheduled_by_id),
                    1 if report.is_complete else 0,
                    report.final_status,
                    report.created_at.isoformat(),
                    report.model_dump_json()
                )
            )
            self.conn.commit()
            return report
        except sqlite3.Error as e:
            self.conn.rollback()
            raise DatabaseError(f"Failed to create inspection: {e}") from e

    def update(self, report: InspectionReport) -> InspectionReport:
        """
        Replace the stored copy of an inspection report.

        Raises:
            ReportNotFoundError: If the report doesn't exist
            DatabaseError: If update fails
        """
        if self.get_by_id(report.id) is None:
            raise ReportNotFoundError(f"Inspection with id {report.id} not found")

        try:
            cursor = self.conn.cursor()
            cursor.execute(
                """
                UPDATE inspections SET
                    title = ?,
                    scheduled_by_id = ?,
                    is_complete = ?,
                    final_status = ?,
                    report_json = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (
                    report.title,
                    str(report.scheduled_by_id),
                    1 if report.is_complete else 0,
                    report.final_status,
                    report.model_dump_json(),
                    str(report.id)
                )
            )
            self.conn.commit()
            return report
        except sqlite3.Error as e:
            self.conn.rollback()
            raise DatabaseError(f"Failed to update inspection: {e}") from e

    def delete(self, id: UUID) -> None:
        """
        Delete an inspection report.

        Raises:
            ReportNotFoundError: If the report doesn't exist
            DatabaseError: If deletion fails
        """
        if self.get_by_id(id) is None:
            raise ReportNotFoundError(f"Inspection with id {id} not found")

        try:
            cursor = self.conn.cursor()
            cursor.execute("DELETE FROM inspections WHERE id = ?", (str(id),))
            self.conn.commit()
        except sqlite3.Error as e:
            self.conn.rollback()
            raise DatabaseError(f"Failed to delete inspection: {e}") from e

    def _row_to_report(self, row: sqlite3.Row) -> InspectionReport:
        """
        Convert database row to InspectionReport.

        Raises:
            DatabaseError: If the stored JSON can't be parsed or validated
        """
        try:
            return InspectionReport.model_validate_json(row["report_json"])
        except Exception as e:
            raise DatabaseError(f"Failed to convert database row to InspectionReport: {e}") from e

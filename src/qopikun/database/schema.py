"""
Database schema definitions and initialization.

This module provides database schema creation and management for the
inspection room. It uses SQLite as the database backend and includes:

- Schema versioning for future migrations
- Table definitions for users, inspection reports and the key/value cache
- Database path management (stored in user's home directory)

Key tables:
- users: Identity store (username, password, role)
- inspections: Canonical inspection reports (full report stored as JSON,
  with the columns needed for listing and filtering)
- key_value_store: Local cache for drafts and inspector task lists

Database location:
- Default: ~/.qopikun/inspection_room.db
- In-memory: ":memory:" (for testing)
"""

import sqlite3
from pathlib import Path
from typing import Optional

from ..core.exceptions import DatabaseError

# Current schema version - increment when schema changes
SCHEMA_VERSION = 1


def get_database_path() -> Path:
    """
    Get the path to the database file in user's home directory.

    Creates the application data directory if it doesn't exist.

    Returns:
        Path to database file: ~/.qopikun/inspection_room.db
    """
    db_dir = Path.home() / ".qopikun"
    db_dir.mkdir(exist_ok=True)
    return db_dir / "inspection_room.db"


def create_schema(conn: sqlite3.Connection) -> None:
    """
    Create the database schema.

    Creates all tables, indexes, and schema version tracking. Safe to call on
    an existing database (all statements are IF NOT EXISTS).

    Args:
        conn: SQLite connection
    """
    cursor = conn.cursor()

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS schema_version (
            version INTEGER PRIMARY KEY
        )
    """)

    cursor.execute("""
        INSERT OR REPLACE INTO schema_version (version) VALUES (?)
    """, (SCHEMA_VERSION,))

    # Users table: identity store
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            username TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL,
            role TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            CHECK(role IN ('ADMIN', 'INSPECTOR', 'SUPERVISOR', 'CUSTOMER', 'THIRD_PARTY_INSPECTOR'))
        )
    """)

    # Inspections table: canonical reports
    # report_json holds the full aggregate; the other columns mirror fields
    # used for listing (owner, completion, ordering)
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS inspections (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            scheduled_by_id TEXT NOT NULL,
            is_complete INTEGER NOT NULL DEFAULT 0,
            final_status TEXT,
            created_at TEXT NOT NULL,
            report_json TEXT NOT NULL,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)

    # Key/value cache: drafts and task lists
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS key_value_store (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)

    # Index for the inspector dashboard listing
    cursor.execute("""
        CREATE INDEX IF NOT EXISTS idx_inspections_scheduled_by ON inspections(scheduled_by_id, created_at)
    """)

    conn.commit()


def initialize_database(db_path: Optional[Path] = None) -> sqlite3.Connection:
    """
    Initialize the database connection and create schema if needed.

    Args:
        db_path: Optional custom database path. If None, uses the default
                 path in the user's home directory.

    Returns:
        SQLite connection with row_factory set to sqlite3.Row

    Raises:
        DatabaseError: If the database version is newer than the application
    """
    if db_path is None:
        db_path = get_database_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row

    cursor = conn.cursor()
    cursor.execute("""
        SELECT name FROM sqlite_master
        WHERE type='table' AND name='schema_version'
    """)

    if cursor.fetchone() is None:
        create_schema(conn)
    else:
        cursor.execute("SELECT version FROM schema_version")
        row = cursor.fetchone()
        current_version = row[0] if row else 0

        if current_version < SCHEMA_VERSION:
            create_schema(conn)
            cursor.execute("UPDATE schema_version SET version = ?", (SCHEMA_VERSION,))
            conn.commit()
        elif current_version > SCHEMA_VERSION:
            conn.close()
            raise DatabaseError(
                f"Database schema version ({current_version}) is newer than "
                f"application version ({SCHEMA_VERSION}). Please update the application."
            )

    return conn


def get_in_memory_connection() -> sqlite3.Connection:
    """
    Get an in-memory SQLite connection for testing.

    Returns:
        SQLite connection with row_factory=sqlite3.Row and schema initialized
    """
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    create_schema(conn)
    return conn

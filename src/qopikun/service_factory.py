"""
Service factory for creating service instances with dependencies.

This module provides a factory function that creates all service instances
with their dependencies properly injected. This centralizes the dependency
setup and makes it easy to swap implementations (e.g., for testing).

The factory opens the database connection, initializes repositories, and
wires them together with services. This is the single point of
configuration for the application's service layer.
"""

from pathlib import Path
from typing import NamedTuple, Optional
import sqlite3

from .core.repositories.inspection_repository import InspectionRepository
from .core.repositories.key_value_store import SqliteKeyValueStore
from .core.repositories.user_repository import UserRepository
from .core.services.draft_service import DraftService
from .core.services.identity_service import IdentityService
from .core.services.image_generation import GdtImageGenerator
from .core.services.inspection_service import InspectionService
from .core.services.task_service import TaskService
from .database.schema import get_in_memory_connection, initialize_database


class Services(NamedTuple):
    identity_service: IdentityService
    inspection_service: InspectionService
    draft_service: DraftService
    task_service: TaskService
    connection: sqlite3.Connection


def create_services(
    database_path: Optional[Path] = None,
    image_generator: Optional[GdtImageGenerator] = None,
    in_memory: bool = False
) -> Services:
    """
    Create all service instances with dependencies injected.

    This function:
    1. Opens (or creates) the database and its schema
    2. Creates all repositories
    3. Creates all services with repositories injected

    Args:
        database_path: Optional path to database file. If None, uses the
                       default location in the user's home directory
        image_generator: Optional GD&T image generator for sessions
        in_memory: Use a throwaway in-memory database (ignores database_path)

    Returns:
        Services tuple (identity, inspection, draft and task services plus
        the open connection)

    Raises:
        DatabaseError: If database initialization fails
    """
    if in_memory:
        conn = get_in_memory_connection()
    else:
        conn = initialize_database(database_path)

    user_repo = UserRepository(conn)
    inspection_repo = InspectionRepository(conn)
    store = SqliteKeyValueStore(conn)

    draft_service = DraftService(store)

    return Services(
        identity_service=IdentityService(user_repo),
        inspection_service=InspectionService(
            inspection_repository=inspection_repo,
            draft_service=draft_service,
            image_generator=image_generator
        ),
        draft_service=draft_service,
        task_service=TaskService(store),
        connection=conn
    )

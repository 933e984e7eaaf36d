"""
Repository implementations for data access.

This module provides repository implementations that abstract database
operations. Entity repositories implement the IRepository interface,
enabling a consistent API and easy testing.

Repositories provided:
- UserRepository: Identity store (users)
- InspectionRepository: Canonical inspection reports
- SqliteKeyValueStore: Local cache for drafts and task lists
"""

from .base import IRepository
from .user_repository import UserRepository
from .inspection_repository import InspectionRepository
from .key_value_store import IKeyValueStore, SqliteKeyValueStore

__all__ = [
    "IRepository",
    "UserRepository",
    "InspectionRepository",
    "IKeyValueStore",
    "SqliteKeyValueStore"
]

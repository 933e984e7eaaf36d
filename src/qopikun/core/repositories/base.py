"""
Abstract repository interface.

This module defines the generic repository pattern interface (IRepository),
which provides a standard CRUD interface for data access. Repositories are
injected into services rather than accessed as global state, so tests can
substitute an in-memory database or a mock.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional, List
from uuid import UUID

# Type variable for the entity type
T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """
    Abstract repository interface for data access.

    Example usage:
        user_repo: IRepository[User] = UserRepository(conn)
        user = user_repo.get_by_id(some_uuid)
    """

    @abstractmethod
    def get_by_id(self, id: UUID) -> Optional[T]:
        """
        Get an entity by its ID.

        Returns:
            The entity if found, None otherwise
        """
        pass

    @abstractmethod
    def get_all(self) -> List[T]:
        """Get all entities, ordered by implementation."""
        pass

    @abstractmethod
    def create(self, entity: T) -> T:
        """
        Create a new entity.

        Raises:
            DatabaseError: If creation fails (e.g., constraint violation)
        """
        pass

    @abstractmethod
    def update(self, entity: T) -> T:
        """
        Update an existing entity.

        Raises:
            DatabaseError: If update fails
        """
        pass

    @abstractmethod
    def delete(self, id: UUID) -> None:
        """
        Delete an entity by ID.

        Raises:
            DatabaseError: If deletion fails
        """
        pass

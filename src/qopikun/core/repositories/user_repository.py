"""
User repository implementation.

This module provides the SQLite implementation of IRepository[User], the
identity store's data access layer. In addition to standard CRUD it supports
lookup by username (usernames are unique).
"""

import sqlite3
from typing import List, Optional
from uuid import UUID

from ..models.user import User
from ..exceptions import DatabaseError, UserNotFoundError
from .base import IRepository


class UserRepository(IRepository[User]):
    """
    SQLite implementation of user repository.

    Converts between User models and rows of the users table. Errors are
    caught and converted to application-specific exceptions.
    """

    def __init__(self, connection: sqlite3.Connection):
        """
        Initialize repository with database connection.

        Args:
            connection: SQLite connection (should have row_factory=sqlite3.Row)
        """
        self.conn = connection

    def get_by_id(self, id: UUID) -> Optional[User]:
        cursor = self.conn.cursor()
        cursor.execute("SELECT * FROM users WHERE id = ?", (str(id),))
        row = cursor.fetchone()

        if row is None:
            return None

        return self._row_to_user(row)

    def get_by_username(self, username: str) -> Optional[User]:
        """
        Get a user by username.

        Args:
            username: Exact username (case-sensitive)

        Returns:
            User if found, None otherwise
        """
        cursor = self.conn.cursor()
        cursor.execute("SELECT * FROM users WHERE username = ?", (username,))
        row = cursor.fetchone()

        if row is None:
            return None

        return self._row_to_user(row)

    def get_all(self) -> List[User]:
        """
        Get all users in creation order.

        Returns:
            List of all User objects
        """
        cursor = self.conn.cursor()
        cursor.execute("SELECT * FROM users ORDER BY created_at, rowid")
        return [self._row_to_user(row) for row in cursor.fetchall()]

    def create(self, user: User) -> User:
        """
        Create a new user.

        Raises:
            DatabaseError: If insertion fails (e.g., duplicate username)
        """
        try:
            cursor = self.conn.cursor()
            cursor.execute(
                """
                INSERT INTO users (id, username, password, role)
                VALUES (?, ?, ?, ?)
                """,
                (str(user.id), user.username, user.password, user.role)
            )
            self.conn.commit()
            return user
        except sqlite3.Error as e:
            self.conn.rollback()
            raise DatabaseError(f"Failed to create user: {e}") from e

    def update(self, user: User) -> User:
        """
        Update a user's username and password.

        The role column is never updated: roles are fixed at creation.

        Raises:
            UserNotFoundError: If user doesn't exist
            DatabaseError: If update fails
        """
        if self.get_by_id(user.id) is None:
            raise UserNotFoundError(f"User with id {user.id} not found")

        try:
            cursor = self.conn.cursor()
            cursor.execute(
                "UPDATE users SET username = ?, password = ? WHERE id = ?",
                (user.username, user.password, str(user.id))
            )
            self.conn.commit()
            return user
        except sqlite3.Error as e:
            self.conn.rollback()
            raise DatabaseError(f"Failed to update user: {e}") from e

    def delete(self, id: UUID) -> None:
        """
        Delete a user by ID.

        Raises:
            UserNotFoundError: If user doesn't exist
            DatabaseError: If deletion fails
        """
        if self.get_by_id(id) is None:
            raise UserNotFoundError(f"User with id {id} not found")

        try:
            cursor = self.conn.cursor()
            cursor.execute("DELETE FROM users WHERE id = ?", (str(id),))
            self.conn.commit()
        except sqlite3.Error as e:
            self.conn.rollback()
            raise DatabaseError(f"Failed to delete user: {e}") from e

    def _row_to_user(self, row: sqlite3.Row) -> User:
        """
        Convert database row to User model object.

        Raises:
            DatabaseError: If the row holds invalid data (e.g. unknown role)
        """
        try:
            return User(
                id=UUID(row["id"]),
                username=row["username"],
                password=row["password"],
                role=row["role"]
            )
        except Exception as e:
            raise DatabaseError(f"Failed to convert database row to User: {e}") from e

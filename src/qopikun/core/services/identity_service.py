"""
Identity service.

Authentication and user management on top of the user repository.
Passwords never leave this service: listings return UserProfile objects.
Invalid credentials are reported as None, not as an exception.
"""

import logging
from typing import List, Optional

from ..models.user import User, UserProfile
from ..repositories.user_repository import UserRepository
from ..inspection_constants import ROLE_ADMIN, ROLE_INSPECTOR

logger = logging.getLogger(__name__)

# Roles that sign in through the login screen; other roles join an
# inspection through its link instead
LOGIN_ROLES = (ROLE_ADMIN, ROLE_INSPECTOR)


class IdentityService:
    """
    Service for authentication and user administration.

    Uses dependency injection to receive the user repository.
    """

    def __init__(self, user_repository: UserRepository):
        """
        Initialize identity service.

        Raises:
            ValueError: If user_repository is None
        """
        if user_repository is None:
            raise ValueError("IdentityService requires user_repository (cannot be None)")

        self.user_repo = user_repository

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """
        Check a username/password pair.

        Returns:
            The User on success, None if the credentials don't match
        """
        user = self.user_repo.get_by_username(username)
        if user is None or user.password != password:
            logger.info(f"Failed login attempt for username {username!r}")
            return None
        return user

    def login(self, username: str, password: str) -> Optional[User]:
        """
        Authenticate for the login screen.

        Only admins and inspectors log in directly; supervisors, customers
        and third-party inspectors join an inspection through its link.

        Returns:
            The User if the credentials match and the role may log in,
            None otherwise
        """
        user = self.authenticate(username, password)
        if user is None:
            return None
        if user.role not in LOGIN_ROLES:
            logger.info(f"User {username!r} with role {user.role} must join via an inspection link")
            return None
        return user

    def create_user(self, username: str, password: str, role: str) -> Optional[User]:
        """
        Create a user.

        Returns:
            The created User, or None if the username is already taken

        Raises:
            ValidationError: If the role is unknown
            DatabaseError: If the database operation fails
        """
        if self.user_repo.get_by_username(username) is not None:
            logger.info(f"Username {username!r} already exists")
            return None

        user = User(username=username, password=password, role=role)
        created = self.user_repo.create(user)
        logger.info(f"Created user {username!r} with role {role}")
        return created

    def list_users(self) -> List[UserProfile]:
        """List all users without their passwords."""
        return [user.to_profile() for user in self.user_repo.get_all()]

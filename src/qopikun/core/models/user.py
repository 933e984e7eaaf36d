"""
User model.

Users are owned by the identity store. A user's role is fixed at creation
(the model is frozen) and the password never leaves the identity store:
it is excluded from serialization and repr, and listings expose
UserProfile objects instead.
"""

from uuid import UUID, uuid4
from pydantic import BaseModel, Field, field_validator, ConfigDict

from ..exceptions import ValidationError
from ..inspection_constants import USER_ROLES


class UserProfile(BaseModel):
    """Public view of a user (no password)."""

    id: UUID
    username: str
    role: str

    model_config = ConfigDict(frozen=True)


class User(BaseModel):
    """
    Application user.

    Roles: ADMIN, INSPECTOR, SUPERVISOR, CUSTOMER, THIRD_PARTY_INSPECTOR.
    """

    id: UUID = Field(default_factory=uuid4)

    username: str = Field(min_length=1)

    # Excluded from model_dump()/model_dump_json() and repr
    password: str = Field(exclude=True, repr=False)

    role: str

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        """
        Validate role is one of the known roles.

        Raises:
            ValidationError: If role is unknown
        """
        if v not in USER_ROLES:
            raise ValidationError(f"role must be one of {USER_ROLES}, got: {v}")
        return v

    def to_profile(self) -> UserProfile:
        """Return the password-free public view of this user."""
        return UserProfile(id=self.id, username=self.username, role=self.role)

    model_config = ConfigDict(frozen=True)

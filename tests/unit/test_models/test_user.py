"""Unit tests for User model."""

import pytest

from qopikun.core.exceptions import ValidationError
from qopikun.core.models.user import User, UserProfile


class TestUserModel:
    """Test User validation and password handling."""

    def test_create_user(self, sample_inspector):
        assert sample_inspector.username == "inspector1"
        assert sample_inspector.role == "INSPECTOR"
        assert sample_inspector.id is not None

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError, match="role"):
            User(username="guest", password="x", role="GUEST")

    def test_password_excluded_from_dump(self, sample_inspector):
        """Test the password never appears in serialized output."""
        assert "password" not in sample_inspector.model_dump()
        assert "password" not in sample_inspector.model_dump_json()
        assert "password" not in repr(sample_inspector)

    def test_to_profile(self, sample_inspector):
        profile = sample_inspector.to_profile()

        assert isinstance(profile, UserProfile)
        assert profile.id == sample_inspector.id
        assert profile.username == "inspector1"
        assert not hasattr(profile, "password")

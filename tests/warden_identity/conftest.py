"""
Pytest configuration for warden_identity tests.

Provides fixtures for users and roles shared by unit and integration tests.
"""

from uuid import UUID

import pytest

from warden_identity.domain.user import DEFAULT_ROLE_NAME, Role, User

USER_ROLE_ID = UUID("00000000-0000-0000-0000-0000000000aa")


@pytest.fixture
def user_role() -> Role:
    """Standard user role."""
    return Role(id=USER_ROLE_ID, name=DEFAULT_ROLE_NAME)


@pytest.fixture
def test_user(user_role) -> User:
    """Create a standard password user."""
    return User.create(
        "test@example.com",
        roles=[user_role],
        full_name="Test User",
        password_hash="hashed_password",
    )


@pytest.fixture
def federated_user(user_role) -> User:
    """Create a user without a password (federated-only)."""
    return User.create("fed@example.com", roles=[user_role])

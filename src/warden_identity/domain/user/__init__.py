"""User domain manages user identity only.

This domain handles:
- User aggregate (identity: id, email, password hash, roles)
- Role value objects shared by password and federated accounts
- Repository interfaces for users and roles
"""

from warden_identity.domain.user.aggregates import User
from warden_identity.domain.user.exceptions import (
    EmailAlreadyExistsError,
    InvalidEmailError,
    UserNotFoundError,
)
from warden_identity.domain.user.repositories import RoleRepository, UserRepository
from warden_identity.domain.user.value_objects import (
    DEFAULT_ROLE_NAME,
    Email,
    Role,
)

__all__ = [
    "DEFAULT_ROLE_NAME",
    "Email",
    "EmailAlreadyExistsError",
    "InvalidEmailError",
    "Role",
    "RoleRepository",
    "User",
    "UserNotFoundError",
    "UserRepository",
]

# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy models for identity management."""

from warden_identity.infrastructure.persistence.sqlalchemy.models.refresh_token_model import (
    RefreshTokenModel,
)
from warden_identity.infrastructure.persistence.sqlalchemy.models.user_model import (
    RoleModel,
    UserModel,
    user_roles,
)

__all__ = [
    "RefreshTokenModel",
    "RoleModel",
    "UserModel",
    "user_roles",
]

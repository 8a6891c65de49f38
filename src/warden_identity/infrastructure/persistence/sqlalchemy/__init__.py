"""SQLAlchemy implementation for warden_identity persistence.

Provides:
- IdentityBase: Declarative base for identity models
- UserModel, RoleModel, RefreshTokenModel: SQLAlchemy models
- UserRepositorySQLAlchemy: Repository implementation for users
- RoleRepositorySQLAlchemy: Repository implementation for roles
- RefreshTokenRepositorySQLAlchemy: Repository implementation for refresh tokens
"""

from warden_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase
from warden_identity.infrastructure.persistence.sqlalchemy.models import (
    RefreshTokenModel,
    RoleModel,
    UserModel,
)
from warden_identity.infrastructure.persistence.sqlalchemy.repositories import (
    RefreshTokenRepositorySQLAlchemy,
    RoleRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

__all__ = [
    "IdentityBase",
    "RefreshTokenModel",
    "RefreshTokenRepositorySQLAlchemy",
    "RoleModel",
    "RoleRepositorySQLAlchemy",
    "UserModel",
    "UserRepositorySQLAlchemy",
]

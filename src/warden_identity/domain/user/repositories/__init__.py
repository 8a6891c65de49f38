from warden_identity.domain.user.repositories.role_repository import RoleRepository
from warden_identity.domain.user.repositories.user_repository import UserRepository

__all__ = ["RoleRepository", "UserRepository"]

"""Role repository interface."""

from abc import ABC, abstractmethod

from warden_identity.domain.user.value_objects.role import Role


class RoleRepository(ABC):
    """Repository interface for roles."""

    @abstractmethod
    async def get_or_create(self, name: str) -> Role:
        """Return the role with this name, creating it if absent.

        Implementations must be safe under concurrent first use: two
        callers racing on the same name both receive the same single row.
        """

    @abstractmethod
    async def find_by_name(self, name: str) -> Role | None:
        """Find a role by its unique name."""

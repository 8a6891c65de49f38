"""User aggregate for identity concerns only."""

from collections.abc import Iterable
from datetime import datetime
from typing import Union
from uuid import UUID, uuid4

from warden_identity.domain.shared.time import utc_now
from warden_identity.domain.user.value_objects import Email, Role


class User:
    """
    User aggregate root.

    A user is identified by a unique email address. ``password_hash`` is
    ``None`` for accounts provisioned from a federated identity provider;
    such accounts cannot log in with a password. Roles are a membership
    set and can only grow.
    """

    def __init__(  # noqa: PLR0913
        self,
        email: Union[str, Email],
        full_name: str | None = None,
        password_hash: str | None = None,
        roles: Iterable[Role] = (),
        enabled: bool = True,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._email = email if isinstance(email, Email) else Email(email)
        self._id = id or uuid4()
        self._full_name = full_name if full_name is not None else self._email.value
        self._password_hash = password_hash
        self._roles = frozenset(roles)
        self._enabled = enabled
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def email_obj(self) -> Email:
        return self._email

    @property
    def full_name(self) -> str:
        return self._full_name

    @property
    def password_hash(self) -> str | None:
        return self._password_hash

    @property
    def has_password(self) -> bool:
        """False for federated-only accounts."""
        return self._password_hash is not None

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def roles(self) -> frozenset[Role]:
        return self._roles

    @property
    def role_names(self) -> list[str]:
        """Role names in a stable (sorted) order."""
        return sorted(role.name for role in self._roles)

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def has_role(self, name: str) -> bool:
        return any(role.name == name for role in self._roles)

    def add_role(self, role: Role) -> None:
        if role in self._roles:
            return
        self._roles = self._roles | {role}
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        email: Union[str, Email],
        roles: Iterable[Role],
        full_name: str | None = None,
        password_hash: str | None = None,
    ) -> "User":
        """Create a new enabled user.

        Raises
        ------
        ValueError
            If no role is given; a user always holds at least one role.
        """
        roles = frozenset(roles)
        if not roles:
            msg = "A user must be created with at least one role"
            raise ValueError(msg)
        return cls(
            email=email,
            full_name=full_name,
            password_hash=password_hash,
            roles=roles,
            enabled=True,
        )

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: UUID,
        email: Union[str, Email],
        full_name: str,
        password_hash: str | None,
        roles: Iterable[Role],
        enabled: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            email=email,
            full_name=full_name,
            password_hash=password_hash,
            roles=roles,
            enabled=enabled,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self._email.value})"

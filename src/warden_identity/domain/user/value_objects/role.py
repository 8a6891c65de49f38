from dataclasses import dataclass
from uuid import UUID

DEFAULT_ROLE_NAME = "USER"


@dataclass(frozen=True)
class Role:
    """A named role. Immutable once persisted."""

    id: UUID
    name: str

    def __str__(self) -> str:
        return self.name

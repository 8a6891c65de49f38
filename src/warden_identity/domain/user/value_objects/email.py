"""Email value object."""

import re
from dataclasses import dataclass

from warden_identity.domain.user.exceptions import InvalidEmailError

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MAX_EMAIL_LENGTH = 255


@dataclass(frozen=True)
class Email:
    """A normalized (trimmed, lower-cased) email address."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidEmailError("Email must be a string")

        normalized = self.value.strip().lower()
        if not normalized or len(normalized) > MAX_EMAIL_LENGTH:
            raise InvalidEmailError(f"Invalid email address: {self.value!r}")
        if not _EMAIL_PATTERN.match(normalized):
            raise InvalidEmailError(f"Invalid email address: {self.value!r}")

        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value

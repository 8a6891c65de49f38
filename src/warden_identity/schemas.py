"""Identity schemas and data structures.

These are simple data classes used for transferring identity
data between components.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

TOKEN_TYPE_BEARER = "Bearer"


@dataclass(frozen=True)
class AccessTokenClaims:
    """Decoded access token claims.

    Attributes
    ----------
    subject
        The user's email address (``sub`` claim)
    roles
        Role names granted to the user when the token was issued
    issued_at
        Issue timestamp (``iat`` claim)
    expires_at
        Expiration timestamp (``exp`` claim)
    token_id
        Unique token identifier (``jti`` claim), if present
    """

    subject: str
    roles: tuple[str, ...]
    issued_at: datetime
    expires_at: datetime
    token_id: str | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check if the token has expired."""
        now = now or datetime.now(tz=timezone.utc)
        return now >= self.expires_at

    def has_role(self, role: str) -> bool:
        return role in self.roles


@dataclass(frozen=True)
class TokenPair:
    """Result of a successful login or token refresh."""

    access_token: str
    refresh_token: str
    token_type: str = TOKEN_TYPE_BEARER

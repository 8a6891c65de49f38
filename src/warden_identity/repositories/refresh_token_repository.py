"""Abstract repository interface for refresh tokens."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class RefreshTokenData:
    """Immutable refresh token data."""

    id: UUID
    token: str
    user_id: UUID
    expiry_date: datetime
    revoked: bool

    def is_expired(self, now: datetime) -> bool:
        """Check if the token has expired (expiry instant included)."""
        return self.expiry_date <= now

    def is_revoked(self) -> bool:
        return self.revoked


class RefreshTokenRepository(ABC):
    """Abstract repository for refresh tokens.

    A user owns at most one refresh token row at any time.
    """

    @abstractmethod
    async def replace_for_user(
        self,
        user_id: UUID,
        token: str,
        expiry_date: datetime,
    ) -> RefreshTokenData:
        """Store a new refresh token for a user, superseding any previous one.

        Must be a single atomic write so that concurrent calls for the same
        user never leave two rows behind.

        Parameters
        ----------
        user_id
            The owning user's identifier
        token
            The opaque token string
        expiry_date
            When the token expires

        Returns
        -------
        The stored token data
        """

    @abstractmethod
    async def find_by_token(self, token: str) -> RefreshTokenData | None:
        """Find a refresh token by its token string.

        Parameters
        ----------
        token
            The opaque token string

        Returns
        -------
        Token data if found (revoked or not), None otherwise
        """

    @abstractmethod
    async def mark_revoked(self, token: str) -> bool:
        """Mark a refresh token as revoked.

        Parameters
        ----------
        token
            The opaque token string

        Returns
        -------
        True if a token was found, False otherwise
        """

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Remove tokens whose expiry date has passed.

        Returns
        -------
        Number of tokens deleted
        """

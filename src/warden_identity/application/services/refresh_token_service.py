"""Refresh token lifecycle: create, verify, revoke."""

import logging
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta

from warden_identity.domain.shared.time import utc_now
from warden_identity.domain.user import User
from warden_identity.exceptions import (
    RefreshTokenExpiredError,
    RefreshTokenNotFoundError,
    RefreshTokenRevokedError,
)
from warden_identity.repositories import RefreshTokenData, RefreshTokenRepository

logger = logging.getLogger(__name__)


class RefreshTokenService:
    """Service for opaque, store-backed refresh tokens.

    Each user holds at most one refresh token. Creating a new one
    supersedes the previous token, which then no longer verifies.
    Verification never rotates or mutates a token; it stays usable until
    it expires or is revoked.
    """

    DEFAULT_EXPIRE_DAYS = 7
    # 32 random bytes -> 256 bits of entropy
    TOKEN_BYTES = 32

    def __init__(
        self,
        token_repository: RefreshTokenRepository,
        refresh_token_expire_days: int = DEFAULT_EXPIRE_DAYS,
        clock: Callable[[], datetime] = utc_now,
    ):
        if refresh_token_expire_days <= 0:
            msg = "Refresh token lifetime must be positive"
            raise ValueError(msg)

        self._token_repo = token_repository
        self._expire = timedelta(days=refresh_token_expire_days)
        self._clock = clock

    async def create(self, user: User) -> RefreshTokenData:
        token = secrets.token_urlsafe(self.TOKEN_BYTES)
        expiry_date = self._clock() + self._expire

        refresh_token = await self._token_repo.replace_for_user(
            user_id=user.id,
            token=token,
            expiry_date=expiry_date,
        )
        logger.debug("Issued refresh token for user: %s", user.id)
        return refresh_token

    async def verify(self, token: str) -> RefreshTokenData:
        """Look up a refresh token and check that it is still usable.

        Raises
        ------
        RefreshTokenNotFoundError
            If no such token exists (never issued, or superseded)
        RefreshTokenRevokedError
            If the token was revoked
        RefreshTokenExpiredError
            If the token expiry date has passed
        """
        if not token:
            raise RefreshTokenNotFoundError

        refresh_token = await self._token_repo.find_by_token(token)
        if refresh_token is None:
            raise RefreshTokenNotFoundError

        if refresh_token.is_revoked():
            logger.warning(
                "Revoked refresh token presented for user: %s",
                refresh_token.user_id,
            )
            raise RefreshTokenRevokedError

        if refresh_token.is_expired(self._clock()):
            raise RefreshTokenExpiredError

        return refresh_token

    async def revoke(self, token: str) -> None:
        """Revoke a refresh token. Unknown tokens are ignored."""
        if not token:
            return

        if await self._token_repo.mark_revoked(token):
            logger.info("Refresh token revoked")
        else:
            logger.debug("Revoke requested for unknown refresh token")

    async def purge_expired(self) -> int:
        """Delete every refresh token whose expiry date has passed."""
        deleted = await self._token_repo.delete_expired(self._clock())
        logger.info("Purged %d expired refresh tokens", deleted)
        return deleted

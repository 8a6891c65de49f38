"""Access token signing service.

Provides creation and validation of short-lived, stateless access tokens
(compact HS256 JWTs). No store lookup is needed to validate a token, which
also means a token cannot be invalidated before its embedded expiry.
"""

from __future__ import annotations

import logging
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING
from uuid import uuid4

import jwt

from warden_identity.domain.shared.time import utc_now
from warden_identity.exceptions import (
    InvalidSignatureError,
    MalformedTokenError,
    TokenExpiredError,
)
from warden_identity.schemas import AccessTokenClaims

if TYPE_CHECKING:
    from warden_identity.domain.user import User

logger = logging.getLogger(__name__)


class TokenSigner:
    """Service for access token creation and validation.

    The signing key is fixed at construction and never changes for the
    lifetime of the instance. Create one signer per process and share it.

    Examples
    --------
    >>> signer = TokenSigner(secret_key="your-secret-key")
    >>> token = signer.generate(user)
    >>> claims = signer.validate(token)
    >>> print(claims.subject)
    """

    DEFAULT_ACCESS_EXPIRE_MINUTES = 15
    ALGORITHM = "HS256"
    _REQUIRED_CLAIMS = ("sub", "iat", "exp")

    def __init__(
        self,
        secret_key: str,
        access_token_expire_minutes: int = DEFAULT_ACCESS_EXPIRE_MINUTES,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the token signer.

        Parameters
        ----------
        secret_key
            Symmetric key for signing tokens. Must be kept secure.
        access_token_expire_minutes
            Minutes until an access token expires (default 15)
        clock
            Returns the current timezone-aware time; injectable for tests
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)
        if access_token_expire_minutes <= 0:
            msg = "Access token lifetime must be positive"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._access_expire = timedelta(minutes=access_token_expire_minutes)
        self._clock = clock

    @classmethod
    def with_ephemeral_key(
        cls,
        access_token_expire_minutes: int = DEFAULT_ACCESS_EXPIRE_MINUTES,
        clock: Callable[[], datetime] = utc_now,
    ) -> TokenSigner:
        """Create a signer with a random key that lives only in this process.

        Every token signed with it becomes unverifiable after a restart.
        """
        logger.warning(
            "No JWT secret key configured; using an ephemeral signing key. "
            "Access tokens will not survive a process restart.",
        )
        return cls(
            secret_key=secrets.token_urlsafe(64),
            access_token_expire_minutes=access_token_expire_minutes,
            clock=clock,
        )

    @property
    def access_token_lifetime(self) -> timedelta:
        return self._access_expire

    def generate(self, user: User) -> str:
        """Create a signed access token for a user.

        Parameters
        ----------
        user
            The user the token is issued to

        Returns
        -------
        The encoded token string (``header.claims.signature``)
        """
        now = self._clock()
        payload = {
            "sub": user.email,
            "roles": user.role_names,
            "iat": now,
            "exp": now + self._access_expire,
            "jti": uuid4().hex,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def validate(self, token: str) -> AccessTokenClaims:
        """Verify and decode an access token.

        Parameters
        ----------
        token
            The token string to verify

        Returns
        -------
        AccessTokenClaims containing the decoded data

        Raises
        ------
        MalformedTokenError
            If the token cannot be decoded or lacks required claims
        InvalidSignatureError
            If the signature does not verify against the current key
        TokenExpiredError
            If the current time is at or past the token expiry
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                # Time claims are checked below against the injected clock
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": list(self._REQUIRED_CLAIMS),
                },
            )
        except jwt.InvalidSignatureError as e:
            raise InvalidSignatureError from e
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(f"Malformed token: {e}") from e

        claims = self._to_claims(payload)
        if claims.is_expired(self._clock()):
            raise TokenExpiredError
        return claims

    def _to_claims(self, payload: dict) -> AccessTokenClaims:
        subject = payload["sub"]
        roles = payload.get("roles", [])
        if not isinstance(subject, str) or not subject:
            raise MalformedTokenError("Malformed token payload: invalid subject")
        if not isinstance(roles, list) or not all(isinstance(r, str) for r in roles):
            raise MalformedTokenError("Malformed token payload: invalid roles")

        try:
            issued_at = datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
            expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        except (TypeError, ValueError, OverflowError) as e:
            raise MalformedTokenError(f"Malformed token payload: {e}") from e

        return AccessTokenClaims(
            subject=subject,
            roles=tuple(roles),
            issued_at=issued_at,
            expires_at=expires_at,
            token_id=payload.get("jti"),
        )

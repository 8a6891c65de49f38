"""Authentication service for user registration and login."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from warden_identity.domain.user import (
    DEFAULT_ROLE_NAME,
    Email,
    EmailAlreadyExistsError,
    InvalidEmailError,
    User,
)
from warden_identity.exceptions import InvalidCredentialsError, RefreshTokenNotFoundError
from warden_identity.schemas import AccessTokenClaims, TokenPair

if TYPE_CHECKING:
    from warden_identity.application.services.refresh_token_service import (
        RefreshTokenService,
    )
    from warden_identity.domain.user import RoleRepository, UserRepository
    from warden_identity.services import PasswordHashingService, TokenSigner

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates password hashing, access token signing and the refresh
    token lifecycle to provide:
    - User registration
    - Login with password
    - Access token renewal from a refresh token
    - Logout (refresh token revocation)

    ``issue_tokens`` is the one issuance path shared by password login and
    federated login, so token shape does not depend on how the user proved
    their identity.
    """

    def __init__(  # noqa: PLR0913
        self,
        user_repository: UserRepository,
        role_repository: RoleRepository,
        password_service: PasswordHashingService,
        token_signer: TokenSigner,
        refresh_token_service: RefreshTokenService,
        default_role: str = DEFAULT_ROLE_NAME,
    ):
        self._user_repo = user_repository
        self._role_repo = role_repository
        self._password_service = password_service
        self._token_signer = token_signer
        self._refresh_service = refresh_token_service
        self._default_role = default_role

    async def register(
        self,
        email: str,
        password: str,
        full_name: str,
    ) -> User:
        email_obj = Email(email)
        if await self._user_repo.exists_by_email(email_obj):
            raise EmailAlreadyExistsError(email_obj.value)

        role = await self._role_repo.get_or_create(self._default_role)
        password_hash = self._password_service.hash(password)
        user = User.create(
            email_obj,
            roles=[role],
            full_name=full_name,
            password_hash=password_hash,
        )
        await self._user_repo.save(user)

        logger.info("User registered: %s (role: %s)", user.email, role.name)
        return user

    async def login(self, email: str, password: str) -> TokenPair:
        try:
            email_obj = Email(email)
        except InvalidEmailError:
            self._spend_password_check(password)
            raise InvalidCredentialsError from None

        user = await self._user_repo.find_by_email(email_obj)
        if user is None or user.password_hash is None or not user.enabled:
            self._spend_password_check(password)
            raise InvalidCredentialsError

        if not self._password_service.verify(password, user.password_hash):
            raise InvalidCredentialsError

        tokens = await self.issue_tokens(user)
        logger.info("User logged in: %s", user.email)
        return tokens

    def _spend_password_check(self, password: str) -> None:
        # Same bcrypt cost as a wrong password, so timing does not reveal
        # whether the account exists
        self._password_service.verify(password, self._password_service.dummy_hash)

    async def issue_tokens(self, user: User) -> TokenPair:
        """Issue a fresh access token and supersede the user's refresh token."""
        access_token = self._token_signer.generate(user)
        refresh_token = await self._refresh_service.create(user)
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token.token,
        )

    async def refresh_access_token(self, refresh_token: str) -> TokenPair:
        """Issue a new access token; the refresh token is returned unchanged."""
        stored = await self._refresh_service.verify(refresh_token)

        user = await self._user_repo.find_by_id(stored.user_id)
        if user is None:
            raise RefreshTokenNotFoundError

        access_token = self._token_signer.generate(user)
        logger.debug("Access token refreshed for user: %s", user.email)
        return TokenPair(access_token=access_token, refresh_token=stored.token)

    async def logout(self, refresh_token: str) -> None:
        await self._refresh_service.revoke(refresh_token)

    def verify_access_token(self, token: str) -> AccessTokenClaims:
        return self._token_signer.validate(token)

"""FastAPI dependency injection for the Warden API.

Provides dependencies for:
- Database sessions
- Identity services (token signer, password hashing, authentication,
  federated provisioning)
- Authentication (access token claims from the Authorization header)
- The shared-secret guard for the federated login callback

Process-wide objects (settings, engine, session maker and the token signer)
are created once by ``create_app`` and live on ``app.state``.
"""

import logging
import secrets
from pathlib import Path
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Header, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from warden_config.settings import Settings
from warden_identity import (
    AccessTokenClaims,
    AuthenticationService,
    IdentityProvisioningService,
    InvalidCredentialsError,
    MalformedTokenError,
    PasswordHashingService,
    RefreshTokenService,
    TokenSigner,
)
from warden_identity.infrastructure.persistence.sqlalchemy import (
    RefreshTokenRepositorySQLAlchemy,
    RoleRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

# Security scheme for Bearer access tokens
security = HTTPBearer(auto_error=False)


def get_database_url(settings: Settings) -> str:
    """
    Get database URL from application settings.

    Returns
    -------
    Database URL string
    """
    url = settings.database_url

    # Ensure data directory exists for file-backed SQLite
    if url.startswith("sqlite") and "///" in url:
        db_path = url.split("///", 1)[-1]
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return url


def create_engine(settings: Settings) -> AsyncEngine:
    return create_async_engine(
        get_database_url(settings),
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


def create_token_signer(settings: Settings) -> TokenSigner:
    """Build the process-wide token signer from settings.

    Without a configured JWT_SECRET_KEY the signer gets a random key that
    lives only as long as this process.
    """
    if settings.jwt_secret_key is None:
        return TokenSigner.with_ephemeral_key(
            access_token_expire_minutes=settings.jwt_access_token_expire_minutes,
        )
    return TokenSigner(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        access_token_expire_minutes=settings.jwt_access_token_expire_minutes,
    )


# -----------------------------------------------------------------------------
# Settings & Database Session
# -----------------------------------------------------------------------------


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.
    Routers commit on success; anything not committed is rolled back when
    the session closes.

    Yields
    ------
    AsyncSession for database operations
    """
    async with request.app.state.session_maker() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Identity Services
# -----------------------------------------------------------------------------


def get_token_signer(request: Request) -> TokenSigner:
    return request.app.state.token_signer


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    """Get password hashing service."""
    return PasswordHashingService(rounds=settings.password_hash_rounds)


TokenSignerDep = Annotated[TokenSigner, Depends(get_token_signer)]
PasswordServiceDep = Annotated[PasswordHashingService, Depends(get_password_service)]


async def get_authentication_service(
    session: DBSession,
    settings: SettingsDep,
    token_signer: TokenSignerDep,
    password_service: PasswordServiceDep,
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    This service orchestrates user registration, login, and token management.
    """
    refresh_token_service = RefreshTokenService(
        token_repository=RefreshTokenRepositorySQLAlchemy(session),
        refresh_token_expire_days=settings.refresh_token_expire_days,
    )
    return AuthenticationService(
        user_repository=UserRepositorySQLAlchemy(session),
        role_repository=RoleRepositorySQLAlchemy(session),
        password_service=password_service,
        token_signer=token_signer,
        refresh_token_service=refresh_token_service,
        default_role=settings.default_role,
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


async def get_provisioning_service(
    session: DBSession,
    settings: SettingsDep,
) -> IdentityProvisioningService:
    """Get the federated identity provisioning service."""
    return IdentityProvisioningService(
        user_repository=UserRepositorySQLAlchemy(session),
        role_repository=RoleRepositorySQLAlchemy(session),
        default_role=settings.default_role,
    )


ProvisioningService = Annotated[
    IdentityProvisioningService,
    Depends(get_provisioning_service),
]


def require_federation_callback(
    settings: SettingsDep,
    x_federation_secret: Annotated[str | None, Header()] = None,
) -> None:
    """
    Admit only the trusted OAuth2 callback to the federated login endpoint.

    Raises
    ------
    HTTPException
        404 if no FEDERATION_CALLBACK_SECRET is configured
    InvalidCredentialsError
        If the X-Federation-Secret header is missing or wrong
    """
    expected = settings.federation_callback_secret
    if expected is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Federated login is not enabled",
        )

    if x_federation_secret is None or not secrets.compare_digest(
        x_federation_secret.encode("utf-8"),
        expected.get_secret_value().encode("utf-8"),
    ):
        raise InvalidCredentialsError


# -----------------------------------------------------------------------------
# Current Claims (Access Token Authentication)
# -----------------------------------------------------------------------------


async def get_current_claims(
    token_signer: TokenSignerDep,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> AccessTokenClaims:
    """
    Validate the Bearer access token from the Authorization header.

    No database lookup happens here; the token alone proves identity until
    it expires.

    Raises
    ------
    MalformedTokenError
        If no Bearer token was sent
    InvalidTokenError
        If the token is rejected by the signer
    """
    if credentials is None:
        raise MalformedTokenError("Authentication required")

    return token_signer.validate(credentials.credentials)


CurrentClaims = Annotated[AccessTokenClaims, Depends(get_current_claims)]

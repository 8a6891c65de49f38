"""Authentication router for registration, login and token management."""

import logging

from fastapi import APIRouter, Depends, status

from warden.presentation.api.dependencies import (
    AuthService,
    CurrentClaims,
    DBSession,
    ProvisioningService,
    TokenSignerDep,
    require_federation_callback,
)
from warden.presentation.api.schemas.auth import (
    FederatedLoginRequest,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from warden_identity import (
    TokenPair,
    TokenSigner,
    User,
    UserNotFoundError,
    complete_federated_login,
)
from warden_identity.infrastructure.persistence.sqlalchemy import (
    UserRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        roles=user.role_names,
        enabled=user.enabled,
        created_at=user.created_at,
    )


def _token_response(tokens: TokenPair, token_signer: TokenSigner) -> TokenResponse:
    return TokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
        expires_in=int(token_signer.access_token_lifetime.total_seconds()),
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered successfully"},
        400: {"description": "Password or email rejected"},
        409: {"description": "Email already registered"},
    },
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService,
    session: DBSession,
) -> UserResponse:
    """
    Create a password account with the default role.

    No tokens are issued; call ``/login`` afterwards.
    """
    user = await auth_service.register(
        email=request.email,
        password=request.password,
        full_name=request.full_name,
    )
    await session.commit()
    return _user_response(user)


@router.post(
    "/login",
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
    },
)
async def login(
    request: LoginRequest,
    auth_service: AuthService,
    session: DBSession,
    token_signer: TokenSignerDep,
) -> TokenResponse:
    """
    Authenticate with email and password.

    Any refresh token previously issued to the user stops working.
    """
    tokens = await auth_service.login(email=request.email, password=request.password)
    await session.commit()
    return _token_response(tokens, token_signer)


@router.post(
    "/federated",
    summary="Complete a federated login",
    dependencies=[Depends(require_federation_callback)],
    responses={
        200: {"description": "Login successful"},
        400: {"description": "Unsupported provider or no email in attributes"},
        401: {"description": "Missing or wrong X-Federation-Secret"},
        404: {"description": "Federated login is not enabled"},
    },
)
async def federated_login(
    request: FederatedLoginRequest,
    auth_service: AuthService,
    provisioning_service: ProvisioningService,
    session: DBSession,
    token_signer: TokenSignerDep,
) -> TokenResponse:
    """
    Issue tokens for a user whose identity a provider has verified.

    Called by the OAuth2 callback once the handshake has succeeded, never
    by browsers directly. Unknown emails are provisioned as password-less
    accounts with the default role.
    """
    tokens = await complete_federated_login(
        provisioning_service,
        auth_service,
        request.provider,
        request.attributes,
    )
    await session.commit()
    return _token_response(tokens, token_signer)


@router.post(
    "/refresh",
    summary="Issue a new access token",
    responses={
        200: {"description": "New access token issued"},
        401: {"description": "Refresh token unknown, revoked or expired"},
    },
)
async def refresh(
    request: RefreshTokenRequest,
    auth_service: AuthService,
    token_signer: TokenSignerDep,
) -> TokenResponse:
    """Exchange a refresh token for a new access token.

    The refresh token itself is returned unchanged.
    """
    tokens = await auth_service.refresh_access_token(request.refresh_token)
    return _token_response(tokens, token_signer)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Revoke a refresh token",
)
async def logout(
    request: RefreshTokenRequest,
    auth_service: AuthService,
    session: DBSession,
) -> None:
    """Revoke the refresh token. Unknown tokens are accepted silently."""
    await auth_service.logout(request.refresh_token)
    await session.commit()


@router.get(
    "/me",
    summary="Get the current user",
    responses={
        200: {"description": "Current user"},
        401: {"description": "Missing, invalid or expired access token"},
    },
)
async def me(claims: CurrentClaims, session: DBSession) -> UserResponse:
    user = await UserRepositorySQLAlchemy(session).find_by_email(claims.subject)
    if user is None:
        raise UserNotFoundError(claims.subject)
    return _user_response(user)

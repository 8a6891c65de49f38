"""Pydantic schemas for the HTTP API."""

from warden.presentation.api.schemas.auth import (
    FederatedLoginRequest,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)

__all__ = [
    "FederatedLoginRequest",
    "LoginRequest",
    "RefreshTokenRequest",
    "RegisterRequest",
    "TokenResponse",
    "UserResponse",
]

"""Authentication schemas for request/response models.

JSON field names are camelCase (``accessToken``, ``refreshToken``,
``tokenType``, ``fullName``); snake_case names are accepted on input too.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(_CamelModel):
    """Request schema for user registration."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, max_length=72)
    full_name: str = Field(..., min_length=1, max_length=255)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "alice@example.com",
                "password": "correct horse battery staple",
                "fullName": "Alice",
            },
        },
    )


class LoginRequest(_CamelModel):
    """Request schema for user login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshTokenRequest(_CamelModel):
    """Request schema for token refresh and logout."""

    refresh_token: str = Field(..., min_length=1)


class FederatedLoginRequest(_CamelModel):
    """Outcome of a completed OAuth2 handshake, posted by the trusted callback."""

    provider: str = Field(..., min_length=1, description="Registered provider name")
    attributes: dict[str, Any] = Field(
        ...,
        description="User attributes returned by the provider",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "provider": "google",
                "attributes": {"email": "alice@example.com", "name": "Alice"},
            },
        },
    )


class TokenResponse(_CamelModel):
    """Response schema for login and refresh."""

    access_token: str
    refresh_token: str
    token_type: str = Field(default="Bearer")
    expires_in: int = Field(..., description="Access token lifetime in seconds")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "accessToken": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "refreshToken": "q0nS4oGxV3sCk2mR9ZrWj1b7Yt8uHfLp",
                "tokenType": "Bearer",
                "expiresIn": 900,
            },
        },
    )


class UserResponse(_CamelModel):
    """Response schema for user data."""

    id: UUID
    email: str
    full_name: str
    roles: list[str]
    enabled: bool
    created_at: datetime

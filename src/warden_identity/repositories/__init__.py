"""Abstract repository interfaces for token management."""

from warden_identity.repositories.refresh_token_repository import (
    RefreshTokenData,
    RefreshTokenRepository,
)

__all__ = [
    "RefreshTokenData",
    "RefreshTokenRepository",
]

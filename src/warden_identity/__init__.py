"""Warden Identity - credential and token lifecycle.

This module handles all identity-related concerns:
- User management (registration, roles)
- Authentication (password login, access tokens)
- Refresh token issuance, verification and revocation
- Federated identity provisioning (post-OAuth2 handshake)

HTTP routing and process bootstrap live in the ``warden`` package; this
package only produces typed results or raises ``AuthError`` subclasses.
"""

from warden_identity.application.services import (
    AuthenticationService,
    IdentityProvisioningService,
    ProviderRegistry,
    RefreshTokenService,
    complete_federated_login,
    default_provider_registry,
)
from warden_identity.domain.user import (
    DEFAULT_ROLE_NAME,
    Email,
    EmailAlreadyExistsError,
    InvalidEmailError,
    Role,
    RoleRepository,
    User,
    UserNotFoundError,
    UserRepository,
)
from warden_identity.exceptions import (
    AuthError,
    ConflictError,
    InvalidCredentialsError,
    InvalidSignatureError,
    InvalidTokenError,
    MalformedTokenError,
    RefreshTokenExpiredError,
    RefreshTokenNotFoundError,
    RefreshTokenRevokedError,
    TokenErrorKind,
    TokenExpiredError,
    UnsupportedProviderError,
    ValidationError,
    WeakPasswordError,
)
from warden_identity.repositories import RefreshTokenData, RefreshTokenRepository
from warden_identity.schemas import AccessTokenClaims, TokenPair
from warden_identity.services import PasswordHashingService, TokenSigner

__all__ = [
    # Domain - User
    "DEFAULT_ROLE_NAME",
    "Email",
    "EmailAlreadyExistsError",
    "InvalidEmailError",
    "Role",
    "RoleRepository",
    "User",
    "UserNotFoundError",
    "UserRepository",
    # Exceptions
    "AuthError",
    "ConflictError",
    "InvalidCredentialsError",
    "InvalidSignatureError",
    "InvalidTokenError",
    "MalformedTokenError",
    "RefreshTokenExpiredError",
    "RefreshTokenNotFoundError",
    "RefreshTokenRevokedError",
    "TokenErrorKind",
    "TokenExpiredError",
    "UnsupportedProviderError",
    "ValidationError",
    "WeakPasswordError",
    # Repositories
    "RefreshTokenData",
    "RefreshTokenRepository",
    # Schemas
    "AccessTokenClaims",
    "TokenPair",
    # Services
    "PasswordHashingService",
    "TokenSigner",
    # Application Services
    "AuthenticationService",
    "IdentityProvisioningService",
    "ProviderRegistry",
    "RefreshTokenService",
    "complete_federated_login",
    "default_provider_registry",
]

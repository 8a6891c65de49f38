"""Application services for identity management."""

from warden_identity.application.services.authentication_service import (
    AuthenticationService,
)
from warden_identity.application.services.federated_login import (
    complete_federated_login,
)
from warden_identity.application.services.identity_provisioning_service import (
    IdentityProvisioningService,
)
from warden_identity.application.services.providers import (
    ProviderRegistry,
    default_provider_registry,
    extract_email,
    extract_github_email,
)
from warden_identity.application.services.refresh_token_service import (
    RefreshTokenService,
)

__all__ = [
    "AuthenticationService",
    "IdentityProvisioningService",
    "ProviderRegistry",
    "RefreshTokenService",
    "complete_federated_login",
    "default_provider_registry",
    "extract_email",
    "extract_github_email",
]

"""Completion step of a federated (OAuth2) login."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from warden_identity.application.services.authentication_service import (
        AuthenticationService,
    )
    from warden_identity.application.services.identity_provisioning_service import (
        IdentityProvisioningService,
    )
    from warden_identity.schemas import TokenPair


async def complete_federated_login(
    provisioning: IdentityProvisioningService,
    authentication: AuthenticationService,
    provider: str,
    attributes: Mapping[str, Any],
) -> TokenPair:
    """Resolve the provider's user and issue tokens exactly as password login does."""
    user = await provisioning.resolve_from_attributes(provider, attributes)
    return await authentication.issue_tokens(user)

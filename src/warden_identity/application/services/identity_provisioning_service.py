"""Resolve federated identity assertions into local users."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from warden_identity.application.services.providers import (
    ProviderRegistry,
    default_provider_registry,
)
from warden_identity.domain.user import DEFAULT_ROLE_NAME, Email, User

if TYPE_CHECKING:
    from warden_identity.domain.user import RoleRepository, UserRepository

logger = logging.getLogger(__name__)


class IdentityProvisioningService:
    """
    Application service for federated identity provisioning.

    The OAuth2 handshake happens elsewhere; this service only consumes its
    outcome ("provider X verified email E"). Users created here have no
    password hash and can therefore only sign in through a provider.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        role_repository: RoleRepository,
        provider_registry: ProviderRegistry | None = None,
        default_role: str = DEFAULT_ROLE_NAME,
    ):
        self._user_repo = user_repository
        self._role_repo = role_repository
        self._providers = provider_registry or default_provider_registry()
        self._default_role = default_role

    @property
    def providers(self) -> ProviderRegistry:
        return self._providers

    async def resolve(self, email: str, provider: str) -> User:
        """Find the local user for a verified email, creating it if absent.

        Parameters
        ----------
        email
            Email address verified by the provider
        provider
            Registered provider name

        Returns
        -------
        The existing or newly provisioned user

        Raises
        ------
        UnsupportedProviderError
            If the provider is not registered
        InvalidEmailError
            If the email is not a valid address
        """
        # Raises UnsupportedProviderError before touching the store
        self._providers.extractor_for(provider)
        email_obj = Email(email)

        user = await self._user_repo.find_by_email(email_obj)
        if user is not None:
            logger.debug("Federated login for existing user: %s", user.email)
            return user

        role = await self._role_repo.get_or_create(self._default_role)
        user = User.create(email_obj, roles=[role])
        await self._user_repo.save(user)

        logger.info("Provisioned user %s from provider %s", user.email, provider)
        return user

    async def resolve_from_attributes(
        self,
        provider: str,
        attributes: Mapping[str, Any],
    ) -> User:
        extractor = self._providers.extractor_for(provider)
        email = extractor(attributes)
        return await self.resolve(email, provider)

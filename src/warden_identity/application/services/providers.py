"""Federated identity provider registry.

Maps a provider name (as reported by the OAuth2 handshake layer) to the rule
that pulls a verified email address out of the provider's user attributes.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from warden_identity.domain.user import InvalidEmailError
from warden_identity.exceptions import UnsupportedProviderError

logger = logging.getLogger(__name__)

EmailExtractor = Callable[[Mapping[str, Any]], str]


def extract_email(attributes: Mapping[str, Any]) -> str:
    """Read the ``email`` attribute."""
    email = attributes.get("email")
    if not isinstance(email, str) or not email.strip():
        raise InvalidEmailError("Provider did not supply an email address")
    return email


def extract_github_email(attributes: Mapping[str, Any]) -> str:
    """Read ``email``, or the primary verified entry of ``emails``.

    GitHub leaves ``email`` empty for users with a private address; the
    addresses are then only available from the ``/user/emails`` listing.
    """
    email = attributes.get("email")
    if isinstance(email, str) and email.strip():
        return email

    for entry in attributes.get("emails") or ():
        if not isinstance(entry, Mapping):
            continue
        if entry.get("primary") and entry.get("verified") and entry.get("email"):
            return entry["email"]

    raise InvalidEmailError("Provider did not supply an email address")


class ProviderRegistry:
    """Registry of supported federated identity providers."""

    def __init__(self, extractors: Mapping[str, EmailExtractor] | None = None):
        self._extractors: dict[str, EmailExtractor] = {}
        for name, extractor in (extractors or {}).items():
            self.register(name, extractor)

    def register(self, name: str, extractor: EmailExtractor) -> None:
        key = self._normalize(name)
        if not key:
            msg = "Provider name cannot be empty"
            raise ValueError(msg)
        self._extractors[key] = extractor
        logger.debug("Registered identity provider: %s", key)

    def extractor_for(self, name: str) -> EmailExtractor:
        """Return the extraction rule for a provider.

        Raises
        ------
        UnsupportedProviderError
            If the provider was never registered
        """
        extractor = self._extractors.get(self._normalize(name))
        if extractor is None:
            raise UnsupportedProviderError(name)
        return extractor

    def is_supported(self, name: str) -> bool:
        return self._normalize(name) in self._extractors

    @property
    def providers(self) -> list[str]:
        return sorted(self._extractors)

    @staticmethod
    def _normalize(name: str) -> str:
        return (name or "").strip().lower()


def default_provider_registry() -> ProviderRegistry:
    return ProviderRegistry(
        {
            "google": extract_email,
            "github": extract_github_email,
        },
    )

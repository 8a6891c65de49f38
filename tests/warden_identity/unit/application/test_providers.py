"""Unit tests for the federated identity provider registry."""

import pytest

from warden_identity.application.services import (
    ProviderRegistry,
    default_provider_registry,
    extract_email,
    extract_github_email,
)
from warden_identity.domain.user import InvalidEmailError
from warden_identity.exceptions import UnsupportedProviderError


class TestExtractors:
    def test_extract_email(self):
        assert extract_email({"email": "bob@x.com", "name": "Bob"}) == "bob@x.com"

    @pytest.mark.parametrize("attributes", [{}, {"email": ""}, {"email": None}])
    def test_extract_email_missing(self, attributes):
        with pytest.raises(InvalidEmailError):
            extract_email(attributes)

    def test_github_prefers_public_email(self):
        attributes = {
            "email": "public@x.com",
            "emails": [{"email": "primary@x.com", "primary": True, "verified": True}],
        }

        assert extract_github_email(attributes) == "public@x.com"

    def test_github_falls_back_to_primary_verified(self):
        attributes = {
            "email": None,
            "emails": [
                {"email": "other@x.com", "primary": False, "verified": True},
                {"email": "unverified@x.com", "primary": True, "verified": False},
                {"email": "primary@x.com", "primary": True, "verified": True},
            ],
        }

        assert extract_github_email(attributes) == "primary@x.com"

    def test_github_without_usable_email(self):
        attributes = {
            "emails": [{"email": "other@x.com", "primary": False, "verified": True}],
        }

        with pytest.raises(InvalidEmailError):
            extract_github_email(attributes)


class TestProviderRegistry:
    def test_default_providers(self):
        registry = default_provider_registry()

        assert registry.providers == ["github", "google"]
        assert registry.extractor_for("google") is extract_email
        assert registry.extractor_for("github") is extract_github_email

    def test_lookup_is_case_insensitive(self):
        registry = default_provider_registry()

        assert registry.is_supported("Google")
        assert registry.extractor_for(" GITHUB ") is extract_github_email

    def test_unknown_provider(self):
        registry = default_provider_registry()

        assert not registry.is_supported("myspace")
        with pytest.raises(UnsupportedProviderError) as exc_info:
            registry.extractor_for("myspace")

        assert exc_info.value.provider == "myspace"
        assert exc_info.value.code == "UNSUPPORTED_PROVIDER"

    def test_register_custom_provider(self):
        registry = ProviderRegistry()

        def extract_mail(attributes):
            return attributes["mail"]

        registry.register("gitlab", extract_mail)

        assert registry.providers == ["gitlab"]
        assert registry.extractor_for("gitlab")({"mail": "a@x.com"}) == "a@x.com"

    def test_register_empty_name_raises(self):
        with pytest.raises(ValueError, match="empty"):
            ProviderRegistry().register("  ", extract_email)

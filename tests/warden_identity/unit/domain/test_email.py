"""Unit tests for the Email value object."""

import pytest

from warden_identity.domain.user import Email, InvalidEmailError


class TestEmail:
    def test_normalizes_case_and_whitespace(self):
        assert Email("  Alice@Example.COM ").value == "alice@example.com"

    def test_equal_after_normalization(self):
        assert Email("A@X.com") == Email("a@x.com")

    def test_str_is_value(self):
        assert str(Email("a@x.com")) == "a@x.com"

    @pytest.mark.parametrize(
        "value",
        ["", "   ", "no-at-sign", "two@@x.com", "a@nodot", "spa ce@x.com"],
    )
    def test_rejects_invalid_addresses(self, value):
        with pytest.raises(InvalidEmailError):
            Email(value)

    def test_rejects_overlong_address(self):
        with pytest.raises(InvalidEmailError):
            Email("a" * 250 + "@x.com")

    def test_rejects_non_string(self):
        with pytest.raises(InvalidEmailError):
            Email(None)  # type: ignore[arg-type]

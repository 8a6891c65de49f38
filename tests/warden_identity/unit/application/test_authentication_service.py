"""Unit tests for AuthenticationService."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from warden_identity.application.services import (
    AuthenticationService,
    RefreshTokenService,
)
from warden_identity.domain.user import (
    EmailAlreadyExistsError,
    RoleRepository,
    User,
    UserRepository,
)
from warden_identity.exceptions import (
    InvalidCredentialsError,
    RefreshTokenNotFoundError,
    RefreshTokenRevokedError,
    WeakPasswordError,
)
from warden_identity.repositories import RefreshTokenData
from warden_identity.schemas import AccessTokenClaims, TokenPair
from warden_identity.services import PasswordHashingService, TokenSigner

TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "secure_password_123"


def _refresh_data(user_id, token="refresh_token") -> RefreshTokenData:
    return RefreshTokenData(
        id=uuid4(),
        token=token,
        user_id=user_id,
        expiry_date=datetime.now(tz=timezone.utc) + timedelta(days=7),
        revoked=False,
    )


class _AuthServiceTestBase:
    @pytest.fixture(autouse=True)
    def _setup(self, user_role):
        """Set up test fixtures."""
        self.user_role = user_role
        self.user_repo = AsyncMock(spec=UserRepository)
        self.role_repo = AsyncMock(spec=RoleRepository)
        self.password_service = Mock(spec=PasswordHashingService)
        self.token_signer = Mock(spec=TokenSigner)
        self.refresh_service = AsyncMock(spec=RefreshTokenService)

        self.role_repo.get_or_create.return_value = user_role

        self.service = AuthenticationService(
            user_repository=self.user_repo,
            role_repository=self.role_repo,
            password_service=self.password_service,
            token_signer=self.token_signer,
            refresh_token_service=self.refresh_service,
        )


class TestAuthenticationServiceRegister(_AuthServiceTestBase):
    """Tests for user registration."""

    async def test_register_creates_user_without_tokens(self):
        # Arrange
        self.user_repo.exists_by_email.return_value = False
        self.password_service.hash.return_value = "hashed_password"

        # Act
        user = await self.service.register(
            email="Test@Example.com",
            password=TEST_PASSWORD,
            full_name="Alice",
        )

        # Assert
        assert user.email == TEST_EMAIL
        assert user.full_name == "Alice"
        assert user.password_hash == "hashed_password"
        assert user.enabled
        assert user.role_names == ["USER"]

        self.user_repo.save.assert_awaited_once_with(user)
        self.role_repo.get_or_create.assert_awaited_once_with("USER")
        self.password_service.hash.assert_called_once_with(TEST_PASSWORD)
        self.token_signer.generate.assert_not_called()
        self.refresh_service.create.assert_not_called()

    async def test_register_raises_when_email_exists(self):
        self.user_repo.exists_by_email.return_value = True

        with pytest.raises(EmailAlreadyExistsError):
            await self.service.register(TEST_EMAIL, TEST_PASSWORD, "Alice")

        self.user_repo.save.assert_not_called()
        self.password_service.hash.assert_not_called()

    async def test_register_propagates_weak_password(self):
        self.user_repo.exists_by_email.return_value = False
        self.password_service.hash.side_effect = WeakPasswordError("Too long")

        with pytest.raises(WeakPasswordError):
            await self.service.register(TEST_EMAIL, "x" * 100, "Alice")

        self.user_repo.save.assert_not_called()

    async def test_register_uses_configured_default_role(self):
        service = AuthenticationService(
            user_repository=self.user_repo,
            role_repository=self.role_repo,
            password_service=self.password_service,
            token_signer=self.token_signer,
            refresh_token_service=self.refresh_service,
            default_role="MEMBER",
        )
        self.user_repo.exists_by_email.return_value = False
        self.password_service.hash.return_value = "hashed_password"

        await service.register(TEST_EMAIL, TEST_PASSWORD, "Alice")

        self.role_repo.get_or_create.assert_awaited_once_with("MEMBER")


class TestAuthenticationServiceLogin(_AuthServiceTestBase):
    """Tests for user login."""

    async def test_login_returns_token_pair(self, test_user):
        self.user_repo.find_by_email.return_value = test_user
        self.password_service.verify.return_value = True
        self.token_signer.generate.return_value = "access_token"
        self.refresh_service.create.return_value = _refresh_data(test_user.id)

        tokens = await self.service.login(TEST_EMAIL, TEST_PASSWORD)

        assert tokens == TokenPair(
            access_token="access_token",
            refresh_token="refresh_token",
            token_type="Bearer",
        )
        self.password_service.verify.assert_called_once_with(
            TEST_PASSWORD,
            "hashed_password",
        )
        self.token_signer.generate.assert_called_once_with(test_user)
        self.refresh_service.create.assert_awaited_once_with(test_user)

    async def test_login_unknown_email(self):
        self.user_repo.find_by_email.return_value = None

        with pytest.raises(InvalidCredentialsError):
            await self.service.login("nobody@example.com", TEST_PASSWORD)

        self.refresh_service.create.assert_not_called()
        self.password_service.verify.assert_called_once_with(
            TEST_PASSWORD,
            self.password_service.dummy_hash,
        )

    async def test_login_wrong_password(self, test_user):
        self.user_repo.find_by_email.return_value = test_user
        self.password_service.verify.return_value = False

        with pytest.raises(InvalidCredentialsError):
            await self.service.login(TEST_EMAIL, "wrong")

        self.token_signer.generate.assert_not_called()
        self.refresh_service.create.assert_not_called()

    async def test_login_federated_only_account(self, federated_user):
        self.user_repo.find_by_email.return_value = federated_user

        with pytest.raises(InvalidCredentialsError):
            await self.service.login(federated_user.email, TEST_PASSWORD)

        self.password_service.verify.assert_called_once_with(
            TEST_PASSWORD,
            self.password_service.dummy_hash,
        )

    async def test_login_disabled_account(self, test_user, user_role):
        disabled = User.reconstitute(
            id=test_user.id,
            email=test_user.email,
            full_name=test_user.full_name,
            password_hash=test_user.password_hash,
            roles=[user_role],
            enabled=False,
            created_at=test_user.created_at,
            updated_at=test_user.updated_at,
        )
        self.user_repo.find_by_email.return_value = disabled
        self.password_service.verify.return_value = True

        with pytest.raises(InvalidCredentialsError):
            await self.service.login(TEST_EMAIL, TEST_PASSWORD)

        self.refresh_service.create.assert_not_called()
        self.password_service.verify.assert_called_once_with(
            TEST_PASSWORD,
            self.password_service.dummy_hash,
        )

    async def test_login_malformed_email(self):
        with pytest.raises(InvalidCredentialsError):
            await self.service.login("not-an-email", TEST_PASSWORD)

        self.user_repo.find_by_email.assert_not_called()
        self.password_service.verify.assert_called_once()

    async def test_login_failures_are_indistinguishable(self, test_user):
        self.user_repo.find_by_email.return_value = None
        with pytest.raises(InvalidCredentialsError) as unknown:
            await self.service.login("nobody@example.com", TEST_PASSWORD)

        self.user_repo.find_by_email.return_value = test_user
        self.password_service.verify.return_value = False
        with pytest.raises(InvalidCredentialsError) as wrong:
            await self.service.login(TEST_EMAIL, "wrong")

        assert str(unknown.value) == str(wrong.value)
        assert unknown.value.code == wrong.value.code


class TestAuthenticationServiceRefresh(_AuthServiceTestBase):
    """Tests for access token renewal."""

    async def test_refresh_returns_same_refresh_token(self, test_user):
        self.refresh_service.verify.return_value = _refresh_data(
            test_user.id,
            token="the-refresh-token",
        )
        self.user_repo.find_by_id.return_value = test_user
        self.token_signer.generate.return_value = "new_access_token"

        tokens = await self.service.refresh_access_token("the-refresh-token")

        assert tokens.access_token == "new_access_token"
        assert tokens.refresh_token == "the-refresh-token"
        assert tokens.token_type == "Bearer"
        self.refresh_service.create.assert_not_called()
        self.user_repo.find_by_id.assert_awaited_once_with(test_user.id)

    async def test_refresh_propagates_verification_error(self):
        self.refresh_service.verify.side_effect = RefreshTokenRevokedError()

        with pytest.raises(RefreshTokenRevokedError):
            await self.service.refresh_access_token("revoked")

        self.token_signer.generate.assert_not_called()

    async def test_refresh_for_missing_owner(self):
        self.refresh_service.verify.return_value = _refresh_data(uuid4())
        self.user_repo.find_by_id.return_value = None

        with pytest.raises(RefreshTokenNotFoundError):
            await self.service.refresh_access_token("refresh_token")


class TestAuthenticationServiceLogout(_AuthServiceTestBase):
    async def test_logout_revokes_refresh_token(self):
        await self.service.logout("refresh_token")

        self.refresh_service.revoke.assert_awaited_once_with("refresh_token")


class TestVerifyAccessToken(_AuthServiceTestBase):
    def test_delegates_to_signer(self):
        now = datetime.now(tz=timezone.utc)
        claims = AccessTokenClaims(
            subject=TEST_EMAIL,
            roles=("USER",),
            issued_at=now,
            expires_at=now + timedelta(minutes=15),
        )
        self.token_signer.validate.return_value = claims

        assert self.service.verify_access_token("access_token") is claims
        self.token_signer.validate.assert_called_once_with("access_token")

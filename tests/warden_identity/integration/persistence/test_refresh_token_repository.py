"""Integration tests for RefreshTokenRepositorySQLAlchemy."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from warden_identity.domain.user import User
from warden_identity.infrastructure.persistence.sqlalchemy import (
    RefreshTokenModel,
    RefreshTokenRepositorySQLAlchemy,
    RoleRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def token_repo(db_session):
    return RefreshTokenRepositorySQLAlchemy(db_session)


@pytest.fixture
async def user(db_session) -> User:
    role = await RoleRepositorySQLAlchemy(db_session).get_or_create("USER")
    user = User.create("owner@example.com", roles=[role])
    await UserRepositorySQLAlchemy(db_session).save(user)
    return user


async def _token_rows(session) -> int:
    result = await session.execute(
        select(func.count()).select_from(RefreshTokenModel),
    )
    return result.scalar_one()


@pytest.mark.integration
class TestRefreshTokenRepositorySQLAlchemy:
    async def test_replace_for_user_stores_token(self, token_repo, user):
        stored = await token_repo.replace_for_user(
            user_id=user.id,
            token="token-1",
            expiry_date=NOW + timedelta(days=7),
        )

        assert stored.token == "token-1"
        assert stored.user_id == user.id
        assert stored.expiry_date == NOW + timedelta(days=7)
        assert not stored.revoked

    async def test_replace_keeps_single_row_per_user(
        self,
        token_repo,
        user,
        db_session,
    ):
        await token_repo.replace_for_user(user.id, "token-1", NOW + timedelta(days=7))
        await token_repo.replace_for_user(user.id, "token-2", NOW + timedelta(days=8))

        assert await _token_rows(db_session) == 1
        assert await token_repo.find_by_token("token-1") is None
        current = await token_repo.find_by_token("token-2")
        assert current.expiry_date == NOW + timedelta(days=8)

    async def test_replace_clears_revocation(self, token_repo, user):
        await token_repo.replace_for_user(user.id, "token-1", NOW + timedelta(days=7))
        await token_repo.mark_revoked("token-1")

        stored = await token_repo.replace_for_user(
            user.id,
            "token-2",
            NOW + timedelta(days=7),
        )

        assert not stored.revoked

    async def test_find_by_token_unknown(self, token_repo):
        assert await token_repo.find_by_token("missing") is None

    async def test_mark_revoked(self, token_repo, user):
        await token_repo.replace_for_user(user.id, "token-1", NOW + timedelta(days=7))

        assert await token_repo.mark_revoked("token-1") is True

        stored = await token_repo.find_by_token("token-1")
        assert stored.revoked
        assert stored.is_revoked()

    async def test_mark_revoked_unknown(self, token_repo, db_session):
        assert await token_repo.mark_revoked("missing") is False
        assert await _token_rows(db_session) == 0

    async def test_delete_expired(self, token_repo, user, db_session):
        await token_repo.replace_for_user(user.id, "token-1", NOW - timedelta(days=1))

        deleted = await token_repo.delete_expired(NOW)

        assert deleted == 1
        assert await _token_rows(db_session) == 0

    async def test_delete_expired_keeps_active(self, token_repo, user, db_session):
        await token_repo.replace_for_user(user.id, "token-1", NOW + timedelta(days=1))

        assert await token_repo.delete_expired(NOW) == 0
        assert await _token_rows(db_session) == 1

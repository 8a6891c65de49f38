"""SQLAlchemy implementation of RefreshTokenRepository."""

import logging
from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from warden_identity.domain.shared.time import ensure_tz_aware, utc_now
from warden_identity.infrastructure.persistence.sqlalchemy.dialect import upsert_insert
from warden_identity.infrastructure.persistence.sqlalchemy.models import (
    RefreshTokenModel,
)
from warden_identity.repositories import RefreshTokenData, RefreshTokenRepository

logger = logging.getLogger(__name__)


class RefreshTokenRepositorySQLAlchemy(RefreshTokenRepository):
    """SQLAlchemy implementation of RefreshTokenRepository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_data(self, model: RefreshTokenModel) -> RefreshTokenData:
        return RefreshTokenData(
            id=model.id,
            token=model.token,
            user_id=model.user_id,
            expiry_date=ensure_tz_aware(model.expiry_date),
            revoked=model.revoked,
        )

    async def replace_for_user(
        self,
        user_id: UUID,
        token: str,
        expiry_date: datetime,
    ) -> RefreshTokenData:
        # One statement: the UNIQUE(user_id) conflict turns the insert into
        # an overwrite of the user's existing row.
        insert_stmt = upsert_insert(self._session, RefreshTokenModel.__table__).values(
            id=uuid4(),
            token=token,
            user_id=user_id,
            expiry_date=expiry_date,
            revoked=False,
            created_at=utc_now(),
        )
        stmt = insert_stmt.on_conflict_do_update(
            index_elements=["user_id"],
            set_={
                "token": insert_stmt.excluded.token,
                "expiry_date": insert_stmt.excluded.expiry_date,
                "revoked": False,
                "created_at": insert_stmt.excluded.created_at,
            },
        )
        await self._session.execute(stmt)

        model = await self._find_model_by_token(token)
        if model is None:
            msg = "Refresh token missing after upsert"
            raise RuntimeError(msg)

        logger.debug("Stored refresh token for user: %s", user_id)
        return self._to_data(model)

    async def find_by_token(self, token: str) -> RefreshTokenData | None:
        model = await self._find_model_by_token(token)
        return self._to_data(model) if model else None

    async def mark_revoked(self, token: str) -> bool:
        stmt = (
            update(RefreshTokenModel)
            .where(RefreshTokenModel.token == token)
            .values(revoked=True)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def delete_expired(self, now: datetime) -> int:
        stmt = (
            delete(RefreshTokenModel)
            .where(RefreshTokenModel.expiry_date <= now)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount:
            logger.info("Deleted %d expired refresh tokens", result.rowcount)
        return result.rowcount

    async def _find_model_by_token(self, token: str) -> RefreshTokenModel | None:
        # populate_existing: the row may have been rewritten by a Core
        # statement since it entered the identity map
        stmt = (
            select(RefreshTokenModel)
            .where(RefreshTokenModel.token == token)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

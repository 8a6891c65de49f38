"""SQLAlchemy implementation of RoleRepository."""

import logging
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from warden_identity.domain.user import Role, RoleRepository
from warden_identity.infrastructure.persistence.sqlalchemy.dialect import upsert_insert
from warden_identity.infrastructure.persistence.sqlalchemy.models import RoleModel

logger = logging.getLogger(__name__)


class RoleRepositorySQLAlchemy(RoleRepository):
    """SQLAlchemy implementation of the RoleRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_or_create(self, name: str) -> Role:
        # INSERT ... ON CONFLICT (name) DO NOTHING, then read back whichever
        # row won. Concurrent first use never creates a second role.
        stmt = (
            upsert_insert(self._session, RoleModel.__table__)
            .values(id=uuid4(), name=name)
            .on_conflict_do_nothing(index_elements=["name"])
        )
        result = await self._session.execute(stmt)
        if result.rowcount:
            logger.info("Created role: %s", name)

        model = await self._find_model_by_name(name)
        if model is None:
            msg = f"Role {name!r} missing after insert"
            raise RuntimeError(msg)
        return self._map_to_domain(model)

    async def find_by_name(self, name: str) -> Role | None:
        model = await self._find_model_by_name(name)
        return self._map_to_domain(model) if model else None

    async def _find_model_by_name(self, name: str) -> RoleModel | None:
        stmt = select(RoleModel).where(RoleModel.name == name)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: RoleModel) -> Role:
        return Role(id=model.id, name=model.name)

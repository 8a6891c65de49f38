"""SQLAlchemy implementation of UserRepository."""

import logging
from typing import Union
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from warden_identity.domain.shared.time import ensure_tz_aware
from warden_identity.domain.user import (
    Email,
    EmailAlreadyExistsError,
    Role,
    User,
    UserRepository,
)
from warden_identity.infrastructure.persistence.sqlalchemy.models import (
    RoleModel,
    UserModel,
)
from warden_identity.infrastructure.persistence.sqlalchemy.models.user_model import (
    USERS_EMAIL_INDEX,
)

logger = logging.getLogger(__name__)


def _is_email_conflict(error: IntegrityError) -> bool:
    # SQLite reports the column, PostgreSQL the index name
    message = str(error.orig)
    return "users.email" in message or USERS_EMAIL_INDEX in message


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        model = await self._find_model_by_id(user_id)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def find_by_email(self, email: Union[str, Email]) -> User | None:
        email_value = email.value if isinstance(email, Email) else Email(email).value

        stmt = select(UserModel).where(UserModel.email == email_value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        email_value = email.value if isinstance(email, Email) else Email(email).value

        stmt = select(UserModel.id).where(UserModel.email == email_value).limit(1)
        result = await self._session.execute(stmt)
        return result.first() is not None

    async def save(self, user: User) -> None:
        existing = await self._find_model_by_id(user.id)

        try:
            if existing:
                await self._update_model(existing, user)
                logger.debug("Updated user: %s", user.id)
            else:
                model = await self._map_to_model(user)
                self._session.add(model)
                logger.info("Created user: %s (email: %s)", user.id, user.email)

            await self._session.flush()
        except IntegrityError as e:
            if _is_email_conflict(e):
                raise EmailAlreadyExistsError(user.email) from e
            raise

    async def _find_model_by_id(self, user_id: UUID) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _role_models(self, roles: frozenset[Role]) -> list[RoleModel]:
        models = []
        for role in sorted(roles, key=lambda r: r.name):
            model = await self._session.get(RoleModel, role.id)
            if model is None:
                msg = f"Role {role.name!r} is not persisted"
                raise ValueError(msg)
            models.append(model)
        return models

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            email=model.email,
            full_name=model.full_name,
            password_hash=model.password_hash,
            roles=[Role(id=role.id, name=role.name) for role in model.roles],
            enabled=model.enabled,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    async def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            password_hash=user.password_hash,
            enabled=user.enabled,
            roles=await self._role_models(user.roles),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    async def _update_model(self, model: UserModel, user: User) -> None:
        model.email = user.email
        model.full_name = user.full_name
        model.password_hash = user.password_hash
        model.enabled = user.enabled
        model.roles = await self._role_models(user.roles)
        model.updated_at = user.updated_at

"""User ↔ role memberships."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from custom_identity.domain.user import RoleNotFoundError, User
from custom_identity.infrastructure.persistence.sqlalchemy.mappers import map_to_domain
from custom_identity.infrastructure.persistence.sqlalchemy.models import (
    RoleModel,
    UserModel,
    UserRoleModel,
)

logger = logging.getLogger(__name__)


class UserRoleAssociations:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add_to_role(self, user: User, normalized_role_name: str) -> None:
        role = await self._find_role(normalized_role_name)
        if role is None:
            raise RoleNotFoundError(normalized_role_name)

        if await self._find_membership(user, role) is None:
            self._session.add(UserRoleModel(user_id=user.id, role_id=role.id))
            logger.debug("Added user %s to role %s", user.id, role.name)

    async def remove_from_role(self, user: User, normalized_role_name: str) -> None:
        role = await self._find_role(normalized_role_name)
        if role is None:
            return

        membership = await self._find_membership(user, role)
        if membership is not None:
            await self._session.delete(membership)
            logger.debug("Removed user %s from role %s", user.id, role.name)

    async def get_roles(self, user: User) -> list[str]:
        stmt = (
            select(RoleModel.name)
            .join(UserRoleModel, UserRoleModel.role_id == RoleModel.id)
            .where(UserRoleModel.user_id == user.id)
            .order_by(RoleModel.name)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def is_in_role(self, user: User, normalized_role_name: str) -> bool:
        role = await self._find_role(normalized_role_name)
        if role is None:
            return False
        return await self._find_membership(user, role) is not None

    async def get_users_in_role(self, normalized_role_name: str) -> list[User]:
        stmt = (
            select(UserModel)
            .join(UserRoleModel, UserRoleModel.user_id == UserModel.id)
            .join(RoleModel, RoleModel.id == UserRoleModel.role_id)
            .where(RoleModel.normalized_name == normalized_role_name)
        )
        result = await self._session.execute(stmt)
        return [map_to_domain(model) for model in result.scalars().all()]

    async def _find_role(self, normalized_role_name: str) -> RoleModel | None:
        stmt = select(RoleModel).where(RoleModel.normalized_name == normalized_role_name)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _find_membership(
        self,
        user: User,
        role: RoleModel,
    ) -> UserRoleModel | None:
        return await self._session.get(UserRoleModel, (user.id, role.id))

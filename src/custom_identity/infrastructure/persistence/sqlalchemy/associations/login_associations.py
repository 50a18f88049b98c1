"""User ↔ external login associations."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from custom_identity.domain.user import User, UserLoginInfo
from custom_identity.infrastructure.persistence.sqlalchemy.mappers import map_to_domain
from custom_identity.infrastructure.persistence.sqlalchemy.models import (
    UserLoginModel,
    UserModel,
)

logger = logging.getLogger(__name__)


class UserLoginAssociations:
    """Reads and writes login rows within the caller's session.

    There is no duplicate check on add: the unique
    ``(login_provider, provider_key)`` constraint is the only guard, so a login
    bound to another user fails with ``IntegrityError`` when the session is
    flushed.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def add_login(self, user: User, login: UserLoginInfo) -> None:
        self._session.add(
            UserLoginModel(
                user_id=user.id,
                login_provider=login.login_provider,
                provider_key=login.provider_key,
                provider_display_name=login.provider_display_name,
            )
        )
        logger.debug("Added login %s for user %s", login.login_provider, user.id)

    async def remove_login(
        self,
        user: User,
        login_provider: str,
        provider_key: str,
    ) -> bool:
        stmt = select(UserLoginModel).where(
            UserLoginModel.user_id == user.id,
            UserLoginModel.login_provider == login_provider,
            UserLoginModel.provider_key == provider_key,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return False

        await self._session.delete(model)
        logger.debug("Removed login %s for user %s", login_provider, user.id)
        return True

    async def get_logins(self, user: User) -> list[UserLoginInfo]:
        stmt = (
            select(UserLoginModel)
            .where(UserLoginModel.user_id == user.id)
            .order_by(UserLoginModel.id)
        )
        result = await self._session.execute(stmt)
        return [
            UserLoginInfo(
                login_provider=model.login_provider,
                provider_key=model.provider_key,
                provider_display_name=model.provider_display_name,
            )
            for model in result.scalars().all()
        ]

    async def find_by_login(
        self,
        login_provider: str,
        provider_key: str,
    ) -> User | None:
        user_id = await self._find_owner_id(login_provider, provider_key)
        if user_id is None:
            return None

        model = await self._session.get(UserModel, user_id)
        if model is None:
            return None

        return map_to_domain(model)

    async def _find_owner_id(
        self,
        login_provider: str,
        provider_key: str,
    ) -> UUID | None:
        stmt = select(UserLoginModel.user_id).where(
            UserLoginModel.login_provider == login_provider,
            UserLoginModel.provider_key == provider_key,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

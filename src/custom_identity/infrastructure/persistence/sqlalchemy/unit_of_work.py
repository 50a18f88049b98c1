"""Scoped acquisition of a user store.

The session is the unit of work. It is opened here, handed to one store and
closed when the scope exits; the store is disposed at the same time.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from custom_identity.domain.user import IdentityErrorDescriber
from custom_identity.infrastructure.persistence.sqlalchemy.repositories import (
    UserStoreSQLAlchemy,
)


@asynccontextmanager
async def open_user_store(
    session_maker: async_sessionmaker[AsyncSession],
    *,
    auto_save_changes: bool | None = None,
    error_describer: IdentityErrorDescriber | None = None,
) -> AsyncIterator[UserStoreSQLAlchemy]:
    """Yield a store bound to a fresh session.

    With ``auto_save_changes=False`` call ``store.save_changes()`` before
    leaving the block; uncommitted work is rolled back when the session
    closes.
    """
    async with session_maker() as session:
        store = UserStoreSQLAlchemy(
            session,
            auto_save_changes=auto_save_changes,
            error_describer=error_describer,
        )
        try:
            yield store
        finally:
            store.dispose()

"""Database initialization utilities."""

import asyncio
import logging
import sys

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from custom_identity.infrastructure.persistence.sqlalchemy.models import Base
from custom_identity_config import Settings, configure_logging, get_settings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_from_settings(settings: Settings | None = None) -> AsyncEngine:
    """Build the async engine; SQLite connections get foreign keys enabled."""
    settings = settings or get_settings()
    engine = create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_pre_ping=not settings.is_sqlite,
    )

    if settings.is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all identity tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    owned = engine is None
    engine = engine or create_engine_from_settings()
    logger.info("Ensuring all identity tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if owned:
        await engine.dispose()
    logger.info("Identity schema is up to date")


async def drop_tables(engine: AsyncEngine | None = None) -> None:
    """Drop all identity tables (USE WITH CAUTION!)."""
    owned = engine is None
    engine = engine or create_engine_from_settings()
    logger.warning("Dropping all identity tables...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    if owned:
        await engine.dispose()
    logger.info("Identity tables dropped")


async def _reset_database(force: bool = False) -> None:
    settings = get_settings()
    database_url = settings.database_url

    db_display = database_url.split("@")[-1] if "@" in database_url else database_url
    print(f"Database: {db_display}")
    print()

    if not force:
        print("WARNING: This will DELETE ALL IDENTITY DATA in the database!")
        print()
        response = input("Type 'yes' to confirm: ")
        if response.lower() != "yes":
            print("Aborted.")
            sys.exit(1)
        print()

    await drop_tables()
    await create_tables()
    logger.info("Identity database recreated successfully!")


def db_init() -> None:
    """Initialize database (create tables)."""
    configure_logging()
    asyncio.run(create_tables())


def db_reset() -> None:
    """Drop and recreate all identity tables."""
    configure_logging()
    force = "--force" in sys.argv or "-f" in sys.argv
    asyncio.run(_reset_database(force=force))

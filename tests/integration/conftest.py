"""
Pytest configuration for integration tests.

Re-export the shared database fixtures to make them available.
"""

from tests.shared.fixtures.database import (
    async_engine,
    db_session,
    roles,
    session_maker,
    user_store,
)

__all__ = [
    "async_engine",
    "db_session",
    "roles",
    "session_maker",
    "user_store",
]

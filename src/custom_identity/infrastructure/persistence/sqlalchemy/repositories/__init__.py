"""SQLAlchemy store implementations."""

from custom_identity.infrastructure.persistence.sqlalchemy.repositories.user_store import (  # noqa: E501
    UserStoreSQLAlchemy,
)

__all__ = ["UserStoreSQLAlchemy"]

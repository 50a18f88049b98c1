"""SQLAlchemy implementation of the identity store.

Provides:
- Base and the ORM models for users, logins, claims and roles
- Association classes for the junction tables
- UserStoreSQLAlchemy: the store facade
- open_user_store: scoped session + store acquisition
"""

from custom_identity.infrastructure.persistence.sqlalchemy.associations import (
    ClaimCatalog,
    UserClaimAssociations,
    UserLoginAssociations,
    UserRoleAssociations,
)
from custom_identity.infrastructure.persistence.sqlalchemy.init_db import (
    create_engine_from_settings,
    create_session_maker,
    create_tables,
    drop_tables,
)
from custom_identity.infrastructure.persistence.sqlalchemy.models import (
    Base,
    ClaimModel,
    RoleModel,
    UserClaimModel,
    UserLoginModel,
    UserModel,
    UserRoleModel,
)
from custom_identity.infrastructure.persistence.sqlalchemy.repositories import (
    UserStoreSQLAlchemy,
)
from custom_identity.infrastructure.persistence.sqlalchemy.unit_of_work import (
    open_user_store,
)

__all__ = [
    "Base",
    "ClaimCatalog",
    "ClaimModel",
    "RoleModel",
    "UserClaimAssociations",
    "UserClaimModel",
    "UserLoginAssociations",
    "UserLoginModel",
    "UserModel",
    "UserRoleAssociations",
    "UserRoleModel",
    "UserStoreSQLAlchemy",
    "create_engine_from_settings",
    "create_session_maker",
    "create_tables",
    "drop_tables",
    "open_user_store",
]

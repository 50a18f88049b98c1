"""SQLAlchemy models for the identity store."""

from custom_identity.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from custom_identity.infrastructure.persistence.sqlalchemy.models.claim_model import (
    ClaimModel,
    UserClaimModel,
)
from custom_identity.infrastructure.persistence.sqlalchemy.models.role_model import (
    RoleModel,
    UserRoleModel,
)
from custom_identity.infrastructure.persistence.sqlalchemy.models.user_login_model import (  # noqa: E501
    UserLoginModel,
)
from custom_identity.infrastructure.persistence.sqlalchemy.models.user_model import (
    UserModel,
)

__all__ = [
    "Base",
    "ClaimModel",
    "RoleModel",
    "TimestampMixin",
    "UserClaimModel",
    "UserLoginModel",
    "UserModel",
    "UserRoleModel",
]

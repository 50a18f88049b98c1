# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""Association manager: junction-table logic for logins, claims and roles."""

from custom_identity.infrastructure.persistence.sqlalchemy.associations.claim_associations import (
    UserClaimAssociations,
)
from custom_identity.infrastructure.persistence.sqlalchemy.associations.claim_catalog import (
    ClaimCatalog,
)
from custom_identity.infrastructure.persistence.sqlalchemy.associations.login_associations import (
    UserLoginAssociations,
)
from custom_identity.infrastructure.persistence.sqlalchemy.associations.role_associations import (
    UserRoleAssociations,
)

__all__ = [
    "ClaimCatalog",
    "UserClaimAssociations",
    "UserLoginAssociations",
    "UserRoleAssociations",
]

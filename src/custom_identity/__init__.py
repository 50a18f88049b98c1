"""Custom Identity - persistence for users and their associations.

This package handles:
- User accounts and credential fields (password hash, stamps, lockout)
- External logins keyed by (provider, provider key)
- Claims stored through a shared, copy-on-write claim catalog
- Role memberships

The SQLAlchemy store lives in
custom_identity.infrastructure.persistence.sqlalchemy.
"""

from custom_identity.domain.shared import CancellationToken
from custom_identity.domain.user import (
    Claim,
    IdentityError,
    IdentityErrorCode,
    IdentityErrorDescriber,
    IdentityResult,
    RoleNotFoundError,
    User,
    UserClaimAssociativesUpdate,
    UserClaimStore,
    UserEmailStore,
    UserLockoutStore,
    UserLoginInfo,
    UserLoginStore,
    UserPasswordStore,
    UserRoleStore,
    UserSecurityStampStore,
    UserStore,
    UserTwoFactorStore,
)
from custom_identity.exceptions import (
    IdentityStoreError,
    OperationCancelledError,
    StoreDisposedError,
)

__all__ = [
    # Domain - User
    "Claim",
    "RoleNotFoundError",
    "User",
    "UserClaimAssociativesUpdate",
    "UserLoginInfo",
    # Results
    "IdentityError",
    "IdentityErrorCode",
    "IdentityErrorDescriber",
    "IdentityResult",
    # Store interfaces
    "UserClaimStore",
    "UserEmailStore",
    "UserLockoutStore",
    "UserLoginStore",
    "UserPasswordStore",
    "UserRoleStore",
    "UserSecurityStampStore",
    "UserStore",
    "UserTwoFactorStore",
    # Exceptions
    "IdentityStoreError",
    "OperationCancelledError",
    "StoreDisposedError",
    # Cancellation
    "CancellationToken",
]

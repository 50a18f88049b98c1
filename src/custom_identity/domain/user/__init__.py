"""User domain: the user aggregate, its value objects and store interfaces."""

from custom_identity.domain.user.aggregates import User
from custom_identity.domain.user.exceptions import RoleNotFoundError
from custom_identity.domain.user.repositories import (
    UserClaimStore,
    UserEmailStore,
    UserLockoutStore,
    UserLoginStore,
    UserPasswordStore,
    UserRoleStore,
    UserSecurityStampStore,
    UserStore,
    UserTwoFactorStore,
)
from custom_identity.domain.user.value_objects import (
    Claim,
    IdentityError,
    IdentityErrorCode,
    IdentityErrorDescriber,
    IdentityResult,
    UserClaimAssociativesUpdate,
    UserLoginInfo,
)

__all__ = [
    "Claim",
    "IdentityError",
    "IdentityErrorCode",
    "IdentityErrorDescriber",
    "IdentityResult",
    "RoleNotFoundError",
    "User",
    "UserClaimAssociativesUpdate",
    "UserClaimStore",
    "UserEmailStore",
    "UserLockoutStore",
    "UserLoginInfo",
    "UserPasswordStore",
    "UserRoleStore",
    "UserSecurityStampStore",
    "UserStore",
    "UserTwoFactorStore",
]

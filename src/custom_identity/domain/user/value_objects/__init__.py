"""Value objects for the user domain."""

from custom_identity.domain.user.value_objects.claim import Claim
from custom_identity.domain.user.value_objects.claim_associatives_update import (
    UserClaimAssociativesUpdate,
)
from custom_identity.domain.user.value_objects.identity_result import (
    IdentityError,
    IdentityErrorCode,
    IdentityErrorDescriber,
    IdentityResult,
)
from custom_identity.domain.user.value_objects.login_info import UserLoginInfo

__all__ = [
    "Claim",
    "IdentityError",
    "IdentityErrorCode",
    "IdentityErrorDescriber",
    "IdentityResult",
    "UserClaimAssociativesUpdate",
    "UserLoginInfo",
]

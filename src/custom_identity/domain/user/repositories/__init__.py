"""Store capability interfaces.

Each interface groups one capability so a single store can satisfy several
independently.
"""

from custom_identity.domain.user.repositories.claim_store import UserClaimStore
from custom_identity.domain.user.repositories.email_store import UserEmailStore
from custom_identity.domain.user.repositories.lockout_store import UserLockoutStore
from custom_identity.domain.user.repositories.login_store import UserLoginStore
from custom_identity.domain.user.repositories.password_store import UserPasswordStore
from custom_identity.domain.user.repositories.role_store import UserRoleStore
from custom_identity.domain.user.repositories.security_stamp_store import (
    UserSecurityStampStore,
)
from custom_identity.domain.user.repositories.two_factor_store import (
    UserTwoFactorStore,
)
from custom_identity.domain.user.repositories.user_store import UserStore

__all__ = [
    "UserClaimStore",
    "UserEmailStore",
    "UserLockoutStore",
    "UserLoginStore",
    "UserPasswordStore",
    "UserRoleStore",
    "UserSecurityStampStore",
    "UserStore",
    "UserTwoFactorStore",
]

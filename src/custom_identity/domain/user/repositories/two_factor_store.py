"""Two-factor flag capability."""

from abc import abstractmethod
from typing import Optional

from custom_identity.domain.shared.cancellation import CancellationToken
from custom_identity.domain.user.aggregates.user import User
from custom_identity.domain.user.repositories.user_store import UserStore


class UserTwoFactorStore(UserStore):
    @abstractmethod
    async def set_two_factor_enabled(
        self,
        user: User,
        enabled: bool,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        """Set the two-factor flag in memory."""

    @abstractmethod
    async def get_two_factor_enabled(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> bool:
        """Return the two-factor flag."""

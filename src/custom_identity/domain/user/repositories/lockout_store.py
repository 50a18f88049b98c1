"""Failed access counter capability."""

from abc import abstractmethod
from typing import Optional

from custom_identity.domain.shared.cancellation import CancellationToken
from custom_identity.domain.user.aggregates.user import User
from custom_identity.domain.user.repositories.user_store import UserStore


class UserLockoutStore(UserStore):
    """Failed access counting. Lockout policy lives with the caller."""

    @abstractmethod
    async def get_access_failed_count(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> int:
        """Return the failed access count."""

    @abstractmethod
    async def increment_access_failed_count(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> int:
        """Increment the failed access count in memory and return it."""

    @abstractmethod
    async def reset_access_failed_count(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> None:
        """Reset the failed access count in memory."""

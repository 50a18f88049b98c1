"""Security stamp capability."""

from abc import abstractmethod
from typing import Optional

from custom_identity.domain.shared.cancellation import CancellationToken
from custom_identity.domain.user.aggregates.user import User
from custom_identity.domain.user.repositories.user_store import UserStore


class UserSecurityStampStore(UserStore):
    """Security stamp that changes whenever credentials change."""

    @abstractmethod
    async def set_security_stamp(
        self,
        user: User,
        stamp: str,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        """Set the security stamp in memory."""

    @abstractmethod
    async def get_security_stamp(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        """Return the security stamp."""

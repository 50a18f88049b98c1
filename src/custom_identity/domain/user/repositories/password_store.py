"""Password hash capability."""

from abc import abstractmethod
from typing import Optional

from custom_identity.domain.shared.cancellation import CancellationToken
from custom_identity.domain.user.aggregates.user import User
from custom_identity.domain.user.repositories.user_store import UserStore


class UserPasswordStore(UserStore):
    """Stores password hashes. Hashing itself happens elsewhere."""

    @abstractmethod
    async def set_password_hash(
        self,
        user: User,
        password_hash: Optional[str],
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        """Set the password hash in memory."""

    @abstractmethod
    async def get_password_hash(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        """Return the password hash."""

    @abstractmethod
    async def has_password(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> bool:
        """Check whether the user has a password hash."""

"""Email capability."""

from abc import abstractmethod
from typing import Optional

from custom_identity.domain.shared.cancellation import CancellationToken
from custom_identity.domain.user.aggregates.user import User
from custom_identity.domain.user.repositories.user_store import UserStore


class UserEmailStore(UserStore):
    """Email address, its normalized form and confirmation flag."""

    @abstractmethod
    async def set_email(
        self,
        user: User,
        email: Optional[str],
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        """Set the email in memory."""

    @abstractmethod
    async def get_email(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        """Return the email."""

    @abstractmethod
    async def get_email_confirmed(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> bool:
        """Return whether the email is confirmed."""

    @abstractmethod
    async def set_email_confirmed(
        self,
        user: User,
        confirmed: bool,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        """Set the confirmation flag in memory."""

    @abstractmethod
    async def get_normalized_email(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        """Return the normalized email."""

    @abstractmethod
    async def set_normalized_email(
        self,
        user: User,
        normalized_email: Optional[str],
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        """Set the normalized email in memory."""

    @abstractmethod
    async def find_by_email(
        self,
        normalized_email: str,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> Optional[User]:
        """Find a user by normalized email."""

"""Core user store interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from custom_identity.domain.shared.cancellation import CancellationToken
from custom_identity.domain.user.aggregates.user import User
from custom_identity.domain.user.value_objects import IdentityResult


class UserStore(ABC):
    """Lifecycle and name accessors every user store provides."""

    @abstractmethod
    async def get_user_id(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> str:
        """Return the user's id as a string."""

    @abstractmethod
    async def get_user_name(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        """Return the user's name."""

    @abstractmethod
    async def set_user_name(
        self,
        user: User,
        user_name: Optional[str],
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        """Set the user's name in memory."""

    @abstractmethod
    async def get_normalized_user_name(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        """Return the normalized user name."""

    @abstractmethod
    async def set_normalized_user_name(
        self,
        user: User,
        normalized_name: Optional[str],
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        """Set the normalized user name in memory."""

    @abstractmethod
    async def create(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> IdentityResult:
        """Persist a new user."""

    @abstractmethod
    async def update(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> IdentityResult:
        """Persist changes to an existing user."""

    @abstractmethod
    async def delete(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> IdentityResult:
        """Delete a user and its associations."""

    @abstractmethod
    async def find_by_id(
        self,
        user_id: UUID | str,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> Optional[User]:
        """Find a user by id."""

    @abstractmethod
    async def find_by_name(
        self,
        normalized_user_name: Optional[str],
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> Optional[User]:
        """Find a user by normalized user name; ``None`` finds nobody."""

    @abstractmethod
    def dispose(self) -> None:
        """Release the store. Later calls fail."""

"""Role membership capability."""

from abc import abstractmethod
from typing import Optional

from custom_identity.domain.shared.cancellation import CancellationToken
from custom_identity.domain.user.aggregates.user import User
from custom_identity.domain.user.repositories.user_store import UserStore


class UserRoleStore(UserStore):
    """Memberships in roles managed outside this store."""

    @abstractmethod
    async def add_to_role(
        self,
        user: User,
        normalized_role_name: str,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        """Add the user to a role."""

    @abstractmethod
    async def remove_from_role(
        self,
        user: User,
        normalized_role_name: str,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        """Remove the user from a role if a member."""

    @abstractmethod
    async def get_roles(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> list[str]:
        """List the names of the user's roles."""

    @abstractmethod
    async def is_in_role(
        self,
        user: User,
        normalized_role_name: str,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> bool:
        """Check role membership."""

    @abstractmethod
    async def get_users_in_role(
        self,
        normalized_role_name: str,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> list[User]:
        """List members of a role."""

"""External login capability."""

from abc import abstractmethod
from typing import Optional

from custom_identity.domain.shared.cancellation import CancellationToken
from custom_identity.domain.user.aggregates.user import User
from custom_identity.domain.user.repositories.user_store import UserStore
from custom_identity.domain.user.value_objects import UserLoginInfo


class UserLoginStore(UserStore):
    """Logins keyed by ``(login_provider, provider_key)``."""

    @abstractmethod
    async def add_login(
        self,
        user: User,
        login: UserLoginInfo,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        """Bind an external login to the user."""

    @abstractmethod
    async def remove_login(
        self,
        user: User,
        login_provider: str,
        provider_key: str,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        """Remove a login binding if it exists."""

    @abstractmethod
    async def get_logins(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> list[UserLoginInfo]:
        """List the user's logins."""

    @abstractmethod
    async def find_by_login(
        self,
        login_provider: str,
        provider_key: str,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> Optional[User]:
        """Find the user owning a login."""

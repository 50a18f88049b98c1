"""Claim capability."""

from abc import abstractmethod
from collections.abc import Iterable
from typing import Optional

from custom_identity.domain.shared.cancellation import CancellationToken
from custom_identity.domain.user.aggregates.user import User
from custom_identity.domain.user.repositories.user_store import UserStore
from custom_identity.domain.user.value_objects import (
    Claim,
    IdentityResult,
    UserClaimAssociativesUpdate,
)


class UserClaimStore(UserStore):
    """Claims matched structurally by ``(type, value)``."""

    @abstractmethod
    async def get_claims(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> list[Claim]:
        """List the user's claims."""

    @abstractmethod
    async def add_claims(
        self,
        user: User,
        claims: Iterable[Claim],
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> IdentityResult:
        """Add claims, all or nothing."""

    @abstractmethod
    async def replace_claim(
        self,
        user: User,
        claim: Claim,
        new_claim: Claim,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> IdentityResult:
        """Replace a claim for this user only."""

    @abstractmethod
    async def remove_claims(
        self,
        user: User,
        claims: Iterable[Claim],
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> IdentityResult:
        """Remove claims; absent claims are ignored."""

    @abstractmethod
    async def get_users_for_claim(
        self, claim: Claim, *, cancellation: Optional[CancellationToken] = None
    ) -> list[User]:
        """List users holding a claim."""

    @abstractmethod
    async def update_claim_associatives(
        self,
        update: UserClaimAssociativesUpdate,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> IdentityResult:
        """Set a user's claims to the given catalog ids."""

"""Request to set a user's claims to a list of catalog ids."""

from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserClaimAssociativesUpdate:
    user_id: UUID
    claim_ids: tuple[int, ...]

    @classmethod
    def of(cls, user_id: UUID, claim_ids: Iterable[int]) -> "UserClaimAssociativesUpdate":
        return cls(user_id=user_id, claim_ids=tuple(claim_ids))

"""User ↔ claim associations.

Assignments point at shared catalog rows. Everything here matches claims by
``(type, value)`` equality and never edits a catalog row, so changing one
user's claims cannot change another user's.
"""

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from custom_identity.domain.user import (
    Claim,
    IdentityErrorDescriber,
    IdentityResult,
    User,
    UserClaimAssociativesUpdate,
)
from custom_identity.infrastructure.persistence.sqlalchemy.associations.claim_catalog import (  # noqa: E501
    ClaimCatalog,
)
from custom_identity.infrastructure.persistence.sqlalchemy.mappers import map_to_domain
from custom_identity.infrastructure.persistence.sqlalchemy.models import (
    ClaimModel,
    UserClaimModel,
    UserModel,
)

logger = logging.getLogger(__name__)


class UserClaimAssociations:
    def __init__(
        self,
        session: AsyncSession,
        describer: IdentityErrorDescriber,
        catalog: ClaimCatalog | None = None,
    ) -> None:
        self._session = session
        self._describer = describer
        self._catalog = catalog or ClaimCatalog(session)

    async def get_claims(self, user: User) -> list[Claim]:
        return [claim for _, claim in await self._assignments_for(user)]

    async def add_claims(self, user: User, claims: Iterable[Claim]) -> IdentityResult:
        """Assign every claim in the batch or none of them.

        The batch is rejected if any claim is already held by the user or
        appears twice in the batch. Validation finishes before the first
        write.
        """
        candidates = list(claims)
        held = set(await self.get_claims(user))
        seen: set[Claim] = set()

        for claim in candidates:
            if claim in held or claim in seen:
                logger.warning("Rejected duplicate claim %s for user %s", claim, user.id)
                return IdentityResult.failed(self._describer.duplicate_claim(claim))
            seen.add(claim)

        for claim in candidates:
            entry = await self._catalog.resolve(claim)
            self._session.add(UserClaimModel(user_id=user.id, claim_id=entry.id))

        logger.debug("Added %d claims for user %s", len(candidates), user.id)
        return IdentityResult.success()

    async def replace_claim(
        self,
        user: User,
        claim: Claim,
        new_claim: Claim,
    ) -> IdentityResult:
        """Repoint the user's ``claim`` assignments at ``new_claim``.

        When the user already holds ``new_claim`` the old assignments are
        dropped instead, so the user never ends up holding it twice.
        """
        matched = [
            assignment
            for assignment, held in await self._assignments_for(user)
            if held == claim
        ]
        if not matched or claim == new_claim:
            return IdentityResult.success()

        already_held = new_claim in await self.get_claims(user)
        if already_held:
            for assignment in matched:
                await self._session.delete(assignment)
        else:
            entry = await self._catalog.resolve(new_claim)
            first, *rest = matched
            first.claim_id = entry.id
            for assignment in rest:
                await self._session.delete(assignment)

        logger.debug("Replaced claim %s with %s for user %s", claim, new_claim, user.id)
        return IdentityResult.success()

    async def remove_claims(self, user: User, claims: Iterable[Claim]) -> IdentityResult:
        targets = set(claims)
        if not targets:
            return IdentityResult.success()

        removed = 0
        for assignment, held in await self._assignments_for(user):
            if held in targets:
                await self._session.delete(assignment)
                removed += 1

        logger.debug("Removed %d claim assignments for user %s", removed, user.id)
        return IdentityResult.success()

    async def get_users_for_claim(self, claim: Claim) -> list[User]:
        stmt = (
            select(UserModel)
            .join(UserClaimModel, UserClaimModel.user_id == UserModel.id)
            .join(ClaimModel, ClaimModel.id == UserClaimModel.claim_id)
            .where(
                ClaimModel.claim_type == claim.type,
                ClaimModel.claim_value == claim.value,
            )
        )
        result = await self._session.execute(stmt)
        return [map_to_domain(model) for model in result.scalars().unique().all()]

    async def update_claim_associatives(
        self,
        update: UserClaimAssociativesUpdate,
    ) -> IdentityResult:
        """Make the user's assignments equal ``update.claim_ids``.

        Unknown ids fail the whole update before anything is written.
        """
        wanted = list(dict.fromkeys(update.claim_ids))
        known = {entry.id for entry in await self._catalog.get_by_ids(wanted)}
        missing = [claim_id for claim_id in wanted if claim_id not in known]
        if missing:
            return IdentityResult.failed(
                *(self._describer.invalid_claim(claim_id) for claim_id in missing)
            )

        stmt = select(UserClaimModel).where(UserClaimModel.user_id == update.user_id)
        result = await self._session.execute(stmt)
        current = list(result.scalars().all())

        kept: set[int] = set()
        for assignment in current:
            if assignment.claim_id in known and assignment.claim_id not in kept:
                kept.add(assignment.claim_id)
            else:
                await self._session.delete(assignment)

        for claim_id in wanted:
            if claim_id not in kept:
                self._session.add(
                    UserClaimModel(user_id=update.user_id, claim_id=claim_id)
                )

        logger.debug(
            "Set %d claims for user %s (%d kept)",
            len(wanted),
            update.user_id,
            len(kept),
        )
        return IdentityResult.success()

    async def _assignments_for(self, user: User) -> list[tuple[UserClaimModel, Claim]]:
        stmt = (
            select(UserClaimModel, ClaimModel.claim_type, ClaimModel.claim_value)
            .join(ClaimModel, ClaimModel.id == UserClaimModel.claim_id)
            .where(UserClaimModel.user_id == user.id)
            .order_by(UserClaimModel.id)
        )
        result = await self._session.execute(stmt)
        return [
            (assignment, Claim(claim_type, claim_value))
            for assignment, claim_type, claim_value in result.all()
        ]

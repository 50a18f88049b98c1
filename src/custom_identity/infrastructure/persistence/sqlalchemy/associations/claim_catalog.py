"""Catalog of distinct ``(type, value)`` claim definitions."""

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from custom_identity.domain.user import Claim
from custom_identity.infrastructure.persistence.sqlalchemy.models import ClaimModel

logger = logging.getLogger(__name__)


class ClaimCatalog:
    """Resolves claims to catalog rows.

    Catalog rows are copy-on-write: callers that need a different
    ``(type, value)`` resolve another row instead of editing one, because a
    row may be referenced by many users.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find(self, claim: Claim) -> ClaimModel | None:
        stmt = select(ClaimModel).where(
            ClaimModel.claim_type == claim.type,
            ClaimModel.claim_value == claim.value,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def resolve(self, claim: Claim) -> ClaimModel:
        """Return the catalog row for ``claim``, inserting it if missing.

        The insert runs in a savepoint. If a concurrent writer committed the
        same ``(type, value)`` first, the unique constraint rejects ours and
        the committed row is returned instead.
        """
        entry = await self.find(claim)
        if entry is not None:
            return entry

        entry = ClaimModel(claim_type=claim.type, claim_value=claim.value)
        try:
            async with self._session.begin_nested():
                self._session.add(entry)
        except IntegrityError:
            # Another session inserted the same pair since ``find``.
            existing = await self.find(claim)
            if existing is None:
                raise
            logger.debug("Claim %s was added concurrently as %s", claim, existing.id)
            return existing

        logger.debug("Added claim %s to catalog as %s", claim, entry.id)
        return entry

    async def get_by_ids(self, claim_ids: Iterable[int]) -> list[ClaimModel]:
        ids = list(claim_ids)
        if not ids:
            return []

        stmt = select(ClaimModel).where(ClaimModel.id.in_(ids))
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

"""SQLAlchemy identity store.

``UserStoreSQLAlchemy`` is the single object the account-management layer
talks to. It satisfies every capability interface in
``custom_identity.domain.user.repositories``; the junction-table work is
delegated to the association classes and the session is the unit of work.
"""

import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from custom_identity.domain.shared.cancellation import CancellationToken
from custom_identity.domain.shared.guards import require_argument
from custom_identity.domain.shared.time import utc_now
from custom_identity.domain.user import (
    Claim,
    IdentityErrorDescriber,
    IdentityResult,
    User,
    UserClaimAssociativesUpdate,
    UserClaimStore,
    UserEmailStore,
    UserLockoutStore,
    UserLoginInfo,
    UserLoginStore,
    UserPasswordStore,
    UserRoleStore,
    UserSecurityStampStore,
    UserTwoFactorStore,
)
from custom_identity.exceptions import StoreDisposedError
from custom_identity.infrastructure.persistence.sqlalchemy.associations import (
    ClaimCatalog,
    UserClaimAssociations,
    UserLoginAssociations,
    UserRoleAssociations,
)
from custom_identity.infrastructure.persistence.sqlalchemy.mappers import (
    map_to_domain,
    map_to_model,
    update_model,
)
from custom_identity.infrastructure.persistence.sqlalchemy.models import (
    UserClaimModel,
    UserLoginModel,
    UserModel,
    UserRoleModel,
)
from custom_identity_config import get_settings

logger = logging.getLogger(__name__)


def _new_stamp() -> str:
    return str(uuid4())


class UserStoreSQLAlchemy(
    UserPasswordStore,
    UserLoginStore,
    UserClaimStore,
    UserEmailStore,
    UserSecurityStampStore,
    UserTwoFactorStore,
    UserLockoutStore,
    UserRoleStore,
):
    """
    Identity store backed by one ``AsyncSession``.

    Every public method checks, in order: the cancellation token, whether
    the store is disposed, and its required arguments. Failures there are
    raised; expected failures (concurrency conflicts, duplicate claims) are
    returned as ``IdentityResult``.

    With ``auto_save_changes`` on, each mutating call commits. With it off,
    changes stay in the session until ``save_changes`` is called.
    """

    def __init__(
        self,
        session: AsyncSession,
        *,
        auto_save_changes: bool | None = None,
        error_describer: IdentityErrorDescriber | None = None,
    ) -> None:
        """Initialize the store.

        Parameters
        ----------
        session
            SQLAlchemy async session; owned by the caller
        auto_save_changes
            Commit after every mutating call; defaults to the
            ``IDENTITY_AUTO_SAVE_CHANGES`` setting
        error_describer
            Source of the errors placed in failed results
        """
        self._session = session
        if auto_save_changes is None:
            auto_save_changes = get_settings().auto_save_changes
        self.auto_save_changes = auto_save_changes
        self.error_describer = error_describer or IdentityErrorDescriber()
        self._disposed = False

        self._logins = UserLoginAssociations(session)
        self._claims = UserClaimAssociations(
            session,
            self.error_describer,
            ClaimCatalog(session),
        )
        self._roles = UserRoleAssociations(session)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def create(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> IdentityResult:
        self._guard(cancellation)
        require_argument(user, "user")

        user.concurrency_stamp = _new_stamp()
        async with self._changes():
            self._session.add(map_to_model(user))

        logger.info("Created user: %s (%s)", user.id, user.user_name)
        return IdentityResult.success()

    async def update(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> IdentityResult:
        self._guard(cancellation)
        require_argument(user, "user")

        model = await self._session.get(UserModel, user.id)
        if model is None or model.concurrency_stamp != user.concurrency_stamp:
            return self._concurrency_failure("update", user)

        previous_stamp = user.concurrency_stamp
        user.concurrency_stamp = _new_stamp()
        user.updated_at = utc_now()
        update_model(model, user)

        try:
            async with self._changes():
                await self._session.flush()
        except StaleDataError:
            user.concurrency_stamp = previous_stamp
            return self._concurrency_failure("update", user)

        logger.debug("Updated user: %s", user.id)
        return IdentityResult.success()

    async def delete(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> IdentityResult:
        self._guard(cancellation)
        require_argument(user, "user")

        model = await self._session.get(UserModel, user.id)
        if model is None or model.concurrency_stamp != user.concurrency_stamp:
            return self._concurrency_failure("delete", user)

        try:
            async with self._changes():
                for junction in (UserClaimModel, UserLoginModel, UserRoleModel):
                    await self._session.execute(
                        delete(junction).where(junction.user_id == user.id)
                    )
                await self._session.delete(model)
                await self._session.flush()
        except StaleDataError:
            return self._concurrency_failure("delete", user)

        logger.info("Deleted user: %s", user.id)
        return IdentityResult.success()

    async def find_by_id(
        self,
        user_id: UUID | str,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> Optional[User]:
        self._guard(cancellation)

        if isinstance(user_id, str):
            try:
                user_id = UUID(user_id)
            except ValueError:
                return None
        if user_id is None:
            return None

        model = await self._session.get(UserModel, user_id)
        return map_to_domain(model) if model else None

    async def find_by_name(
        self,
        normalized_user_name: Optional[str],
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> Optional[User]:
        self._guard(cancellation)
        if normalized_user_name is None:
            return None

        return await self._find_first(
            UserModel.normalized_user_name == normalized_user_name
        )

    async def find_by_email(
        self,
        normalized_email: str,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> Optional[User]:
        self._guard(cancellation)
        require_argument(normalized_email, "normalized_email")

        return await self._find_first(UserModel.normalized_email == normalized_email)

    async def save_changes(
        self, *, cancellation: Optional[CancellationToken] = None
    ) -> None:
        """Commit pending changes (for ``auto_save_changes=False``)."""
        self._guard(cancellation)
        try:
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise

    def dispose(self) -> None:
        self._disposed = True

    async def __aenter__(self) -> "UserStoreSQLAlchemy":
        self._raise_if_disposed()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    # ------------------------------------------------------------------
    # Field accessors (in memory only)
    # ------------------------------------------------------------------

    async def get_user_id(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> str:
        return str(self._checked(user, cancellation).id)

    async def get_user_name(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        return self._checked(user, cancellation).user_name

    async def set_user_name(
        self,
        user: User,
        user_name: Optional[str],
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        self._checked(user, cancellation).user_name = user_name

    async def get_normalized_user_name(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        return self._checked(user, cancellation).normalized_user_name

    async def set_normalized_user_name(
        self,
        user: User,
        normalized_name: Optional[str],
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        self._checked(user, cancellation).normalized_user_name = normalized_name

    async def get_email(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        return self._checked(user, cancellation).email

    async def set_email(
        self,
        user: User,
        email: Optional[str],
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        self._checked(user, cancellation).email = email

    async def get_normalized_email(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        return self._checked(user, cancellation).normalized_email

    async def set_normalized_email(
        self,
        user: User,
        normalized_email: Optional[str],
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        self._checked(user, cancellation).normalized_email = normalized_email

    async def get_email_confirmed(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> bool:
        return self._checked(user, cancellation).email_confirmed

    async def set_email_confirmed(
        self,
        user: User,
        confirmed: bool,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        self._checked(user, cancellation).email_confirmed = confirmed

    async def get_password_hash(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        return self._checked(user, cancellation).password_hash

    async def set_password_hash(
        self,
        user: User,
        password_hash: Optional[str],
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        self._checked(user, cancellation).password_hash = password_hash

    async def has_password(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> bool:
        return self._checked(user, cancellation).password_hash is not None

    async def get_security_stamp(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> Optional[str]:
        return self._checked(user, cancellation).security_stamp

    async def set_security_stamp(
        self,
        user: User,
        stamp: str,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        checked = self._checked(user, cancellation)
        if not stamp:
            msg = "Argument 'stamp' must not be empty"
            raise ValueError(msg)
        checked.security_stamp = stamp

    async def get_two_factor_enabled(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> bool:
        return self._checked(user, cancellation).two_factor_enabled

    async def set_two_factor_enabled(
        self,
        user: User,
        enabled: bool,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        self._checked(user, cancellation).two_factor_enabled = enabled

    async def get_access_failed_count(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> int:
        return self._checked(user, cancellation).access_failed_count

    async def increment_access_failed_count(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> int:
        checked = self._checked(user, cancellation)
        checked.access_failed_count += 1
        return checked.access_failed_count

    async def reset_access_failed_count(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> None:
        self._checked(user, cancellation).access_failed_count = 0

    # ------------------------------------------------------------------
    # Logins
    # ------------------------------------------------------------------

    async def add_login(
        self,
        user: User,
        login: UserLoginInfo,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        self._checked(user, cancellation)
        require_argument(login, "login")

        async with self._changes():
            self._logins.add_login(user, login)

    async def remove_login(
        self,
        user: User,
        login_provider: str,
        provider_key: str,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        self._checked(user, cancellation)

        async with self._changes():
            await self._logins.remove_login(user, login_provider, provider_key)

    async def get_logins(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> list[UserLoginInfo]:
        self._checked(user, cancellation)
        return await self._logins.get_logins(user)

    async def find_by_login(
        self,
        login_provider: str,
        provider_key: str,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> Optional[User]:
        self._guard(cancellation)
        return await self._logins.find_by_login(login_provider, provider_key)

    # ------------------------------------------------------------------
    # Claims
    # ------------------------------------------------------------------

    async def get_claims(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> list[Claim]:
        self._checked(user, cancellation)
        return await self._claims.get_claims(user)

    async def add_claims(
        self,
        user: User,
        claims: Iterable[Claim],
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> IdentityResult:
        self._checked(user, cancellation)
        require_argument(claims, "claims")

        async with self._changes():
            return await self._claims.add_claims(user, claims)

    async def replace_claim(
        self,
        user: User,
        claim: Claim,
        new_claim: Claim,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> IdentityResult:
        self._checked(user, cancellation)
        require_argument(claim, "claim")
        require_argument(new_claim, "new_claim")

        async with self._changes():
            return await self._claims.replace_claim(user, claim, new_claim)

    async def remove_claims(
        self,
        user: User,
        claims: Iterable[Claim],
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> IdentityResult:
        self._checked(user, cancellation)
        require_argument(claims, "claims")

        async with self._changes():
            return await self._claims.remove_claims(user, claims)

    async def get_users_for_claim(
        self, claim: Claim, *, cancellation: Optional[CancellationToken] = None
    ) -> list[User]:
        self._guard(cancellation)
        require_argument(claim, "claim")
        return await self._claims.get_users_for_claim(claim)

    async def update_claim_associatives(
        self,
        update: UserClaimAssociativesUpdate,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> IdentityResult:
        self._guard(cancellation)
        require_argument(update, "update")

        async with self._changes():
            return await self._claims.update_claim_associatives(update)

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    async def add_to_role(
        self,
        user: User,
        normalized_role_name: str,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        self._checked(user, cancellation)
        require_argument(normalized_role_name, "normalized_role_name")

        async with self._changes():
            await self._roles.add_to_role(user, normalized_role_name)

    async def remove_from_role(
        self,
        user: User,
        normalized_role_name: str,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> None:
        self._checked(user, cancellation)
        require_argument(normalized_role_name, "normalized_role_name")

        async with self._changes():
            await self._roles.remove_from_role(user, normalized_role_name)

    async def get_roles(
        self, user: User, *, cancellation: Optional[CancellationToken] = None
    ) -> list[str]:
        self._checked(user, cancellation)
        return await self._roles.get_roles(user)

    async def is_in_role(
        self,
        user: User,
        normalized_role_name: str,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> bool:
        self._checked(user, cancellation)
        require_argument(normalized_role_name, "normalized_role_name")
        return await self._roles.is_in_role(user, normalized_role_name)

    async def get_users_in_role(
        self,
        normalized_role_name: str,
        *,
        cancellation: Optional[CancellationToken] = None,
    ) -> list[User]:
        self._guard(cancellation)
        require_argument(normalized_role_name, "normalized_role_name")
        return await self._roles.get_users_in_role(normalized_role_name)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _guard(self, cancellation: Optional[CancellationToken]) -> None:
        if cancellation is not None:
            cancellation.raise_if_cancellation_requested()
        self._raise_if_disposed()

    def _checked(self, user: User, cancellation: Optional[CancellationToken]) -> User:
        self._guard(cancellation)
        return require_argument(user, "user")

    def _raise_if_disposed(self) -> None:
        if self._disposed:
            raise StoreDisposedError(type(self).__name__)

    @asynccontextmanager
    async def _changes(self) -> AsyncIterator[None]:
        """Commit the enclosed writes when auto-saving.

        Any error rolls the session back and propagates unchanged.
        """
        try:
            yield
            if self.auto_save_changes:
                await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise

    async def _find_first(self, criterion) -> Optional[User]:
        stmt = select(UserModel).where(criterion).limit(1)
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return map_to_domain(model) if model else None

    def _concurrency_failure(self, operation: str, user: User) -> IdentityResult:
        logger.warning("Concurrency conflict on %s of user %s", operation, user.id)
        return IdentityResult.failed(self.error_describer.concurrency_failure())

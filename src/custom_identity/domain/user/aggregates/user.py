"""User aggregate holding identity and credential fields."""

from datetime import datetime
from uuid import UUID, uuid4

from custom_identity.domain.shared.time import utc_now


class User:
    """
    User aggregate root.

    Field values are plain mutable attributes; the store's setters change them
    in memory and nothing is persisted until ``update`` is called. The id is
    fixed at construction. Instances are not safe to share between
    concurrently running operations.
    """

    def __init__(
        self,
        user_name: str | None = None,
        email: str | None = None,
        id: UUID | None = None,
        normalized_user_name: str | None = None,
        normalized_email: str | None = None,
        email_confirmed: bool = False,
        password_hash: str | None = None,
        security_stamp: str | None = None,
        concurrency_stamp: str | None = None,
        two_factor_enabled: bool = False,
        access_failed_count: int = 0,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = id or uuid4()
        self.user_name = user_name
        self.normalized_user_name = normalized_user_name
        self.email = email
        self.normalized_email = normalized_email
        self.email_confirmed = email_confirmed
        self.password_hash = password_hash
        self.security_stamp = security_stamp
        self.concurrency_stamp = concurrency_stamp
        self.two_factor_enabled = two_factor_enabled
        self.access_failed_count = access_failed_count
        self.created_at = created_at or utc_now()
        self.updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @classmethod
    def create(
        cls,
        user_name: str,
        email: str | None = None,
    ) -> "User":
        """Create a new user with upper-cased normalized name and email."""
        return cls(
            user_name=user_name,
            normalized_user_name=user_name.upper(),
            email=email,
            normalized_email=email.upper() if email else None,
            security_stamp=uuid4().hex.upper(),
        )

    @classmethod
    def reconstitute(
        cls,
        id: UUID,
        user_name: str | None,
        normalized_user_name: str | None,
        email: str | None,
        normalized_email: str | None,
        email_confirmed: bool,
        password_hash: str | None,
        security_stamp: str | None,
        concurrency_stamp: str | None,
        two_factor_enabled: bool,
        access_failed_count: int,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            user_name=user_name,
            normalized_user_name=normalized_user_name,
            email=email,
            normalized_email=normalized_email,
            email_confirmed=email_confirmed,
            password_hash=password_hash,
            security_stamp=security_stamp,
            concurrency_stamp=concurrency_stamp,
            two_factor_enabled=two_factor_enabled,
            access_failed_count=access_failed_count,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, user_name={self.user_name})"

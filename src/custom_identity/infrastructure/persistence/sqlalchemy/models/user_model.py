"""SQLAlchemy model for the User aggregate."""

from uuid import UUID

from sqlalchemy import Boolean, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from custom_identity.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class UserModel(Base, TimestampMixin):
    """SQLAlchemy model for persisting users.

    ``concurrency_stamp`` is the mapper's version column. Stamps are assigned
    by the store, and every UPDATE/DELETE is guarded by the stamp that was
    loaded, so a lost update raises ``StaleDataError`` at flush.
    """

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    normalized_user_name: Mapped[str | None] = mapped_column(
        String(256),
        nullable=True,
        index=True,
    )
    email: Mapped[str | None] = mapped_column(String(256), nullable=True)
    normalized_email: Mapped[str | None] = mapped_column(
        String(256),
        nullable=True,
        index=True,
    )
    email_confirmed: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    password_hash: Mapped[str | None] = mapped_column(Text, nullable=True)
    security_stamp: Mapped[str | None] = mapped_column(String(64), nullable=True)
    concurrency_stamp: Mapped[str] = mapped_column(String(64), nullable=False)
    two_factor_enabled: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    access_failed_count: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    __mapper_args__ = {
        "version_id_col": concurrency_stamp,
        "version_id_generator": False,
    }

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, user_name={self.user_name})>"

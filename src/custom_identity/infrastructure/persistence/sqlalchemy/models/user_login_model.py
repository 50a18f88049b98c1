"""SQLAlchemy model for external logins."""

from uuid import UUID

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from custom_identity.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class UserLoginModel(Base, TimestampMixin):
    """Login binding. ``(login_provider, provider_key)`` is globally unique.

    ``id`` increases with every insert and gives the listing order.
    """

    __tablename__ = "user_logins"

    __table_args__ = (
        UniqueConstraint(
            "login_provider",
            "provider_key",
            name="uq_user_logins_provider_key",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    login_provider: Mapped[str] = mapped_column(String(128), nullable=False)
    provider_key: Mapped[str] = mapped_column(String(128), nullable=False)
    provider_display_name: Mapped[str | None] = mapped_column(
        String(256),
        nullable=True,
    )
    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<UserLoginModel(provider={self.login_provider}, "
            f"key={self.provider_key}, user_id={self.user_id})>"
        )

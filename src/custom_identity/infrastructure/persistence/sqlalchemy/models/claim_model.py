"""SQLAlchemy models for the claim catalog and user claim assignments."""

from uuid import UUID

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from custom_identity.infrastructure.persistence.sqlalchemy.models.base import Base


class ClaimModel(Base):
    """Catalog row for one ``(claim_type, claim_value)`` pair.

    Rows are shared by every assignment pointing at them and are never
    updated after insert.
    """

    __tablename__ = "claims"

    __table_args__ = (
        UniqueConstraint("claim_type", "claim_value", name="uq_claims_type_value"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    claim_type: Mapped[str] = mapped_column(String(256), nullable=False)
    claim_value: Mapped[str] = mapped_column(String(256), nullable=False)

    def __repr__(self) -> str:
        return f"<ClaimModel(id={self.id}, {self.claim_type}={self.claim_value})>"


class UserClaimModel(Base):
    """Junction between a user and a catalog claim.

    The pair ``(user_id, claim_id)`` has no unique constraint;
    duplicates are rejected by the claim associations when adding.
    """

    __tablename__ = "user_claims"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    claim_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("claims.id"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<UserClaimModel(user_id={self.user_id}, claim_id={self.claim_id})>"

"""Redemption database models."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from qrhunt.core.database.base import Base, TenantMixin, TimestampMixin, UUIDMixin


class Redemption(Base, UUIDMixin, TimestampMixin, TenantMixin):
    """The prize code issued to a user who solved a tenant's puzzle.

    At most one per (user, tenant); the code is unique within the tenant.

    Attributes:
        user_id: The winner
        redemption_code: Code shown to the prize desk
        redeemed: Whether the prize has been handed out
        redeemed_at: When it was handed out
        redeemed_by: Staff member who handed it out
    """

    __tablename__ = "redemptions"
    __table_args__ = (
        UniqueConstraint("user_id", "tenant_id", name="uq_redemptions_user_tenant"),
        UniqueConstraint("tenant_id", "redemption_code", name="uq_redemptions_tenant_code"),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    redemption_code: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
    )
    redeemed: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    redeemed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    redeemed_by: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Redemption(user_id={self.user_id}, tenant_id={self.tenant_id})>"

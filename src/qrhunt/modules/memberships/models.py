"""Tenant membership database models."""

from enum import Enum
from uuid import UUID

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from qrhunt.core.constants import MAX_ROLE_NAME_LENGTH
from qrhunt.core.database.base import Base, TenantMixin, TimestampMixin, UUIDMixin


class MembershipRole(str, Enum):
    """Staff roles grantable within a tenant."""

    ADMIN = "admin"
    STAFF = "staff"


class TenantMembership(Base, UUIDMixin, TimestampMixin, TenantMixin):
    """Grants a user a staff role in one tenant.

    This table is the source of truth for tenant roles; revoking a
    membership takes effect on the caller's next request.
    """

    __tablename__ = "tenant_memberships"
    __table_args__ = (
        UniqueConstraint("user_id", "tenant_id", name="uq_memberships_user_tenant"),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(
        String(MAX_ROLE_NAME_LENGTH),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<TenantMembership(user_id={self.user_id}, "
            f"tenant_id={self.tenant_id}, role={self.role})>"
        )

"""User and profile database models."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from qrhunt.core.constants import (
    MAX_EMAIL_LENGTH,
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_ROLE_NAME_LENGTH,
    MAX_STATUS_LENGTH,
)
from qrhunt.core.database.base import Base, TenantMixin, TimestampMixin, UUIDMixin


class ProfileRole(str, Enum):
    """Role recorded on a profile row. Authorization reads memberships, not this."""

    VISITOR = "visitor"
    STAFF = "staff"
    ADMIN = "admin"


class CompletionStatus(str, Enum):
    """Where a visitor is in the hunt."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class User(Base, UUIDMixin, TimestampMixin):
    """A platform-wide account.

    One account can be a visitor in several tenants and staff in others;
    the per-tenant side lives in ``Profile`` and ``TenantMembership``.

    Attributes:
        email: Unique email address across the platform
        password_hash: Bcrypt-hashed password
        full_name: User's full name
        is_active: Whether the user can sign in
        is_super_admin: Platform operator flag, the only global privilege
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    full_name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    is_super_admin: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"


class Profile(Base, UUIDMixin, TimestampMixin, TenantMixin):
    """A user's presence in one tenant.

    Attributes:
        user_id: The account this profile belongs to
        full_name: Name as entered at registration for this tenant
        email: Contact email as entered at registration
        phone: Optional phone number
        role: Display role; see ``ProfileRole``
        completion_status: ``in_progress`` until the puzzle is solved
        completed_at: When the puzzle was solved
    """

    __tablename__ = "profiles"
    __table_args__ = (
        UniqueConstraint("user_id", "tenant_id", name="uq_profiles_user_tenant"),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    full_name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=False,
    )
    phone: Mapped[str | None] = mapped_column(
        String(MAX_PHONE_LENGTH),
        nullable=True,
    )
    role: Mapped[str] = mapped_column(
        String(MAX_ROLE_NAME_LENGTH),
        default=ProfileRole.VISITOR.value,
        nullable=False,
    )
    completion_status: Mapped[str] = mapped_column(
        String(MAX_STATUS_LENGTH),
        default=CompletionStatus.IN_PROGRESS.value,
        nullable=False,
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Profile(user_id={self.user_id}, tenant_id={self.tenant_id})>"


class RevokedToken(Base, UUIDMixin, TimestampMixin):
    """An access token invalidated by sign-out before its expiry.

    Attributes:
        jti: The token's unique ID claim
        user_id: The token's owner
        expires_at: Original expiry; rows past it can be deleted
    """

    __tablename__ = "revoked_tokens"

    jti: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
        index=True,
    )
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

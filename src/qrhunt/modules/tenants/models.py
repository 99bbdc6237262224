"""Tenant database models."""

from typing import Any

from sqlalchemy import JSON, Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from qrhunt.core.constants import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH, MAX_SLUG_LENGTH
from qrhunt.core.database.base import Base, TimestampMixin, UUIDMixin


class Tenant(Base, UUIDMixin, TimestampMixin):
    """A customer organisation (a park or zoo) hosting its own hunt.

    Attributes:
        name: Display name
        slug: Subdomain label, unique across the platform
        is_active: Inactive tenants resolve exactly like unknown ones
        branding: Theme settings; keys missing here fall back to the defaults
        contact_email: Optional contact address shown to visitors
    """

    __tablename__ = "tenants"

    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    slug: Mapped[str] = mapped_column(
        String(MAX_SLUG_LENGTH),
        unique=True,
        nullable=False,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    branding: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        default=dict,
        nullable=False,
    )
    contact_email: Mapped[str | None] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, slug={self.slug}, active={self.is_active})>"

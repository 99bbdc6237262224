"""Site content database models."""

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from qrhunt.core.constants import MAX_CONTENT_KEY_LENGTH
from qrhunt.core.database.base import Base, TenantMixin, TimestampMixin, UUIDMixin


class SiteContent(Base, UUIDMixin, TimestampMixin, TenantMixin):
    """A tenant's override of one site text.

    Keys without a row fall back to the built-in default.
    """

    __tablename__ = "site_content"
    __table_args__ = (
        UniqueConstraint("tenant_id", "content_key", name="uq_site_content_tenant_key"),
    )

    content_key: Mapped[str] = mapped_column(
        String(MAX_CONTENT_KEY_LENGTH),
        nullable=False,
    )
    content_value: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<SiteContent(key={self.content_key}, tenant_id={self.tenant_id})>"

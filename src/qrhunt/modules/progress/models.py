"""Scan progress database models."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from qrhunt.core.database.base import Base, TenantMixin, UUIDMixin


class UserProgress(Base, UUIDMixin, TenantMixin):
    """One collected letter: a user scanned a station.

    The unique constraint makes repeated and concurrent scans collapse to
    a single row.
    """

    __tablename__ = "user_progress"
    __table_args__ = (
        UniqueConstraint(
            "tenant_id", "user_id", "animal_id", name="uq_progress_tenant_user_animal"
        ),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    animal_id: Mapped[UUID] = mapped_column(
        ForeignKey("animals.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    letter: Mapped[str] = mapped_column(
        String(8),
        nullable=False,
    )
    scanned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

"""Station (animal) database models."""

from uuid import UUID, uuid4

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from qrhunt.core.constants import MAX_NAME_LENGTH, MAX_URL_LENGTH
from qrhunt.core.database.base import Base, TenantMixin, TimestampMixin, UUIDMixin


class Animal(Base, UUIDMixin, TimestampMixin, TenantMixin):
    """A scan station: one animal exhibit with its QR code and puzzle letter.

    Attributes:
        name: Name in the default language
        name_he: Hebrew display name
        qr_token: Opaque credential printed in the QR code
        letter: The letter this station contributes to the puzzle word
        order_index: Position of the letter in the word, also the display order
        fun_facts: Text shown after a scan
        image_url: Optional image
        video_url: Optional video
        is_active: Inactive stations accept no scans and drop out of the word
    """

    __tablename__ = "animals"

    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    name_he: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        default="",
        nullable=False,
    )
    qr_token: Mapped[UUID] = mapped_column(
        default=uuid4,
        unique=True,
        nullable=False,
        index=True,
    )
    letter: Mapped[str] = mapped_column(
        String(8),
        nullable=False,
    )
    order_index: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )
    fun_facts: Mapped[str] = mapped_column(
        Text,
        default="",
        nullable=False,
    )
    image_url: Mapped[str | None] = mapped_column(
        String(MAX_URL_LENGTH),
        nullable=True,
    )
    video_url: Mapped[str | None] = mapped_column(
        String(MAX_URL_LENGTH),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Animal(id={self.id}, name={self.name}, tenant_id={self.tenant_id})>"

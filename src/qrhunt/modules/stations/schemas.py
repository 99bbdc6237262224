"""Pydantic schemas for stations."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from qrhunt.core.constants import MAX_NAME_LENGTH


class StationBase(BaseModel):
    """Editable station fields."""

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    name_he: str = Field("", max_length=MAX_NAME_LENGTH)
    letter: str = Field(..., min_length=1, max_length=1)
    order_index: int = Field(..., ge=0)
    fun_facts: str = ""
    image_url: HttpUrl | None = None
    video_url: HttpUrl | None = None
    is_active: bool = True


class StationCreate(StationBase):
    """Schema for creating a station. The QR token is generated."""


class StationUpdate(BaseModel):
    """Schema for updating a station. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    name_he: str | None = Field(None, max_length=MAX_NAME_LENGTH)
    letter: str | None = Field(None, min_length=1, max_length=1)
    order_index: int | None = Field(None, ge=0)
    fun_facts: str | None = None
    image_url: HttpUrl | None = None
    video_url: HttpUrl | None = None
    is_active: bool | None = None
    regenerate_qr_token: bool = False


class StationResponse(BaseModel):
    """Station as seen by tenant admins, QR token included."""

    id: UUID
    name: str
    name_he: str
    qr_token: UUID
    letter: str
    order_index: int
    fun_facts: str
    image_url: str | None
    video_url: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

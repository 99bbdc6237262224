"""Pydantic schemas for users, profiles and authentication."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from qrhunt.core.constants import (
    DEFAULT_PAGE_SIZE,
    MAX_NAME_LENGTH,
    MAX_PAGE_SIZE,
    MAX_PASSWORD_LENGTH,
    MAX_PHONE_LENGTH,
    MIN_PASSWORD_LENGTH,
)
from qrhunt.modules.redemptions.schemas import RedemptionResponse


# ============================================================
# Auth Schemas
# ============================================================


class RegisterRequest(BaseModel):
    """Visitor registration for the current tenant."""

    email: EmailStr
    password: str = Field(
        ..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )
    full_name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    phone: str | None = Field(None, max_length=MAX_PHONE_LENGTH)


class LoginRequest(BaseModel):
    """Schema for login request."""

    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """Schema for token response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int


# ============================================================
# User Schemas
# ============================================================


class UserResponse(BaseModel):
    """Schema for user response data."""

    id: UUID
    email: str
    full_name: str
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProfileResponse(BaseModel):
    """A user's profile in one tenant."""

    id: UUID
    user_id: UUID
    full_name: str
    email: str
    phone: str | None
    role: str
    completion_status: str
    completed_at: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MeResponse(BaseModel):
    """The caller, with their standing in the current tenant if any."""

    user: UserResponse
    profile: ProfileResponse | None = None
    role: str | None = None


class ProfileListResponse(BaseModel):
    """Paginated list of profiles."""

    items: list[ProfileResponse]
    total: int
    page: int
    page_size: int
    pages: int


class ScannedStation(BaseModel):
    """A station a visitor has scanned."""

    station_id: UUID
    name: str
    name_he: str
    letter: str
    order_index: int
    scanned_at: datetime


class VisitorDetail(BaseModel):
    """One visitor's profile, scan history and prize."""

    profile: ProfileResponse
    scans: list[ScannedStation]
    active_station_count: int
    redemption: RedemptionResponse | None = None


class ProfileFilterParams(BaseModel):
    """Query parameters selecting visitors."""

    search: str | None = Field(None, max_length=MAX_NAME_LENGTH)
    status: Literal["in_progress", "completed", "all"] = "all"


class ProfileSearchParams(ProfileFilterParams):
    """Query parameters for the paginated visitor list."""

    page: int = Field(1, ge=1)
    page_size: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

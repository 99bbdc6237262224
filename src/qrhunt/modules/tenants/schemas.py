"""Pydantic schemas for tenants and their branding."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    HttpUrl,
    field_validator,
)

from qrhunt.core.constants import (
    DEFAULT_BRANDING,
    HEX_COLOR_PATTERN,
    MAX_NAME_LENGTH,
    MAX_SLUG_LENGTH,
)
from qrhunt.core.utils.text import is_valid_slug


# ============================================================
# Branding
# ============================================================


class Branding(BaseModel):
    """A tenant's theme.

    All six colors are required and unknown keys are rejected.
    """

    primary: str = Field(..., pattern=HEX_COLOR_PATTERN)
    accent: str = Field(..., pattern=HEX_COLOR_PATTERN)
    background: str = Field(..., pattern=HEX_COLOR_PATTERN)
    text: str = Field(..., pattern=HEX_COLOR_PATTERN)
    error: str = Field(..., pattern=HEX_COLOR_PATTERN)
    success: str = Field(..., pattern=HEX_COLOR_PATTERN)
    logo_url: HttpUrl | None = None
    bg_image_url: HttpUrl | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("logo_url", "bg_image_url", mode="before")
    @classmethod
    def empty_url_is_none(cls, v: Any) -> Any:
        """Treat an empty string as an unset URL."""
        return None if v == "" else v


def merge_branding(stored: dict[str, Any] | None) -> dict[str, Any]:
    """Overlay a tenant's stored branding on the defaults."""
    return {**DEFAULT_BRANDING, **(stored or {})}


class BrandingUpdate(BaseModel):
    """Body of the tenant admin branding update."""

    branding: Branding


class BrandingResponse(BaseModel):
    """A tenant's effective branding."""

    branding: dict[str, Any]


# ============================================================
# Tenant Schemas
# ============================================================


def _check_slug(v: str | None) -> str | None:
    if v is not None and not is_valid_slug(v):
        raise ValueError(
            "Slug must be lowercase letters and digits separated by single hyphens"
        )
    return v


class TenantCreate(BaseModel):
    """Schema for creating a tenant. The slug defaults to one derived from the name."""

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    slug: str | None = Field(None, max_length=MAX_SLUG_LENGTH)
    contact_email: EmailStr | None = None
    is_active: bool = True

    _validate_slug = field_validator("slug")(_check_slug)


class TenantUpdate(BaseModel):
    """Schema for updating a tenant. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    slug: str | None = Field(None, max_length=MAX_SLUG_LENGTH)
    contact_email: EmailStr | None = None
    is_active: bool | None = None
    branding: Branding | None = None

    _validate_slug = field_validator("slug")(_check_slug)


class TenantPublic(BaseModel):
    """The configuration any visitor of a tenant's site may read."""

    name: str
    slug: str
    branding: dict[str, Any]


class TenantResponse(BaseModel):
    """Full tenant record for platform operators."""

    id: UUID
    name: str
    slug: str
    is_active: bool
    branding: dict[str, Any]
    contact_email: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TenantWithStats(TenantResponse):
    """Tenant record with its visitor counts."""

    users_count: int = 0
    completed_count: int = 0
    completion_rate: int = 0

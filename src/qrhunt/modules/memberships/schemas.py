"""Pydantic schemas for staff and membership administration."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, EmailStr


class StaffCreate(BaseModel):
    """Tenant admins can grant the staff role only."""

    email: EmailStr
    role: Literal["staff"] = "staff"


class StaffMember(BaseModel):
    """A staff member of the current tenant."""

    user_id: UUID
    email: str
    full_name: str
    role: str
    created_at: datetime


class MemberAssign(BaseModel):
    """Grant or change a role in any tenant."""

    email: EmailStr
    tenant_id: UUID
    role: Literal["admin", "staff"]


class MemberResponse(BaseModel):
    """A membership with the names needed to display it."""

    user_id: UUID
    tenant_id: UUID
    tenant_name: str
    email: str
    role: str
    created_at: datetime


class TenantOption(BaseModel):
    """Tenant choice for the membership form."""

    id: UUID
    name: str


class MemberListResponse(BaseModel):
    """Every membership on the platform, plus the tenants to choose from."""

    memberships: list[MemberResponse]
    tenants: list[TenantOption]

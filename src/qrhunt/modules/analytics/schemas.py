"""Pydantic schemas for the analytics dashboards."""

from uuid import UUID

from pydantic import BaseModel


class StationCount(BaseModel):
    """Scans recorded at one station."""

    station_id: UUID
    name: str
    name_he: str
    order_index: int
    count: int


class TenantAnalytics(BaseModel):
    """A tenant's visitor funnel."""

    total_users: int
    completed_users: int
    completion_rate: int
    distribution: list[StationCount]


class TenantStats(BaseModel):
    """One row of the platform dashboard."""

    id: UUID
    name: str
    slug: str
    is_active: bool
    users: int
    completed: int
    completion_rate: int
    scans: int


class PlatformTotals(BaseModel):
    tenants: int
    active_tenants: int
    suspended_tenants: int
    total_users: int
    total_completed: int


class PlatformAnalytics(BaseModel):
    """Platform totals with per-tenant breakdown."""

    totals: PlatformTotals
    tenants: list[TenantStats]

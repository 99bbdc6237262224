"""Dashboard figures for tenant staff and platform operators.

Only ``visitor`` profiles are counted; staff and admins who also hold a
profile in the tenant do not affect the funnel.
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends

from qrhunt.api.dependencies import DBSession
from qrhunt.core.database import elevated
from qrhunt.modules.analytics.schemas import (
    PlatformAnalytics,
    PlatformTotals,
    StationCount,
    TenantAnalytics,
    TenantStats,
)
from qrhunt.modules.analytics.stats import completion_rate
from qrhunt.modules.progress.repos import ProgressRepository
from qrhunt.modules.stations.repos import StationRepository
from qrhunt.modules.tenants.repos import TenantRepository
from qrhunt.modules.users.models import CompletionStatus
from qrhunt.modules.users.repos import ProfileRepository


_COMPLETED = CompletionStatus.COMPLETED.value


class AnalyticsService:
    """Service computing dashboard aggregates."""

    def __init__(self, db: DBSession) -> None:
        self.db = db
        self.profiles = ProfileRepository(db)
        self.progress = ProgressRepository(db)
        self.stations = StationRepository(db)
        self.tenants = TenantRepository(db)

    async def tenant_analytics(self, tenant_id: UUID) -> TenantAnalytics:
        """Visitor counts and per-station scans for one tenant.

        Stations are listed in ``order_index`` order, inactive ones and
        ones nobody has scanned included.
        """
        by_status = await self.profiles.count_by_status(tenant_id)
        total = sum(by_status.values())
        completed = by_status.get(_COMPLETED, 0)

        scans = await self.progress.count_by_animal(tenant_id)
        stations = await self.stations.list_by_tenant(tenant_id)

        return TenantAnalytics(
            total_users=total,
            completed_users=completed,
            completion_rate=completion_rate(completed, total),
            distribution=[
                StationCount(
                    station_id=s.id,
                    name=s.name,
                    name_he=s.name_he,
                    order_index=s.order_index,
                    count=scans.get(s.id, 0),
                )
                for s in stations
            ],
        )

    async def platform_analytics(self) -> PlatformAnalytics:
        """Totals across every tenant plus a row per tenant."""
        async with elevated(self.db, "super_admin_analytics"):
            tenants = await self.tenants.list_all()
            profile_counts = await self.profiles.count_by_tenant_system()
            scan_counts = await self.progress.count_by_tenant()

        rows = []
        for tenant in tenants:
            by_status = profile_counts.get(tenant.id, {})
            users = sum(by_status.values())
            completed = by_status.get(_COMPLETED, 0)
            rows.append(
                TenantStats(
                    id=tenant.id,
                    name=tenant.name,
                    slug=tenant.slug,
                    is_active=tenant.is_active,
                    users=users,
                    completed=completed,
                    completion_rate=completion_rate(completed, users),
                    scans=scan_counts.get(tenant.id, 0),
                )
            )

        active = sum(1 for t in tenants if t.is_active)
        return PlatformAnalytics(
            totals=PlatformTotals(
                tenants=len(tenants),
                active_tenants=active,
                suspended_tenants=len(tenants) - active,
                total_users=sum(r.users for r in rows),
                total_completed=sum(r.completed for r in rows),
            ),
            tenants=rows,
        )


# Type alias for dependency injection
AnalyticsSvc = Annotated[AnalyticsService, Depends(AnalyticsService)]

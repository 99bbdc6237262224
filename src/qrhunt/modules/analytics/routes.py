"""Analytics dashboards."""

from fastapi import APIRouter

from qrhunt.core.auth import SuperAdmin, TenantStaff
from qrhunt.modules.analytics.schemas import PlatformAnalytics, TenantAnalytics
from qrhunt.modules.analytics.services import AnalyticsSvc


router = APIRouter(tags=["analytics"])


@router.get(
    "/admin/analytics",
    response_model=TenantAnalytics,
    summary="Tenant analytics",
)
async def get_tenant_analytics(
    access: TenantStaff, service: AnalyticsSvc
) -> TenantAnalytics:
    """Visitor funnel and station distribution for the current tenant."""
    return await service.tenant_analytics(access.tenant_id)


@router.get(
    "/super-admin/analytics",
    response_model=PlatformAnalytics,
    summary="Platform analytics",
)
async def get_platform_analytics(
    _admin: SuperAdmin, service: AnalyticsSvc
) -> PlatformAnalytics:
    """Totals across all tenants with a per-tenant breakdown."""
    return await service.platform_analytics()

"""Site content routes: public texts and the admin editor."""

from fastapi import APIRouter

from qrhunt.core.auth import TenantAdmin
from qrhunt.core.tenancy import CurrentTenant
from qrhunt.modules.content.schemas import (
    SiteContentEntry,
    SiteContentPublic,
    SiteContentUpdate,
)
from qrhunt.modules.content.services import SiteContentSvc


public_router = APIRouter(prefix="/content", tags=["content"])
admin_router = APIRouter(prefix="/admin/content", tags=["content"])


@public_router.get("", response_model=SiteContentPublic, summary="Site texts")
async def get_site_content(
    tenant: CurrentTenant, service: SiteContentSvc
) -> SiteContentPublic:
    """Texts for the landing, game and redeem pages, defaults filled in."""
    return SiteContentPublic(content=await service.get_content(tenant))


@admin_router.get("", response_model=list[SiteContentEntry], summary="List site texts")
async def list_site_content(
    tenant: CurrentTenant, _access: TenantAdmin, service: SiteContentSvc
) -> list[SiteContentEntry]:
    return await service.list_entries(tenant)


@admin_router.put("", response_model=list[SiteContentEntry], summary="Edit site texts")
async def update_site_content(
    data: SiteContentUpdate,
    tenant: CurrentTenant,
    _access: TenantAdmin,
    service: SiteContentSvc,
) -> list[SiteContentEntry]:
    """Replace the given texts. Keys left out are unchanged."""
    return await service.update(tenant, data.values)


router = APIRouter()
router.include_router(public_router)
router.include_router(admin_router)

"""Tenant routes: public configuration, branding and platform lifecycle."""

from uuid import UUID

from fastapi import APIRouter, Response, status

from qrhunt.core.auth import SuperAdmin, TenantAdmin
from qrhunt.core.errors import NotFoundError
from qrhunt.core.tenancy import CurrentTenant, Directory, TenantSlug
from qrhunt.modules.tenants.schemas import (
    BrandingResponse,
    BrandingUpdate,
    TenantCreate,
    TenantPublic,
    TenantResponse,
    TenantUpdate,
    TenantWithStats,
    merge_branding,
)
from qrhunt.modules.tenants.services import TenantSvc, to_public


public_router = APIRouter(prefix="/tenants", tags=["tenants"])
branding_router = APIRouter(prefix="/admin/branding", tags=["tenants"])
platform_router = APIRouter(prefix="/super-admin/tenants", tags=["super-admin"])


@public_router.get(
    "/current",
    response_model=TenantPublic,
    summary="Current tenant",
    description="Public configuration of the tenant the request's host resolves to.",
)
async def get_current_tenant_config(
    slug: TenantSlug, directory: Directory
) -> TenantPublic:
    """Return the resolved tenant's name, slug and effective branding."""
    if slug is None:
        raise NotFoundError("No tenant for this host", error_code="tenant_not_found")
    tenant = await directory.get_tenant_or_fail(slug)
    return to_public(tenant)


# ============================================================
# Tenant admin
# ============================================================


@branding_router.get("", response_model=BrandingResponse, summary="Get branding")
async def get_branding(tenant: CurrentTenant, _access: TenantAdmin) -> BrandingResponse:
    """Return the current tenant's effective branding."""
    return BrandingResponse(branding=merge_branding(tenant.branding))


@branding_router.patch("", response_model=BrandingResponse, summary="Update branding")
async def update_branding(
    data: BrandingUpdate,
    tenant: CurrentTenant,
    _access: TenantAdmin,
    service: TenantSvc,
) -> BrandingResponse:
    """Replace the current tenant's branding."""
    return BrandingResponse(branding=await service.update_branding(tenant, data.branding))


# ============================================================
# Platform
# ============================================================


@platform_router.get("", response_model=list[TenantWithStats], summary="List tenants")
async def list_tenants(_admin: SuperAdmin, service: TenantSvc) -> list[TenantWithStats]:
    """List every tenant with visitor counts and completion rate."""
    return await service.list_with_stats()


@platform_router.post(
    "",
    response_model=TenantResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a tenant",
)
async def create_tenant(
    data: TenantCreate, _admin: SuperAdmin, service: TenantSvc
) -> TenantResponse:
    """Create a tenant with the default branding."""
    tenant = await service.create_tenant(data)
    return TenantResponse.model_validate(tenant)


@platform_router.get("/{tenant_id}", response_model=TenantResponse, summary="Get a tenant")
async def get_tenant(
    tenant_id: UUID, _admin: SuperAdmin, service: TenantSvc
) -> TenantResponse:
    """Get a tenant, active or not."""
    tenant = await service.get_tenant(tenant_id)
    return TenantResponse.model_validate(tenant)


@platform_router.patch(
    "/{tenant_id}", response_model=TenantResponse, summary="Update a tenant"
)
async def update_tenant(
    tenant_id: UUID,
    data: TenantUpdate,
    _admin: SuperAdmin,
    service: TenantSvc,
) -> TenantResponse:
    """Update name, slug, contact email, status or branding."""
    tenant = await service.update_tenant(tenant_id, data)
    return TenantResponse.model_validate(tenant)


@platform_router.delete(
    "/{tenant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a tenant",
)
async def delete_tenant(
    tenant_id: UUID, _admin: SuperAdmin, service: TenantSvc
) -> Response:
    """Delete a tenant and everything it owns."""
    await service.delete_tenant(tenant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


router = APIRouter()
router.include_router(public_router)
router.include_router(branding_router)
router.include_router(platform_router)

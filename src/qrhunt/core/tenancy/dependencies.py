"""FastAPI dependencies for tenant context."""

from typing import Annotated

import structlog
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from qrhunt.api.dependencies import DBSession
from qrhunt.config import settings
from qrhunt.core.database import bind_tenant
from qrhunt.core.errors import BadRequestError
from qrhunt.core.tenancy.cache import get_request_cache
from qrhunt.core.tenancy.directory import TenantDirectory
from qrhunt.core.tenancy.resolver import extract_tenant_slug
from qrhunt.modules.tenants.models import Tenant


def get_tenant_slug(request: Request) -> str | None:
    """Get the slug set by TenantResolutionMiddleware, deriving it if absent."""
    if hasattr(request.state, "tenant_slug"):
        return request.state.tenant_slug
    return extract_tenant_slug(
        request.headers.get("host"),
        header_slug=request.headers.get(settings.tenant_header),
        query_slug=request.query_params.get(settings.tenant_query_param),
    )


def get_tenant_directory(request: Request, db: DBSession) -> TenantDirectory:
    """Build a directory sharing the request's cache."""
    return TenantDirectory(db, get_request_cache(request))


Directory = Annotated[TenantDirectory, Depends(get_tenant_directory)]
TenantSlug = Annotated[str | None, Depends(get_tenant_slug)]


async def _enter_tenant(request: Request, db: AsyncSession, tenant: Tenant) -> None:
    """Scope the session, request state and log context to ``tenant``."""
    await bind_tenant(db, tenant.id)
    request.state.tenant_id = tenant.id
    structlog.contextvars.bind_contextvars(tenant_id=str(tenant.id))


async def get_optional_tenant(
    request: Request,
    slug: TenantSlug,
    directory: Directory,
    db: DBSession,
) -> Tenant | None:
    """Get the request's tenant, or None outside any tenant context.

    A resolved tenant is bound to the session like ``get_current_tenant``.
    """
    if slug is None:
        return None
    tenant = await directory.get_tenant(slug)
    if tenant is not None:
        await _enter_tenant(request, db, tenant)
    return tenant


async def get_current_tenant(
    request: Request,
    slug: TenantSlug,
    directory: Directory,
    db: DBSession,
) -> Tenant:
    """Get the request's tenant and scope the session to it.

    Args:
        request: The incoming request
        slug: Tenant slug for the request
        directory: Request-scoped tenant directory
        db: Database session

    Returns:
        The active tenant

    Raises:
        BadRequestError: If the request carries no tenant context
        NotFoundError: If the tenant is missing or inactive
    """
    if slug is None:
        raise BadRequestError(
            "This endpoint must be called on a tenant host",
            error_code="tenant_required",
        )

    tenant = await directory.get_tenant_or_fail(slug)
    await _enter_tenant(request, db, tenant)

    return tenant


# Type aliases for cleaner dependency injection
CurrentTenant = Annotated[Tenant, Depends(get_current_tenant)]
OptionalTenant = Annotated[Tenant | None, Depends(get_optional_tenant)]

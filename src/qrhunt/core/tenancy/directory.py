"""Tenant lookup by slug, memoized per request."""

from collections.abc import Mapping

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from qrhunt.config import settings
from qrhunt.core.constants import TENANT_NOT_FOUND_PATH
from qrhunt.core.errors import NotFoundError
from qrhunt.core.tenancy.cache import RequestCache
from qrhunt.core.tenancy.resolver import extract_tenant_slug
from qrhunt.modules.tenants.models import Tenant
from qrhunt.modules.tenants.repos import TenantRepository


logger = structlog.get_logger()


class TenantDirectory:
    """Resolves slugs to active tenants.

    Every lookup within one request goes to the database at most once per
    slug. Missing and deactivated tenants are indistinguishable to callers.
    """

    def __init__(self, session: AsyncSession, cache: RequestCache | None = None) -> None:
        self.repo = TenantRepository(session)
        self.cache = cache or RequestCache()

    async def get_tenant(self, slug: str) -> Tenant | None:
        """Get the active tenant for a slug.

        Returns:
            The tenant, or None when the slug is unknown or the tenant is inactive
        """
        return await self.cache.get_or_load(
            "tenant", slug, lambda: self.repo.get_active_by_slug(slug)
        )

    async def get_tenant_or_fail(self, slug: str) -> Tenant:
        """Get the active tenant for a slug.

        Raises:
            NotFoundError: With a redirect hint to the tenant-not-found page
        """
        tenant = await self.get_tenant(slug)
        if tenant is None:
            logger.info("tenant_not_found", tenant_slug=slug)
            raise NotFoundError(
                "Tenant not found",
                error_code="tenant_not_found",
                redirect_to=TENANT_NOT_FOUND_PATH,
            )
        return tenant

    async def resolve_tenant_from_request(
        self,
        host: str | None,
        headers: Mapping[str, str],
        query: Mapping[str, str],
    ) -> Tenant | None:
        """Extract the slug from request parts and look up its tenant."""
        slug = extract_tenant_slug(
            host,
            header_slug=headers.get(settings.tenant_header),
            query_slug=query.get(settings.tenant_query_param),
        )
        if slug is None:
            return None
        return await self.get_tenant(slug)

"""Tenant repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select

from qrhunt.api.dependencies import DBSession
from qrhunt.modules.tenants.models import Tenant


class TenantRepository:
    """Repository for Tenant database operations.

    Tenants are the root of the isolation hierarchy, so these queries are
    the only ones in the application that are not tenant-scoped.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, tenant: Tenant) -> Tenant:
        """Create a new tenant."""
        self.session.add(tenant)
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant

    async def get_by_id(self, tenant_id: UUID) -> Tenant | None:
        """Get a tenant by ID, active or not."""
        return await self.session.get(Tenant, tenant_id)

    async def get_by_slug(self, slug: str) -> Tenant | None:
        """Get a tenant by slug, active or not."""
        result = await self.session.execute(select(Tenant).where(Tenant.slug == slug))
        return result.scalar_one_or_none()

    async def get_active_by_slug(self, slug: str) -> Tenant | None:
        """Get an active tenant by slug.

        Returns:
            The tenant, or None when it is missing or deactivated
        """
        stmt = select(Tenant).where(Tenant.slug == slug, Tenant.is_active.is_(True))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Tenant]:
        """List every tenant ordered by name."""
        result = await self.session.execute(select(Tenant).order_by(Tenant.name))
        return list(result.scalars().all())

    async def update(self, tenant: Tenant) -> Tenant:
        """Flush pending changes to a tenant."""
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant

    async def delete(self, tenant: Tenant) -> None:
        """Delete a tenant. Tenant-scoped rows go with it through ON DELETE CASCADE."""
        await self.session.delete(tenant)
        await self.session.flush()


# Type alias for dependency injection
TenantRepo = Annotated[TenantRepository, Depends(TenantRepository)]

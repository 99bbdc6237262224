"""Tenant lifecycle and branding."""

from typing import Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends

from qrhunt.api.dependencies import DBSession
from qrhunt.core.constants import DEFAULT_BRANDING
from qrhunt.core.database import elevated
from qrhunt.core.errors import ConflictError, NotFoundError, ValidationError
from qrhunt.core.utils.text import generate_slug
from qrhunt.modules.analytics.stats import completion_rate
from qrhunt.modules.tenants.models import Tenant
from qrhunt.modules.tenants.repos import TenantRepository
from qrhunt.modules.tenants.schemas import (
    Branding,
    TenantCreate,
    TenantPublic,
    TenantResponse,
    TenantUpdate,
    TenantWithStats,
    merge_branding,
)
from qrhunt.modules.users.models import CompletionStatus
from qrhunt.modules.users.repos import ProfileRepository


logger = structlog.get_logger()


def to_public(tenant: Tenant) -> TenantPublic:
    """Project a tenant onto its public configuration."""
    return TenantPublic(
        name=tenant.name,
        slug=tenant.slug,
        branding=merge_branding(tenant.branding),
    )


class TenantService:
    """Service for tenant administration.

    Platform operations span tenants and run elevated; callers are
    authorized as super-admins before reaching this service.
    """

    def __init__(self, db: DBSession) -> None:
        self.db = db
        self.repo = TenantRepository(db)
        self.profiles = ProfileRepository(db)

    async def _get_or_fail(self, tenant_id: UUID) -> Tenant:
        tenant = await self.repo.get_by_id(tenant_id)
        if tenant is None:
            raise NotFoundError(
                "Tenant not found",
                error_code="tenant_not_found",
                resource="tenant",
                resource_id=str(tenant_id),
            )
        return tenant

    async def _ensure_slug_free(self, slug: str, exclude: UUID | None = None) -> None:
        existing = await self.repo.get_by_slug(slug)
        if existing is not None and existing.id != exclude:
            raise ConflictError(
                f"Slug '{slug}' is already taken",
                error_code="slug_exists",
            )

    # ------------------------------------------------------------
    # Platform operations
    # ------------------------------------------------------------

    async def list_with_stats(self) -> list[TenantWithStats]:
        """List every tenant with its visitor and completion counts."""
        async with elevated(self.db, "super_admin_tenants"):
            tenants = await self.repo.list_all()
            counts = await self.profiles.count_by_tenant_system()

        results = []
        for tenant in tenants:
            by_status = counts.get(tenant.id, {})
            total = sum(by_status.values())
            completed = by_status.get(CompletionStatus.COMPLETED.value, 0)
            results.append(
                TenantWithStats(
                    **TenantResponse.model_validate(tenant).model_dump(),
                    users_count=total,
                    completed_count=completed,
                    completion_rate=completion_rate(completed, total),
                )
            )
        return results

    async def get_tenant(self, tenant_id: UUID) -> Tenant:
        """Get a tenant, active or not.

        Raises:
            NotFoundError: If the tenant does not exist
        """
        return await self._get_or_fail(tenant_id)

    async def create_tenant(self, data: TenantCreate) -> Tenant:
        """Create a tenant with the default branding.

        Raises:
            ValidationError: If no slug was given and none can be derived from the name
            ConflictError: If the slug is taken
        """
        slug = data.slug or generate_slug(data.name)
        if not slug:
            raise ValidationError(
                "A slug is required when the name has no latin letters or digits",
                error_code="slug_required",
                errors=[{"field": "slug", "message": "Slug is required"}],
            )
        await self._ensure_slug_free(slug)

        tenant = await self.repo.create(
            Tenant(
                name=data.name,
                slug=slug,
                contact_email=data.contact_email,
                is_active=data.is_active,
                branding=dict(DEFAULT_BRANDING),
            )
        )
        logger.info("tenant_created", tenant_id=str(tenant.id), slug=slug)
        return tenant

    async def update_tenant(self, tenant_id: UUID, data: TenantUpdate) -> Tenant:
        """Apply a partial update.

        Raises:
            NotFoundError: If the tenant does not exist
            ConflictError: If the new slug is taken
        """
        tenant = await self._get_or_fail(tenant_id)

        changes: dict[str, Any] = data.model_dump(mode="json", exclude_unset=True)
        if changes.get("slug") and changes["slug"] != tenant.slug:
            await self._ensure_slug_free(changes["slug"], exclude=tenant.id)
        if "branding" in changes and changes["branding"] is None:
            changes.pop("branding")

        for field, value in changes.items():
            if value is None and field in ("name", "slug", "is_active"):
                continue
            setattr(tenant, field, value)

        logger.info("tenant_updated", tenant_id=str(tenant_id), fields=sorted(changes))
        return await self.repo.update(tenant)

    async def delete_tenant(self, tenant_id: UUID) -> None:
        """Delete a tenant and, by cascade, all of its data.

        Raises:
            NotFoundError: If the tenant does not exist
        """
        tenant = await self._get_or_fail(tenant_id)
        async with elevated(self.db, "super_admin_tenant_delete"):
            await self.repo.delete(tenant)
        logger.warning("tenant_deleted", tenant_id=str(tenant_id), slug=tenant.slug)

    # ------------------------------------------------------------
    # Tenant admin operations
    # ------------------------------------------------------------

    async def update_branding(self, tenant: Tenant, branding: Branding) -> dict[str, Any]:
        """Replace a tenant's branding and return the effective theme."""
        tenant.branding = branding.model_dump(mode="json")
        tenant = await self.repo.update(tenant)
        logger.info("branding_updated", tenant_id=str(tenant.id))
        return merge_branding(tenant.branding)


# Type alias for dependency injection
TenantSvc = Annotated[TenantService, Depends(TenantService)]

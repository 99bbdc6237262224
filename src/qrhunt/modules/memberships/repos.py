"""Tenant membership repository."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select

from qrhunt.api.dependencies import DBSession
from qrhunt.modules.memberships.models import TenantMembership
from qrhunt.modules.tenants.models import Tenant
from qrhunt.modules.users.models import User


class MembershipRepository:
    """Repository for TenantMembership database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, membership: TenantMembership) -> TenantMembership:
        """Create a new membership."""
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership

    async def get_for_user(
        self, user_id: UUID, tenant_id: UUID
    ) -> TenantMembership | None:
        """Get a user's membership in one tenant."""
        stmt = select(TenantMembership).where(
            TenantMembership.user_id == user_id,
            TenantMembership.tenant_id == tenant_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_user_system(self, user_id: UUID) -> list[TenantMembership]:
        """List a user's memberships across every tenant.

        Cross-tenant by nature; callers must run it inside ``elevated``.
        """
        stmt = select(TenantMembership).where(TenantMembership.user_id == user_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_tenant(
        self, tenant_id: UUID
    ) -> list[tuple[TenantMembership, User]]:
        """List a tenant's memberships together with their users."""
        stmt = (
            select(TenantMembership, User)
            .join(User, User.id == TenantMembership.user_id)
            .where(TenantMembership.tenant_id == tenant_id)
            .order_by(TenantMembership.created_at, TenantMembership.id)
        )
        result = await self.session.execute(stmt)
        return [(membership, user) for membership, user in result.all()]

    async def list_all_system(self) -> list[tuple[TenantMembership, User, Tenant]]:
        """List every membership with its user and tenant, newest first.

        Cross-tenant by nature; callers must run it inside ``elevated``.
        """
        stmt = (
            select(TenantMembership, User, Tenant)
            .join(User, User.id == TenantMembership.user_id)
            .join(Tenant, Tenant.id == TenantMembership.tenant_id)
            .order_by(TenantMembership.created_at.desc(), TenantMembership.id)
        )
        result = await self.session.execute(stmt)
        return [(membership, user, tenant) for membership, user, tenant in result.all()]

    async def delete(self, membership: TenantMembership) -> None:
        """Delete a membership."""
        await self.session.delete(membership)
        await self.session.flush()


# Type alias for dependency injection
MembershipRepo = Annotated[MembershipRepository, Depends(MembershipRepository)]

"""Membership administration for tenant admins and platform operators."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from qrhunt.api.dependencies import DBSession
from qrhunt.core.database import elevated
from qrhunt.core.errors import ConflictError, ForbiddenError, NotFoundError
from qrhunt.modules.memberships.models import MembershipRole, TenantMembership
from qrhunt.modules.memberships.repos import MembershipRepository
from qrhunt.modules.memberships.schemas import (
    MemberListResponse,
    MemberResponse,
    StaffMember,
    TenantOption,
)
from qrhunt.modules.tenants.repos import TenantRepository
from qrhunt.modules.users.models import Profile, ProfileRole, User
from qrhunt.modules.users.repos import ProfileRepository, UserRepository


logger = structlog.get_logger()


def _default_name(email: str) -> str:
    return email.split("@", 1)[0]


class MembershipService:
    """Service for granting and revoking tenant roles.

    Granting a role to an unknown email creates a password-less account;
    the person sets a password through the account recovery flow.
    """

    def __init__(self, db: DBSession) -> None:
        self.db = db
        self.memberships = MembershipRepository(db)
        self.users = UserRepository(db)
        self.profiles = ProfileRepository(db)
        self.tenants = TenantRepository(db)

    # ------------------------------------------------------------
    # Shared steps
    # ------------------------------------------------------------

    async def _get_or_create_user(self, email: str) -> User:
        user = await self.users.get_by_email(email)
        if user is None:
            user = await self.users.create(
                User(email=email.lower(), full_name=_default_name(email))
            )
            logger.info("staff_account_created", user_id=str(user.id))
        return user

    async def _ensure_profile(self, user: User, tenant_id: UUID, role: str) -> Profile:
        profile = await self.profiles.get_by_user(user.id, tenant_id)
        if profile is None:
            profile = await self.profiles.create(
                Profile(
                    tenant_id=tenant_id,
                    user_id=user.id,
                    full_name=user.full_name,
                    email=user.email,
                    role=role,
                )
            )
        return profile

    # ------------------------------------------------------------
    # Tenant admin operations
    # ------------------------------------------------------------

    async def list_staff(self, tenant_id: UUID) -> list[StaffMember]:
        """List the tenant's memberships with the members' names."""
        rows = await self.memberships.list_by_tenant(tenant_id)
        user_ids = [user.id for _, user in rows]
        names = {
            p.user_id: p.full_name
            for p in await self.profiles.list_for_users(tenant_id, user_ids)
        }
        return [
            StaffMember(
                user_id=user.id,
                email=user.email,
                full_name=names.get(user.id, user.full_name),
                role=membership.role,
                created_at=membership.created_at,
            )
            for membership, user in rows
        ]

    async def add_staff(self, tenant_id: UUID, email: str) -> StaffMember:
        """Grant the staff role in a tenant.

        Raises:
            ConflictError: If the user already has a membership in the tenant
        """
        user = await self._get_or_create_user(email)

        if await self.memberships.get_for_user(user.id, tenant_id):
            raise ConflictError(
                "This user is already a staff member of this site",
                error_code="membership_exists",
            )

        profile = await self._ensure_profile(user, tenant_id, ProfileRole.STAFF.value)
        membership = await self.memberships.create(
            TenantMembership(
                tenant_id=tenant_id,
                user_id=user.id,
                role=MembershipRole.STAFF.value,
            )
        )

        logger.info("membership_granted", user_id=str(user.id), role=membership.role)
        return StaffMember(
            user_id=user.id,
            email=user.email,
            full_name=profile.full_name,
            role=membership.role,
            created_at=membership.created_at,
        )

    async def remove_staff(self, tenant_id: UUID, user_id: UUID) -> None:
        """Revoke a staff membership.

        Raises:
            NotFoundError: If the user has no membership in the tenant
            ForbiddenError: If the target is an admin
        """
        membership = await self.memberships.get_for_user(user_id, tenant_id)
        if membership is None:
            raise NotFoundError("Staff member not found", error_code="membership_not_found")

        if membership.role == MembershipRole.ADMIN.value:
            raise ForbiddenError(
                "Admins can only be removed by a platform operator",
                error_code="cannot_remove_admin",
            )

        await self.memberships.delete(membership)
        logger.info("membership_revoked", user_id=str(user_id), tenant_id=str(tenant_id))

    # ------------------------------------------------------------
    # Platform operations (callers are super-admins)
    # ------------------------------------------------------------

    async def list_all(self) -> MemberListResponse:
        """List every membership across tenants."""
        async with elevated(self.db, "super_admin_members"):
            rows = await self.memberships.list_all_system()
            tenants = await self.tenants.list_all()

        return MemberListResponse(
            memberships=[
                MemberResponse(
                    user_id=user.id,
                    tenant_id=tenant.id,
                    tenant_name=tenant.name,
                    email=user.email,
                    role=membership.role,
                    created_at=membership.created_at,
                )
                for membership, user, tenant in rows
            ],
            tenants=[TenantOption(id=t.id, name=t.name) for t in tenants],
        )

    async def assign(
        self, email: str, tenant_id: UUID, role: str
    ) -> tuple[MemberResponse, bool]:
        """Create or update a membership in any tenant.

        Returns:
            Tuple of (membership, created)

        Raises:
            NotFoundError: If the tenant does not exist
        """
        async with elevated(self.db, "super_admin_assign"):
            tenant = await self.tenants.get_by_id(tenant_id)
            if tenant is None:
                raise NotFoundError("Tenant not found", error_code="tenant_not_found")

            user = await self._get_or_create_user(email)
            await self._ensure_profile(user, tenant_id, role)

            membership = await self.memberships.get_for_user(user.id, tenant_id)
            created = membership is None
            if membership is None:
                membership = await self.memberships.create(
                    TenantMembership(tenant_id=tenant_id, user_id=user.id, role=role)
                )
            elif membership.role != role:
                membership.role = role
                await self.db.flush()

        logger.info(
            "membership_granted" if created else "membership_updated",
            user_id=str(user.id),
            tenant_id=str(tenant_id),
            role=role,
        )
        return (
            MemberResponse(
                user_id=user.id,
                tenant_id=tenant.id,
                tenant_name=tenant.name,
                email=user.email,
                role=membership.role,
                created_at=membership.created_at,
            ),
            created,
        )

    async def revoke(self, user_id: UUID, tenant_id: UUID) -> None:
        """Delete a membership in any tenant.

        Raises:
            NotFoundError: If there is no such membership
        """
        async with elevated(self.db, "super_admin_revoke"):
            membership = await self.memberships.get_for_user(user_id, tenant_id)
            if membership is None:
                raise NotFoundError("Membership not found", error_code="membership_not_found")
            await self.memberships.delete(membership)

        logger.info("membership_revoked", user_id=str(user_id), tenant_id=str(tenant_id))


# Type alias for dependency injection
MembershipSvc = Annotated[MembershipService, Depends(MembershipService)]

"""Role resolution for tenant staff and platform operators.

Tenant roles come from ``tenant_memberships`` rows, looked up fresh on
every request. The only global privilege is the super-admin flag on the
account, consulted after memberships so that a super-admin who is also
staff somewhere is reported with their tenant role there.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from qrhunt.api.dependencies import DBSession
from qrhunt.core.auth.dependencies import CurrentPrincipal, OptionalPrincipal
from qrhunt.core.auth.schemas import Principal
from qrhunt.core.constants import (
    ADMIN_LOGIN_PATH,
    COMPLETE_PROFILE_PATH,
    SUPER_ADMIN_LOGIN_PATH,
)
from qrhunt.core.database import elevated
from qrhunt.core.errors import ForbiddenError, UnauthorizedError
from qrhunt.core.tenancy import CurrentTenant
from qrhunt.modules.memberships.models import MembershipRole, TenantMembership
from qrhunt.modules.memberships.repos import MembershipRepository
from qrhunt.modules.users.repos import ProfileRepository, UserRepository


logger = structlog.get_logger()


class Role(str, Enum):
    """Effective role of a principal."""

    STAFF = "staff"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


# Higher wins when a principal holds several memberships
_MEMBERSHIP_PRECEDENCE = {
    MembershipRole.STAFF.value: 1,
    MembershipRole.ADMIN.value: 2,
}


@dataclass(frozen=True)
class Unauthenticated:
    """No principal on the request."""


@dataclass(frozen=True)
class Forbidden:
    """Authenticated, but without any staff role."""

    principal: Principal


@dataclass(frozen=True)
class Authorized:
    """Authenticated with a role."""

    principal: Principal
    role: Role


RoleResolution = Unauthenticated | Forbidden | Authorized


@dataclass(frozen=True)
class TenantAccess:
    """A principal authorized for a tenant, and the role that authorized them."""

    principal: Principal
    role: Role
    tenant_id: UUID

    @property
    def is_admin(self) -> bool:
        return self.role in (Role.ADMIN, Role.SUPER_ADMIN)


@dataclass(frozen=True)
class PlayerAccess:
    """A principal with a profile on the request's tenant."""

    principal: Principal
    tenant_id: UUID


def _highest_role(memberships: list[TenantMembership]) -> Role:
    best = max(memberships, key=lambda m: _MEMBERSHIP_PRECEDENCE.get(m.role, 0))
    return Role(best.role)


class RoleResolver:
    """Resolves and enforces roles for a principal.

    Membership reads cross the tenant policy boundary (the principal may
    be staff in a tenant other than the one bound to the session), so they
    run elevated. Nothing else happens inside that block.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.memberships = MembershipRepository(session)
        self.users = UserRepository(session)

    async def resolve(
        self,
        principal: Principal | None,
        tenant_id: UUID | None = None,
    ) -> RoleResolution:
        """Determine a principal's role.

        Args:
            principal: The caller, or None when unauthenticated
            tenant_id: Tenant to check; without it any membership counts

        Returns:
            Unauthenticated, Forbidden or Authorized
        """
        if principal is None:
            return Unauthenticated()

        async with elevated(self.session, "role_resolution"):
            if tenant_id is not None:
                membership = await self.memberships.get_for_user(
                    principal.id, tenant_id
                )
                memberships = [membership] if membership else []
            else:
                memberships = await self.memberships.list_for_user_system(principal.id)

        if memberships:
            return Authorized(principal=principal, role=_highest_role(memberships))

        if await self.users.is_super_admin(principal.id):
            logger.info(
                "super_admin_access",
                user_id=str(principal.id),
                tenant_id=str(tenant_id) if tenant_id else None,
            )
            return Authorized(principal=principal, role=Role.SUPER_ADMIN)

        return Forbidden(principal=principal)

    async def require_role(
        self,
        principal: Principal | None,
        tenant_id: UUID | None = None,
    ) -> Authorized:
        """Require a staff role (or super-admin) for the principal.

        Raises:
            UnauthorizedError: If there is no principal
            ForbiddenError: If the principal has no role
        """
        resolution = await self.resolve(principal, tenant_id)

        if isinstance(resolution, Unauthenticated):
            raise UnauthorizedError(
                "Authentication required",
                error_code="unauthenticated",
                login_url=ADMIN_LOGIN_PATH,
            )
        if isinstance(resolution, Forbidden):
            logger.warning(
                "role_denied",
                user_id=str(resolution.principal.id),
                tenant_id=str(tenant_id) if tenant_id else None,
            )
            raise ForbiddenError(
                "Staff access required",
                error_code="staff_required",
                login_url=ADMIN_LOGIN_PATH,
            )
        return resolution

    async def require_super_admin(self, principal: Principal | None) -> Principal:
        """Require the platform operator flag.

        Tenant memberships never satisfy this check.

        Raises:
            UnauthorizedError: If there is no principal
            ForbiddenError: If the principal is not a super-admin
        """
        if principal is None:
            raise UnauthorizedError(
                "Authentication required",
                error_code="unauthenticated",
                login_url=SUPER_ADMIN_LOGIN_PATH,
            )
        if not await self.users.is_super_admin(principal.id):
            logger.warning("super_admin_denied", user_id=str(principal.id))
            raise ForbiddenError(
                "Super-admin access required",
                error_code="super_admin_required",
                login_url=SUPER_ADMIN_LOGIN_PATH,
            )
        return principal


# ============================================================
# Dependencies
# ============================================================


async def get_tenant_staff(
    principal: OptionalPrincipal,
    tenant: CurrentTenant,
    db: DBSession,
) -> TenantAccess:
    """Require staff, admin or super-admin on the request's tenant."""
    authorized = await RoleResolver(db).require_role(principal, tenant.id)
    return TenantAccess(
        principal=authorized.principal,
        role=authorized.role,
        tenant_id=tenant.id,
    )


async def get_tenant_admin(
    access: Annotated[TenantAccess, Depends(get_tenant_staff)],
) -> TenantAccess:
    """Require admin (or super-admin) on the request's tenant.

    Raises:
        ForbiddenError: If the principal is only staff
    """
    if not access.is_admin:
        raise ForbiddenError(
            "Admin access required",
            error_code="admin_required",
            login_url=ADMIN_LOGIN_PATH,
        )
    return access


async def get_player(
    tenant: CurrentTenant,
    principal: CurrentPrincipal,
    db: DBSession,
) -> PlayerAccess:
    """Require a profile on the request's tenant.

    Accounts are shared across tenants, so a valid token alone does not mean
    the caller registered here.

    Raises:
        ForbiddenError: If the caller has no profile on this tenant
    """
    profile = await ProfileRepository(db).get_by_user(principal.id, tenant.id)
    if profile is None:
        logger.info("profile_required", user_id=str(principal.id))
        raise ForbiddenError(
            "Complete your profile on this site to play",
            error_code="profile_required",
            details={"redirect_to": COMPLETE_PROFILE_PATH},
        )
    return PlayerAccess(principal=principal, tenant_id=tenant.id)


async def get_super_admin(
    principal: OptionalPrincipal,
    db: DBSession,
) -> Principal:
    """Require a super-admin principal."""
    return await RoleResolver(db).require_super_admin(principal)


# Type aliases for cleaner dependency injection
TenantStaff = Annotated[TenantAccess, Depends(get_tenant_staff)]
TenantAdmin = Annotated[TenantAccess, Depends(get_tenant_admin)]
SuperAdmin = Annotated[Principal, Depends(get_super_admin)]
Player = Annotated[PlayerAccess, Depends(get_player)]

"""Staff and membership administration routes."""

from uuid import UUID

from fastapi import APIRouter, Query, Response, status
from fastapi.responses import JSONResponse

from qrhunt.core.auth import SuperAdmin, TenantAdmin
from qrhunt.modules.memberships.schemas import (
    MemberAssign,
    MemberListResponse,
    MemberResponse,
    StaffCreate,
    StaffMember,
)
from qrhunt.modules.memberships.services import MembershipSvc


staff_router = APIRouter(prefix="/admin/staff", tags=["staff"])
members_router = APIRouter(prefix="/super-admin/members", tags=["super-admin"])


@staff_router.get("", response_model=list[StaffMember], summary="List staff")
async def list_staff(access: TenantAdmin, service: MembershipSvc) -> list[StaffMember]:
    """List the current tenant's staff and admins."""
    return await service.list_staff(access.tenant_id)


@staff_router.post(
    "",
    response_model=StaffMember,
    status_code=status.HTTP_201_CREATED,
    summary="Add a staff member",
)
async def add_staff(
    data: StaffCreate, access: TenantAdmin, service: MembershipSvc
) -> StaffMember:
    """Grant the staff role on the current tenant."""
    return await service.add_staff(access.tenant_id, data.email)


@staff_router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a staff member",
)
async def remove_staff(
    user_id: UUID, access: TenantAdmin, service: MembershipSvc
) -> Response:
    """Revoke a staff membership. Admin memberships cannot be removed here."""
    await service.remove_staff(access.tenant_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@members_router.get("", response_model=MemberListResponse, summary="List all memberships")
async def list_members(_admin: SuperAdmin, service: MembershipSvc) -> MemberListResponse:
    """List memberships across every tenant."""
    return await service.list_all()


@members_router.post(
    "",
    response_model=MemberResponse,
    summary="Grant or change a membership",
    description="Answers 201 when a membership is created and 200 when its role is updated.",
)
async def assign_member(
    data: MemberAssign, _admin: SuperAdmin, service: MembershipSvc
) -> JSONResponse:
    """Create or update a membership in any tenant."""
    member, created = await service.assign(data.email, data.tenant_id, data.role)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        content=member.model_dump(mode="json"),
    )


@members_router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Revoke a membership",
)
async def revoke_member(
    user_id: UUID,
    _admin: SuperAdmin,
    service: MembershipSvc,
    tenant_id: UUID = Query(...),
) -> Response:
    """Revoke a membership in any tenant."""
    await service.revoke(user_id, tenant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


router = APIRouter()
router.include_router(staff_router)
router.include_router(members_router)

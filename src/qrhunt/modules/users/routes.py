"""Visitor list routes for tenant admins."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Response

from qrhunt.core.auth import TenantAdmin
from qrhunt.modules.users.schemas import (
    ProfileFilterParams,
    ProfileListResponse,
    ProfileSearchParams,
    VisitorDetail,
)
from qrhunt.modules.users.services import ProfileSvc


router = APIRouter(prefix="/admin/users", tags=["users"])


@router.get(
    "",
    response_model=ProfileListResponse,
    summary="List visitors",
    description="Search matches name and email case-insensitively.",
)
async def list_visitors(
    params: Annotated[ProfileSearchParams, Query()],
    access: TenantAdmin,
    service: ProfileSvc,
) -> ProfileListResponse:
    """List the current tenant's visitors."""
    return await service.list_visitors(access.tenant_id, params)


@router.get(
    "/export",
    response_class=Response,
    summary="Export visitors as CSV",
    responses={200: {"content": {"text/csv": {}}}},
)
async def export_visitors(
    params: Annotated[ProfileFilterParams, Query()],
    access: TenantAdmin,
    service: ProfileSvc,
) -> Response:
    """Download the visitors matching the list filters."""
    body = await service.export_visitors(access.tenant_id, params)
    return Response(
        content=body,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": "attachment; filename=users-export.csv"},
    )


@router.get(
    "/{user_id}",
    response_model=VisitorDetail,
    summary="Get one visitor",
    description="Profile, scanned stations and prize of one user on this tenant.",
)
async def get_visitor(
    user_id: UUID,
    access: TenantAdmin,
    service: ProfileSvc,
) -> VisitorDetail:
    return await service.get_visitor(user_id, access.tenant_id)

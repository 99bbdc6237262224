"""Visitor administration for tenant admins."""

import csv
import io
import math
from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from qrhunt.api.dependencies import DBSession
from qrhunt.core.errors import NotFoundError
from qrhunt.modules.progress.repos import ProgressRepository
from qrhunt.modules.redemptions.repos import RedemptionRepository
from qrhunt.modules.redemptions.schemas import RedemptionResponse
from qrhunt.modules.stations.repos import StationRepository
from qrhunt.modules.users.repos import ProfileRepo
from qrhunt.modules.users.schemas import (
    ProfileFilterParams,
    ProfileListResponse,
    ProfileResponse,
    ProfileSearchParams,
    ScannedStation,
    VisitorDetail,
)


logger = structlog.get_logger()

EXPORT_COLUMNS = (
    "full_name",
    "phone",
    "email",
    "completion_status",
    "completed_at",
    "created_at",
)

# Byte order mark so spreadsheet tools detect UTF-8 (names are often Hebrew)
CSV_BOM = "\ufeff"


class ProfileService:
    """Service for listing a tenant's visitors."""

    def __init__(self, repo: ProfileRepo, db: DBSession) -> None:
        self.repo = repo
        self.progress = ProgressRepository(db)
        self.stations = StationRepository(db)
        self.redemptions = RedemptionRepository(db)

    async def list_visitors(
        self, tenant_id: UUID, params: ProfileSearchParams
    ) -> ProfileListResponse:
        """List visitor profiles with search, status filter and pagination.

        Args:
            tenant_id: The tenant's UUID
            params: Search text, status and page

        Returns:
            A page of profiles, newest first
        """
        profiles, total = await self.repo.search(
            tenant_id,
            search=params.search,
            status=params.status,
            page=params.page,
            page_size=params.page_size,
        )
        return ProfileListResponse(
            items=[ProfileResponse.model_validate(p) for p in profiles],
            total=total,
            page=params.page,
            page_size=params.page_size,
            pages=math.ceil(total / params.page_size) if total else 0,
        )

    async def export_visitors(self, tenant_id: UUID, params: ProfileFilterParams) -> str:
        """Render the matching visitors as CSV, newest first."""
        profiles = await self.repo.list_matching(
            tenant_id, search=params.search, status=params.status
        )

        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(EXPORT_COLUMNS)
        for p in profiles:
            writer.writerow(
                [
                    p.full_name,
                    p.phone or "",
                    p.email,
                    p.completion_status,
                    p.completed_at.date().isoformat() if p.completed_at else "",
                    p.created_at.date().isoformat(),
                ]
            )

        logger.info("visitors_exported", tenant_id=str(tenant_id), rows=len(profiles))
        return CSV_BOM + buffer.getvalue()


    async def get_visitor(self, user_id: UUID, tenant_id: UUID) -> VisitorDetail:
        """Profile, scans in scan order and redemption of one user in a tenant.

        Raises:
            NotFoundError: If the user has no profile in this tenant
        """
        profile = await self.repo.get_by_user(user_id, tenant_id)
        if profile is None:
            raise NotFoundError(
                "Visitor not found",
                error_code="visitor_not_found",
                resource="visitor",
                resource_id=str(user_id),
            )

        stations = {a.id: a for a in await self.stations.list_by_tenant(tenant_id)}
        scans = [
            ScannedStation(
                station_id=p.animal_id,
                name=stations[p.animal_id].name,
                name_he=stations[p.animal_id].name_he,
                letter=p.letter,
                order_index=stations[p.animal_id].order_index,
                scanned_at=p.scanned_at,
            )
            for p in await self.progress.list_for_user(user_id, tenant_id)
            if p.animal_id in stations
        ]
        redemption = await self.redemptions.get_for_user(user_id, tenant_id)

        return VisitorDetail(
            profile=ProfileResponse.model_validate(profile),
            scans=scans,
            active_station_count=sum(1 for a in stations.values() if a.is_active),
            redemption=(
                RedemptionResponse.model_validate(redemption) if redemption else None
            ),
        )


# Type alias for dependency injection
ProfileSvc = Annotated[ProfileService, Depends(ProfileService)]

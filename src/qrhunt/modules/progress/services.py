"""Scan recording and the visitor's board."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from qrhunt.api.dependencies import DBSession
from qrhunt.core.errors import BadRequestError, NotFoundError
from qrhunt.modules.progress.repos import ProgressRepository
from qrhunt.modules.progress.schemas import (
    GameStateResponse,
    GameStation,
    ScanOutcome,
    ScanResponse,
    StationPublic,
)
from qrhunt.modules.stations.repos import StationRepository


logger = structlog.get_logger()


def parse_qr_token(raw: str) -> UUID:
    """Parse a scanned token.

    Raises:
        BadRequestError: If the token is not a UUID
    """
    try:
        return UUID(raw)
    except ValueError:
        raise BadRequestError(
            "Invalid QR code",
            error_code="invalid_qr_token",
        ) from None


class ScanService:
    """Service for recording scans.

    Stations are looked up by QR token *and* tenant, so a code printed for
    one tenant scanned on another tenant's host is reported as not found.
    """

    def __init__(self, db: DBSession) -> None:
        self.stations = StationRepository(db)
        self.progress = ProgressRepository(db)

    async def scan(self, raw_token: str, user_id: UUID, tenant_id: UUID) -> ScanResponse:
        """Record a scan for the user.

        Args:
            raw_token: Token from the QR code URL
            user_id: The scanning user
            tenant_id: The tenant resolved from the request

        Returns:
            ScanResponse with the outcome and, for active stations, the station

        Raises:
            BadRequestError: If the token is malformed
            NotFoundError: If no station of this tenant has the token
        """
        qr_token = parse_qr_token(raw_token)

        animal = await self.stations.get_by_qr_token(qr_token, tenant_id)
        if animal is None:
            logger.warning("scan_station_not_found", tenant_id=str(tenant_id))
            raise NotFoundError("Station not found", error_code="station_not_found")

        if not animal.is_active:
            return ScanResponse(outcome=ScanOutcome.STATION_INACTIVE)

        inserted = await self.record_scan(user_id, tenant_id, animal.id, animal.letter)

        outcome = ScanOutcome.RECORDED if inserted else ScanOutcome.ALREADY_SCANNED
        logger.info(
            "scan_recorded",
            station_id=str(animal.id),
            user_id=str(user_id),
            outcome=outcome.value,
        )
        return ScanResponse(outcome=outcome, station=StationPublic.model_validate(animal))

    async def record_scan(
        self, user_id: UUID, tenant_id: UUID, animal_id: UUID, letter: str
    ) -> bool:
        """Idempotently record that a user scanned a station.

        Returns:
            True on the first scan, False when it was already recorded
        """
        return await self.progress.record_scan(
            tenant_id=tenant_id,
            user_id=user_id,
            animal_id=animal_id,
            letter=letter,
        )

    async def game_state(self, user_id: UUID, tenant_id: UUID) -> GameStateResponse:
        """Build the visitor's board: active stations and collected letters."""
        animals = await self.stations.list_by_tenant(tenant_id, active_only=True)
        collected = {
            p.animal_id: p.letter
            for p in await self.progress.list_for_user(user_id, tenant_id)
        }

        stations = [
            GameStation(
                id=a.id,
                name=a.name,
                name_he=a.name_he,
                order_index=a.order_index,
                image_url=a.image_url,
                collected=a.id in collected,
                letter=collected.get(a.id),
            )
            for a in animals
        ]
        return GameStateResponse(
            stations=stations,
            collected_count=sum(1 for s in stations if s.collected),
            total_count=len(stations),
        )


# Type alias for dependency injection
ScanSvc = Annotated[ScanService, Depends(ScanService)]

"""Station management for tenant admins."""

from typing import Annotated
from uuid import UUID, uuid4

import structlog
from fastapi import Depends

from qrhunt.core.errors import NotFoundError
from qrhunt.modules.stations.models import Animal
from qrhunt.modules.stations.repos import StationRepo
from qrhunt.modules.stations.schemas import StationCreate, StationUpdate


logger = structlog.get_logger()


class StationService:
    """Service for station CRUD within one tenant."""

    def __init__(self, repo: StationRepo) -> None:
        self.repo = repo

    async def list_stations(self, tenant_id: UUID) -> list[Animal]:
        """List every station of a tenant, inactive ones included."""
        return await self.repo.list_by_tenant(tenant_id)

    async def get_station(self, station_id: UUID, tenant_id: UUID) -> Animal:
        """Get a station.

        Raises:
            NotFoundError: If the station is missing or belongs to another tenant
        """
        animal = await self.repo.get_by_id(station_id, tenant_id)
        if animal is None:
            raise NotFoundError(
                "Station not found",
                error_code="station_not_found",
                resource="station",
                resource_id=str(station_id),
            )
        return animal

    async def create_station(self, data: StationCreate, tenant_id: UUID) -> Animal:
        """Create a station with a fresh QR token."""
        values = data.model_dump(mode="json")
        animal = await self.repo.create(Animal(tenant_id=tenant_id, **values))
        logger.info("station_created", station_id=str(animal.id), tenant_id=str(tenant_id))
        return animal

    async def update_station(
        self, station_id: UUID, data: StationUpdate, tenant_id: UUID
    ) -> Animal:
        """Apply a partial update.

        Setting ``regenerate_qr_token`` invalidates the printed QR code.
        """
        animal = await self.get_station(station_id, tenant_id)

        changes = data.model_dump(mode="json", exclude_unset=True)
        regenerate = changes.pop("regenerate_qr_token", False)
        for field, value in changes.items():
            setattr(animal, field, value)
        if regenerate:
            animal.qr_token = uuid4()

        logger.info(
            "station_updated",
            station_id=str(station_id),
            fields=sorted(changes),
            qr_token_regenerated=regenerate,
        )
        return await self.repo.update(animal)


# Type alias for dependency injection
StationSvc = Annotated[StationService, Depends(StationService)]

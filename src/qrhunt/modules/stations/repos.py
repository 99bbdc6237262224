"""Station repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select

from qrhunt.api.dependencies import DBSession
from qrhunt.modules.stations.models import Animal


class StationRepository:
    """Repository for Animal database operations.

    Every lookup is filtered by tenant. A QR token belonging to another
    tenant's station is simply not found.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, animal: Animal) -> Animal:
        """Create a new station."""
        self.session.add(animal)
        await self.session.flush()
        await self.session.refresh(animal)
        return animal

    async def get_by_id(self, animal_id: UUID, tenant_id: UUID) -> Animal | None:
        """Get a station by ID within a tenant."""
        stmt = select(Animal).where(Animal.id == animal_id, Animal.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_qr_token(self, qr_token: UUID, tenant_id: UUID) -> Animal | None:
        """Get a station by its QR token within a tenant."""
        stmt = select(Animal).where(
            Animal.qr_token == qr_token,
            Animal.tenant_id == tenant_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_tenant(
        self, tenant_id: UUID, active_only: bool = False
    ) -> list[Animal]:
        """List a tenant's stations in puzzle order.

        Args:
            tenant_id: The tenant's UUID
            active_only: Skip inactive stations

        Returns:
            Stations ordered by ``order_index``
        """
        stmt = select(Animal).where(Animal.tenant_id == tenant_id)
        if active_only:
            stmt = stmt.where(Animal.is_active.is_(True))
        stmt = stmt.order_by(Animal.order_index, Animal.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, animal: Animal) -> Animal:
        """Flush pending changes to a station."""
        await self.session.flush()
        await self.session.refresh(animal)
        return animal


# Type alias for dependency injection
StationRepo = Annotated[StationRepository, Depends(StationRepository)]

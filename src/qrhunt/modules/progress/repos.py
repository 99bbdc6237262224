"""Progress repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import func, select

from qrhunt.api.dependencies import DBSession
from qrhunt.core.database import insert_ignoring_conflicts
from qrhunt.modules.progress.models import UserProgress


class ProgressRepository:
    """Repository for UserProgress database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def record_scan(
        self,
        tenant_id: UUID,
        user_id: UUID,
        animal_id: UUID,
        letter: str,
    ) -> bool:
        """Record a scan, ignoring duplicates.

        Args:
            tenant_id: The tenant's UUID
            user_id: The scanning user
            animal_id: The scanned station
            letter: The station's letter at scan time

        Returns:
            True if a row was written, False if the scan was already recorded
        """
        stmt = insert_ignoring_conflicts(
            self.session,
            UserProgress,
            {
                "tenant_id": tenant_id,
                "user_id": user_id,
                "animal_id": animal_id,
                "letter": letter,
            },
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def list_for_user(self, user_id: UUID, tenant_id: UUID) -> list[UserProgress]:
        """List a user's scans in a tenant."""
        stmt = (
            select(UserProgress)
            .where(UserProgress.user_id == user_id, UserProgress.tenant_id == tenant_id)
            .order_by(UserProgress.scanned_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_animal(self, tenant_id: UUID) -> dict[UUID, int]:
        """Count scans per station in a tenant."""
        stmt = (
            select(UserProgress.animal_id, func.count())
            .where(UserProgress.tenant_id == tenant_id)
            .group_by(UserProgress.animal_id)
        )
        result = await self.session.execute(stmt)
        return {animal_id: count for animal_id, count in result.all()}

    async def count_by_tenant(self) -> dict[UUID, int]:
        """Count scans per tenant. Platform-wide; run elevated."""
        stmt = select(UserProgress.tenant_id, func.count()).group_by(UserProgress.tenant_id)
        result = await self.session.execute(stmt)
        return {tenant_id: count for tenant_id, count in result.all()}


# Type alias for dependency injection
ProgressRepo = Annotated[ProgressRepository, Depends(ProgressRepository)]

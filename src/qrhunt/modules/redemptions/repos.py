"""Redemption repository for database operations."""

from datetime import UTC, datetime
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select, update

from qrhunt.api.dependencies import DBSession
from qrhunt.core.database import insert_ignoring_conflicts
from qrhunt.modules.redemptions.models import Redemption


class RedemptionRepository:
    """Repository for Redemption database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def get_for_user(self, user_id: UUID, tenant_id: UUID) -> Redemption | None:
        """Get a user's redemption in a tenant."""
        stmt = select(Redemption).where(
            Redemption.user_id == user_id,
            Redemption.tenant_id == tenant_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_code(self, code: str, tenant_id: UUID) -> Redemption | None:
        """Get a redemption by its code within a tenant."""
        stmt = select(Redemption).where(
            Redemption.redemption_code == code,
            Redemption.tenant_id == tenant_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def insert_if_absent(self, user_id: UUID, tenant_id: UUID, code: str) -> bool:
        """Insert a redemption unless one conflicts.

        Returns:
            True if the row was written
        """
        stmt = insert_ignoring_conflicts(
            self.session,
            Redemption,
            {"user_id": user_id, "tenant_id": tenant_id, "redemption_code": code},
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def mark_redeemed(
        self, redemption_id: UUID, tenant_id: UUID, staff_id: UUID
    ) -> bool:
        """Mark a redemption as handed out, if it has not been already.

        Returns:
            True if this call flipped the flag
        """
        stmt = (
            update(Redemption)
            .where(
                Redemption.id == redemption_id,
                Redemption.tenant_id == tenant_id,
                Redemption.redeemed.is_(False),
            )
            .values(redeemed=True, redeemed_at=datetime.now(UTC), redeemed_by=staff_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def refresh(self, redemption: Redemption) -> Redemption:
        """Reload a redemption from the database."""
        await self.session.refresh(redemption)
        return redemption


# Type alias for dependency injection
RedemptionRepo = Annotated[RedemptionRepository, Depends(RedemptionRepository)]

"""Site content repository."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select

from qrhunt.api.dependencies import DBSession
from qrhunt.modules.content.models import SiteContent


class SiteContentRepository:
    """Repository for SiteContent rows, always filtered by tenant."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def list_for_tenant(self, tenant_id: UUID) -> list[SiteContent]:
        stmt = (
            select(SiteContent)
            .where(SiteContent.tenant_id == tenant_id)
            .order_by(SiteContent.content_key)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def save(self, tenant_id: UUID, key: str, value: str) -> None:
        """Create or replace the override for ``key``."""
        stmt = select(SiteContent).where(
            SiteContent.tenant_id == tenant_id,
            SiteContent.content_key == key,
        )
        row = (await self.session.execute(stmt)).scalar_one_or_none()
        if row is None:
            self.session.add(
                SiteContent(tenant_id=tenant_id, content_key=key, content_value=value)
            )
        else:
            row.content_value = value
        await self.session.flush()

    async def delete(self, tenant_id: UUID, key: str) -> None:
        """Drop the override for ``key``, if any."""
        stmt = select(SiteContent).where(
            SiteContent.tenant_id == tenant_id,
            SiteContent.content_key == key,
        )
        row = (await self.session.execute(stmt)).scalar_one_or_none()
        if row is not None:
            await self.session.delete(row)
            await self.session.flush()


# Type alias for dependency injection
SiteContentRepo = Annotated[SiteContentRepository, Depends(SiteContentRepository)]

"""Site content lookups with defaults, and admin edits."""

from typing import Annotated

import structlog
from fastapi import Depends

from qrhunt.core.constants import SITE_CONTENT_DEFAULTS
from qrhunt.modules.content.repos import SiteContentRepo
from qrhunt.modules.content.schemas import SiteContentEntry
from qrhunt.modules.tenants.models import Tenant


logger = structlog.get_logger()


def default_text(key: str, tenant: Tenant) -> str:
    """Built-in text for ``key``; the landing title defaults to the tenant name."""
    _description, default = SITE_CONTENT_DEFAULTS[key]
    if key == "landing_title" and not default:
        return tenant.name
    return default


class SiteContentService:
    """Service merging a tenant's overrides over the defaults."""

    def __init__(self, repo: SiteContentRepo) -> None:
        self.repo = repo

    async def _overrides(self, tenant: Tenant) -> dict[str, str]:
        rows = await self.repo.list_for_tenant(tenant.id)
        # Rows for keys that are no longer known are ignored
        return {
            row.content_key: row.content_value
            for row in rows
            if row.content_key in SITE_CONTENT_DEFAULTS and row.content_value
        }

    async def get_content(self, tenant: Tenant) -> dict[str, str]:
        """Every known key with the tenant's value or the default."""
        overrides = await self._overrides(tenant)
        return {
            key: overrides.get(key) or default_text(key, tenant)
            for key in SITE_CONTENT_DEFAULTS
        }

    async def list_entries(self, tenant: Tenant) -> list[SiteContentEntry]:
        """The editable texts for the admin screen, in a stable order."""
        overrides = await self._overrides(tenant)
        return [
            SiteContentEntry(
                key=key,
                description=description,
                value=overrides.get(key) or default_text(key, tenant),
                is_default=key not in overrides,
            )
            for key, (description, _default) in SITE_CONTENT_DEFAULTS.items()
        ]

    async def update(
        self, tenant: Tenant, values: dict[str, str]
    ) -> list[SiteContentEntry]:
        """Save the given texts; empty ones fall back to the default again."""
        for key, value in values.items():
            if value:
                await self.repo.save(tenant.id, key, value)
            else:
                await self.repo.delete(tenant.id, key)

        logger.info(
            "site_content_updated", tenant_id=str(tenant.id), keys=sorted(values)
        )
        return await self.list_entries(tenant)


# Type alias for dependency injection
SiteContentSvc = Annotated[SiteContentService, Depends(SiteContentService)]

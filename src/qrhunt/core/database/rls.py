"""Row-level-security backstop.

PostgreSQL policies (see the ``enable_row_level_security`` migration) only
expose rows whose ``tenant_id`` matches the transaction-local setting
``app.current_tenant_id``, unless ``app.elevated`` is ``on``.

The application-level ``tenant_id`` filter in every repository is the
primary control; these policies are a second, independent layer. On any
other dialect the helpers here do nothing.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession


logger = structlog.get_logger()

TENANT_SETTING = "app.current_tenant_id"
ELEVATED_SETTING = "app.elevated"

_SET_CONFIG = text("SELECT set_config(:name, :value, true)")


def supports_rls(session: AsyncSession) -> bool:
    """Return True when the session is bound to PostgreSQL."""
    return session.get_bind().dialect.name == "postgresql"


async def bind_tenant(session: AsyncSession, tenant_id: UUID) -> None:
    """Scope the current transaction to a tenant for the RLS policies."""
    if not supports_rls(session):
        return
    await session.execute(_SET_CONFIG, {"name": TENANT_SETTING, "value": str(tenant_id)})


@asynccontextmanager
async def elevated(session: AsyncSession, reason: str) -> AsyncIterator[AsyncSession]:
    """Lift the RLS policies for the duration of the block.

    Only enter this after the caller has been authorized; it amplifies the
    session's privileges, it does not replace the role checks.

    Args:
        session: Session to elevate
        reason: Short label recorded in the log
    """
    if not supports_rls(session):
        yield session
        return

    logger.info("rls_elevated", reason=reason)
    await session.execute(_SET_CONFIG, {"name": ELEVATED_SETTING, "value": "on"})
    try:
        yield session
    finally:
        await session.execute(_SET_CONFIG, {"name": ELEVATED_SETTING, "value": "off"})

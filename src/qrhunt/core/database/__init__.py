"""Database layer - session management, base models, and mixins."""

from qrhunt.core.database.base import Base, TenantMixin, TimestampMixin, UUIDMixin
from qrhunt.core.database.rls import bind_tenant, elevated
from qrhunt.core.database.session import (
    async_engine,
    async_session_factory,
    get_db,
)
from qrhunt.core.database.statements import insert_ignoring_conflicts


__all__ = [
    "Base",
    "TenantMixin",
    "TimestampMixin",
    "UUIDMixin",
    "async_engine",
    "async_session_factory",
    "bind_tenant",
    "elevated",
    "get_db",
    "insert_ignoring_conflicts",
]

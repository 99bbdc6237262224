"""Dialect-aware statement builders."""

from typing import Any

from sqlalchemy import Insert
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession


def insert_ignoring_conflicts(
    session: AsyncSession, model: type[Any], values: dict[str, Any]
) -> Insert:
    """Build ``INSERT ... ON CONFLICT DO NOTHING`` for the session's dialect.

    Concurrent writers racing on a unique constraint both succeed; only the
    first row is kept.

    Raises:
        NotImplementedError: If the dialect has no conflict clause support
    """
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(model).values(**values).on_conflict_do_nothing()
    if dialect == "sqlite":
        return sqlite.insert(model).values(**values).on_conflict_do_nothing()
    raise NotImplementedError(f"ON CONFLICT DO NOTHING not supported for {dialect}")

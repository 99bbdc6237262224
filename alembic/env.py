"""Alembic migration environment (async engine)."""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context
from qrhunt.config import settings
from qrhunt.core.database import Base

# Import all models to ensure they're registered with Base.metadata
from qrhunt.modules.content.models import SiteContent  # noqa: F401
from qrhunt.modules.memberships.models import TenantMembership  # noqa: F401
from qrhunt.modules.progress.models import UserProgress  # noqa: F401
from qrhunt.modules.redemptions.models import Redemption  # noqa: F401
from qrhunt.modules.stations.models import Animal  # noqa: F401
from qrhunt.modules.tenants.models import Tenant  # noqa: F401
from qrhunt.modules.users.models import Profile, RevokedToken, User  # noqa: F401


config = context.config
config.set_main_option(
    "sqlalchemy.url", settings.async_database_url.replace("%", "%%")
)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL to stdout without connecting."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Run migrations through an async engine."""
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

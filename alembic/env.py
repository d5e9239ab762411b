"""
Alembic environment for LeaseDesk.

Runs migrations through the application's async engine settings, so the
database URL and MySQL SSL options come from the YAML config named by CONFIG.
"""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

# CONFIG must be set before leasedesk_backend.config is imported
os.environ.setdefault("CONFIG", "resources/config/local.yaml")

from leasedesk_backend.config import settings  # noqa: E402
from leasedesk_backend.database import Base, connect_args  # noqa: E402

# Register every model on Base.metadata
from leasedesk_backend.modules.auth import models as auth_models  # noqa: E402, F401
from leasedesk_backend.modules.listing_management import (  # noqa: E402, F401
    models as listing_models,
)
from leasedesk_backend.modules.property_management import (  # noqa: E402, F401
    models as property_models,
)
from leasedesk_backend.modules.task_management import (  # noqa: E402, F401
    models as task_models,
)

config = context.config
config.set_main_option("sqlalchemy.url", settings.database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL for the migrations without connecting."""
    context.configure(
        url=settings.database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Apply the migrations over an async connection."""
    configuration = config.get_section(config.config_ini_section, {})
    configuration["sqlalchemy.url"] = settings.database_url

    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
        connect_args=connect_args,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())

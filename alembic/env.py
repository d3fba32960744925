"""
Alembic environment configuration for the per-country appointment stores.

This module configures Alembic to use the application's database settings
and SQLAlchemy models for migration autogeneration. Migrations run over the
same asyncpg driver as the application.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

# Import settings to get database URL
from app.config.settings import get_settings
from app.database.async_db import get_async_database_url

# Import Base and the country store models to register them with Base.metadata
from app.models.db.base import Base
from app.domains.appointment_scheduling.infrastructure.persistence.sqlalchemy.models import (  # noqa: F401
    ChileAppointmentModel,
    ChileScheduleModel,
    PeruAppointmentModel,
    PeruScheduleModel,
)

# Import schema definitions for multi-schema support
from app.models.db.schemas import MANAGED_SCHEMAS, VERSION_TABLE_SCHEMA

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

# Get settings and set database URL. ConfigParser treats % as interpolation.
settings = get_settings()
config.set_main_option("sqlalchemy.url", get_async_database_url(settings).replace("%", "%%"))

# Interpret the config file for Python logging.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def include_object(object, name, type_, reflected, compare_to):
    """
    Include objects from the country schemas only.

    Tables anywhere else (including the version table) are left alone
    by autogeneration.
    """
    if type_ == "table":
        schema = getattr(object, "schema", None) or "public"
        return schema in MANAGED_SCHEMAS
    return True


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode.

    Emits the SQL to the script output instead of executing it, so no
    database connection is needed.
    """
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=True,
        include_schemas=True,
        include_object=include_object,
        version_table_schema=VERSION_TABLE_SCHEMA,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
        include_schemas=True,
        include_object=include_object,
        version_table_schema=VERSION_TABLE_SCHEMA,
        transaction_per_migration=True,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode on an async engine."""
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

"""Alembic environment — async migrations for the event site schema.

Covers the ten tables behind gifts, orders, sales, RSVPs, album photos, story
events, content sections, background images, site config and users. Revisions
live in versions/ as NNN_<slug>.py; 001_initial creates the full schema and
every later change is a new revision, never an edit to an applied one.

Design Decisions:
    - Database URL comes from event_site.config.Settings, so DATABASE_URL,
      .env and the postgresql:// => postgresql+asyncpg:// rewrite behave exactly
      as they do for the running API
    - compare_type on: money columns are Numeric(10,2) and a drift to Float
      must show up in autogenerate
    - NullPool: a migration run opens one connection and exits
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from event_site.config import get_settings
from event_site.db.base import Base
# Registers every table on Base.metadata
import event_site.models  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    return get_settings().database_url


def _configure(**kwargs) -> None:
    context.configure(target_metadata=target_metadata, compare_type=True, **kwargs)


def run_migrations_offline() -> None:
    """Emit SQL for the pending revisions without connecting."""
    _configure(
        url=_database_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    configuration = config.get_section(config.config_ini_section, {})
    configuration["sqlalchemy.url"] = _database_url()
    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())

"""Alembic environment for the vendorcomply schema (async engine, batch mode for SQLite)."""

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

import vendorcomply.domain  # noqa: F401  (populates Base.metadata)
from vendorcomply.core.config import settings
from vendorcomply.db.base import Base

if context.config.config_file_name:
    fileConfig(context.config.config_file_name)

# `alembic -x db_url=...` overrides DATABASE_URL
DATABASE_URL = context.get_x_argument(as_dictionary=True).get("db_url", settings.database_url)

# ALTER TABLE on SQLite needs batch mode
_COMMON = {"target_metadata": Base.metadata, "render_as_batch": True}


def _migrate_offline() -> None:
    context.configure(
        url=DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_COMMON,
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    context.configure(connection=connection, **_COMMON)
    with context.begin_transaction():
        context.run_migrations()


async def _migrate_online() -> None:
    engine = create_async_engine(DATABASE_URL)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    _migrate_offline()
else:
    asyncio.run(_migrate_online())

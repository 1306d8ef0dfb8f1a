"""Alembic environment - online async migrations for the Taskboard schema.

Invariants:
    - Database URL comes from taskboard.config.Settings (DATABASE_URL / .env),
      so migrations and the API always target the same database
    - Every model is imported before Base.metadata is handed to Alembic
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context

from taskboard.config import get_settings
from taskboard.db.base import Base
import taskboard.models  # noqa: F401

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)


def _migrate(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=Base.metadata)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations() -> None:
    engine = create_async_engine(get_settings().database_url, poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(_migrate)
    await engine.dispose()


asyncio.run(run_migrations())

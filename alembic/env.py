"""Alembic environment for the invitation store.

The database URL comes from PLAYERPATH_DATABASE_URL unless alembic.ini sets
sqlalchemy.url. Migrations run on the async driver the app uses.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from playerpath.core.config import get_settings
from playerpath.infrastructure.persistence import models  # noqa: F401
from playerpath.infrastructure.persistence.database import Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

if not config.get_main_option("sqlalchemy.url"):
    config.set_main_option("sqlalchemy.url", get_settings().database_url)

DATABASE_URL = config.get_main_option("sqlalchemy.url")
# SQLite can only alter tables by copying them
BATCH_MODE = DATABASE_URL.startswith("sqlite")


def configure_and_run(**options) -> None:
    context.configure(
        target_metadata=Base.metadata,
        render_as_batch=BATCH_MODE,
        **options,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_sync_migrations(connection: Connection) -> None:
    configure_and_run(connection=connection)


async def run_async_migrations() -> None:
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(run_sync_migrations)
    await engine.dispose()


if context.is_offline_mode():
    configure_and_run(
        url=DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
elif config.attributes.get("connection") is not None:
    run_sync_migrations(config.attributes["connection"])
else:
    asyncio.run(run_async_migrations())

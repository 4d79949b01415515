import asyncio
import logging

from alembic import context
from alembic.config import Config
from sqlalchemy import MetaData
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

import models  # noqa
from src.core.database.base import Base
from src.main.config import config as app_config

config: Config = context.config
target_metadata: MetaData = Base.metadata
logger = logging.getLogger("alembic.env")


def _get_postgres_dsn() -> str:
    dsn = app_config.postgres.dsn_async
    logger.info("Running migrations against %s", app_config.postgres.POSTGRES_HOST)
    return dsn


def run_migrations_offline() -> None:
    """Emit the migration SQL to the script output without a database."""
    context.configure(
        url=_get_postgres_dsn(),
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
    connectable: AsyncEngine = create_async_engine(url=_get_postgres_dsn())

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

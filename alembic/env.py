"""Migration runner for the FuelEU compliance schema.

`alembic upgrade head` applies the revisions in alembic/versions against the
DATABASE_URL from Settings; `alembic upgrade head --sql` prints the DDL
instead. Autogenerate compares against the ORM tables in src.db.tables.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from src.config.settings import get_settings
from src.db.session import Base
import src.db.tables  # noqa: F401  routes, ship_compliance, bank_entries, pools

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

DATABASE_URL = get_settings().DATABASE_URL
target_metadata = Base.metadata


def _configure_and_run(**options) -> None:
    context.configure(target_metadata=target_metadata, **options)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    """Emit the migration SQL without connecting."""
    _configure_and_run(
        url=DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )


async def run_migrations_online() -> None:
    """Apply migrations over an asyncpg connection."""
    engine = create_async_engine(DATABASE_URL, poolclass=pool.NullPool)

    def _apply(connection: Connection) -> None:
        _configure_and_run(connection=connection)

    async with engine.connect() as connection:
        await connection.run_sync(_apply)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())

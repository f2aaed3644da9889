from logging.config import fileConfig

import asyncio

from alembic import context
from tokentoss.core.config import settings
from tokentoss.db.base import Base
from tokentoss.db.session import engine
from tokentoss.models import bet, game, odds  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL for the configured database without connecting."""
    context.configure(
        url=settings.DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations against the app's async engine."""

    async def async_run():
        # alembic needs a sync connection
        async with engine.begin() as conn:
            await conn.run_sync(do_run_migrations)

    asyncio.run(async_run())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

# 📄 File: migrations/env.py
# 🧭 Purpose (Layman Explanation):
# Tells Alembic how to reach the database and which tables Botanical Buddy expects, so
# schema changes can be applied the same way in every environment.
# 🧪 Purpose (Technical Summary):
# Alembic environment using the application's async engine URL and the metadata of every
# registered model. Online migrations run through an AsyncEngine with NullPool.
# 🔗 Dependencies:
# - alembic (migration tool)
# - SQLAlchemy asyncio (asyncpg or aiosqlite driver)
# - python-dotenv (environment variables)
# - botanical_buddy.shared.config.settings
# 🔄 Connected Modules / Calls From:
# - alembic CLI commands (upgrade, downgrade, revision)

import asyncio
from logging.config import fileConfig

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config

# Load environment variables before settings are read
load_dotenv()

from botanical_buddy.shared.config.settings import get_settings  # noqa: E402
from botanical_buddy.shared.infrastructure.database.models import metadata  # noqa: E402

# This is the Alembic Config object
config = context.config

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Set the target metadata for 'autogenerate' support
target_metadata = metadata


def get_database_url() -> str:
    """Database URL from application settings (DATABASE_URL or DB_* parts)."""
    return get_settings().database_url


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.

    Emits SQL to the script output without connecting.
    """
    context.configure(
        url=get_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Run migrations through an async engine."""
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = get_database_url()

    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


# Determine which mode to run migrations in
if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

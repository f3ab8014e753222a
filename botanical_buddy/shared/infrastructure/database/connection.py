# 📄 File: botanical_buddy/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Opens and manages the connection to the database that stores users, plants and care logs,
# and checks that the database is reachable.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy engine lifecycle: declarative Base with a constraint naming convention,
# engine creation with dialect-specific pool settings, SQLite foreign-key enforcement,
# optional schema creation, and a connectivity health check.
#
# 🔗 Dependencies:
# - SQLAlchemy 2.x asyncio extension
# - asyncpg (PostgreSQL) or aiosqlite (SQLite) drivers
# - botanical_buddy.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - botanical_buddy.main (lifespan startup/shutdown)
# - botanical_buddy.shared.infrastructure.database.session
# - botanical_buddy.api.v1.health

import logging
from typing import Any, Dict, Optional

from sqlalchemy import MetaData, event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from botanical_buddy.shared.config.settings import Settings
from botanical_buddy.shared.core.exceptions import DatabaseError

logger = logging.getLogger(__name__)

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

Base = declarative_base(metadata=MetaData(naming_convention=NAMING_CONVENTION))


class DatabaseConnectionManager:
    """Owns the async engine and session factory for one application instance."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.database_url = settings.database_url
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def _build_connection_params(self) -> Dict[str, Any]:
        """Build engine keyword arguments for the configured dialect."""
        params: Dict[str, Any] = {
            "echo": self.settings.DEBUG and self.settings.is_development,
        }

        if self.is_sqlite:
            return params

        params.update({
            "pool_size": self.settings.DB_POOL_SIZE,
            "max_overflow": self.settings.DB_MAX_OVERFLOW,
            "pool_timeout": self.settings.DB_POOL_TIMEOUT,
            "pool_recycle": self.settings.DB_POOL_RECYCLE,
            "pool_pre_ping": True,
            "connect_args": {
                "server_settings": {
                    "application_name": f"{self.settings.APP_NAME}_{self.settings.ENVIRONMENT}",
                },
            },
        })
        return params

    async def initialize(self) -> None:
        """Create the engine and session factory."""
        if self._engine is not None:
            logger.warning("Database connection manager already initialized")
            return

        try:
            self._engine = create_async_engine(self.database_url, **self._build_connection_params())
            self._register_connection_events()
            self._session_factory = async_sessionmaker(
                bind=self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=True,
            )

            if self.settings.DB_CREATE_TABLES:
                await self.create_tables()

            logger.info("Database connection initialized")
        except Exception as e:
            logger.error(f"Failed to initialize database connection: {e}")
            raise DatabaseError("Database initialization failed", operation="initialize")

    def _register_connection_events(self) -> None:
        """Register SQLAlchemy connection event listeners."""
        if not self.is_sqlite:
            return

        @event.listens_for(self._engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            # SQLite ignores ON DELETE clauses unless this is on for each connection
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    async def create_tables(self) -> None:
        """Create every table registered on Base.metadata."""
        # Model modules register their tables on import
        import botanical_buddy.shared.infrastructure.database.models  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    async def health_check(self) -> Dict[str, Any]:
        """Run a trivial query to confirm the database answers."""
        if self._engine is None:
            return {"status": "disconnected", "error": "not initialized"}

        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return {"status": "connected"}
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return {"status": "disconnected", "error": type(e).__name__}

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database connections closed")
        self._engine = None
        self._session_factory = None

    @property
    def engine(self) -> Optional[AsyncEngine]:
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker:
        if self._session_factory is None:
            raise DatabaseError("Database not initialized", operation="session")
        return self._session_factory

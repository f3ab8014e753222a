# 📄 File: botanical_buddy/shared/infrastructure/database/session.py
#
# 🧭 Purpose (Layman Explanation):
# Hands each API request its own database "conversation" and makes sure changes are
# either saved together or thrown away together if something goes wrong.
#
# 🧪 Purpose (Technical Summary):
# Unit-of-work session handling: commit on success, rollback on any exception,
# SQLAlchemy errors translated to DatabaseError, always close. Exposed to routers as the
# get_db_session FastAPI dependency.
#
# 🔗 Dependencies:
# - SQLAlchemy AsyncSession
# - botanical_buddy.shared.infrastructure.database.connection
#
# 🔄 Connected Modules / Calls From:
# - All presentation routers (Depends(get_db_session))
# - Tests that drive services directly

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import exc
from sqlalchemy.ext.asyncio import AsyncSession

from botanical_buddy.shared.core.exceptions import DatabaseError
from botanical_buddy.shared.infrastructure.database.connection import DatabaseConnectionManager

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages database sessions with transaction handling and automatic cleanup."""

    def __init__(self, connection_manager: DatabaseConnectionManager):
        self._connection_manager = connection_manager

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get an async database session with automatic transaction management.

        Yields:
            AsyncSession: Database session

        Raises:
            DatabaseError: If the transaction fails at the database level
        """
        session: AsyncSession = self._connection_manager.session_factory()

        try:
            yield session
            await session.commit()

        except exc.SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error occurred, transaction rolled back: {e}")
            raise DatabaseError(operation="transaction") from e

        except Exception:
            # Domain errors keep their type so the error handlers can map them
            await session.rollback()
            raise

        finally:
            await session.close()


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency to get a database session.

    Yields:
        AsyncSession: Database session bound to this application's engine
    """
    session_manager: DatabaseSessionManager = request.app.state.session_manager
    async with session_manager.get_session() as session:
        yield session

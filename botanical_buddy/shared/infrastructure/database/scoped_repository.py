# 📄 File: botanical_buddy/shared/infrastructure/database/scoped_repository.py
#
# 🧭 Purpose (Layman Explanation):
# Makes sure people can only see and change their own addresses, plants and care logs.
# Someone else's record looks exactly like a record that doesn't exist.
#
# 🧪 Purpose (Technical Summary):
# Generic owner-scoped repository over an async SQLAlchemy session. Subclasses declare
# the model, the ownership predicate, default ordering and eager-load options; every
# single-record read, update and delete is filtered by id AND owner, and a miss raises
# NotFoundError whether the row is absent or owned by someone else.
#
# 🔗 Dependencies:
# - SQLAlchemy 2.x select API
# - botanical_buddy.shared.core.exceptions
#
# 🔄 Connected Modules / Calls From:
# - plant_management repositories (addresses, user plants, care logs)
# - weather_environmental repository

import logging
from typing import Any, ClassVar, Generic, List, Mapping, Optional, Sequence, Type, TypeVar
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from botanical_buddy.shared.core.exceptions import NotFoundError
from botanical_buddy.shared.utils.helpers import utcnow

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class ScopedRepository(Generic[ModelT]):
    """
    Base repository restricting every query to rows owned by one user.

    Subclasses set:
        model: Mapped class
        resource_name: Name used in "<name> not found" messages
        default_order: Columns used by list_owned
        load_options: Loader options applied to every select

    and override ``scope`` when ownership is transitive.
    """

    model: ClassVar[Type[Any]]
    resource_name: ClassVar[str] = "Resource"
    default_order: ClassVar[Sequence[Any]] = ()
    load_options: ClassVar[Sequence[Any]] = ()

    def __init__(self, session: AsyncSession):
        self._session = session

    # =========================================================================
    # OWNERSHIP PREDICATE
    # =========================================================================

    def scope(self, stmt: Select, user_id: UUID) -> Select:
        """Restrict a select to rows owned by user_id (direct owner column)."""
        return stmt.where(self.model.user_id == user_id)

    def _scoped_select(self, user_id: UUID) -> Select:
        stmt = self.scope(select(self.model), user_id)
        if self.load_options:
            stmt = stmt.options(*self.load_options)
        return stmt

    # =========================================================================
    # READS
    # =========================================================================

    async def get_owned(self, record_id: UUID, user_id: UUID) -> Optional[ModelT]:
        stmt = self._scoped_select(user_id).where(self.model.id == record_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_owned_or_404(self, record_id: UUID, user_id: UUID) -> ModelT:
        """
        Fetch a record by id and owner.

        Raises:
            NotFoundError: Record missing or owned by another user
        """
        instance = await self.get_owned(record_id, user_id)
        if instance is None:
            logger.info(f"{self.resource_name} {record_id} not found for user {user_id}")
            raise NotFoundError(self.resource_name)
        return instance

    async def exists_owned(self, record_id: UUID, user_id: UUID) -> bool:
        stmt = self.scope(select(self.model.id), user_id).where(self.model.id == record_id)
        result = await self._session.execute(stmt)
        return result.first() is not None

    async def list_owned(self, user_id: UUID, *criteria: Any) -> List[ModelT]:
        """List the caller's rows, filtered by extra criteria, in default order."""
        stmt = self._scoped_select(user_id)
        if criteria:
            stmt = stmt.where(*criteria)
        if self.default_order:
            stmt = stmt.order_by(*self.default_order)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def count_owned(self, user_id: UUID) -> int:
        stmt = self.scope(select(func.count()).select_from(self.model), user_id)
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    # =========================================================================
    # WRITES
    # =========================================================================

    async def add(self, instance: ModelT, refresh: Sequence[str] = ()) -> ModelT:
        """
        Persist a new instance.

        Args:
            instance: Transient model instance
            refresh: Relationship names to load after the flush
        """
        self._session.add(instance)
        await self._session.flush()
        if refresh:
            await self._session.refresh(instance, attribute_names=list(refresh))
        return instance

    async def update_owned(
        self,
        record_id: UUID,
        user_id: UUID,
        changes: Mapping[str, Any],
    ) -> ModelT:
        """
        Apply a partial update to an owned record.

        Keys whose value is None are skipped so omitted fields keep their stored value.
        ``updated_at`` is refreshed on every call.
        """
        instance = await self.get_owned_or_404(record_id, user_id)
        for field, value in changes.items():
            if value is not None:
                setattr(instance, field, value)
        if hasattr(instance, "updated_at"):
            instance.updated_at = utcnow()
        await self._session.flush()
        return instance

    async def delete_owned(self, record_id: UUID, user_id: UUID) -> None:
        instance = await self.get_owned_or_404(record_id, user_id)
        await self._session.delete(instance)
        await self._session.flush()

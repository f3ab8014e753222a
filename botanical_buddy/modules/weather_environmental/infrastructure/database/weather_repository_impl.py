"""
Weather Data Repository Implementation

Daily weather rows keyed by (address_id, date). Rows are written with a
dialect-native INSERT ... ON CONFLICT DO NOTHING so that concurrent first
fetches for the same address and day leave exactly one row.
"""

import logging
from datetime import date
from typing import Any, List, Mapping, Optional
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from botanical_buddy.modules.weather_environmental.infrastructure.database.models import (
    WeatherDataModel,
)
from botanical_buddy.shared.utils.helpers import utcnow

logger = logging.getLogger(__name__)

_INSERT_BY_DIALECT = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


class WeatherDataRepositoryImpl:
    """
    Repository for persisted daily weather.

    Ownership is enforced by the caller through the parent address before any
    method here is used.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_for_day(self, address_id: UUID, day: date) -> Optional[WeatherDataModel]:
        stmt = select(WeatherDataModel).where(
            WeatherDataModel.address_id == address_id,
            WeatherDataModel.date == day,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def insert_if_absent(
        self, address_id: UUID, day: date, values: Mapping[str, Any]
    ) -> WeatherDataModel:
        """
        Store the day's observation unless a row already exists, then return the stored row.

        A concurrent writer that loses the race gets the winner's row back.
        """
        dialect_name = self._session.bind.dialect.name
        insert = _INSERT_BY_DIALECT.get(dialect_name)
        if insert is None:
            raise NotImplementedError(f"Unsupported database dialect: {dialect_name}")

        stmt = (
            insert(WeatherDataModel)
            .values(
                id=uuid4(),
                address_id=address_id,
                date=day,
                created_at=utcnow(),
                **values,
            )
            .on_conflict_do_nothing(index_elements=["address_id", "date"])
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            logger.info(f"Weather for address {address_id} on {day} was stored concurrently")

        stored = await self.get_for_day(address_id, day)
        if stored is None:
            raise RuntimeError(f"Weather row for address {address_id} on {day} missing after insert")
        return stored

    async def list_since(self, address_id: UUID, since: date) -> List[WeatherDataModel]:
        stmt = (
            select(WeatherDataModel)
            .where(WeatherDataModel.address_id == address_id, WeatherDataModel.date >= since)
            .order_by(WeatherDataModel.date.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

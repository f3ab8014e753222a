"""
Plant Management Repositories

Owner-scoped repositories for addresses, user plants and care logs. Care logs
have no owner column of their own; they are scoped through the parent plant.
"""

import logging
from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.orm import selectinload

from botanical_buddy.modules.plant_management.infrastructure.database.models import (
    AddressModel,
    PlantCareLogModel,
    UserPlantModel,
)
from botanical_buddy.shared.infrastructure.database.scoped_repository import ScopedRepository

logger = logging.getLogger(__name__)


class AddressRepository(ScopedRepository[AddressModel]):
    model = AddressModel
    resource_name = "Address"
    default_order = (AddressModel.created_at.desc(),)


class UserPlantRepository(ScopedRepository[UserPlantModel]):
    model = UserPlantModel
    resource_name = "Plant"
    default_order = (UserPlantModel.created_at.desc(),)
    load_options = (selectinload(UserPlantModel.address),)

    async def any_referencing_address(self, address_id: UUID) -> bool:
        """True if at least one plant points at the address."""
        stmt = select(UserPlantModel.id).where(UserPlantModel.address_id == address_id).limit(1)
        result = await self._session.execute(stmt)
        return result.first() is not None


class PlantCareLogRepository(ScopedRepository[PlantCareLogModel]):
    model = PlantCareLogModel
    resource_name = "Care log"
    default_order = (PlantCareLogModel.date_time.desc(),)

    def scope(self, stmt: Select, user_id: UUID) -> Select:
        """Ownership runs through the parent plant."""
        return stmt.join(
            UserPlantModel, PlantCareLogModel.user_plant_id == UserPlantModel.id
        ).where(UserPlantModel.user_id == user_id)

    async def list_for_plant(self, plant_id: UUID, user_id: UUID) -> List[PlantCareLogModel]:
        return await self.list_owned(user_id, PlantCareLogModel.user_plant_id == plant_id)

    async def statistics_for_plant(self, plant_id: UUID, user_id: UUID) -> Dict[str, Any]:
        """
        Aggregate a plant's care logs per care type.

        Returns:
            Dict with ``total_logs`` and ``care_types`` (count, first and last entry per
            type, most frequent first)
        """
        stmt = (
            self.scope(
                select(
                    PlantCareLogModel.care_type,
                    func.count(PlantCareLogModel.id),
                    func.max(PlantCareLogModel.date_time),
                    func.min(PlantCareLogModel.date_time),
                ),
                user_id,
            )
            .where(PlantCareLogModel.user_plant_id == plant_id)
            .group_by(PlantCareLogModel.care_type)
            .order_by(func.count(PlantCareLogModel.id).desc(), PlantCareLogModel.care_type)
        )
        result = await self._session.execute(stmt)

        care_types = [
            {
                "care_type": care_type,
                "count": count,
                "last_entry": last_entry,
                "first_entry": first_entry,
            }
            for care_type, count, last_entry, first_entry in result.all()
        ]
        return {
            "total_logs": sum(entry["count"] for entry in care_types),
            "care_types": care_types,
        }

"""
Care log use cases.

Logs are owned through their plant: a log is visible only if its plant belongs
to the caller. Creating a log for someone else's plant is a bad request, while
reading the logs of someone else's plant is a not-found.
"""

import logging
from typing import Any, Dict, List, Mapping
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from botanical_buddy.modules.plant_management.infrastructure.database.models import PlantCareLogModel
from botanical_buddy.modules.plant_management.infrastructure.database.repositories import (
    PlantCareLogRepository,
    UserPlantRepository,
)
from botanical_buddy.shared.core.exceptions import BadRequestError
from botanical_buddy.shared.utils.helpers import utcnow

logger = logging.getLogger(__name__)


class CareLogService:
    def __init__(self, session: AsyncSession):
        self.logs = PlantCareLogRepository(session)
        self.plants = UserPlantRepository(session)

    async def list_for_plant(self, plant_id: UUID, user_id: UUID) -> List[PlantCareLogModel]:
        await self.plants.get_owned_or_404(plant_id, user_id)
        return await self.logs.list_for_plant(plant_id, user_id)

    async def statistics_for_plant(self, plant_id: UUID, user_id: UUID) -> Dict[str, Any]:
        await self.plants.get_owned_or_404(plant_id, user_id)
        return await self.logs.statistics_for_plant(plant_id, user_id)

    async def get_log(self, log_id: UUID, user_id: UUID) -> PlantCareLogModel:
        return await self.logs.get_owned_or_404(log_id, user_id)

    async def create_log(self, user_id: UUID, data: Mapping[str, Any]) -> PlantCareLogModel:
        """
        Record a care event.

        Raises:
            BadRequestError: The plant is not the caller's
        """
        payload = dict(data)
        if not await self.plants.exists_owned(payload["user_plant_id"], user_id):
            raise BadRequestError("Invalid plant")

        if payload.get("date_time") is None:
            payload["date_time"] = utcnow()

        log = await self.logs.add(PlantCareLogModel(**payload))
        logger.info(f"Care log {log.id} ({log.care_type}) added to plant {log.user_plant_id}")
        return log

    async def update_log(
        self, log_id: UUID, user_id: UUID, changes: Mapping[str, Any]
    ) -> PlantCareLogModel:
        return await self.logs.update_owned(log_id, user_id, changes)

    async def delete_log(self, log_id: UUID, user_id: UUID) -> None:
        await self.logs.delete_owned(log_id, user_id)

# 📄 File: botanical_buddy/modules/plant_management/domain/services/user_plant_service.py
#
# 🧭 Purpose (Layman Explanation):
# Adds, changes and removes plants in a user's collection, checking their plan's plant
# limit and that any address they pick is really theirs.
#
# 🧪 Purpose (Technical Summary):
# UserPlant use cases. Creation evaluates the tier policy immediately before the insert
# in the same session, then validates address ownership. The check and insert are not
# serialized, so two concurrent creations can both pass the limit check.
#
# 🔗 Dependencies:
# - plant_management repositories
# - user_management tier policy and user repository
#
# 🔄 Connected Modules / Calls From:
# - plant_management presentation user plants router

import logging
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from botanical_buddy.modules.plant_management.infrastructure.database.models import UserPlantModel
from botanical_buddy.modules.plant_management.infrastructure.database.repositories import (
    AddressRepository,
    UserPlantRepository,
)
from botanical_buddy.modules.user_management.domain.services.tier_policy import can_add_resource
from botanical_buddy.modules.user_management.infrastructure.database.user_repository_impl import (
    UserRepositoryImpl,
)
from botanical_buddy.shared.core.exceptions import (
    AuthenticationError,
    BadRequestError,
    TierLimitExceededError,
)

logger = logging.getLogger(__name__)


class UserPlantService:
    """Use cases for the plants in a user's collection."""

    def __init__(self, session: AsyncSession):
        self.plants = UserPlantRepository(session)
        self.addresses = AddressRepository(session)
        self.users = UserRepositoryImpl(session)

    async def list_plants(self, user_id: UUID) -> List[UserPlantModel]:
        return await self.plants.list_owned(user_id)

    async def get_plant(self, plant_id: UUID, user_id: UUID) -> UserPlantModel:
        return await self.plants.get_owned_or_404(plant_id, user_id)

    async def _ensure_address_owned(self, address_id: Optional[UUID], user_id: UUID) -> None:
        if address_id is not None and not await self.addresses.exists_owned(address_id, user_id):
            raise BadRequestError("Invalid address")

    async def create_plant(self, user_id: UUID, data: Mapping[str, Any]) -> UserPlantModel:
        """
        Add a plant to the caller's collection.

        Raises:
            AuthenticationError: Token subject no longer exists
            TierLimitExceededError: Tier limit reached
            BadRequestError: address_id not owned by the caller
        """
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise AuthenticationError(details="User no longer exists")

        current_count = await self.plants.count_owned(user_id)
        if not can_add_resource(user.subscription_tier, current_count):
            logger.info(
                f"Plant limit reached for user {user_id} "
                f"(tier={user.subscription_tier}, plants={current_count})"
            )
            raise TierLimitExceededError(user.subscription_tier, current_count)

        await self._ensure_address_owned(data.get("address_id"), user_id)

        plant = await self.plants.add(UserPlantModel(user_id=user_id, **data), refresh=("address",))
        logger.info(f"Plant {plant.id} created for user {user_id}")
        return plant

    async def update_plant(
        self, plant_id: UUID, user_id: UUID, changes: Dict[str, Any]
    ) -> UserPlantModel:
        await self.plants.get_owned_or_404(plant_id, user_id)
        await self._ensure_address_owned(changes.get("address_id"), user_id)
        return await self.plants.update_owned(plant_id, user_id, changes)

    async def delete_plant(self, plant_id: UUID, user_id: UUID) -> None:
        await self.plants.delete_owned(plant_id, user_id)
        logger.info(f"Plant {plant_id} deleted by user {user_id}")

# 📄 File: botanical_buddy/modules/plant_management/domain/services/address_service.py
#
# 🧭 Purpose (Layman Explanation):
# Manages the places where a user keeps plants and stops an address from being removed
# while plants are still assigned to it.
#
# 🧪 Purpose (Technical Summary):
# Address use cases on top of the owner-scoped AddressRepository, including the
# application-level referential guard checked before any delete.
#
# 🔗 Dependencies:
# - plant_management repositories
# - botanical_buddy.shared.core.exceptions
#
# 🔄 Connected Modules / Calls From:
# - plant_management presentation addresses router

import logging
from typing import Any, List, Mapping
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from botanical_buddy.modules.plant_management.infrastructure.database.models import AddressModel
from botanical_buddy.modules.plant_management.infrastructure.database.repositories import (
    AddressRepository,
    UserPlantRepository,
)
from botanical_buddy.shared.core.exceptions import ConflictError

logger = logging.getLogger(__name__)

ADDRESS_IN_USE_MESSAGE = (
    "Cannot delete address that is being used by plants. "
    "Please update or delete those plants first."
)


class AddressService:
    """Use cases for a user's addresses."""

    def __init__(self, session: AsyncSession):
        self.addresses = AddressRepository(session)
        self.plants = UserPlantRepository(session)

    async def list_addresses(self, user_id: UUID) -> List[AddressModel]:
        return await self.addresses.list_owned(user_id)

    async def get_address(self, address_id: UUID, user_id: UUID) -> AddressModel:
        return await self.addresses.get_owned_or_404(address_id, user_id)

    async def create_address(self, user_id: UUID, data: Mapping[str, Any]) -> AddressModel:
        address = await self.addresses.add(AddressModel(user_id=user_id, **data))
        logger.info(f"Address {address.id} created for user {user_id}")
        return address

    async def update_address(
        self, address_id: UUID, user_id: UUID, changes: Mapping[str, Any]
    ) -> AddressModel:
        return await self.addresses.update_owned(address_id, user_id, changes)

    async def delete_address(self, address_id: UUID, user_id: UUID) -> None:
        """
        Delete an address the caller owns.

        Raises:
            NotFoundError: Address missing or not owned
            ConflictError: Plants still reference the address
        """
        await self.addresses.get_owned_or_404(address_id, user_id)

        if await self.plants.any_referencing_address(address_id):
            logger.info(f"Refused to delete address {address_id}: still referenced by plants")
            raise ConflictError(ADDRESS_IN_USE_MESSAGE)

        await self.addresses.delete_owned(address_id, user_id)
        logger.info(f"Address {address_id} deleted by user {user_id}")

# 📄 File: botanical_buddy/modules/plant_management/presentation/api/v1/addresses.py
#
# 🧭 Purpose (Layman Explanation):
# Lets users list, add, edit and remove the places where they keep their plants.
#
# 🧪 Purpose (Technical Summary):
# Owner-scoped CRUD endpoints for addresses wrapped in the standard response envelope.
# Deletion is refused with 409 while plants reference the address.
#
# 🔗 Dependencies:
# - FastAPI router
# - plant_management AddressService
#
# 🔄 Connected Modules / Calls From:
# - botanical_buddy.api.v1.router (mounted at /api/v1/addresses)

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from botanical_buddy.modules.plant_management.domain.services.address_service import AddressService
from botanical_buddy.modules.plant_management.presentation.api.schemas.address_schemas import (
    AddressCreateRequest,
    AddressResponse,
    AddressUpdateRequest,
)
from botanical_buddy.shared.core.dependencies import CurrentUser, get_current_user
from botanical_buddy.shared.core.responses import ApiResponse
from botanical_buddy.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)

addresses_router = APIRouter()


def get_address_service(session: AsyncSession = Depends(get_db_session)) -> AddressService:
    return AddressService(session)


@addresses_router.get(
    "/",
    response_model=ApiResponse[List[AddressResponse]],
    summary="List addresses",
    description="All addresses of the current user, newest first",
)
async def list_addresses(
    current_user: CurrentUser = Depends(get_current_user),
    service: AddressService = Depends(get_address_service),
) -> ApiResponse[List[AddressResponse]]:
    addresses = await service.list_addresses(current_user.user_id)
    data = [AddressResponse.model_validate(address) for address in addresses]
    return ApiResponse(data=data, count=len(data))


@addresses_router.get(
    "/{address_id}",
    response_model=ApiResponse[AddressResponse],
    summary="Get address",
    responses={404: {"description": "Address not found"}},
)
async def get_address(
    address_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: AddressService = Depends(get_address_service),
) -> ApiResponse[AddressResponse]:
    address = await service.get_address(address_id, current_user.user_id)
    return ApiResponse(data=AddressResponse.model_validate(address))


@addresses_router.post(
    "/",
    response_model=ApiResponse[AddressResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create address",
)
async def create_address(
    address_data: AddressCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: AddressService = Depends(get_address_service),
) -> ApiResponse[AddressResponse]:
    address = await service.create_address(current_user.user_id, address_data.model_dump())
    return ApiResponse(data=AddressResponse.model_validate(address))


@addresses_router.put(
    "/{address_id}",
    response_model=ApiResponse[None],
    summary="Update address",
    description="Partial update: only fields present and non-null in the body are changed",
    responses={404: {"description": "Address not found"}},
)
async def update_address(
    address_id: UUID,
    address_data: AddressUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: AddressService = Depends(get_address_service),
) -> ApiResponse[None]:
    await service.update_address(
        address_id, current_user.user_id, address_data.model_dump(exclude_unset=True)
    )
    return ApiResponse(message="Address updated successfully")


@addresses_router.delete(
    "/{address_id}",
    response_model=ApiResponse[None],
    summary="Delete address",
    responses={
        404: {"description": "Address not found"},
        409: {"description": "Address still used by plants"},
    },
)
async def delete_address(
    address_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: AddressService = Depends(get_address_service),
) -> ApiResponse[None]:
    await service.delete_address(address_id, current_user.user_id)
    return ApiResponse(message="Address deleted successfully")
